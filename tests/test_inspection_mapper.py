from __future__ import annotations

from copy import deepcopy
from typing import Any

import pytest

from app.inspections.enums import ApplicantType, ConstructionProcedure, Dependency
from app.inspections.mapper import (
    compose_inspection_dto,
    extract_inspector_ids,
    normalize_applicant_type,
    normalize_parcel,
    parse_dependency,
    parse_procedure,
)

DEPENDENCY_FRAGMENT_KEYS = {
    "mayorOffice",
    "landUse",
    "antiquity",
    "pcCancellation",
    "generalInspection",
    "workReceipt",
    "concession",
}


def _base_values(**overrides: Any) -> dict[str, Any]:
    values: dict[str, Any] = {
        "inspectionDate": "15/03/2024",
        "procedureNumber": "TR-2024-001",
        "userIds": ["7"],
        "applicantType": "ANONIMO",
        "district": "SantaCruz",
        "exactAddress": "100 m norte del parque",
    }
    values.update(overrides)
    return values


def _constructions(procedure: str, data: dict[str, Any]) -> dict[str, Any]:
    return compose_inspection_dto(
        _base_values(
            dependency="Constructions",
            constructions={"procedure": procedure, "data": data},
        )
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("FISICA", ApplicantType.INDIVIDUAL),
        ("  persona física ", ApplicantType.INDIVIDUAL),
        ("Persona Fisica", ApplicantType.INDIVIDUAL),
        ("juridica", ApplicantType.LEGAL_ENTITY),
        ("PERSONA JURÍDICA", ApplicantType.LEGAL_ENTITY),
        ("ANONIMO", ApplicantType.ANONYMOUS),
        ("", ApplicantType.ANONYMOUS),
        (None, ApplicantType.ANONYMOUS),
        ("empresa", ApplicantType.ANONYMOUS),
    ],
)
def test_normalize_applicant_type_maps_closed_table(raw: Any, expected: ApplicantType) -> None:
    assert normalize_applicant_type(raw) is expected


def test_extract_inspector_ids_keeps_only_finite_numbers() -> None:
    ids = extract_inspector_ids(["12", 5, "abc", " 3", "", None, float("nan"), True, 2.5, "007"])

    assert ids == [12, 5, 2.5, 7]


def test_extract_inspector_ids_ignores_non_list_input() -> None:
    assert extract_inspector_ids("12") == []
    assert extract_inspector_ids(None) == []


def test_parse_discriminants_return_none_for_unknown_tags() -> None:
    assert parse_dependency("MaritimeZone") is Dependency.MARITIME_ZONE
    assert parse_dependency("Unknown") is None
    assert parse_dependency(None) is None
    assert parse_procedure("RecibidoObra") is ConstructionProcedure.WORK_RECEIPT
    assert parse_procedure("recibidoobra") is None


def test_compose_end_to_end_mayor_office() -> None:
    dto = compose_inspection_dto(
        {
            "inspectionDate": "15/03/2024",
            "procedureNumber": "",
            "applicantType": "FISICA",
            "individualRequest": {"firstName": "Ana"},
            "district": "Tamarindo",
            "exactAddress": "",
            "dependency": "MayorOffice",
            "mayorOffice": {"procedureType": "Permiso"},
        }
    )

    assert dto == {
        "inspectionDate": "2024-03-15",
        "applicantType": "Persona Física",
        "location": {"district": "Tamarindo"},
        "individualRequest": {"firstName": "Ana"},
        "mayorOffice": {"procedureType": "Permiso"},
    }


def test_compose_individual_applicant_excludes_legal_entity() -> None:
    dto = compose_inspection_dto(
        _base_values(
            applicantType="FISICA",
            individualRequest={
                "firstName": "Ana",
                "lastName1": "Mora",
                "lastName2": "",
                "physicalId": "504440333",
            },
            legalEntityRequest={"companyName": "Hotel Playa S.A.", "legalId": "3101123456"},
        )
    )

    assert dto["individualRequest"] == {
        "firstName": "Ana",
        "lastName1": "Mora",
        "physicalId": "504440333",
    }
    assert "legalEntityRequest" not in dto


def test_compose_legal_entity_applicant_excludes_individual() -> None:
    dto = compose_inspection_dto(
        _base_values(
            applicantType="Persona Jurídica",
            individualRequest={"firstName": "Ana"},
            legalEntityRequest={"companyName": "Hotel Playa S.A.", "legalId": "3101123456"},
        )
    )

    assert dto["applicantType"] == "Persona Jurídica"
    assert dto["legalEntityRequest"] == {
        "companyName": "Hotel Playa S.A.",
        "legalId": "3101123456",
    }
    assert "individualRequest" not in dto


def test_compose_legal_entity_accepts_legacy_legal_name_key() -> None:
    dto = compose_inspection_dto(
        _base_values(applicantType="JURIDICA", legalEntityRequest={"legalName": "Coop R.L."})
    )

    assert dto["legalEntityRequest"] == {"companyName": "Coop R.L."}


def test_compose_anonymous_applicant_has_no_requester_fragment() -> None:
    dto = compose_inspection_dto(
        _base_values(applicantType="", individualRequest={"firstName": "Ana"})
    )

    assert dto["applicantType"] == "Anonimo"
    assert "individualRequest" not in dto
    assert "legalEntityRequest" not in dto


def test_compose_top_level_fields() -> None:
    dto = compose_inspection_dto(_base_values(userIds=["7", "x", 9]))

    assert dto["inspectionDate"] == "2024-03-15"
    assert dto["procedureNumber"] == "TR-2024-001"
    assert dto["inspectorIds"] == [7, 9]
    assert dto["location"] == {
        "district": "SantaCruz",
        "exactAddress": "100 m norte del parque",
    }


def test_compose_omits_inspector_ids_when_none_survive() -> None:
    dto = compose_inspection_dto(_base_values(userIds=["abc", None]))

    assert "inspectorIds" not in dto


def test_compose_falls_back_to_inspector_ids_key() -> None:
    values = _base_values(inspectorIds=["4"])
    del values["userIds"]

    assert compose_inspection_dto(values)["inspectorIds"] == [4]


def test_compose_drops_invalid_inspection_date() -> None:
    dto = compose_inspection_dto(_base_values(inspectionDate="31-02-2024"))

    assert "inspectionDate" not in dto


def test_compose_work_receipt() -> None:
    dto = _constructions("RecibidoObra", {"visitedAt": "2024-03-15", "status": "Completa"})

    assert dto["workReceipt"] == {"visitDate": "2024-03-15", "state": "Completa"}


def test_compose_work_receipt_canonicalizes_visit_date() -> None:
    dto = _constructions("RecibidoObra", {"visitedAt": "1/4/2024", "status": "Parcial"})

    assert dto["workReceipt"]["visitDate"] == "2024-04-01"


def test_compose_land_use_keeps_false_flags() -> None:
    dto = _constructions(
        "UsoSuelo",
        {
            "landUseRequested": "Comercial",
            "landUseMatches": False,
            "landUseRecommended": True,
            "observations": "",
        },
    )

    assert dto["landUse"] == {
        "requestedUse": "Comercial",
        "matchesLocation": False,
        "isRecommended": True,
    }


def test_compose_antiquity() -> None:
    dto = _constructions("Antiguedad", {"propertyNumber": "5-123456", "estimatedAge": "15 años"})

    assert dto["antiquity"] == {"propertyNumber": "5-123456", "estimatedAntiquity": "15 años"}


def test_compose_pc_cancellation() -> None:
    dto = _constructions(
        "AnulacionPC",
        {"contractNumber": "C-88", "pcNumber": "PC-12", "built": False, "observations": "Lote vacío"},
    )

    assert dto["pcCancellation"] == {
        "contractNumber": "C-88",
        "pcNumber": "PC-12",
        "built": False,
        "observations": "Lote vacío",
    }


def test_compose_general_inspection() -> None:
    dto = _constructions("InspeccionGeneral", {"propertyNumber": "5-1", "observations": "OK"})

    assert dto["generalInspection"] == {"propertyNumber": "5-1", "observations": "OK"}


def test_compose_constructions_with_unknown_procedure_has_no_fragment() -> None:
    dto = _constructions("Demolicion", {"propertyNumber": "5-1"})

    assert not DEPENDENCY_FRAGMENT_KEYS & dto.keys()


def test_compose_constructions_without_data_has_no_fragment() -> None:
    dto = compose_inspection_dto(
        _base_values(dependency="Constructions", constructions={"procedure": "Antiguedad"})
    )

    assert not DEPENDENCY_FRAGMENT_KEYS & dto.keys()


def test_compose_maritime_zone_concession_with_parcels() -> None:
    dto = compose_inspection_dto(
        _base_values(
            dependency="MaritimeZone",
            zmtConcession={
                "fileNumber": "ZMT-45",
                "concessionType": "Turística",
                "grantedAt": "01/02/2010",
                "expiresAt": "2030-02-01",
                "observations": "",
                "parcels": [
                    {
                        "planType": "Catastro",
                        "planNumber": "G-1234-2009",
                        "area": "350.5",
                        "fenceTypes": "wood, metal",
                        "planComplies": "si",
                        "respectsBoundary": "no",
                    }
                ],
            },
        )
    )

    concession = dto["concession"]
    assert concession["fileNumber"] == "ZMT-45"
    assert concession["grantedAt"] == "2010-02-01"
    assert concession["expiresAt"] == "2030-02-01"
    assert "observations" not in concession

    parcel = concession["parcels"][0]
    assert parcel["fenceTypes"] == ["wood", "metal"]
    assert parcel["planComplies"] is True
    assert parcel["respectsBoundary"] is False
    assert parcel["fencesInvadePublic"] is False
    assert parcel["area"] == 350.5


def test_compose_maritime_zone_without_parcels_still_attaches_concession() -> None:
    dto = compose_inspection_dto(
        _base_values(dependency="MaritimeZone", zmtConcession={"fileNumber": "ZMT-1"})
    )

    assert dto["concession"] == {"fileNumber": "ZMT-1"}


def test_normalize_parcel_coerces_elements() -> None:
    parcel = normalize_parcel(
        {
            "area": 120,
            "fenceTypes": " alambre ,, malla ,",
            "roadHasPublicAccess": "si",
            "roadMatchesPlan": "SI",
            "topographyOther": "",
        }
    )

    assert parcel.area == 120
    assert parcel.fence_types == ["alambre", "malla"]
    assert parcel.road_has_public_access is True
    assert parcel.road_matches_plan is False
    assert parcel.topography_other is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("300", 300), ("12.75", 12.75), (" 8 ", 8), ("abc", None), ("", None), (None, None), (True, None)],
)
def test_normalize_parcel_area(raw: Any, expected: Any) -> None:
    assert normalize_parcel({"area": raw}).area == expected


def test_normalize_parcel_absent_fields_default_to_false_and_empty() -> None:
    parcel = normalize_parcel({})

    assert parcel.fence_types == []
    assert parcel.area is None
    assert parcel.plan_complies is False


def test_normalize_parcel_accepts_already_split_fence_types() -> None:
    assert normalize_parcel({"fenceTypes": ["wood", " ", "metal "]}).fence_types == ["wood", "metal"]


@pytest.mark.parametrize(
    "dependency",
    ["Unknown", "RealEstate", "Collections", "TaxesAndLicenses", "ServicePlatform", "WorkClosure", "", None],
)
def test_compose_dependencies_without_fragment(dependency: Any) -> None:
    dto = compose_inspection_dto(
        _base_values(dependency=dependency, mayorOffice={"procedureType": "Permiso"})
    )

    assert not DEPENDENCY_FRAGMENT_KEYS & dto.keys()
    assert dto["applicantType"] == "Anonimo"


def test_compose_attaches_only_the_selected_dependency_fragment() -> None:
    dto = compose_inspection_dto(
        _base_values(
            dependency="MayorOffice",
            mayorOffice={"procedureType": "Permiso", "observations": "Sin novedad"},
            constructions={"procedure": "Antiguedad", "data": {"propertyNumber": "1"}},
            zmtConcession={"fileNumber": "ZMT-1"},
        )
    )

    assert DEPENDENCY_FRAGMENT_KEYS & dto.keys() == {"mayorOffice"}


def test_compose_never_mutates_input() -> None:
    values = _base_values(
        dependency="MaritimeZone",
        zmtConcession={"parcels": [{"fenceTypes": "a, b", "planComplies": "si"}]},
    )
    snapshot = deepcopy(values)

    compose_inspection_dto(values)

    assert values == snapshot


def test_compose_empty_input_returns_anonymous_only() -> None:
    assert compose_inspection_dto({}) == {"applicantType": "Anonimo"}
    assert compose_inspection_dto(None) == {"applicantType": "Anonimo"}


def test_compose_result_has_no_empty_values() -> None:
    dto = compose_inspection_dto(
        _base_values(
            exactAddress="",
            dependency="MaritimeZone",
            zmtConcession={"fileNumber": "", "parcels": [{"planType": ""}]},
        )
    )

    def _assert_non_empty(value: Any) -> None:
        assert value not in ("", None, [], {})
        if isinstance(value, dict):
            for item in value.values():
                _assert_non_empty(item)
        if isinstance(value, list):
            for item in value:
                _assert_non_empty(item)

    _assert_non_empty(dto)
