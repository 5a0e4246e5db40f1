"""Compose backend inspection DTOs from raw inspection form values."""

from __future__ import annotations

import logging
import math
import re
import unicodedata
from collections.abc import Mapping
from typing import Any, assert_never

from app.inspections.dates import canonicalize_date
from app.inspections.enums import ApplicantType, ConstructionProcedure, Dependency
from app.inspections.fragments import (
    AntiquityFragment,
    ApplicantFragment,
    ConcessionFragment,
    DependencyFragment,
    GeneralInspectionFragment,
    IndividualRequest,
    LandUseFragment,
    LegalEntityRequest,
    Location,
    MayorOfficeFragment,
    Parcel,
    PcCancellationFragment,
    WorkReceiptFragment,
)
from app.inspections.pruning import prune_empty

LOGGER = logging.getLogger(__name__)

PARCEL_FLAG_SENTINEL = "si"

_APPLICANT_TYPES: dict[str, ApplicantType] = {
    "FISICA": ApplicantType.INDIVIDUAL,
    "PERSONA FISICA": ApplicantType.INDIVIDUAL,
    "JURIDICA": ApplicantType.LEGAL_ENTITY,
    "PERSONA JURIDICA": ApplicantType.LEGAL_ENTITY,
}
_DIGITS_RE = re.compile(r"[0-9]+")
_INTEGER_RE = re.compile(r"-?[0-9]+")


def _null_if_empty(value: Any) -> Any:
    return None if value == "" else value


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_applicant_type(value: Any) -> ApplicantType:
    """Map a free-form applicant type onto the backend label."""
    if not value:
        return ApplicantType.ANONYMOUS
    key = _strip_diacritics(str(value).strip()).upper()
    return _APPLICANT_TYPES.get(key, ApplicantType.ANONYMOUS)


def extract_inspector_ids(values: Any) -> list[int | float]:
    """Keep numeric inspector ids; digit-only strings are converted, the rest dropped."""
    if not isinstance(values, (list, tuple)):
        return []

    ids: list[int | float] = []
    for value in values:
        if isinstance(value, str) and _DIGITS_RE.fullmatch(value):
            ids.append(int(value))
        elif isinstance(value, bool):
            continue
        elif isinstance(value, (int, float)) and math.isfinite(value):
            ids.append(value)
    return ids


def parse_dependency(value: Any) -> Dependency | None:
    """Return the dependency for a known tag, ``None`` otherwise."""
    if not isinstance(value, str):
        return None
    try:
        return Dependency(value)
    except ValueError:
        return None


def parse_procedure(value: Any) -> ConstructionProcedure | None:
    """Return the construction procedure for a known tag, ``None`` otherwise."""
    if not isinstance(value, str):
        return None
    try:
        return ConstructionProcedure(value)
    except ValueError:
        return None


def _coerce_area(value: Any) -> int | float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _flag(value: Any) -> bool:
    return value == PARCEL_FLAG_SENTINEL


def _fence_types(value: Any) -> list[str]:
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [item for item in value if isinstance(item, str)]
    else:
        return []
    return [part.strip() for part in parts if part.strip()]


def normalize_parcel(raw: Mapping[str, Any]) -> Parcel:
    """Coerce one raw maritime-zone parcel record."""
    return Parcel(
        plan_type=_null_if_empty(raw.get("planType")),
        plan_number=_null_if_empty(raw.get("planNumber")),
        area=_coerce_area(raw.get("area")),
        mojon_type=_null_if_empty(raw.get("mojonType")),
        plan_complies=_flag(raw.get("planComplies")),
        respects_boundary=_flag(raw.get("respectsBoundary")),
        anchorage_mojones=_null_if_empty(raw.get("anchorageMojones")),
        topography=_null_if_empty(raw.get("topography")),
        topography_other=_null_if_empty(raw.get("topographyOther")),
        fence_types=_fence_types(raw.get("fenceTypes")),
        fences_invade_public=_flag(raw.get("fencesInvadePublic")),
        road_has_public_access=_flag(raw.get("roadHasPublicAccess")),
        road_description=_null_if_empty(raw.get("roadDescription")),
        road_limitations=_null_if_empty(raw.get("roadLimitations")),
        road_matches_plan=_flag(raw.get("roadMatchesPlan")),
        right_of_way_width=_null_if_empty(raw.get("rightOfWayWidth")),
    )


def build_applicant_fragment(
    applicant: ApplicantType, values: Mapping[str, Any]
) -> ApplicantFragment | None:
    """Select the requester fragment matching the applicant type."""
    if applicant is ApplicantType.INDIVIDUAL:
        raw = values.get("individualRequest")
        if not isinstance(raw, Mapping):
            return None
        return IndividualRequest(
            first_name=_null_if_empty(raw.get("firstName")),
            last_name1=_null_if_empty(raw.get("lastName1")),
            last_name2=_null_if_empty(raw.get("lastName2")),
            physical_id=_null_if_empty(raw.get("physicalId")),
        )
    if applicant is ApplicantType.LEGAL_ENTITY:
        raw = values.get("legalEntityRequest")
        if not isinstance(raw, Mapping):
            return None
        company_name = raw.get("companyName")
        if company_name is None:
            company_name = raw.get("legalName")
        return LegalEntityRequest(
            company_name=_null_if_empty(company_name),
            legal_id=_null_if_empty(raw.get("legalId")),
        )
    return None


def _construction_fragment(
    procedure: ConstructionProcedure, data: Mapping[str, Any]
) -> DependencyFragment:
    if procedure is ConstructionProcedure.LAND_USE:
        return LandUseFragment(
            requested_use=_null_if_empty(data.get("landUseRequested")),
            matches_location=data.get("landUseMatches"),
            is_recommended=data.get("landUseRecommended"),
            observations=_null_if_empty(data.get("observations")),
        )
    elif procedure is ConstructionProcedure.ANTIQUITY:
        return AntiquityFragment(
            property_number=_null_if_empty(data.get("propertyNumber")),
            estimated_antiquity=_null_if_empty(data.get("estimatedAge")),
        )
    elif procedure is ConstructionProcedure.PC_CANCELLATION:
        return PcCancellationFragment(
            contract_number=_null_if_empty(data.get("contractNumber")),
            pc_number=_null_if_empty(data.get("pcNumber")),
            built=data.get("built"),
            observations=_null_if_empty(data.get("observations")),
        )
    elif procedure is ConstructionProcedure.GENERAL_INSPECTION:
        return GeneralInspectionFragment(
            property_number=_null_if_empty(data.get("propertyNumber")),
            observations=_null_if_empty(data.get("observations")),
        )
    elif procedure is ConstructionProcedure.WORK_RECEIPT:
        return WorkReceiptFragment(
            visit_date=canonicalize_date(data.get("visitedAt")),
            state=_null_if_empty(data.get("status")),
        )
    else:
        assert_never(procedure)


def _concession_fragment(raw: Mapping[str, Any]) -> ConcessionFragment:
    parcels = raw.get("parcels")
    if not isinstance(parcels, (list, tuple)):
        parcels = []
    return ConcessionFragment(
        file_number=_null_if_empty(raw.get("fileNumber")),
        concession_type=_null_if_empty(raw.get("concessionType")),
        granted_at=canonicalize_date(raw.get("grantedAt")),
        expires_at=canonicalize_date(raw.get("expiresAt")),
        observations=_null_if_empty(raw.get("observations")),
        parcels=[normalize_parcel(item) for item in parcels if isinstance(item, Mapping)],
    )


def build_dependency_fragment(values: Mapping[str, Any]) -> DependencyFragment | None:
    """Select the single dependency-specific fragment, if any applies."""
    raw_dependency = values.get("dependency")
    dependency = parse_dependency(raw_dependency)
    if dependency is None:
        if raw_dependency:
            LOGGER.debug("unknown_dependency_omitted", extra={"dependency": str(raw_dependency)})
        return None

    if dependency is Dependency.MAYOR_OFFICE:
        raw = values.get("mayorOffice")
        if not isinstance(raw, Mapping):
            return None
        return MayorOfficeFragment(
            procedure_type=_null_if_empty(raw.get("procedureType")),
            observations=_null_if_empty(raw.get("observations")),
        )
    elif dependency is Dependency.CONSTRUCTIONS:
        constructions = _mapping(values.get("constructions"))
        raw_procedure = constructions.get("procedure")
        procedure = parse_procedure(raw_procedure)
        if procedure is None:
            if raw_procedure:
                LOGGER.debug("unknown_procedure_omitted", extra={"procedure": str(raw_procedure)})
            return None
        return _construction_fragment(procedure, _mapping(constructions.get("data")))
    elif dependency is Dependency.MARITIME_ZONE:
        raw = values.get("zmtConcession")
        if not isinstance(raw, Mapping):
            return None
        return _concession_fragment(raw)
    elif (
        dependency is Dependency.REAL_ESTATE
        or dependency is Dependency.COLLECTIONS
        or dependency is Dependency.TAXES_AND_LICENSES
        or dependency is Dependency.SERVICE_PLATFORM
        or dependency is Dependency.WORK_CLOSURE
    ):
        return None
    else:
        assert_never(dependency)


def compose_inspection_dto(values: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build the inspection creation payload from raw form values.

    The applicant type selects at most one requester fragment and the dependency
    (plus, for constructions, the procedure) selects at most one dependency
    fragment. Unknown tags and malformed values are omitted rather than
    rejected. Empty optional structure is pruned from the result.
    """
    values = _mapping(values)
    applicant = normalize_applicant_type(values.get("applicantType"))

    raw_ids = values.get("userIds")
    if raw_ids is None:
        raw_ids = values.get("inspectorIds")
    inspector_ids = extract_inspector_ids(raw_ids)

    dto: dict[str, Any] = {
        "inspectionDate": canonicalize_date(values.get("inspectionDate")),
        "procedureNumber": _null_if_empty(values.get("procedureNumber")),
        "applicantType": str(applicant),
        "location": Location(
            district=values.get("district"),
            exact_address=values.get("exactAddress"),
        ).to_payload(),
    }
    if inspector_ids:
        dto["inspectorIds"] = inspector_ids

    applicant_fragment = build_applicant_fragment(applicant, values)
    if applicant_fragment is not None:
        dto[applicant_fragment.dto_key] = applicant_fragment.to_payload()

    dependency_fragment = build_dependency_fragment(values)
    if dependency_fragment is not None:
        dto[dependency_fragment.dto_key] = dependency_fragment.to_payload()

    return prune_empty(dto) or {}
