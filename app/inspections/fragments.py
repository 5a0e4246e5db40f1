"""Variant payload types assembled into an inspection DTO."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypeAlias


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def render(value: Any) -> Any:
    """Render fragments (and lists of them) into camelCase JSON-like data."""
    if isinstance(value, Fragment):
        return {_camel(item.name): render(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, (list, tuple)):
        return [render(item) for item in value]
    return value


class Fragment:
    """Base for DTO fragments; ``dto_key`` is the key the fragment is sent under."""

    dto_key: ClassVar[str] = ""

    def to_payload(self) -> dict[str, Any]:
        return render(self)


@dataclass(frozen=True)
class Location(Fragment):
    dto_key: ClassVar[str] = "location"

    district: Any = None
    exact_address: Any = None


@dataclass(frozen=True)
class IndividualRequest(Fragment):
    dto_key: ClassVar[str] = "individualRequest"

    first_name: Any = None
    last_name1: Any = None
    last_name2: Any = None
    physical_id: Any = None


@dataclass(frozen=True)
class LegalEntityRequest(Fragment):
    dto_key: ClassVar[str] = "legalEntityRequest"

    company_name: Any = None
    legal_id: Any = None


ApplicantFragment: TypeAlias = IndividualRequest | LegalEntityRequest


@dataclass(frozen=True)
class MayorOfficeFragment(Fragment):
    dto_key: ClassVar[str] = "mayorOffice"

    procedure_type: Any = None
    observations: Any = None


@dataclass(frozen=True)
class LandUseFragment(Fragment):
    dto_key: ClassVar[str] = "landUse"

    requested_use: Any = None
    matches_location: Any = None
    is_recommended: Any = None
    observations: Any = None


@dataclass(frozen=True)
class AntiquityFragment(Fragment):
    dto_key: ClassVar[str] = "antiquity"

    property_number: Any = None
    estimated_antiquity: Any = None


@dataclass(frozen=True)
class PcCancellationFragment(Fragment):
    dto_key: ClassVar[str] = "pcCancellation"

    contract_number: Any = None
    pc_number: Any = None
    built: Any = None
    observations: Any = None


@dataclass(frozen=True)
class GeneralInspectionFragment(Fragment):
    dto_key: ClassVar[str] = "generalInspection"

    property_number: Any = None
    observations: Any = None


@dataclass(frozen=True)
class WorkReceiptFragment(Fragment):
    dto_key: ClassVar[str] = "workReceipt"

    visit_date: str | None = None
    state: Any = None


@dataclass(frozen=True)
class Parcel(Fragment):
    """One maritime-zone parcel after element-wise coercion."""

    plan_type: Any = None
    plan_number: Any = None
    area: int | float | None = None
    mojon_type: Any = None
    plan_complies: bool = False
    respects_boundary: bool = False
    anchorage_mojones: Any = None
    topography: Any = None
    topography_other: Any = None
    fence_types: list[str] = field(default_factory=list)
    fences_invade_public: bool = False
    road_has_public_access: bool = False
    road_description: Any = None
    road_limitations: Any = None
    road_matches_plan: bool = False
    right_of_way_width: Any = None


@dataclass(frozen=True)
class ConcessionFragment(Fragment):
    dto_key: ClassVar[str] = "concession"

    file_number: Any = None
    concession_type: Any = None
    granted_at: str | None = None
    expires_at: str | None = None
    observations: Any = None
    parcels: list[Parcel] = field(default_factory=list)


DependencyFragment: TypeAlias = (
    MayorOfficeFragment
    | LandUseFragment
    | AntiquityFragment
    | PcCancellationFragment
    | GeneralInspectionFragment
    | WorkReceiptFragment
    | ConcessionFragment
)
