"""Closed enumerations for inspection discriminants."""

from __future__ import annotations

from enum import StrEnum


class ApplicantType(StrEnum):
    """Applicant label expected by the inspections backend."""

    ANONYMOUS = "Anonimo"
    INDIVIDUAL = "Persona Física"
    LEGAL_ENTITY = "Persona Jurídica"


class Dependency(StrEnum):
    """Municipal office an inspection belongs to."""

    MAYOR_OFFICE = "MayorOffice"
    REAL_ESTATE = "RealEstate"
    COLLECTIONS = "Collections"
    CONSTRUCTIONS = "Constructions"
    TAXES_AND_LICENSES = "TaxesAndLicenses"
    SERVICE_PLATFORM = "ServicePlatform"
    MARITIME_ZONE = "MaritimeZone"
    WORK_CLOSURE = "WorkClosure"


class ConstructionProcedure(StrEnum):
    """Procedure sub-type used only by the Constructions dependency."""

    LAND_USE = "UsoSuelo"
    ANTIQUITY = "Antiguedad"
    PC_CANCELLATION = "AnulacionPC"
    GENERAL_INSPECTION = "InspeccionGeneral"
    WORK_RECEIPT = "RecibidoObra"


class District(StrEnum):
    """Districts of the canton."""

    SANTA_CRUZ = "SantaCruz"
    BOLSON = "Bolson"
    VEINTISIETE_ABRIL = "VeintisieteAbril"
    TEMPATE = "Tempate"
    CARTAGENA = "Cartagena"
    CUAJINIQUIL = "Cuajiniquil"
    DIRIA = "Diria"
    CABOVELAS = "Cabovelas"
    TAMARINDO = "Tamarindo"
