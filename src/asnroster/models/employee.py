"""Employee record — the normalized structure the engine operates on.

Roster exports are inconsistently formatted, so every enum-like field accepts
the known input synonyms and degrades to ``None`` instead of failing.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class EmployeeType(StrEnum):
    PNS = "pns"
    P3K = "p3k"
    NON_ASN = "nonAsn"


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"


class EducationLevel(StrEnum):
    """Fixed 10-step education ladder, lowest first."""

    SD = "sd"
    SMP = "smp"
    SMA = "sma"
    D1 = "d1"
    D2 = "d2"
    D3 = "d3"
    D4 = "d4"
    S1 = "s1"
    S2 = "s2"
    S3 = "s3"


_EMPLOYEE_TYPE_SYNONYMS: dict[str, EmployeeType] = {
    "pns": EmployeeType.PNS,
    "p3k": EmployeeType.P3K,
    "pppk": EmployeeType.P3K,
    "nonasn": EmployeeType.NON_ASN,
    "honorer": EmployeeType.NON_ASN,
}

_GENDER_SYNONYMS: dict[str, Gender] = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "l": Gender.MALE,
    "lakilaki": Gender.MALE,
    "pria": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
    "p": Gender.FEMALE,
    "perempuan": Gender.FEMALE,
    "wanita": Gender.FEMALE,
}

_EDUCATION_SYNONYMS: dict[str, EducationLevel] = {
    **{level.value: level for level in EducationLevel},
    "smasmk": EducationLevel.SMA,
    "smk": EducationLevel.SMA,
    "slta": EducationLevel.SMA,
}

_NOISE = re.compile(r"[\s\-_/.]+")


def _squash(value: Any) -> str:
    return _NOISE.sub("", str(value)).lower()


def normalize_employee_type(value: Any) -> Optional[EmployeeType]:
    """Map raw employee-type codes (``PPPK``, ``Non-ASN``, ``honorer``...) to the enum."""
    if value is None or isinstance(value, EmployeeType):
        return value
    return _EMPLOYEE_TYPE_SYNONYMS.get(_squash(value))


def normalize_gender(value: Any) -> Optional[Gender]:
    if value is None or isinstance(value, Gender):
        return value
    return _GENDER_SYNONYMS.get(_squash(value))


def normalize_education(value: Any) -> Optional[EducationLevel]:
    if value is None or isinstance(value, EducationLevel):
        return value
    return _EDUCATION_SYNONYMS.get(_squash(value))


def parse_birth_date(value: Any) -> Optional[date]:
    """Accept dates, datetimes and ISO strings; anything else means "no birth date"."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug("Ignoring unparseable birth date %r", value)
        return None


class EmployeeRecord(BaseModel):
    """Single roster entry as delivered by the roster-storage collaborator."""

    # --- Identity Fields ---
    id: str
    nip: str = ""  # Nomor Induk Pegawai
    name: str = Field(default="", validation_alias=AliasChoices("name", "fullName"))

    # --- Demographic Fields ---
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    education_level: Optional[EducationLevel] = None

    # --- Employment Fields ---
    employee_type: Optional[EmployeeType] = None
    position: str = ""
    rank: str = ""  # free-text golongan/pangkat
    rank_class: str = Field(default="", alias="class")  # secondary class column, RankParser fallback
    work_unit: str = ""

    model_config = {
        "str_strip_whitespace": True,
        "frozen": True,
        "alias_generator": to_camel,  # roster exports use birthDate, workUnit...
        "populate_by_name": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("nip", "name", "position", "rank", "rank_class", "work_unit", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value: Any) -> Optional[date]:
        return parse_birth_date(value)

    @field_validator("gender", mode="before")
    @classmethod
    def _normalize_gender(cls, value: Any) -> Optional[Gender]:
        return normalize_gender(value)

    @field_validator("employee_type", mode="before")
    @classmethod
    def _normalize_employee_type(cls, value: Any) -> Optional[EmployeeType]:
        return normalize_employee_type(value)

    @field_validator("education_level", mode="before")
    @classmethod
    def _normalize_education(cls, value: Any) -> Optional[EducationLevel]:
        return normalize_education(value)
