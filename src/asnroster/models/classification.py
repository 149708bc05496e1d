"""Derived classification models: rank tier, position category, BUP assignment."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel

from asnroster.models.employee import EmployeeType


class Grade(StrEnum):
    """Golongan, lowest first."""

    I = "I"  # noqa: E741
    II = "II"
    III = "III"
    IV = "IV"


# Ruang (subgrade) letters per golongan with their canonical pangkat titles.
PANGKAT_TITLES: dict[Grade, dict[str, str]] = {
    Grade.I: {
        "a": "Juru Muda",
        "b": "Juru Muda Tingkat I",
        "c": "Juru",
        "d": "Juru Tingkat I",
    },
    Grade.II: {
        "a": "Pengatur Muda",
        "b": "Pengatur Muda Tingkat I",
        "c": "Pengatur",
        "d": "Pengatur Tingkat I",
    },
    Grade.III: {
        "a": "Penata Muda",
        "b": "Penata Muda Tingkat I",
        "c": "Penata",
        "d": "Penata Tingkat I",
    },
    Grade.IV: {
        "a": "Pembina",
        "b": "Pembina Tingkat I",
        "c": "Pembina Utama Muda",
        "d": "Pembina Utama Madya",
        "e": "Pembina Utama",
    },
}


class RankTier(BaseModel):
    """Parsed golongan/ruang pair. Recomputed on every run, never stored."""

    grade: Grade
    subgrade: Optional[str] = None
    rule: str = ""  # name of the RankParser rule that matched
    from_fallback: bool = False  # matched against the secondary class text

    model_config = {"frozen": True}

    @property
    def code(self) -> str:
        """``IV/b`` style code, or the bare grade when no subgrade was found."""
        if self.subgrade:
            return f"{self.grade.value}/{self.subgrade}"
        return self.grade.value

    @property
    def pangkat(self) -> Optional[str]:
        if self.subgrade is None:
            return None
        return PANGKAT_TITLES[self.grade].get(self.subgrade)


class PositionType(StrEnum):
    """Headline job family of a title, independent of its BUP category."""

    STRUKTURAL = "Struktural"
    FUNGSIONAL = "Fungsional"
    ADMINISTRASI = "Administrasi"


class PositionCategory(StrEnum):
    """BUP category of a title; doubles as the forecast bucket.

    STRUCTURAL is the administrative/clerical default every unmatched
    title falls into.
    """

    STRUCTURAL = "administrasi"
    FUNCTIONAL_ENTRY = "fungsionalPertamaMuda"
    FUNCTIONAL_SKILL = "fungsionalKeterampilan"
    FUNCTIONAL_SENIOR_RESEARCHER = "penelitiPerekayasaPertamaMuda"
    SENIOR_EXECUTIVE = "pimpinanTinggi"
    FUNCTIONAL_MID_SENIOR = "fungsionalMadya"
    FUNCTIONAL_PRINCIPAL = "fungsionalUtama"


class RetirementAssignment(BaseModel):
    """Statutory retirement age (BUP) assigned to one employee."""

    employee_id: str
    category: PositionCategory
    statutory_age: int  # 58, 60 or 65
    retirement_date: Optional[date] = None  # None when birth date is unknown
    rule: str = ""  # decision-table row that fired

    model_config = {"frozen": True}

    @property
    def retirement_year(self) -> Optional[int]:
        return self.retirement_date.year if self.retirement_date else None


class EmployeeClassification(BaseModel):
    """Per-employee audit row: what every classifier decided and why."""

    employee_id: str
    employee_type: Optional[EmployeeType] = None
    rank_tier: Optional[RankTier] = None
    position_category: PositionCategory
    position_type: Optional[PositionType] = None  # None when the title is blank
    retirement: RetirementAssignment
