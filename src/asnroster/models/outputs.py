"""Output models handed to the presentation/reporting collaborators."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from asnroster.models.classification import EmployeeClassification, PositionCategory
from asnroster.models.employee import EmployeeType, Gender


class RetiringEmployee(BaseModel):
    """Compact display row for one employee inside a forecast cell."""

    id: str
    nip: str = ""
    name: str = ""
    position: str = ""
    rank: str = ""
    work_unit: str = ""
    gender: Optional[Gender] = None
    employee_type: Optional[EmployeeType] = None
    category: PositionCategory
    statutory_age: int
    retirement_date: date


class ForecastCell(BaseModel):
    """Retirements of one BUP category within one calendar year."""

    year: int
    category: PositionCategory
    count: int = 0
    employees: list[RetiringEmployee] = Field(default_factory=list)


class RetirementForecast(BaseModel):
    """Full year x category grid; every cell exists even when empty."""

    start_year: int
    horizon_years: int
    cells: list[ForecastCell] = Field(default_factory=list)

    @property
    def years(self) -> list[int]:
        return list(range(self.start_year, self.start_year + self.horizon_years))

    @property
    def total(self) -> int:
        return sum(c.count for c in self.cells)

    def cell(self, year: int, category: PositionCategory) -> ForecastCell:
        for c in self.cells:
            if c.year == year and c.category == category:
                return c
        raise KeyError((year, category))

    def series(self, category: PositionCategory) -> list[int]:
        """Counts per horizon year for one category (chart series shape)."""
        return [self.cell(year, category).count for year in self.years]

    def totals_by_year(self) -> dict[int, int]:
        totals = {year: 0 for year in self.years}
        for c in self.cells:
            totals[c.year] += c.count
        return totals


class RetirementSummary(BaseModel):
    """Headline retirement figures, independent of the forecast horizon."""

    this_year: int = 0  # includes already-overdue retirements
    next_year: int = 0
    within_five_years: int = 0  # years start+1 .. start+5


class SubgradeCount(BaseModel):
    code: str  # "IV/b"
    pangkat: str
    count: int = 0


class RankGroupCount(BaseModel):
    """Employees per golongan, with the per-ruang breakdown."""

    grade: str
    count: int = 0
    subgrades: list[SubgradeCount] = Field(default_factory=list)


class PositionTitleCount(BaseModel):
    name: str  # title as written in the roster
    count: int = 0


class PositionTypeCount(BaseModel):
    """Employees per job family, with every distinct title under it."""

    type: str
    count: int = 0
    positions: list[PositionTitleCount] = Field(default_factory=list)  # most common first

    def top_positions(self, limit: int = 10) -> list[PositionTitleCount]:
        return self.positions[:limit]


class WorkUnitCount(BaseModel):
    name: str
    count: int = 0
    sub_units: dict[str, int] = Field(default_factory=dict)


class EmployeeTypeCounts(BaseModel):
    pns: int = 0
    p3k: int = 0
    non_asn: int = 0
    unrecognized: int = 0


class GenderCounts(BaseModel):
    male: int = 0
    female: int = 0


class AgeBracketCounts(BaseModel):
    """Brackets ``[0,30)``, ``[30,40]``, ``(40,50]``, ``(50,inf)``."""

    under_30: int = 0
    between_30_and_40: int = 0
    between_41_and_50: int = 0
    above_50: int = 0


class DistributionCounts(BaseModel):
    """Demographic tallies produced by DistributionAggregator."""

    gender: GenderCounts = Field(default_factory=GenderCounts)
    age_brackets: AgeBracketCounts = Field(default_factory=AgeBracketCounts)
    education: dict[str, int] = Field(default_factory=dict)
    work_units: list[WorkUnitCount] = Field(default_factory=list)
    total_work_units: int = 0
    retiring_soon: int = 0


class AggregateResult(BaseModel):
    """Everything one engine run produces for one roster snapshot."""

    total_employees: int = 0
    employee_type_counts: EmployeeTypeCounts = Field(default_factory=EmployeeTypeCounts)
    rank_tier_counts: list[RankGroupCount] = Field(default_factory=list)
    unparsed_rank_count: int = 0
    position_category_counts: dict[str, int] = Field(default_factory=dict)
    position_type_counts: dict[str, int] = Field(default_factory=dict)
    position_types: list[PositionTypeCount] = Field(default_factory=list)  # largest family first
    retirement_category_counts: dict[str, int] = Field(default_factory=dict)
    distribution: DistributionCounts = Field(default_factory=DistributionCounts)
    unprojectable_count: int = 0  # no birth date, left out of forecast and age brackets
    forecast: RetirementForecast
    retirement_summary: RetirementSummary = Field(default_factory=RetirementSummary)
    classifications: list[EmployeeClassification] = Field(default_factory=list)

    @property
    def gender_counts(self) -> GenderCounts:
        return self.distribution.gender

    @property
    def age_bracket_counts(self) -> AgeBracketCounts:
        return self.distribution.age_brackets

    @property
    def education_counts(self) -> dict[str, int]:
        return self.distribution.education
