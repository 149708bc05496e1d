"""ForecastBuilder — projects BUP retirements over a multi-year horizon.

Every ``(year, category)`` cell of the horizon is created up front so callers
can index the full grid without checking for gaps. Employees already past
their retirement date at the start of the horizon are folded into the first
year rather than dropped.
"""

from __future__ import annotations

import logging
from typing import Iterable

from asnroster.core.exceptions import HorizonError
from asnroster.models.classification import PositionCategory, RetirementAssignment
from asnroster.models.employee import EmployeeRecord
from asnroster.models.outputs import (
    ForecastCell,
    RetirementForecast,
    RetirementSummary,
    RetiringEmployee,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_HORIZON_YEARS = 20


def validate_horizon(horizon_years: object, max_years: int = DEFAULT_MAX_HORIZON_YEARS) -> int:
    """Return the horizon if it is an int in ``[1, max_years]``, else raise HorizonError."""
    if isinstance(horizon_years, bool) or not isinstance(horizon_years, int):
        raise HorizonError(horizon_years, max_years)
    if horizon_years < 1 or horizon_years > max_years:
        raise HorizonError(horizon_years, max_years)
    return horizon_years


def to_retiring_employee(employee: EmployeeRecord, assignment: RetirementAssignment) -> RetiringEmployee:
    return RetiringEmployee(
        id=employee.id,
        nip=employee.nip,
        name=employee.name,
        position=employee.position,
        rank=employee.rank,
        work_unit=employee.work_unit,
        gender=employee.gender,
        employee_type=employee.employee_type,
        category=assignment.category,
        statutory_age=assignment.statutory_age,
        retirement_date=assignment.retirement_date,
    )


class ForecastBuilder:
    """Buckets retirement assignments into the year x category grid."""

    def __init__(self, max_horizon_years: int = DEFAULT_MAX_HORIZON_YEARS) -> None:
        self._max_horizon_years = max_horizon_years

    def build(
        self,
        employees: Iterable[tuple[EmployeeRecord, RetirementAssignment]],
        horizon_years: int,
        start_year: int,
    ) -> list[ForecastCell]:
        horizon_years = validate_horizon(horizon_years, self._max_horizon_years)
        end_year = start_year + horizon_years

        grid: dict[tuple[int, PositionCategory], ForecastCell] = {
            (year, category): ForecastCell(year=year, category=category)
            for year in range(start_year, end_year)
            for category in PositionCategory
        }

        folded = 0
        for employee, assignment in employees:
            retirement_year = assignment.retirement_year
            if retirement_year is None:
                continue
            if retirement_year < start_year:
                folded += 1
                retirement_year = start_year
            if retirement_year >= end_year:
                continue

            cell = grid[(retirement_year, assignment.category)]
            cell.employees.append(to_retiring_employee(employee, assignment))
            cell.count += 1

        if folded:
            logger.info("Folded %d already-eligible employees into %d", folded, start_year)
        return list(grid.values())

    def build_forecast(
        self,
        employees: Iterable[tuple[EmployeeRecord, RetirementAssignment]],
        horizon_years: int,
        start_year: int,
    ) -> RetirementForecast:
        cells = self.build(employees, horizon_years, start_year)
        return RetirementForecast(start_year=start_year, horizon_years=horizon_years, cells=cells)


def summarize(
    employees: Iterable[tuple[EmployeeRecord, RetirementAssignment]],
    start_year: int,
) -> RetirementSummary:
    """Headline counts: this year, next year, and the five years after this one.

    Read straight from the assignments so the counts do not depend on how
    many years the forecast grid covers. Overdue retirements count as this year.
    """
    this_year = next_year = within_five_years = 0
    for _employee, assignment in employees:
        retirement_year = assignment.retirement_year
        if retirement_year is None:
            continue
        offset = retirement_year - start_year
        if offset <= 0:
            this_year += 1
        elif offset <= 5:
            within_five_years += 1
            if offset == 1:
                next_year += 1
    return RetirementSummary(
        this_year=this_year,
        next_year=next_year,
        within_five_years=within_five_years,
    )
