"""DistributionAggregator — gender, age bracket, education and work-unit tallies."""

from __future__ import annotations

import logging
import re
from collections import Counter, defaultdict
from typing import Iterable

from asnroster.models.employee import EducationLevel, EmployeeRecord, Gender
from asnroster.models.outputs import AgeBracketCounts, DistributionCounts, GenderCounts, WorkUnitCount

logger = logging.getLogger(__name__)

_UNIT_SEPARATORS = re.compile(r"[,/\-]")


def age_bracket(age: int) -> str:
    """Bracket field name for ``age``.

    ``[0,30)``, ``[30,40]``, ``(40,50]``, ``(50,inf)``: 30 and 40 both land
    in the second bracket, 41 is the first age of the third.
    """
    if age < 30:
        return "under_30"
    if 30 <= age <= 40:
        return "between_30_and_40"
    if 40 < age <= 50:
        return "between_41_and_50"
    return "above_50"


def main_work_unit(work_unit: str) -> str:
    return _UNIT_SEPARATORS.split(work_unit, maxsplit=1)[0].strip()


class DistributionAggregator:
    """Accumulates demographic tallies one employee at a time.

    Ages are calendar-year differences against ``reference_year``. Employees
    without a birth date are skipped for the age tallies only.
    """

    def __init__(self, reference_year: int, retiring_soon_age: int = 55) -> None:
        self._reference_year = reference_year
        self._retiring_soon_age = retiring_soon_age
        self._gender: Counter[Gender] = Counter()
        self._ages: Counter[str] = Counter()
        self._education: Counter[EducationLevel] = Counter()
        self._units: dict[str, int] = defaultdict(int)
        self._sub_units: dict[str, Counter[str]] = defaultdict(Counter)
        self._distinct_units: set[str] = set()
        self._retiring_soon = 0

    def add(self, employee: EmployeeRecord) -> None:
        if employee.gender is not None:
            self._gender[employee.gender] += 1

        if employee.education_level is not None:
            self._education[employee.education_level] += 1

        if employee.birth_date is not None:
            age = self._reference_year - employee.birth_date.year
            self._ages[age_bracket(age)] += 1
            if age >= self._retiring_soon_age:
                self._retiring_soon += 1

        if employee.work_unit:
            self._distinct_units.add(employee.work_unit)
            main = main_work_unit(employee.work_unit)
            self._units[main] += 1
            if employee.work_unit != main:
                self._sub_units[main][employee.work_unit] += 1

    def result(self) -> DistributionCounts:
        work_units = [
            WorkUnitCount(name=name, count=count, sub_units=dict(sorted(self._sub_units[name].items())))
            for name, count in self._units.items()
        ]
        work_units.sort(key=lambda unit: (-unit.count, unit.name))

        return DistributionCounts(
            gender=GenderCounts(
                male=self._gender[Gender.MALE],
                female=self._gender[Gender.FEMALE],
            ),
            age_brackets=AgeBracketCounts(**self._ages),
            education={level.value: self._education[level] for level in EducationLevel},
            work_units=work_units,
            total_work_units=len(self._distinct_units),
            retiring_soon=self._retiring_soon,
        )

    def aggregate(self, employees: Iterable[EmployeeRecord]) -> DistributionCounts:
        for employee in employees:
            self.add(employee)
        return self.result()
