"""Tests for DistributionAggregator."""

from __future__ import annotations

from datetime import date

import pytest

from asnroster.engine.distribution import DistributionAggregator, age_bracket, main_work_unit
from tests.fakes import make_employee

REFERENCE_YEAR = 2026


def _born(age: int) -> date:
    return date(REFERENCE_YEAR - age, 7, 1)


@pytest.mark.parametrize(
    "age, bracket",
    [
        (0, "under_30"),
        (29, "under_30"),
        (30, "between_30_and_40"),
        (40, "between_30_and_40"),
        (41, "between_41_and_50"),
        (50, "between_41_and_50"),
        (51, "above_50"),
    ],
)
def test_age_bracket_boundaries(age, bracket):
    assert age_bracket(age) == bracket


def test_single_pass_tallies():
    employees = [
        make_employee(gender="male", birth_date=_born(30), education_level="s1"),
        make_employee(gender="Perempuan", birth_date=_born(40), education_level="S2"),
        make_employee(gender="female", birth_date=_born(41), education_level=None),
        make_employee(gender=None, birth_date=None, education_level="doctorate"),
    ]

    result = DistributionAggregator(REFERENCE_YEAR).aggregate(employees)

    assert (result.gender.male, result.gender.female) == (1, 2)
    assert result.age_brackets.between_30_and_40 == 2
    assert result.age_brackets.between_41_and_50 == 1
    assert result.age_brackets.under_30 == 0
    assert result.education["s1"] == 1
    assert result.education["s2"] == 1
    assert sum(result.education.values()) == 2


def test_education_ladder_fully_initialized():
    result = DistributionAggregator(REFERENCE_YEAR).result()
    assert list(result.education) == ["sd", "smp", "sma", "d1", "d2", "d3", "d4", "s1", "s2", "s3"]
    assert all(v == 0 for v in result.education.values())


def test_age_uses_calendar_year_difference():
    employee = make_employee(birth_date=date(REFERENCE_YEAR - 30, 12, 31))
    result = DistributionAggregator(REFERENCE_YEAR).aggregate([employee])
    assert result.age_brackets.between_30_and_40 == 1


def test_retiring_soon_threshold():
    employees = [make_employee(birth_date=_born(54)), make_employee(birth_date=_born(55))]
    result = DistributionAggregator(REFERENCE_YEAR, retiring_soon_age=55).aggregate(employees)
    assert result.retiring_soon == 1


class TestWorkUnits:
    def test_main_unit_split(self):
        assert main_work_unit("Biro Umum, Subbagian Rumah Tangga") == "Biro Umum"
        assert main_work_unit("Dinas Kesehatan/Puskesmas A") == "Dinas Kesehatan"
        assert main_work_unit("Inspektorat") == "Inspektorat"

    def test_sub_units_and_sorting(self):
        employees = [
            make_employee(work_unit="Inspektorat"),
            make_employee(work_unit="Biro Umum - Keuangan"),
            make_employee(work_unit="Biro Umum - Keuangan"),
            make_employee(work_unit="Biro Umum"),
            make_employee(work_unit=""),
        ]
        result = DistributionAggregator(REFERENCE_YEAR).aggregate(employees)

        assert [u.name for u in result.work_units] == ["Biro Umum", "Inspektorat"]
        biro = result.work_units[0]
        assert biro.count == 3
        assert biro.sub_units == {"Biro Umum - Keuangan": 2}
        assert result.total_work_units == 3
