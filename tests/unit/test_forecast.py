"""Tests for ForecastBuilder grid construction and folding."""

from __future__ import annotations

from datetime import date

import pytest

from asnroster.core.exceptions import ConfigurationError, HorizonError
from asnroster.engine.forecast import ForecastBuilder, summarize, validate_horizon
from asnroster.models.classification import PositionCategory, RetirementAssignment
from tests.fakes import make_employee


def _entry(retirement_date, category=PositionCategory.STRUCTURAL, age=58, **fields):
    employee = make_employee(**fields)
    assignment = RetirementAssignment(
        employee_id=employee.id,
        category=category,
        statutory_age=age,
        retirement_date=retirement_date,
        rule="test",
    )
    return employee, assignment


@pytest.fixture
def builder():
    return ForecastBuilder()


class TestGrid:
    def test_every_cell_initialized(self, builder):
        cells = builder.build([], horizon_years=4, start_year=2026)
        assert len(cells) == 4 * 7
        assert all(c.count == 0 and c.employees == [] for c in cells)
        assert {c.year for c in cells} == {2026, 2027, 2028, 2029}

    def test_cells_ordered_by_year_then_category(self, builder):
        cells = builder.build([], horizon_years=2, start_year=2026)
        assert [c.category for c in cells[:7]] == list(PositionCategory)
        assert cells[7].year == 2027


class TestBucketing:
    def test_employee_lands_in_retirement_year(self, builder):
        entry = _entry(date(2028, 5, 1), PositionCategory.SENIOR_EXECUTIVE, 60, name="Budi")
        forecast = builder.build_forecast([entry], horizon_years=5, start_year=2026)

        cell = forecast.cell(2028, PositionCategory.SENIOR_EXECUTIVE)
        assert cell.count == 1
        assert cell.employees[0].name == "Budi"
        assert cell.employees[0].retirement_date == date(2028, 5, 1)
        assert forecast.total == 1

    def test_already_eligible_folded_into_first_year(self, builder):
        entry = _entry(date(2019, 1, 10), PositionCategory.FUNCTIONAL_SKILL)
        forecast = builder.build_forecast([entry], horizon_years=3, start_year=2026)
        assert forecast.cell(2026, PositionCategory.FUNCTIONAL_SKILL).count == 1
        assert forecast.total == 1

    def test_beyond_horizon_excluded(self, builder):
        entry = _entry(date(2031, 1, 1))
        forecast = builder.build_forecast([entry], horizon_years=5, start_year=2026)
        assert forecast.total == 0

    def test_last_horizon_year_included(self, builder):
        entry = _entry(date(2030, 12, 31))
        forecast = builder.build_forecast([entry], horizon_years=5, start_year=2026)
        assert forecast.cell(2030, PositionCategory.STRUCTURAL).count == 1

    def test_missing_retirement_date_skipped(self, builder):
        forecast = builder.build_forecast([_entry(None)], horizon_years=5, start_year=2026)
        assert forecast.total == 0

    def test_series_and_summary(self, builder):
        entries = [
            _entry(date(2020, 1, 1)),
            _entry(date(2027, 3, 1)),
            _entry(date(2027, 9, 1)),
            _entry(date(2031, 1, 1)),
        ]
        forecast = builder.build_forecast(entries, horizon_years=10, start_year=2026)

        assert forecast.series(PositionCategory.STRUCTURAL)[:3] == [1, 2, 0]
        summary = summarize(entries, start_year=2026)
        assert summary.this_year == 1
        assert summary.next_year == 2
        assert summary.within_five_years == 3


class TestSummary:
    def test_counts_beyond_short_forecast_window(self, builder):
        entries = [_entry(date(2027, 5, 1)), _entry(date(2029, 2, 1))]
        forecast = builder.build_forecast(entries, horizon_years=1, start_year=2026)
        assert forecast.total == 0

        summary = summarize(entries, start_year=2026)
        assert (summary.this_year, summary.next_year, summary.within_five_years) == (0, 1, 2)

    def test_sixth_year_and_missing_dates_excluded(self):
        entries = [_entry(date(2032, 1, 1)), _entry(None), _entry(date(2031, 12, 31))]
        summary = summarize(entries, start_year=2026)
        assert (summary.this_year, summary.next_year, summary.within_five_years) == (0, 0, 1)


class TestHorizonValidation:
    @pytest.mark.parametrize("horizon", [0, -1, 21, 2.5, "5", True])
    def test_invalid_horizon_raises(self, builder, horizon):
        with pytest.raises(HorizonError):
            builder.build([], horizon_years=horizon, start_year=2026)

    def test_horizon_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="between 1 and 20"):
            validate_horizon(0)

    def test_upper_bound_accepted(self):
        assert validate_horizon(20) == 20

    def test_custom_maximum(self):
        with pytest.raises(HorizonError):
            ForecastBuilder(max_horizon_years=3).build([], horizon_years=4, start_year=2026)
