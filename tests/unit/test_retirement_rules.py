"""Tests for the BUP decision table."""

from __future__ import annotations

from datetime import date

import pytest

from asnroster.engine.position_classifier import PositionClassifier
from asnroster.engine.rank_parser import RankParser
from asnroster.engine.retirement_rules import RetirementRuleEngine, add_years
from asnroster.models.classification import PositionCategory
from tests.fakes import make_employee


@pytest.fixture
def assign():
    parser = RankParser()
    classifier = PositionClassifier()
    engine = RetirementRuleEngine()

    def _assign(position: str = "", rank: str = "", **overrides):
        employee = make_employee(position=position, rank=rank, **overrides)
        return engine.assign(
            employee,
            parser.parse(employee.rank, employee.rank_class),
            classifier.classify(employee.position),
        )

    return _assign


class TestPositionRows:
    @pytest.mark.parametrize("rank", ["", "III/a", "IV/e", "Pembina Utama"])
    def test_director_is_60_regardless_of_rank(self, assign, rank):
        result = assign("Director", rank)
        assert result.statutory_age == 60
        assert result.category is PositionCategory.SENIOR_EXECUTIVE
        assert result.rule == "senior_executive"

    def test_principal_researcher_is_65(self, assign):
        result = assign("Peneliti Ahli Utama", "III/d")
        assert (result.statutory_age, result.category) == (65, PositionCategory.FUNCTIONAL_PRINCIPAL)

    def test_mid_senior_functional_is_60(self, assign):
        result = assign("Analis Ahli Madya", "III/d")
        assert (result.statutory_age, result.category) == (60, PositionCategory.FUNCTIONAL_MID_SENIOR)

    def test_researcher_without_qualifier_is_58(self, assign):
        result = assign("Researcher", "III/a")
        assert result.statutory_age == 58
        assert result.category is PositionCategory.FUNCTIONAL_SENIOR_RESEARCHER

    def test_skill_grade_is_58(self, assign):
        result = assign("Teknisi Terampil", "II/c")
        assert (result.statutory_age, result.category) == (58, PositionCategory.FUNCTIONAL_SKILL)

    def test_empty_position_and_rank_is_default(self, assign):
        result = assign("", "")
        assert result.statutory_age == 58
        assert result.category is PositionCategory.STRUCTURAL
        assert result.rule == "administrative_default"


class TestRankOverrides:
    def test_senior_rank_raises_researcher_to_65(self, assign):
        result = assign("Researcher", "IV/d")
        assert result.statutory_age == 65
        assert result.category is PositionCategory.FUNCTIONAL_PRINCIPAL
        assert result.rule == "rank_principal"

    def test_senior_rank_raises_mid_senior_to_65(self, assign):
        assert assign("Auditor Ahli Madya", "IV/c").statutory_age == 65

    def test_rank_iv_raises_staff_to_60(self, assign):
        result = assign("Staff", "Golongan IV/a")
        assert (result.statutory_age, result.rule) == (60, "rank_mid_senior")

    def test_rank_iv_does_not_replace_equal_age(self, assign):
        result = assign("Analis Ahli Madya", "IV/a")
        assert result.rule == "functional_mid_senior"

    def test_principal_title_in_rank_text(self, assign):
        result = assign("Pengelola Keuangan", "Pembina Utama")
        assert (result.statutory_age, result.rule) == (65, "rank_principal")

    def test_rank_never_lowers_age(self, assign):
        result = assign("Peneliti Ahli Utama", "II/a")
        assert result.statutory_age == 65

    def test_unparsed_rank_skips_rank_rows(self, assign):
        result = assign("Pengadministrasi Utama", "staff")
        assert result.statutory_age == 58
        assert result.rule == "administrative_default"


class TestRetirementDate:
    def test_birth_date_advanced_by_statutory_age(self, assign):
        result = assign("Staff", "", birth_date=date(1965, 8, 17))
        assert result.retirement_date == date(2023, 8, 17)
        assert result.retirement_year == 2023

    def test_missing_birth_date_still_assigns(self, assign):
        result = assign("Director", "", birth_date=None)
        assert result.statutory_age == 60
        assert result.retirement_date is None

    def test_leap_day_rolls_to_march(self):
        assert add_years(date(1964, 2, 29), 58) == date(2022, 3, 1)
        assert add_years(date(1964, 2, 29), 60) == date(2024, 2, 29)


@pytest.mark.parametrize(
    "position, rank",
    [("", ""), ("???", "garbled"), ("Kepala", "IX/z"), ("x", "Pembina Tingkat I")],
)
def test_assignment_is_total(assign, position, rank):
    result = assign(position, rank, birth_date=None)
    assert result.statutory_age in {58, 60, 65}
    assert isinstance(result.category, PositionCategory)
    assert result.rule
