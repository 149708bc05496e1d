"""RetirementRuleEngine — assigns the statutory retirement age (BUP).

Position rows decide a provisional assignment (first match wins). A
leadership assignment is final. For everyone else the rank rows are checked
afterwards and may only raise the age, never lower it. Without a parsed rank
tier the rank rows are skipped.

    row                      age  category
    senior_executive          60  SENIOR_EXECUTIVE      (final)
    functional_principal      65  FUNCTIONAL_PRINCIPAL
    functional_mid_senior     60  FUNCTIONAL_MID_SENIOR
    senior_researcher         58  FUNCTIONAL_SENIOR_RESEARCHER
    functional_entry          58  FUNCTIONAL_ENTRY
    rank_principal            65  FUNCTIONAL_PRINCIPAL  (IV/c-e or "utama"/"principal" title)
    rank_mid_senior           60  FUNCTIONAL_MID_SENIOR (any IV)
    functional_skill          58  FUNCTIONAL_SKILL
    administrative_default    58  STRUCTURAL
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, NamedTuple, Optional

from asnroster.models.classification import Grade, PositionCategory, RankTier, RetirementAssignment
from asnroster.models.employee import EmployeeRecord

logger = logging.getLogger(__name__)

PRINCIPAL_TITLE_KEYWORDS = ("utama", "principal")
SENIOR_SUBGRADES = frozenset({"c", "d", "e"})


class RuleContext(NamedTuple):
    position_category: PositionCategory
    rank_tier: Optional[RankTier]
    position_text: str
    rank_text: str


class RetirementRule(NamedTuple):
    name: str
    statutory_age: int
    category: PositionCategory
    applies: Callable[[RuleContext], bool]
    final: bool = False


def _category_is(category: PositionCategory) -> Callable[[RuleContext], bool]:
    return lambda ctx: ctx.position_category is category


def _has_principal_title(ctx: RuleContext) -> bool:
    text = f"{ctx.position_text} {ctx.rank_text}".lower()
    return any(k in text for k in PRINCIPAL_TITLE_KEYWORDS)


def _is_rank_principal(ctx: RuleContext) -> bool:
    tier = ctx.rank_tier
    if tier is None:
        return False
    senior_rank = tier.grade is Grade.IV and tier.subgrade in SENIOR_SUBGRADES
    return senior_rank or _has_principal_title(ctx)


def _is_rank_iv(ctx: RuleContext) -> bool:
    return ctx.rank_tier is not None and ctx.rank_tier.grade is Grade.IV


POSITION_ROWS: tuple[RetirementRule, ...] = (
    RetirementRule(
        "senior_executive", 60, PositionCategory.SENIOR_EXECUTIVE,
        _category_is(PositionCategory.SENIOR_EXECUTIVE), final=True,
    ),
    RetirementRule(
        "functional_principal", 65, PositionCategory.FUNCTIONAL_PRINCIPAL,
        _category_is(PositionCategory.FUNCTIONAL_PRINCIPAL),
    ),
    RetirementRule(
        "functional_mid_senior", 60, PositionCategory.FUNCTIONAL_MID_SENIOR,
        _category_is(PositionCategory.FUNCTIONAL_MID_SENIOR),
    ),
    RetirementRule(
        "senior_researcher", 58, PositionCategory.FUNCTIONAL_SENIOR_RESEARCHER,
        _category_is(PositionCategory.FUNCTIONAL_SENIOR_RESEARCHER),
    ),
    RetirementRule(
        "functional_entry", 58, PositionCategory.FUNCTIONAL_ENTRY,
        _category_is(PositionCategory.FUNCTIONAL_ENTRY),
    ),
    RetirementRule(
        "functional_skill", 58, PositionCategory.FUNCTIONAL_SKILL,
        _category_is(PositionCategory.FUNCTIONAL_SKILL),
    ),
)

RANK_ROWS: tuple[RetirementRule, ...] = (
    RetirementRule("rank_principal", 65, PositionCategory.FUNCTIONAL_PRINCIPAL, _is_rank_principal),
    RetirementRule("rank_mid_senior", 60, PositionCategory.FUNCTIONAL_MID_SENIOR, _is_rank_iv),
)

DEFAULT_ROW = RetirementRule("administrative_default", 58, PositionCategory.STRUCTURAL, lambda ctx: True)


def add_years(birth_date: date, years: int) -> date:
    """Same month/day ``years`` later; 29 February rolls to 1 March."""
    try:
        return birth_date.replace(year=birth_date.year + years)
    except ValueError:
        return date(birth_date.year + years, 3, 1)


class RetirementRuleEngine:
    """Evaluates the BUP decision table for one employee at a time."""

    def __init__(
        self,
        position_rows: tuple[RetirementRule, ...] = POSITION_ROWS,
        rank_rows: tuple[RetirementRule, ...] = RANK_ROWS,
        default_row: RetirementRule = DEFAULT_ROW,
    ) -> None:
        self._position_rows = position_rows
        self._rank_rows = rank_rows
        self._default_row = default_row

    def assign(
        self,
        employee: EmployeeRecord,
        rank_tier: Optional[RankTier],
        position_category: PositionCategory,
    ) -> RetirementAssignment:
        ctx = RuleContext(
            position_category=position_category,
            rank_tier=rank_tier,
            position_text=employee.position,
            rank_text=employee.rank,
        )
        row = self.select_rule(ctx)
        retirement_date = None
        if employee.birth_date is not None:
            retirement_date = add_years(employee.birth_date, row.statutory_age)

        logger.debug(
            "Employee %s assigned BUP %d via %s (%s)",
            employee.id, row.statutory_age, row.name, row.category,
        )
        return RetirementAssignment(
            employee_id=employee.id,
            category=row.category,
            statutory_age=row.statutory_age,
            retirement_date=retirement_date,
            rule=row.name,
        )

    def select_rule(self, ctx: RuleContext) -> RetirementRule:
        provisional = next(
            (row for row in self._position_rows if row.applies(ctx)),
            self._default_row,
        )
        if provisional.final:
            return provisional

        for row in self._rank_rows:
            if row.statutory_age > provisional.statutory_age and row.applies(ctx):
                return row
        return provisional
