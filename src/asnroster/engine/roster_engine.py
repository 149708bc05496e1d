"""RosterEngine — one roster snapshot in, one AggregateResult out.

Each run is a full recomputation: classifiers, deduplication sets and
tallies are created per call and nothing survives between calls.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

from asnroster.core.config import AppSettings
from asnroster.core.protocols import IRosterSource
from asnroster.engine.dedup import RANK_TIER_TALLY, RETIREMENT_TALLY, Deduplicator
from asnroster.engine.distribution import DistributionAggregator
from asnroster.engine.forecast import ForecastBuilder, summarize, validate_horizon
from asnroster.engine.position_classifier import PositionClassifier
from asnroster.engine.rank_parser import RankParser
from asnroster.engine.retirement_rules import RetirementRuleEngine
from asnroster.models.classification import (
    PANGKAT_TITLES,
    EmployeeClassification,
    Grade,
    PositionCategory,
    PositionType,
    RankTier,
    RetirementAssignment,
)
from asnroster.models.employee import EmployeeRecord, EmployeeType
from asnroster.models.outputs import (
    AggregateResult,
    EmployeeTypeCounts,
    PositionTitleCount,
    PositionTypeCount,
    RankGroupCount,
    SubgradeCount,
)

logger = logging.getLogger(__name__)

RosterInput = Iterable[Union[EmployeeRecord, Mapping[str, Any]]]


class _RankTally:
    """Golongan totals plus per-ruang counts, pre-seeded from the pangkat table."""

    def __init__(self) -> None:
        self._totals: Counter[Grade] = Counter()
        self._codes: Counter[str] = Counter()

    def add(self, tier: RankTier) -> None:
        self._totals[tier.grade] += 1
        if tier.subgrade:
            self._codes[tier.code] += 1

    def result(self) -> list[RankGroupCount]:
        return [
            RankGroupCount(
                grade=grade.value,
                count=self._totals[grade],
                subgrades=[
                    SubgradeCount(
                        code=f"{grade.value}/{letter}",
                        pangkat=title,
                        count=self._codes[f"{grade.value}/{letter}"],
                    )
                    for letter, title in PANGKAT_TITLES[grade].items()
                ],
            )
            for grade in Grade
        ]


class _PositionTypeTally:
    """Job-family totals and the distinct titles seen under each family."""

    def __init__(self) -> None:
        self._totals: Counter[PositionType] = Counter()
        self._titles: dict[PositionType, Counter[str]] = {t: Counter() for t in PositionType}

    def add(self, position_type: PositionType, title: str) -> None:
        self._totals[position_type] += 1
        self._titles[position_type][title] += 1

    def counts(self) -> dict[str, int]:
        return {t.value: self._totals[t] for t in PositionType}

    def result(self) -> list[PositionTypeCount]:
        families = [
            PositionTypeCount(
                type=t.value,
                count=self._totals[t],
                positions=[
                    PositionTitleCount(name=name, count=count)
                    for name, count in sorted(self._titles[t].items(), key=lambda item: (-item[1], item[0]))
                ],
            )
            for t in PositionType
        ]
        families.sort(key=lambda family: -family.count)
        return families


class RosterEngine:
    """Classification and retirement projection over a full roster."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def run(
        self,
        roster: RosterInput,
        *,
        horizon_years: Optional[int] = None,
        start_year: Optional[int] = None,
        as_of: Optional[date] = None,
    ) -> AggregateResult:
        """Classify every employee and build the retirement forecast.

        Args:
            roster: EmployeeRecords or plain mappings with the same fields.
            horizon_years: Forecast length; defaults to the configured horizon.
            start_year: First forecast year; defaults to ``as_of.year``.
            as_of: Reference date for ages; defaults to today.

        Raises:
            HorizonError: Before any employee is read, if the horizon is invalid.
        """
        config = self._settings.engine
        if horizon_years is None:
            horizon_years = config.default_horizon_years
        horizon_years = validate_horizon(horizon_years, config.max_horizon_years)

        as_of = as_of or date.today()
        start_year = as_of.year if start_year is None else start_year

        employees = [self._coerce(item) for item in roster]

        rank_parser = RankParser()
        position_classifier = PositionClassifier()
        rule_engine = RetirementRuleEngine()
        dedup = Deduplicator()
        distribution = DistributionAggregator(as_of.year, config.retiring_soon_age)

        type_counts: Counter[Optional[EmployeeType]] = Counter()
        rank_tally = _RankTally()
        position_counts: Counter[PositionCategory] = Counter()
        position_types = _PositionTypeTally()
        retirement_counts: Counter[PositionCategory] = Counter()
        classifications: list[EmployeeClassification] = []
        projectable: list[tuple[EmployeeRecord, RetirementAssignment]] = []
        unparsed_rank = 0
        unprojectable = 0

        for employee in employees:
            if employee.employee_type is None:
                logger.warning("Employee %s has unrecognized employee type", employee.id)
            type_counts[employee.employee_type] += 1

            tier = rank_parser.parse(employee.rank, employee.rank_class)
            if tier is None:
                unparsed_rank += 1
            elif dedup.claim(RANK_TIER_TALLY, employee.id):
                rank_tally.add(tier)

            category = position_classifier.classify(employee.position)
            position_counts[category] += 1
            position_type: Optional[PositionType] = None
            if employee.position:
                position_type = position_classifier.classify_type(employee.position)
                position_types.add(position_type, employee.position)

            assignment = rule_engine.assign(employee, tier, category)
            if dedup.claim(RETIREMENT_TALLY, employee.id):
                retirement_counts[assignment.category] += 1
                if assignment.retirement_date is None:
                    unprojectable += 1
                else:
                    projectable.append((employee, assignment))

            distribution.add(employee)
            classifications.append(
                EmployeeClassification(
                    employee_id=employee.id,
                    employee_type=employee.employee_type,
                    rank_tier=tier,
                    position_category=category,
                    position_type=position_type,
                    retirement=assignment,
                )
            )

        builder = ForecastBuilder(config.max_horizon_years)
        forecast = builder.build_forecast(projectable, horizon_years, start_year)

        logger.info(
            "Processed %d employees: %d unparsed ranks, %d unprojectable, %d retiring in %d-%d",
            len(employees), unparsed_rank, unprojectable, forecast.total,
            start_year, start_year + horizon_years - 1,
        )

        return AggregateResult(
            total_employees=len(employees),
            employee_type_counts=EmployeeTypeCounts(
                pns=type_counts[EmployeeType.PNS],
                p3k=type_counts[EmployeeType.P3K],
                non_asn=type_counts[EmployeeType.NON_ASN],
                unrecognized=type_counts[None],
            ),
            rank_tier_counts=rank_tally.result(),
            unparsed_rank_count=unparsed_rank,
            position_category_counts={c.value: position_counts[c] for c in PositionCategory},
            position_type_counts=position_types.counts(),
            position_types=position_types.result(),
            retirement_category_counts={c.value: retirement_counts[c] for c in PositionCategory},
            distribution=distribution.result(),
            unprojectable_count=unprojectable,
            forecast=forecast,
            retirement_summary=summarize(projectable, start_year),
            classifications=classifications,
        )

    def run_source(self, source: IRosterSource, **kwargs: Any) -> AggregateResult:
        """Run against the current snapshot of a roster-storage collaborator."""
        return self.run(source.list_employees(), **kwargs)

    @staticmethod
    def _coerce(item: EmployeeRecord | Mapping[str, Any]) -> EmployeeRecord:
        if isinstance(item, EmployeeRecord):
            return item
        return EmployeeRecord.model_validate(dict(item))
