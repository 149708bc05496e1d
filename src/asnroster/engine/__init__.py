"""Classification and retirement projection engine."""

from __future__ import annotations

from asnroster.engine.dedup import Deduplicator
from asnroster.engine.distribution import DistributionAggregator
from asnroster.engine.forecast import ForecastBuilder
from asnroster.engine.position_classifier import PositionClassifier
from asnroster.engine.rank_parser import RankParser
from asnroster.engine.retirement_rules import RetirementRuleEngine
from asnroster.engine.roster_engine import RosterEngine

__all__ = [
    "Deduplicator",
    "DistributionAggregator",
    "ForecastBuilder",
    "PositionClassifier",
    "RankParser",
    "RetirementRuleEngine",
    "RosterEngine",
]
