"""Deduplicator — each employee id counts at most once per tally."""

from __future__ import annotations

import logging
from collections import defaultdict

from asnroster.core.types import EmployeeId, TallyName

logger = logging.getLogger(__name__)

RANK_TIER_TALLY: TallyName = "rank_tier"
RETIREMENT_TALLY: TallyName = "retirement_category"


class Deduplicator:
    """Per-tally set of already-counted employee ids.

    Created fresh for every engine run; nothing is shared between runs.
    """

    def __init__(self) -> None:
        self._seen: dict[TallyName, set[EmployeeId]] = defaultdict(set)

    def claim(self, tally: TallyName, employee_id: EmployeeId) -> bool:
        """Mark ``employee_id`` as counted; False if it was counted before."""
        seen = self._seen[tally]
        if employee_id in seen:
            logger.warning("Employee %s already counted in %s tally, skipping", employee_id, tally)
            return False
        seen.add(employee_id)
        return True

    def is_counted(self, tally: TallyName, employee_id: EmployeeId) -> bool:
        return employee_id in self._seen.get(tally, ())

    def count(self, tally: TallyName) -> int:
        return len(self._seen.get(tally, ()))

    def merge(self, other: Deduplicator) -> Deduplicator:
        """Union of two shards' seen ids; shards must own disjoint ids."""
        merged = Deduplicator()
        for source in (self, other):
            for tally, ids in source._seen.items():
                merged._seen[tally] |= ids
        return merged
