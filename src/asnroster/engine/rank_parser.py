"""RankParser — extracts golongan/ruang from free-text rank strings.

Rules are evaluated top to bottom and the first match wins:

1. ``labeled``     "Golongan IV/b", "Gol. III-a", "Grade II"
2. ``roman_pair``  "IV/b", "III-a" anywhere in the text
3. ``title``       pangkat titles: Pembina, Penata, Pengatur, Juru (grade only)
4. ``roman_scan``  a bare IV, III, II or I token (grade only)

When the rank text yields nothing, the same chain runs against the
secondary class text.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple, Optional

from asnroster.models.classification import PANGKAT_TITLES, Grade, RankTier

logger = logging.getLogger(__name__)

Match = tuple[Grade, Optional[str]]

_LABELED = re.compile(
    r"\b(?:golongan|gol|grade|g)\b\.?\s*[.:]?\s*([IVX]+)(?:\s*[/\-]?\s*([A-E]))?\b",
    re.IGNORECASE,
)
_ROMAN_PAIR = re.compile(r"(?<![A-Za-z])([IVX]+)\s*[/\-]\s*([A-E])(?![A-Za-z])", re.IGNORECASE)
_TITLE = re.compile(
    r"\b(pembina|penata|pengatur|juru)\b"
    r"(?:\s+(?:utama|muda|madya))*"
    r"(?:\s+(?:tingkat|tkt|tk|t)\.?\s*[IVX]+\b)?",
    re.IGNORECASE,
)
_SCAN_ORDER = (Grade.IV, Grade.III, Grade.II, Grade.I)  # longest first
_SCAN = {
    grade: re.compile(rf"(?<![A-Za-z]){grade.value}[A-E]?(?![A-Za-z])", re.IGNORECASE)
    for grade in _SCAN_ORDER
}
_TITLE_GRADES = {
    "pembina": Grade.IV,
    "penata": Grade.III,
    "pengatur": Grade.II,
    "juru": Grade.I,
}


def _to_grade(numeral: str) -> Optional[Grade]:
    try:
        return Grade(numeral.upper())
    except ValueError:
        return None  # IX, VII... are roman numerals but not golongan


def _to_subgrade(grade: Grade, letter: Optional[str]) -> Optional[str]:
    if not letter:
        return None
    letter = letter.lower()
    return letter if letter in PANGKAT_TITLES[grade] else None


def _match_pairs(pattern: re.Pattern[str], text: str) -> Optional[Match]:
    for m in pattern.finditer(text):
        grade = _to_grade(m.group(1))
        if grade is not None:
            return grade, _to_subgrade(grade, m.group(2))
    return None


def match_labeled(text: str) -> Optional[Match]:
    return _match_pairs(_LABELED, text)


def match_roman_pair(text: str) -> Optional[Match]:
    return _match_pairs(_ROMAN_PAIR, text)


def match_title(text: str) -> Optional[Match]:
    m = _TITLE.search(text)
    if m is None:
        return None
    return _TITLE_GRADES[m.group(1).lower()], None


def match_roman_scan(text: str) -> Optional[Match]:
    for grade in _SCAN_ORDER:
        if _SCAN[grade].search(text):
            return grade, None
    return None


class RankRule(NamedTuple):
    name: str
    matcher: Callable[[str], Optional[Match]]


RANK_RULES: tuple[RankRule, ...] = (
    RankRule("labeled", match_labeled),
    RankRule("roman_pair", match_roman_pair),
    RankRule("title", match_title),
    RankRule("roman_scan", match_roman_scan),
)


class RankParser:
    """Ordered rule chain over rank text, then over the fallback class text."""

    def __init__(self, rules: tuple[RankRule, ...] = RANK_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[RankRule, ...]:
        return self._rules

    def parse(self, rank_text: str | None, fallback_text: str | None = None) -> Optional[RankTier]:
        """Return the parsed tier, or None when neither text carries a grade signal."""
        tier = self._run_chain(rank_text or "", from_fallback=False)
        if tier is None and fallback_text:
            tier = self._run_chain(fallback_text, from_fallback=True)
        return tier

    def _run_chain(self, text: str, *, from_fallback: bool) -> Optional[RankTier]:
        text = text.strip()
        if not text:
            return None
        for rule in self._rules:
            found = rule.matcher(text)
            if found is not None:
                grade, subgrade = found
                logger.debug("Rank %r matched rule %s -> %s/%s", text, rule.name, grade, subgrade)
                return RankTier(grade=grade, subgrade=subgrade, rule=rule.name, from_fallback=from_fallback)
        return None
