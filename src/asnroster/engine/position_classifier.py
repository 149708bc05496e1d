"""PositionClassifier — maps free-text position titles to a position category.

The keyword table is ordered by priority: leadership first, then
researcher/engineer, general functional and skill-grade titles. Seniority
qualifiers upgrade a researcher or general functional match instead of
competing with it. Titles matching nothing land in the administrative default.

A second, coarser table sorts titles into the three headline job families
(Struktural, Fungsional, Administrasi) used by the position distribution.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from asnroster.models.classification import PositionCategory, PositionType

logger = logging.getLogger(__name__)


class KeywordRule(NamedTuple):
    keyword: str
    category: PositionCategory
    upgradable: bool = False


def _group(category: PositionCategory, *keywords: str, upgradable: bool = False) -> list[KeywordRule]:
    return [KeywordRule(k, category, upgradable) for k in keywords]


POSITION_RULES: tuple[KeywordRule, ...] = (
    *_group(
        PositionCategory.SENIOR_EXECUTIVE,
        "kepala", "direktur", "director", "head of", "manager", "manajer",
        "sekretaris", "secretary", "ketua", "chair", "koordinator", "coordinator",
        "pimpinan", "kabid", "kasubag", "kasie", "camat", "lurah",
    ),
    *_group(
        PositionCategory.FUNCTIONAL_SENIOR_RESEARCHER,
        "peneliti", "perekayasa", "researcher", "engineer",
        upgradable=True,
    ),
    *_group(
        PositionCategory.FUNCTIONAL_ENTRY,
        "ahli", "fungsional", "analis", "analyst", "auditor", "widyaiswara",
        "instruktur", "instructor", "specialist",
        upgradable=True,
    ),
    *_group(
        PositionCategory.FUNCTIONAL_SKILL,
        "terampil", "mahir", "penyelia", "teknisi", "technician", "skilled",
    ),
)

# Highest qualifier first; "chief specialist" is covered by "chief".
QUALIFIER_RULES: tuple[KeywordRule, ...] = (
    *_group(PositionCategory.FUNCTIONAL_PRINCIPAL, "utama", "principal", "chief"),
    *_group(PositionCategory.FUNCTIONAL_MID_SENIOR, "madya", "senior", "mid"),
)

DEFAULT_CATEGORY = PositionCategory.STRUCTURAL


class TypeRule(NamedTuple):
    keyword: str
    position_type: PositionType


def _types(position_type: PositionType, *keywords: str) -> list[TypeRule]:
    return [TypeRule(k, position_type) for k in keywords]


# First match wins: "Kepala Sekretariat" is Struktural, "Staf Sekretariat" Administrasi.
POSITION_TYPE_RULES: tuple[TypeRule, ...] = (
    *_types(
        PositionType.STRUKTURAL,
        "kepala", "direktur", "director", "head of", "manajer", "manager", "kabid",
        "sekretaris", "secretary", "kasubag", "kasie", "camat", "lurah",
        "koordinator", "coordinator", "ketua", "chair", "pimpinan",
    ),
    *_types(
        PositionType.FUNGSIONAL,
        "dokter", "guru", "dosen", "peneliti", "perekayasa", "analis", "ahli",
        "pranata", "pengawas", "auditor", "penyuluh", "fungsional", "asisten",
        "tenaga", "pengajar", "operator", "widyaiswara", "instruktur",
        "terampil", "mahir", "penyelia", "teknisi",
        "researcher", "engineer", "analyst", "instructor", "specialist", "technician",
    ),
    *_types(
        PositionType.ADMINISTRASI,
        "staff", "staf", "admin", "pengadministrasi", "pelaksana", "operasional",
        "pengelola", "pengumpul", "bendahara", "sekretariat", "pembantu",
        "petugas", "pembukuan", "arsiparis", "pendukung",
    ),
)

DEFAULT_POSITION_TYPE = PositionType.ADMINISTRASI


class PositionMatch(NamedTuple):
    category: PositionCategory
    keyword: Optional[str] = None
    qualifier: Optional[str] = None


class PositionClassifier:
    """Pure and total: every title, including ``""``, yields one category."""

    def __init__(
        self,
        rules: tuple[KeywordRule, ...] = POSITION_RULES,
        qualifiers: tuple[KeywordRule, ...] = QUALIFIER_RULES,
        type_rules: tuple[TypeRule, ...] = POSITION_TYPE_RULES,
    ) -> None:
        self._rules = rules
        self._qualifiers = qualifiers
        self._type_rules = type_rules

    def classify(self, position_text: str | None) -> PositionCategory:
        return self.explain(position_text).category

    def explain(self, position_text: str | None) -> PositionMatch:
        """Classify and report which keyword (and qualifier) decided it."""
        text = (position_text or "").lower()
        if not text.strip():
            return PositionMatch(DEFAULT_CATEGORY)

        for rule in self._rules:
            if rule.keyword not in text:
                continue
            if rule.upgradable:
                qualifier = self.find_qualifier(text)
                if qualifier is not None:
                    return PositionMatch(qualifier.category, rule.keyword, qualifier.keyword)
            return PositionMatch(rule.category, rule.keyword)

        logger.debug("Position %r matched no keyword, using %s", position_text, DEFAULT_CATEGORY)
        return PositionMatch(DEFAULT_CATEGORY)

    def find_qualifier(self, text: str) -> Optional[KeywordRule]:
        text = text.lower()
        for qualifier in self._qualifiers:
            if qualifier.keyword in text:
                return qualifier
        return None

    def classify_type(self, position_text: str | None) -> PositionType:
        """Headline job family; anything unmatched is Administrasi."""
        text = (position_text or "").lower()
        for rule in self._type_rules:
            if rule.keyword in text:
                return rule.position_type
        return DEFAULT_POSITION_TYPE
