"""
Hobby Area Classifier.

Maps canonical keywords to coarse hobby-area buckets with a static,
multi-label rule table.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from hobbytags.models.survey import AreaRule
from hobbytags.rules import AREA_LABELS, AREA_RULES, DEFAULT_AREA

logger = logging.getLogger(__name__)


class AreaClassifier:
    """
    Union-match classifier: every rule whose keywords intersect the
    respondent's keywords contributes its area, in rule-table order.
    Falls back to [default_area] when nothing matches.
    """

    def __init__(
        self,
        rules: Optional[Sequence[Tuple[str, Iterable[str]]]] = None,
        default_area: str = DEFAULT_AREA
    ):
        """
        Initialize classifier.

        Args:
            rules: Ordered (area, keywords) pairs; defaults to AREA_RULES
            default_area: Area assigned when no rule matches
        """
        if rules is None:
            rules = AREA_RULES
        self.rules = [AreaRule(hobby_area=area, keywords=tuple(words)) for area, words in rules]
        self.default_area = default_area
        logger.debug(f"Initialized AreaClassifier with {len(self.rules)} rules")

    @property
    def keyword_universe(self) -> frozenset:
        """Every keyword referenced by any rule."""
        return frozenset(w for rule in self.rules for w in rule.keywords)

    def classify(self, keywords: Iterable[str]) -> List[str]:
        """
        Classify a keyword set into hobby areas.

        Args:
            keywords: Canonical keywords for one respondent

        Returns:
            Non-empty list of areas
        """
        kw = set(keywords)
        areas = [rule.hobby_area for rule in self.rules if rule.matches(kw)]
        return areas or [self.default_area]

    def snapshot(self) -> List[dict]:
        """Rules in JSON-ready form, for the audit artifact."""
        return [rule.to_dict() for rule in self.rules]


def format_area_label(area: str) -> str:
    """
    Human-readable area label, e.g. "arts_media" -> "Arts & Media".
    """
    normalized = area.strip().lower()
    if not normalized:
        return ""
    if normalized in AREA_LABELS:
        return AREA_LABELS[normalized]
    return " ".join(part.capitalize() for part in normalized.replace("_", " ").split(" ") if part)
