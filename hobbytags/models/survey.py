"""
Survey data models.

SurveyRow is one parsed CSV row. AreaRecord and IntroRecord are the two
output record schemas (rule-based area buckets vs. canonical hobby tags).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SurveyRow:
    """
    One raw CSV data row, keyed by header text.
    Never mutated after ingestion.
    """
    row_number: int  # 1-based position among data rows (header excluded)
    cells: Dict[str, str]
    raw_cells: Tuple[str, ...] = ()  # every parsed cell, including unmapped ones

    def get(self, column: str) -> str:
        """Return the cell for column, or "" when the row is short."""
        value = self.cells.get(column)
        return value if value is not None else ""

    def is_blank(self) -> bool:
        """
        True only when every cell is empty or whitespace.

        Cells past the last header or under a duplicate header are not in
        `cells` but still count.
        """
        values = list(self.cells.values()) + list(self.raw_cells)
        return all(not str(v or "").strip() for v in values)


@dataclass(frozen=True)
class AreaRule:
    """A hobby area and the canonical keywords that place a respondent in it."""
    hobby_area: str
    keywords: tuple

    def matches(self, keywords) -> bool:
        return not set(self.keywords).isdisjoint(keywords)

    def to_dict(self) -> dict:
        return {"hobby_area": self.hobby_area, "keywords": list(self.keywords)}


@dataclass
class AreaRecord:
    """
    Output record of the rule-based pipeline (IVIS23_final schema).
    All twelve rating keys are present; invalid cells are None.
    """
    id: int
    alias: str
    time_year: str
    hobby_raw: str
    hobby: List[str] = field(default_factory=list)
    hobby_area: List[str] = field(default_factory=list)
    ratings: Dict[str, Optional[float]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "alias": self.alias,
            "time_year": self.time_year,
            "hobby_raw": self.hobby_raw,
            "hobby": list(self.hobby),
            "hobby_area": list(self.hobby_area),
            "ratings": dict(self.ratings),
        }


@dataclass
class IntroRecord:
    """
    Output record of the canon-dictionary pipeline (intro-ratings schema).
    Only valid ratings are present in the map.
    """
    id: int
    alias: str
    about: str
    hobbies: List[str] = field(default_factory=list)
    ratings: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "alias": self.alias,
            "about": self.about,
            "hobbies": list(self.hobbies),
            "ratings": dict(self.ratings),
        }
