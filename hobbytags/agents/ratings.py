"""
Rating Field Mapper.

Parses self-rating cells into validated numbers and maps survey headers
to rating keys. Two schemas are supported and kept distinct:

- "ivis23_final": fixed twelve keys (ten rating questions plus
  collaboration and code_repository); an invalid cell is kept as None.
- "intro_ratings": keys slugified from every "How would you rate your ..."
  header; an invalid cell is omitted from the map.

Both store values on the 1-10 scale, rounded to one decimal.
"""

import logging
import math
import re
from typing import Dict, List, Optional, Tuple

import config.settings as settings
from hobbytags.models.survey import SurveyRow

logger = logging.getLogger(__name__)


STRICT_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
# Leading decimal number of a cell, so "8/10" reads as 8
LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

SCHEMA_IVIS23_FINAL = "ivis23_final"
SCHEMA_INTRO_RATINGS = "intro_ratings"


def slugify_header(header: str) -> str:
    """
    Derive a rating key from a survey question.

    "How would you rate your Information Visualization skills?"
    -> "information_visualization"
    """
    key = header.lower()
    key = re.sub(r"^how would you rate your\s+", "", key)
    key = re.sub(r"\s*skills\??\s*$", "", key, flags=re.IGNORECASE)
    key = re.sub(r"[^a-z0-9]+", "_", key)
    return key.strip("_")


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round to the nearest 10**-decimals with halves rounded up (7.25 -> 7.3)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def parse_rating(
    value,
    low: float = settings.RATING_MIN,
    high: float = settings.RATING_MAX,
    decimals: int = settings.RATING_DECIMALS,
    strict: bool = False
) -> Optional[float]:
    """
    Parse one rating cell.

    Args:
        value: Raw cell (string, number or None)
        low: Inclusive lower bound
        high: Inclusive upper bound
        decimals: Decimal places kept
        strict: Only accept plain decimal notation ("7", "7.5", "-1").
            Otherwise the leading number of the cell is read and any
            trailing text ignored ("8/10" -> 8.0).

    Returns:
        Rounded rating, or None when the cell is empty, not a finite
        number, or outside [low, high]
    """
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None
    match = STRICT_NUMBER.match(text) if strict else LEADING_NUMBER.match(text)
    if not match:
        return None

    number = float(match.group(0))

    if not math.isfinite(number):
        return None
    if number < low or number > high:
        return None

    return round_half_up(number, decimals)


def clamp_rating(value: float, low: float, high: float) -> float:
    """Clamp a value into a display scale; never used at ingestion."""
    return max(low, min(high, value))


def to_display_scale(
    value: float,
    source_max: float = settings.RATING_MAX,
    low: float = settings.DISPLAY_RATING_MIN,
    high: float = settings.DISPLAY_RATING_MAX
) -> float:
    """
    Rescale a rating from [0, source_max] to the display scale [low, high].

    The result is clamped, so values from a wider source scale still land
    on the chart (12 on a 1-10 scale shows as 5.0).
    """
    return clamp_rating(low + value * (high - low) / source_max, low, high)


class RatingFieldMapper:
    """
    Maps the rating cells of one SurveyRow into a ratings dict.
    """

    def __init__(self, schema: str, fields: List[Tuple[str, str]]):
        """
        Initialize mapper.

        Args:
            schema: SCHEMA_IVIS23_FINAL or SCHEMA_INTRO_RATINGS
            fields: Ordered (key, header) pairs
        """
        if schema not in (SCHEMA_IVIS23_FINAL, SCHEMA_INTRO_RATINGS):
            raise ValueError(f"Unknown rating schema: {schema}")

        self.schema = schema
        self.fields = list(fields)
        logger.info(f"Initialized RatingFieldMapper schema={schema} with {len(self.fields)} fields")

    @classmethod
    def ivis23_final(cls) -> "RatingFieldMapper":
        """Fixed schema: ten rating questions, then collaboration and code_repository."""
        fields = list(settings.RATING_COLUMNS.items()) + list(settings.EXTRA_RATING_COLUMNS.items())
        return cls(SCHEMA_IVIS23_FINAL, fields)

    @classmethod
    def from_headers(cls, headers: List[str]) -> "RatingFieldMapper":
        """Discover rating columns by their question prefix (case-insensitive)."""
        prefix = settings.RATING_HEADER_PREFIX.lower()
        fields = []
        for header in headers:
            if not header.lower().startswith(prefix):
                continue
            key = slugify_header(header)
            if key:
                fields.append((key, header))
        return cls(SCHEMA_INTRO_RATINGS, fields)

    @property
    def keys(self) -> List[str]:
        return [key for key, _ in self.fields]

    @property
    def required_columns(self) -> List[str]:
        """Headers that must exist in the CSV for this schema."""
        if self.schema == SCHEMA_IVIS23_FINAL:
            return [header for _, header in self.fields]
        return []

    def field_descriptions(self) -> List[Dict[str, str]]:
        return [{"original": header, "key": key} for key, header in self.fields]

    def map_row(self, row: SurveyRow) -> Dict[str, Optional[float]]:
        """
        Extract ratings from a row. Malformed cells never abort the row.
        """
        ratings = {}
        strict = self.schema == SCHEMA_IVIS23_FINAL

        for key, header in self.fields:
            raw = row.get(header)
            value = parse_rating(raw, strict=strict)

            if value is None and raw.strip():
                logger.warning(f"Row {row.row_number}: invalid rating {raw!r} for '{key}'")

            if value is not None or self.schema == SCHEMA_IVIS23_FINAL:
                ratings[key] = value

        return ratings
