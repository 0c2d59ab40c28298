"""
Hobby and Hobby-Area Aggregation.

Frequency tables over a run's records and per-area rating averages,
built with pandas.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List

import pandas as pd

import config.settings as settings
from hobbytags.agents.classification import format_area_label
from hobbytags.agents.ratings import to_display_scale

logger = logging.getLogger(__name__)


def count_table(counts: Counter, label: str, alphabetical_ties: bool = False) -> List[Dict]:
    """
    Convert a Counter into [{label: key, "count": n}] sorted by count desc.

    Ties keep first-counted order, or alphabetical order when
    alphabetical_ties is set.

    Args:
        counts: Key -> frequency
        label: Field name for the key ("hobby_area", "hobby")
        alphabetical_ties: Break ties alphabetically

    Returns:
        JSON-ready list of rows
    """
    if not counts:
        return []

    df = pd.DataFrame({label: list(counts.keys()), "count": list(counts.values())})

    if alphabetical_ties:
        df = df.sort_values(["count", label], ascending=[False, True], kind="mergesort")
    else:
        df = df.sort_values("count", ascending=False, kind="mergesort")

    return [
        {label: str(row[label]), "count": int(row["count"])}
        for row in df.to_dict(orient="records")
    ]


def area_count_table(area_counts: Counter) -> List[Dict]:
    return count_table(area_counts, "hobby_area")


def hobby_count_table(hobby_counts: Counter) -> List[Dict]:
    return count_table(hobby_counts, "hobby", alphabetical_ties=True)


def recount_areas(records: Iterable[Dict]) -> Counter:
    """
    Rebuild area tallies from emitted records.

    Matches the run accumulator for the same records, so counts can be
    audited without re-running the pipeline.
    """
    counts = Counter()
    for record in records:
        counts.update(record.get("hobby_area", []))
    return counts


class AreaRatingAggregator:
    """
    Averages each rating key over the members of every hobby area.

    `averages` stay on the ingestion scale (1-10). `display_averages`
    are the same means on the dashboard's 0-5 presentation scale.
    """

    def __init__(
        self,
        rating_keys: List[str],
        source_max: float = settings.RATING_MAX,
        display_min: float = settings.DISPLAY_RATING_MIN,
        display_max: float = settings.DISPLAY_RATING_MAX
    ):
        """
        Initialize aggregator.

        Args:
            rating_keys: Rating keys to average, in output order
            source_max: Upper bound of the ingestion scale
            display_min: Lower bound of the display scale
            display_max: Upper bound of the display scale
        """
        self.rating_keys = list(rating_keys)
        self.source_max = source_max
        self.display_min = display_min
        self.display_max = display_max

    def aggregate(self, records: List[Dict]) -> List[Dict]:
        """
        Compute per-area averages.

        Args:
            records: AreaRecord dicts (hobby_area + ratings)

        Returns:
            [{"hobby_area", "label", "respondents", "averages",
            "display_averages"}] in first-seen area order; a mean is None
            when no member has a value
        """
        rows = []
        for record in records:
            ratings = record.get("ratings", {})
            for area in record.get("hobby_area", []):
                row = {"hobby_area": area}
                for key in self.rating_keys:
                    row[key] = ratings.get(key)
                rows.append(row)

        if not rows:
            logger.warning("No records to aggregate ratings for")
            return []

        df = pd.DataFrame(rows, columns=["hobby_area"] + self.rating_keys)
        df[self.rating_keys] = df[self.rating_keys].astype(float)
        grouped = df.groupby("hobby_area", sort=False)
        means = grouped[self.rating_keys].mean()
        sizes = grouped.size()

        summary = []
        for area in means.index:
            averages = {}
            display_averages = {}
            for key in self.rating_keys:
                mean = means.at[area, key]
                if pd.isna(mean):
                    averages[key] = None
                    display_averages[key] = None
                    continue
                averages[key] = round(float(mean), 2)
                display = to_display_scale(float(mean), self.source_max, self.display_min, self.display_max)
                display_averages[key] = round(display, 2)
            summary.append({
                "hobby_area": area,
                "label": format_area_label(area),
                "respondents": int(sizes[area]),
                "averages": averages,
                "display_averages": display_averages,
            })

        logger.info(f"Aggregated ratings for {len(summary)} hobby areas")
        return summary
