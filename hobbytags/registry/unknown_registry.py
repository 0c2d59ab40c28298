"""
Unknown Hobby Registry.

Per-run tally of candidate hobby phrases that no canonical dictionary
entry resolved. Purely diagnostic: the report feeds human review of the
dictionary and never changes classification in the same run.
"""

import logging
from collections import Counter
from typing import Dict, List

from hobbytags.utils.storage import write_json

logger = logging.getLogger(__name__)


class UnknownHobbyRegistry:
    """
    Accumulates unresolved candidate phrases and their occurrence counts.

    One instance per pipeline invocation; never shared across runs.
    """

    def __init__(self):
        self.counts: Counter = Counter()

    def record(self, term: str) -> None:
        """Count one occurrence of an unresolved term."""
        self.counts[term] += 1
        logger.debug(f"Unknown hobby candidate: '{term}' (seen {self.counts[term]}x)")

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, term: str) -> bool:
        return term in self.counts

    def get_count(self, term: str) -> int:
        return self.counts.get(term, 0)

    def to_report(self) -> List[Dict]:
        """
        Registry as a review report.

        Returns:
            [{"term": term, "count": n}] sorted by count descending,
            then alphabetically
        """
        ordered = sorted(self.counts.items(), key=lambda item: (-item[1], item[0]))
        return [{"term": term, "count": count} for term, count in ordered]

    def save(self, path: str) -> None:
        """Write the report to path."""
        report = self.to_report()
        write_json(path, report)
        logger.info(f"Wrote {len(report)} unknown hobbies to {path}")
