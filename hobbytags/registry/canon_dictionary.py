"""
Canonical Hobby Dictionary.

Maps cleaned hobby phrases (canonical names and their accepted variants)
to the canonical hobby term. Loaded once per run, read-only afterwards.
"""

import json
import logging
from typing import Dict, List, Optional

from hobbytags.agents.extraction import clean_candidate_phrase

logger = logging.getLogger(__name__)


class CanonicalHobbyDictionary:
    """
    Lookup table from cleaned phrase -> canonical hobby term.

    Source format is a JSON object {"canonical": ["variant", ...], ...}.
    Keys and variants are cleaned with the same routine as survey
    candidates, so lookups compare like with like. Later entries win
    when two canonicals claim the same cleaned phrase.
    """

    def __init__(self, entries: Dict[str, List[str]]):
        """
        Build the dictionary.

        Args:
            entries: Canonical term -> list of raw variants
        """
        self.entries = entries
        self.lookup_map: Dict[str, str] = {}

        for canonical, variants in entries.items():
            clean_canonical = clean_candidate_phrase(canonical)
            if clean_canonical:
                self.lookup_map[clean_canonical] = canonical

            if not isinstance(variants, list):
                logger.warning(f"Ignoring non-list variants for canonical hobby '{canonical}'")
                continue
            for variant in variants:
                cleaned = clean_candidate_phrase(str(variant))
                if cleaned:
                    self.lookup_map[cleaned] = canonical

        logger.info(
            f"Loaded canonical hobby dictionary: {len(entries)} terms, "
            f"{len(self.lookup_map)} lookup phrases"
        )

    @classmethod
    def load(cls, path: str) -> "CanonicalHobbyDictionary":
        """
        Load a dictionary JSON file (a leading UTF-8 BOM is tolerated).

        Raises:
            OSError: If the file cannot be read
            ValueError: If the content is not a JSON object
        """
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read().lstrip("\ufeff")

        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Canonical hobby dictionary must be a JSON object: {path}")

        return cls(data)

    def lookup(self, phrase: str) -> Optional[str]:
        """Return the canonical term for an already-cleaned phrase, or None."""
        return self.lookup_map.get(phrase)

    def __len__(self) -> int:
        return len(self.entries)
