"""
Keyword Extraction Agent.

Turns normalized hobby text into an ordered, de-duplicated list of
canonical keywords (token level), or into candidate hobby phrases
(chunk level) for the open-vocabulary pipeline.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from hobbytags.agents.normalization import (
    normalize_for_lookup,
    normalize_hobby_text,
    strip_noise_phrases,
)
from hobbytags.rules import (
    CANDIDATE_STOPWORDS,
    INVALID_VALUES,
    NOISE_WORDS,
    SPECIFICITY_CONFLICTS,
    STOP_WORDS,
    TOKEN_CORRECTIONS,
    UNKNOWN_REJECT_PHRASES,
    UNKNOWN_REJECT_WORDS,
)

logger = logging.getLogger(__name__)


NUMERIC_TOKEN = re.compile(r"^\d+$")
CONJUNCTION_SPLIT = re.compile(r"\b(?:and)\b|&")
ALNUM = re.compile(r"[a-z0-9]", re.IGNORECASE)


class KeywordExtractor:
    """
    Extracts canonical keywords from normalized text.

    Scans tokens left to right, resolving the longest known multi-word
    phrase first, then token-level corrections, then the drop filters
    (stopwords, noise words, short tokens, numbers and, when an allow-list
    is configured, anything outside it).

    With allowed_terms=None the extractor runs open-vocabulary: any token
    surviving the filters is kept.
    """

    def __init__(
        self,
        multiword: Optional[Dict[str, str]] = None,
        token_corrections: Optional[Dict[str, str]] = None,
        stop_words: Iterable[str] = STOP_WORDS,
        noise_words: Iterable[str] = NOISE_WORDS,
        allowed_terms: Optional[Iterable[str]] = None,
        conflicts: Sequence[Tuple[str, str]] = SPECIFICITY_CONFLICTS
    ):
        """
        Initialize keyword extractor.

        Args:
            multiword: Phrase ("video games") -> canonical token ("videogame")
            token_corrections: Single-token fixes ("movies" -> "movie")
            stop_words: Tokens always dropped
            noise_words: Survey filler tokens always dropped
            allowed_terms: Allow-list of keywords, or None for open vocabulary
            conflicts: (specific, generic) pairs; generic is removed when
                specific was emitted
        """
        self.token_corrections = dict(TOKEN_CORRECTIONS if token_corrections is None else token_corrections)
        self.stop_words = frozenset(stop_words)
        self.noise_words = frozenset(noise_words)
        self.allowed_terms = frozenset(allowed_terms) if allowed_terms is not None else None
        self.conflicts = list(conflicts)

        # Longest phrases first; sorted() is stable so table order breaks ties
        phrases = [(phrase.split(), canonical) for phrase, canonical in (multiword or {}).items()]
        self.multiword_rules = sorted(phrases, key=lambda rule: len(rule[0]), reverse=True)

        mode = "allow-list" if self.allowed_terms is not None else "open-vocabulary"
        logger.debug(
            f"Initialized KeywordExtractor ({mode}) with "
            f"{len(self.multiword_rules)} multi-word rules"
        )

    @property
    def is_allow_list(self) -> bool:
        return self.allowed_terms is not None

    def extract(self, normalized_text: str, max_keywords: int = 12) -> List[str]:
        """
        Extract keywords from normalized text.

        Args:
            normalized_text: Output of TextNormalizer.normalize()
            max_keywords: Upper bound on returned keywords

        Returns:
            Ordered unique keywords, len <= max_keywords
        """
        words = [w for w in normalized_text.split(" ") if w]
        seen = set()
        out = []

        i = 0
        while i < len(words) and len(out) < max_keywords:
            matched, consumed = self._match_multiword(words, i)
            word = matched if matched is not None else words[i]
            i += consumed

            word = self.token_corrections.get(word, word)
            if not self._keep(word) or word in seen:
                continue

            seen.add(word)
            out.append(word)

        for specific, generic in self.conflicts:
            if specific in seen:
                out = [w for w in out if w != generic]

        return out

    def _match_multiword(self, words: List[str], start: int) -> Tuple[Optional[str], int]:
        """Return (canonical, tokens consumed) for the longest phrase at start."""
        for phrase_tokens, canonical in self.multiword_rules:
            end = start + len(phrase_tokens)
            if end > len(words):
                continue
            if words[start:end] == phrase_tokens:
                return canonical, len(phrase_tokens)
        return None, 1

    def _keep(self, word: str) -> bool:
        if word in self.stop_words or word in self.noise_words:
            return False
        if len(word) <= 2 and word != "3d":
            return False
        if NUMERIC_TOKEN.match(word):
            return False
        if self.allowed_terms is not None and word not in self.allowed_terms:
            return False
        return True


def clean_candidate_phrase(text: str) -> str:
    """Normalize a phrase, strip filler phrases and drop stopwords."""
    no_noise = strip_noise_phrases(normalize_for_lookup(text))
    words = [w.strip() for w in no_noise.split(" ")]
    return " ".join(w for w in words if w and w not in CANDIDATE_STOPWORDS).strip()


def is_invalid_phrase(value: str) -> bool:
    """True for placeholder answers such as "none" or "n/a"."""
    return normalize_for_lookup(value) in INVALID_VALUES


def is_reasonable_unknown(value: str) -> bool:
    """
    Decide whether an unresolved phrase is worth recording for review.

    Rejects short or placeholder values, phrases without alphanumerics,
    sentence fragments ("such as", "i am"), phrases over four words and
    phrases containing any reject word.
    """
    if not value or len(value) <= 2:
        return False
    if is_invalid_phrase(value):
        return False
    if not ALNUM.search(value):
        return False
    for phrase in UNKNOWN_REJECT_PHRASES:
        if re.search(r"\b" + re.escape(phrase) + r"\b", value, re.IGNORECASE):
            return False
    words = [w for w in value.split(" ") if w]
    if len(words) > 4:
        return False
    if any(w in UNKNOWN_REJECT_WORDS for w in words):
        return False
    return True


def extract_hobby_candidates(about_text: str) -> List[str]:
    """
    Split free text into unique candidate hobby phrases.

    Chunks on commas (and other structural separators), then on "and"/"&";
    each part is cleaned with clean_candidate_phrase(). Parts of two
    characters or fewer and placeholder answers are dropped.

    Args:
        about_text: Raw or display-cleaned free text

    Returns:
        Candidate phrases in first-seen order
    """
    normalized = normalize_hobby_text(about_text)
    if not normalized:
        return []

    results = []
    for chunk in normalized.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        for part in CONJUNCTION_SPLIT.split(chunk):
            part = part.strip()
            if not part:
                continue
            cleaned = clean_candidate_phrase(part)
            if not cleaned or len(cleaned) <= 2:
                continue
            if is_invalid_phrase(cleaned):
                continue
            if cleaned not in results:
                results.append(cleaned)

    return results
