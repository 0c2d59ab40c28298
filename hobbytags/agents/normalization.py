"""
Text Normalization Agent.

Deterministic cleanup of free-text hobby answers: lowercasing, emoji and
symbol removal, separator collapsing and ordered phrase corrections.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from hobbytags.rules import NOISE_PHRASES, PHRASE_CORRECTIONS

logger = logging.getLogger(__name__)


EMOJI_PATTERN = re.compile("[\U0001F300-\U0001FAFF\u2600-\u27BF]")
SEPARATOR_PATTERN = re.compile(r"[;|/\\\n\r]+")
NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Unicode-aware variants: keep letters and digits of any script
NON_WORD_PATTERN = re.compile(r"[^\w\s]|_")
NON_WORD_OR_DELIMITER_PATTERN = re.compile(r"[^\w\s,&]|_")


class TextNormalizer:
    """
    Normalizes raw hobby text into a lowercase, space-delimited string.

    Phrase corrections run after symbol removal and before tokenization,
    so idioms like "video games" reach the tokenizer as one token.
    Pass phrase_corrections=() to leave multi-word handling to the
    keyword extractor instead.
    """

    def __init__(self, phrase_corrections: Optional[Sequence[Tuple[str, str]]] = None):
        """
        Initialize normalizer.

        Args:
            phrase_corrections: Ordered (regex, replacement) pairs.
                Defaults to the built-in correction table.
        """
        if phrase_corrections is None:
            phrase_corrections = PHRASE_CORRECTIONS
        self.phrase_corrections = [
            (re.compile(pattern), replacement)
            for pattern, replacement in phrase_corrections
        ]
        logger.debug(f"Initialized TextNormalizer with {len(self.phrase_corrections)} phrase corrections")

    def normalize(self, text: Optional[str]) -> str:
        """
        Normalize raw text.

        Args:
            text: Raw free text (None and "" allowed)

        Returns:
            Normalized string, possibly empty
        """
        if not text:
            return ""

        t = str(text).lower()
        t = EMOJI_PATTERN.sub(" ", t)
        t = SEPARATOR_PATTERN.sub(" ", t)
        t = t.replace("&", " and ")
        t = NON_ALNUM_PATTERN.sub(" ", t)
        for pattern, replacement in self.phrase_corrections:
            t = pattern.sub(replacement, t)
        return WHITESPACE_PATTERN.sub(" ", t).strip()


def normalize_for_lookup(text: Optional[str]) -> str:
    """Lowercase, drop emoji and punctuation, collapse whitespace."""
    t = str(text if text is not None else "").lower()
    t = EMOJI_PATTERN.sub(" ", t)
    t = NON_WORD_PATTERN.sub(" ", t)
    return WHITESPACE_PATTERN.sub(" ", t).strip()


def normalize_hobby_text(text: Optional[str]) -> str:
    """
    Normalize hobby text keeping "," as the chunk delimiter.

    Structural separators (;|/\\ and newlines) become commas, runs of
    commas collapse, and leading/trailing commas are removed. "&" is kept
    so the candidate splitter can use it as a conjunction.
    """
    t = str(text if text is not None else "").lower()
    t = EMOJI_PATTERN.sub(" ", t)
    t = re.sub(r"[;|/\n\r\\]+", ",", t)
    t = NON_WORD_OR_DELIMITER_PATTERN.sub(" ", t)
    t = WHITESPACE_PATTERN.sub(" ", t)
    t = re.sub(r"\s*,\s*", ",", t)
    t = re.sub(r",+", ",", t)
    t = re.sub(r"^,|,$", "", t)
    return t.strip()


def strip_noise_phrases(text: str, phrases: List[str] = NOISE_PHRASES) -> str:
    """Remove filler phrases such as "i like" or "in my free time"."""
    current = text
    for phrase in phrases:
        pattern = r"\b" + r"\s+".join(re.escape(w) for w in phrase.split()) + r"\b"
        current = re.sub(pattern, " ", current)
    return WHITESPACE_PATTERN.sub(" ", current).strip()


def clean_about(text: Optional[str]) -> str:
    """
    Tidy a free-text answer for display.

    Collapses whitespace, turns ; | and , separators into ", ", removes
    empty list items, tightens space before sentence punctuation and
    drops trailing separators.
    """
    if not text:
        return ""

    t = WHITESPACE_PATTERN.sub(" ", text)
    t = re.sub(r"\s*[,;|]\s*", ", ", t)
    t = re.sub(r",\s*,+", ", ", t)
    t = re.sub(r"\s+([.!?])", r"\1", t)
    t = re.sub(r"[,\s]+$", "", t)
    return t.strip()
