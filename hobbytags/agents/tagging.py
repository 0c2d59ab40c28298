"""
Hobby Taggers.

Two interchangeable strategies behind one interface:

- RuleBasedTagger: allow-list keyword extraction + area classification.
  Produces canonical keywords and hobby areas.
- CanonDictionaryTagger: open-vocabulary candidate phrases resolved
  against the canonical hobby dictionary. Produces free-form canonical
  tags and feeds the unknown-hobby registry.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import config.settings as settings
from hobbytags.agents.classification import AreaClassifier
from hobbytags.agents.extraction import (
    KeywordExtractor,
    extract_hobby_candidates,
    is_reasonable_unknown,
)
from hobbytags.agents.normalization import TextNormalizer
from hobbytags.registry.canon_dictionary import CanonicalHobbyDictionary
from hobbytags.registry.unknown_registry import UnknownHobbyRegistry
from hobbytags.rules import MULTIWORD_CANONICAL

logger = logging.getLogger(__name__)


@dataclass
class TagResult:
    """Tags derived from one free-text answer."""
    tags: List[str] = field(default_factory=list)
    areas: List[str] = field(default_factory=list)  # empty for the canon variant
    unknown: List[str] = field(default_factory=list)


class HobbyTagger:
    """
    Base interface. Subclasses set `variant` and implement tag().
    """

    variant = ""

    def tag(self, text: str, unknown_registry: Optional[UnknownHobbyRegistry] = None) -> TagResult:
        raise NotImplementedError


class RuleBasedTagger(HobbyTagger):
    """
    Allow-list variant.

    Only keywords referenced by the area rules survive extraction, so any
    hobby not yet covered by a rule is silently dropped.

    phrase_strategy picks where multi-word idioms are resolved:
    - "normalizer": regex phrase corrections before tokenizing
    - "tokenizer": longest-match phrase table during token scan
    Exactly one of the two is active.
    """

    variant = "rule"

    def __init__(
        self,
        classifier: Optional[AreaClassifier] = None,
        phrase_strategy: str = settings.DEFAULT_PHRASE_STRATEGY,
        max_keywords: int = settings.DEFAULT_MAX_KEYWORDS
    ):
        if phrase_strategy not in settings.PHRASE_STRATEGIES:
            raise ValueError(
                f"Invalid phrase strategy: {phrase_strategy}. "
                f"Must be one of {settings.PHRASE_STRATEGIES}"
            )
        if max_keywords < 1:
            raise ValueError(f"Invalid max_keywords: {max_keywords}. Must be at least 1")

        self.classifier = classifier or AreaClassifier()
        self.phrase_strategy = phrase_strategy
        self.max_keywords = max_keywords

        if phrase_strategy == "normalizer":
            self.normalizer = TextNormalizer()
            multiword = {}
        else:
            self.normalizer = TextNormalizer(phrase_corrections=())
            multiword = MULTIWORD_CANONICAL

        self.extractor = KeywordExtractor(
            multiword=multiword,
            allowed_terms=self.classifier.keyword_universe
        )

        logger.info(
            f"Initialized RuleBasedTagger (phrase_strategy={phrase_strategy}, "
            f"max_keywords={max_keywords}, {len(self.classifier.rules)} area rules)"
        )

    def extract_keywords(self, text: str) -> List[str]:
        return self.extractor.extract(self.normalizer.normalize(text), self.max_keywords)

    def tag(self, text: str, unknown_registry: Optional[UnknownHobbyRegistry] = None) -> TagResult:
        keywords = self.extract_keywords(text)
        areas = self.classifier.classify(keywords)
        return TagResult(tags=keywords, areas=areas)


class CanonDictionaryTagger(HobbyTagger):
    """
    Open-vocabulary variant.

    Each candidate phrase is looked up in the canonical dictionary.
    Unresolved but plausible phrases are counted in the unknown registry
    and, when include_unknown_as_tags is set, kept as tags verbatim.
    Tags are returned sorted.
    """

    variant = "canon"

    def __init__(
        self,
        dictionary: CanonicalHobbyDictionary,
        include_unknown_as_tags: bool = settings.INCLUDE_UNKNOWN_AS_TAGS
    ):
        self.dictionary = dictionary
        self.include_unknown_as_tags = include_unknown_as_tags
        logger.info(
            f"Initialized CanonDictionaryTagger "
            f"(include_unknown_as_tags={include_unknown_as_tags})"
        )

    def tag(self, text: str, unknown_registry: Optional[UnknownHobbyRegistry] = None) -> TagResult:
        tags = set()
        unknown = []

        for candidate in extract_hobby_candidates(text):
            canonical = self.dictionary.lookup(candidate)
            if canonical:
                tags.add(canonical)
                continue

            if is_reasonable_unknown(candidate):
                unknown.append(candidate)
                if unknown_registry is not None:
                    unknown_registry.record(candidate)
                if self.include_unknown_as_tags:
                    tags.add(candidate)

        return TagResult(tags=sorted(tags), unknown=unknown)


def build_tagger(
    variant: str,
    dictionary: Optional[CanonicalHobbyDictionary] = None,
    phrase_strategy: str = settings.DEFAULT_PHRASE_STRATEGY,
    max_keywords: int = settings.DEFAULT_MAX_KEYWORDS,
    include_unknown_as_tags: bool = settings.INCLUDE_UNKNOWN_AS_TAGS
) -> HobbyTagger:
    """
    Create the tagger for a configured variant ("rule" or "canon").

    Raises:
        ValueError: On an unknown variant or a canon variant without dictionary
    """
    if variant == "rule":
        return RuleBasedTagger(phrase_strategy=phrase_strategy, max_keywords=max_keywords)
    if variant == "canon":
        if dictionary is None:
            raise ValueError("The canon tagger requires a canonical hobby dictionary")
        return CanonDictionaryTagger(dictionary, include_unknown_as_tags=include_unknown_as_tags)
    raise ValueError(f"Invalid tagger variant: {variant}. Must be one of {settings.TAGGER_VARIANTS}")
