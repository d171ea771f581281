"""
Skill matcher for skillmatch.

Scores every descriptor of a registry against a free-text request and
returns a ranked MatchResult. Matching is a pure function of the query,
the registry and the weights, so one matcher can serve concurrent callers.

Score components:
- trigger: trigger phrases found (as token sequences) in the query
- overlap: Jaccard similarity of query and descriptor content tokens
- name: the descriptor name appears in the query as a whole token
  sequence (tie-break only; it never qualifies an entry by itself)

A query that is exactly a descriptor's name always ranks that descriptor
first, even above entries with a higher score.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from skillmatch.config.schema import MatcherConfig
from skillmatch.skills.errors import EmptyQueryError
from skillmatch.skills.models import MatchEntry, MatchResult, ScoreBreakdown, SkillDescriptor
from skillmatch.skills.registry import SkillRegistry
from skillmatch.skills.tokenizer import (
    STOP_WORDS,
    contains_sequence,
    content_tokens,
    jaccard,
    normalize,
    tokenize,
)

logger = logging.getLogger(__name__)

SCORE_PRECISION = 6


@dataclass(frozen=True)
class _DescriptorFeatures:
    name: str
    name_sequence: tuple[str, ...]
    tokens: frozenset[str]
    triggers: tuple[tuple[str, tuple[str, ...]], ...]


@dataclass(frozen=True)
class _QueryFeatures:
    text: str
    sequence: tuple[str, ...]
    tokens: frozenset[str]


@lru_cache(maxsize=2048)
def _descriptor_features(name: str, description: str, triggers: tuple[str, ...]) -> _DescriptorFeatures:
    tokens = content_tokens(f"{name} {description}")
    trigger_sequences = tuple(
        (phrase, tuple(tokenize(phrase))) for phrase in triggers if tokenize(phrase)
    )
    return _DescriptorFeatures(
        name=" ".join(normalize(name).split()),
        name_sequence=tuple(tokenize(name)),
        tokens=tokens,
        triggers=trigger_sequences,
    )


def _features(descriptor: SkillDescriptor) -> _DescriptorFeatures:
    return _descriptor_features(descriptor.name, descriptor.description, descriptor.triggers)


def _query_features(query: str) -> _QueryFeatures:
    sequence = tuple(tokenize(query))
    return _QueryFeatures(
        text=" ".join(normalize(query).split()),
        sequence=sequence,
        tokens=frozenset(t for t in sequence if t not in STOP_WORDS),
    )


def _sort_key(entry: MatchEntry) -> tuple[bool, float, int, str]:
    # Exact name first, then score, then the more specific (shorter) description.
    return (
        not entry.breakdown.exact_name,
        -entry.score,
        len(entry.descriptor.description),
        entry.descriptor.name,
    )


class SkillMatcher:
    """Ranks registry descriptors against natural-language requests."""

    def __init__(self, settings: MatcherConfig | None = None):
        self.settings = settings or MatcherConfig()

    def score(self, query: str, descriptor: SkillDescriptor) -> ScoreBreakdown:
        """Score a single descriptor against a query.

        Raises:
            EmptyQueryError: If the query is blank.
        """
        if not query or not query.strip():
            raise EmptyQueryError()
        return self._score(_query_features(query), descriptor)

    def _score(self, query: _QueryFeatures, descriptor: SkillDescriptor) -> ScoreBreakdown:
        features = _features(descriptor)
        settings = self.settings

        matched = tuple(
            phrase for phrase, sequence in features.triggers if contains_sequence(query.sequence, sequence)
        )
        overlap = jaccard(query.tokens, features.tokens)

        name_hit = contains_sequence(query.sequence, features.name_sequence)

        return ScoreBreakdown(
            trigger=round(settings.trigger_weight * len(matched), SCORE_PRECISION),
            overlap=round(settings.overlap_weight * overlap, SCORE_PRECISION),
            name=settings.name_weight if name_hit else 0.0,
            matched_triggers=matched,
            exact_name=query.text == features.name,
        )

    def match(
        self,
        query: str,
        registry: SkillRegistry,
        max_results: int | None = None,
    ) -> MatchResult:
        """Rank every descriptor in the registry against the query.

        Args:
            query: Natural-language request.
            registry: Registry snapshot to match against.
            max_results: Result limit; defaults to the configured limit.
                Zero means unlimited.

        Returns:
            MatchResult with an exact-name entry first, then the rest by
            descending score. Empty when no trigger or overlap score is above
            the configured minimum.

        Raises:
            EmptyQueryError: If the query is blank.
        """
        if not query or not query.strip():
            raise EmptyQueryError()

        query_features = _query_features(query)
        threshold = self.settings.min_score
        limit = self.settings.max_results if max_results is None else max_results

        entries = []
        for descriptor in registry.list():
            breakdown = self._score(query_features, descriptor)
            # The name bonus only breaks ties; it never qualifies an entry.
            if breakdown.exact_name or breakdown.relevance > threshold:
                entries.append(MatchEntry(descriptor=descriptor, score=breakdown.total, breakdown=breakdown))

        entries.sort(key=_sort_key)
        if limit:
            entries = entries[:limit]

        logger.debug(
            f"Matched {query!r}: "
            + (", ".join(f"{e.name}={e.score}" for e in entries) if entries else "no skills above threshold")
        )
        return MatchResult(query=query, entries=tuple(entries))


def match(query: str, registry: SkillRegistry, settings: MatcherConfig | None = None) -> MatchResult:
    """Match a query against a registry with the given (or default) settings."""
    return SkillMatcher(settings).match(query, registry)
