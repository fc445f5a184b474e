"""Keyword similarity strategies used by the cluster builder."""

from typing import Protocol

from keyword_opportunity.utils.text_processing import tokenize


class SimilarityStrategy(Protocol):
    """Anything that scores how related two keywords are, in [0, 1]."""

    def similarity(self, keyword_a: str, keyword_b: str) -> float:
        ...


class JaccardSimilarity:
    """Jaccard index over the lowercase word sets of two keywords."""

    name = "jaccard"

    def similarity(self, keyword_a: str, keyword_b: str) -> float:
        words_a = set(tokenize(keyword_a))
        words_b = set(tokenize(keyword_b))
        union = words_a | words_b
        if not union:
            return 0.0
        return len(words_a & words_b) / len(union)


class OverlapSimilarity:
    """Shared words over the size of the smaller word set."""

    name = "overlap"

    def similarity(self, keyword_a: str, keyword_b: str) -> float:
        words_a = set(tokenize(keyword_a))
        words_b = set(tokenize(keyword_b))
        smaller = min(len(words_a), len(words_b))
        if not smaller:
            return 0.0
        return len(words_a & words_b) / smaller


SIMILARITY_STRATEGIES: dict[str, type] = {
    JaccardSimilarity.name: JaccardSimilarity,
    OverlapSimilarity.name: OverlapSimilarity,
}


def get_similarity_strategy(name: str) -> SimilarityStrategy:
    """Instantiate a registered strategy by name.

    Raises:
        ValueError: for an unknown strategy name.
    """
    strategy_cls = SIMILARITY_STRATEGIES.get((name or "").lower())
    if strategy_cls is None:
        raise ValueError(
            f"Unknown similarity strategy: {name!r}. "
            f"Choose from {sorted(SIMILARITY_STRATEGIES)}"
        )
    return strategy_cls()
