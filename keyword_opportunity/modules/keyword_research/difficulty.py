"""Ranking-difficulty estimation from observed ranking pages or keyword metrics."""

import logging
import math
from typing import Iterable, Optional, Sequence

from keyword_opportunity.config import HIGH_AUTHORITY_DOMAINS
from keyword_opportunity.models.keyword import KeywordRecord, RankingPage
from keyword_opportunity.utils.helpers import round_half_up

logger = logging.getLogger(__name__)

HIGH_AUTHORITY_SCORE = 35
STANDARD_SCORE = 15
MAX_PAGES_CONSIDERED = 10

LEVEL_BASE_DIFFICULTY: dict[str, float] = {
    "HIGH": 70,
    "MEDIUM": 45,
    "LOW": 25,
}
MIN_METRIC_DIFFICULTY = 15
FALLBACK_DIFFICULTY = 30


def is_high_authority(domain: str, authority_domains: Iterable[str] = HIGH_AUTHORITY_DOMAINS) -> bool:
    """True when *domain* contains one of the high-authority domains."""
    domain = (domain or "").lower()
    return bool(domain) and any(ha in domain for ha in authority_domains)


def difficulty_from_ranking_pages(
    pages: Sequence[RankingPage],
    authority_domains: Iterable[str] = HIGH_AUTHORITY_DOMAINS,
) -> int:
    """Authority-weighted difficulty over the top ten ranking pages.

    The page at 0-indexed position ``i`` weighs ``(10 - i) / 10`` and
    contributes 35 points for a high-authority domain, 15 otherwise.
    Returns 0 for an empty page list, meaning the caller should fall back
    to :func:`difficulty_from_metrics`.
    """
    if not pages:
        return 0
    authority_domains = tuple(authority_domains)
    difficulty = 0.0
    for index, page in enumerate(pages[:MAX_PAGES_CONSIDERED]):
        weight = (MAX_PAGES_CONSIDERED - index) / MAX_PAGES_CONSIDERED
        score = HIGH_AUTHORITY_SCORE if is_high_authority(page.domain, authority_domains) else STANDARD_SCORE
        difficulty += score * weight
    return min(100, round_half_up(difficulty))


def difficulty_from_metrics(
    competition_level: Optional[str],
    competition: float,
    search_volume: float,
    cpc: float,
) -> int:
    """Estimate difficulty from competition, volume, and cost-per-click.

    Base by level (HIGH 70, MEDIUM 45, LOW 25, otherwise
    ``max(20, competition * 100)``), plus volume and cpc bonuses, clamped
    to [15, 100].  A non-numeric intermediate result yields 30.
    """
    level = (competition_level or "").strip().upper()
    if level in LEVEL_BASE_DIFFICULTY:
        difficulty = LEVEL_BASE_DIFFICULTY[level]
    else:
        difficulty = competition * 100
        if not math.isnan(difficulty):
            difficulty = max(20.0, difficulty)

    if search_volume > 100_000:
        difficulty += 15
    elif search_volume > 10_000:
        difficulty += 10
    elif search_volume > 1_000:
        difficulty += 5

    if cpc > 5:
        difficulty += 10
    elif cpc > 2:
        difficulty += 5
    elif cpc > 1:
        difficulty += 3

    if math.isnan(difficulty):
        return FALLBACK_DIFFICULTY
    return min(100, max(MIN_METRIC_DIFFICULTY, round_half_up(difficulty)))


def estimate_difficulty(
    record: KeywordRecord,
    authority_domains: Iterable[str] = HIGH_AUTHORITY_DOMAINS,
) -> int:
    """Ranking-page difficulty when usable, metrics difficulty otherwise."""
    serp_difficulty = difficulty_from_ranking_pages(record.ranking_pages, authority_domains)
    if serp_difficulty > 0:
        return serp_difficulty
    return difficulty_from_metrics(
        record.competition_level,
        record.competition,
        record.search_volume,
        record.cpc,
    )
