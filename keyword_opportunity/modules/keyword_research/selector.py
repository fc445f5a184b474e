"""Opportunity selection -- quick wins, high-value targets, competitors, action plan."""

import logging
from collections import Counter
from typing import Sequence

from keyword_opportunity.models.keyword import KeywordCluster
from keyword_opportunity.models.report import ActionStep, CompetitorEntry

logger = logging.getLogger(__name__)


def _by_commercial_score(clusters: list[KeywordCluster]) -> list[KeywordCluster]:
    return sorted(clusters, key=lambda c: -c.total_commercial_score)


def find_quick_wins(
    clusters: Sequence[KeywordCluster],
    max_difficulty: float = 40,
    min_volume: int = 50,
    limit: int = 5,
) -> list[KeywordCluster]:
    """Low-difficulty clusters with real search demand, best first."""
    for cluster in clusters:
        logger.debug(
            "Cluster %r: avg_difficulty=%.1f (< %s), total_search_volume=%d (> %s)",
            cluster.main_keyword, cluster.avg_difficulty, max_difficulty,
            cluster.total_search_volume, min_volume,
        )
    matches = [
        c for c in clusters
        if c.avg_difficulty < max_difficulty and c.total_search_volume > min_volume
    ]
    quick_wins = _by_commercial_score(matches)[:limit]
    logger.info("Found %d quick wins", len(quick_wins))
    return quick_wins


def find_high_value(
    clusters: Sequence[KeywordCluster],
    min_score: int = 1000,
    max_difficulty: float = 65,
    limit: int = 5,
) -> list[KeywordCluster]:
    """High commercial-score clusters that are still winnable, best first."""
    matches = [
        c for c in clusters
        if c.total_commercial_score > min_score and c.avg_difficulty < max_difficulty
    ]
    high_value = _by_commercial_score(matches)[:limit]
    logger.info("Found %d high-value targets", len(high_value))
    return high_value


def tabulate_competitors(
    clusters: Sequence[KeywordCluster],
    limit: int = 10,
) -> list[CompetitorEntry]:
    """Count how many clusters each competitor domain ranks in.

    Sorted by frequency descending; equal counts keep first-seen order.
    """
    counts = Counter(domain for c in clusters for domain in c.competitor_domains)
    return [
        CompetitorEntry(domain=domain, frequency=frequency)
        for domain, frequency in counts.most_common(limit)
    ]


def build_action_plan(
    clusters: Sequence[KeywordCluster],
    quick_wins: Sequence[KeywordCluster],
    high_value: Sequence[KeywordCluster],
    competitors: Sequence[CompetitorEntry],
) -> list[ActionStep]:
    """Up to four templated steps, each only when its data exists."""
    plan: list[ActionStep] = []

    if quick_wins:
        plan.append(ActionStep(
            title='Target "Quick Win" Keywords',
            description=(
                "Focus on creating content for low-competition keywords like "
                f'"{quick_wins[0].main_keyword}" to see faster ranking improvements. '
                "These are often easier to rank for and can bring initial traffic."
            ),
            category="Quick Wins",
        ))

    if high_value:
        plan.append(ActionStep(
            title="Pursue High-Value Targets",
            description=(
                "Develop in-depth, high-quality content for valuable keywords like "
                f'"{high_value[0].main_keyword}". These may be more competitive but '
                "offer significant returns."
            ),
            category="High Value",
        ))

    if clusters:
        plan.append(ActionStep(
            title="Build Thematic Authority",
            description=(
                "Create comprehensive content around your primary keyword clusters, "
                f'starting with the "{clusters[0].theme.value}" theme, to establish '
                "expertise and improve rankings across a group of related terms."
            ),
            category="Content",
        ))

    if competitors:
        plan.append(ActionStep(
            title="Analyze Top Competitors",
            description=(
                f"Investigate the content strategies of competitors like {competitors[0].domain}. "
                "Analyze their top-ranking pages for your target keywords to find gaps "
                "and opportunities."
            ),
            category="Competitors",
        ))

    return plan
