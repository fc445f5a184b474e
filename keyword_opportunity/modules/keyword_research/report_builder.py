"""Assemble clusters and selections into an AnalysisReport."""

import logging
from typing import Optional, Sequence

from keyword_opportunity.config import EngineSettings
from keyword_opportunity.models.keyword import KeywordCluster
from keyword_opportunity.models.report import (
    AnalysisReport,
    CompetitorEntry,
    ReportSummary,
    SummaryCard,
)
from keyword_opportunity.modules.keyword_research.selector import (
    build_action_plan,
    find_high_value,
    find_quick_wins,
    tabulate_competitors,
)
from keyword_opportunity.utils.helpers import round_half_up

logger = logging.getLogger(__name__)


def summarize_clusters(
    clusters: Sequence[KeywordCluster],
    competitors: Sequence[CompetitorEntry] = (),
    traffic_capture_rate: float = 0.3,
) -> ReportSummary:
    """Totals over all clusters; averages are means of the cluster averages."""
    count = len(clusters)
    total_volume = sum(c.total_search_volume for c in clusters)
    return ReportSummary(
        total_keywords=sum(c.keyword_count for c in clusters),
        total_clusters=count,
        total_search_volume=total_volume,
        avg_difficulty=sum(c.avg_difficulty for c in clusters) / count if count else 0.0,
        avg_cpc=sum(c.avg_cpc for c in clusters) / count if count else 0.0,
        estimated_traffic_potential=round_half_up(total_volume * traffic_capture_rate),
        top_competitor=competitors[0].domain if competitors else None,
    )


def build_summary_cards(summary: ReportSummary) -> list[SummaryCard]:
    return [
        SummaryCard(
            title="Total Keywords",
            value=str(summary.total_keywords),
            description="Total number of relevant keywords analyzed.",
        ),
        SummaryCard(
            title="Total Search Volume",
            value=f"{summary.total_search_volume:,}",
            description="Estimated monthly searches for all keywords.",
        ),
        SummaryCard(
            title="Average Difficulty",
            value=f"{round(summary.avg_difficulty)}/100",
            description="Estimated competition for ranking.",
        ),
        SummaryCard(
            title="Top Competitor",
            value=summary.top_competitor or "N/A",
            description="Most frequently seen competing domain.",
        ),
    ]


def assemble_report(
    clusters: Sequence[KeywordCluster],
    settings: Optional[EngineSettings] = None,
    source_website: Optional[str] = None,
    business_type: Optional[str] = None,
    analysis_date: Optional[str] = None,
) -> AnalysisReport:
    """Select opportunities from *clusters* and build the final report.

    *clusters* must already be ordered by descending total commercial
    score.  An empty list yields an all-zero summary and empty subsets.
    """
    settings = settings or EngineSettings()
    clusters = list(clusters)

    quick_wins = find_quick_wins(
        clusters,
        max_difficulty=settings.quick_win_max_difficulty,
        min_volume=settings.quick_win_min_volume,
        limit=settings.top_n_subset,
    )
    high_value = find_high_value(
        clusters,
        min_score=settings.high_value_min_score,
        max_difficulty=settings.high_value_max_difficulty,
        limit=settings.top_n_subset,
    )
    competitors = tabulate_competitors(clusters, limit=settings.top_n_competitors)

    summary = summarize_clusters(clusters, competitors, settings.traffic_capture_rate)
    summary.source_website = source_website
    summary.business_type = business_type
    summary.analysis_date = analysis_date

    report = AnalysisReport(
        summary=summary,
        summary_cards=build_summary_cards(summary),
        quick_wins=quick_wins,
        high_value=high_value,
        clusters=clusters,
        top_clusters=clusters[: settings.top_n_clusters],
        competitors=competitors,
        action_plan=build_action_plan(clusters, quick_wins, high_value, competitors),
    )
    logger.info(
        "Report assembled: %d keywords, %d clusters, %d quick wins, %d high-value",
        summary.total_keywords, summary.total_clusters, len(quick_wins), len(high_value),
    )
    return report
