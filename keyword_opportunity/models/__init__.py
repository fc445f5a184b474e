"""Data models -- keywords, clusters, and analysis reports."""

from keyword_opportunity.models.keyword import (
    Theme,
    RankingPage,
    KeywordRecord,
    KeywordCluster,
)
from keyword_opportunity.models.report import (
    SummaryCard,
    ActionStep,
    CompetitorEntry,
    ReportSummary,
    AnalysisReport,
)

__all__ = [
    "Theme",
    "RankingPage",
    "KeywordRecord",
    "KeywordCluster",
    "SummaryCard",
    "ActionStep",
    "CompetitorEntry",
    "ReportSummary",
    "AnalysisReport",
]
