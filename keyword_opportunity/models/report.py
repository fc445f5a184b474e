"""Analysis report models."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from keyword_opportunity.models.keyword import KeywordCluster


@dataclass
class SummaryCard:
    """Headline metric shown at the top of a report."""
    title: str
    value: str
    description: str


@dataclass
class ActionStep:
    """One templated recommendation in the action plan."""
    title: str
    description: str
    category: str  # Quick Wins, High Value, Content, Competitors


@dataclass
class CompetitorEntry:
    """Domain and the number of clusters it ranks in."""
    domain: str
    frequency: int


@dataclass
class ReportSummary:
    """Totals and averages over every cluster of a run."""
    total_keywords: int = 0
    total_clusters: int = 0
    total_search_volume: int = 0
    avg_difficulty: float = 0.0
    avg_cpc: float = 0.0
    estimated_traffic_potential: int = 0
    top_competitor: Optional[str] = None
    source_website: Optional[str] = None
    business_type: Optional[str] = None
    analysis_date: Optional[str] = None


@dataclass
class AnalysisReport:
    """Final output of one analysis run."""
    summary: ReportSummary
    summary_cards: list[SummaryCard] = field(default_factory=list)
    quick_wins: list[KeywordCluster] = field(default_factory=list)
    high_value: list[KeywordCluster] = field(default_factory=list)
    clusters: list[KeywordCluster] = field(default_factory=list)
    top_clusters: list[KeywordCluster] = field(default_factory=list)
    competitors: list[CompetitorEntry] = field(default_factory=list)
    action_plan: list[ActionStep] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain JSON-compatible types."""
        return {
            "summary": asdict(self.summary),
            "summary_cards": [asdict(card) for card in self.summary_cards],
            "quick_wins": [cl.to_dict() for cl in self.quick_wins],
            "high_value": [cl.to_dict() for cl in self.high_value],
            "top_clusters": [cl.cluster_id for cl in self.top_clusters],
            "clusters": [cl.to_dict() for cl in self.clusters],
            "competitors": [asdict(entry) for entry in self.competitors],
            "action_plan": [asdict(step) for step in self.action_plan],
        }
