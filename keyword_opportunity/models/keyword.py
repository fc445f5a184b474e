"""Keyword, ranking-page, and keyword-cluster models."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class Theme(str, Enum):
    """Intent theme assigned to a keyword cluster."""
    PURCHASE_INTENT = "Purchase Intent"
    RESEARCH_COMPARISON = "Research & Comparison"
    EDUCATIONAL = "Educational"
    PRICE_RESEARCH = "Price Research"
    GENERAL = "General"


@dataclass
class RankingPage:
    """One organic result observed for a keyword."""
    url: str
    title: str = ""
    domain: str = ""
    position: int = 0


@dataclass
class KeywordRecord:
    """Individual keyword with search metrics and derived scores."""
    keyword: str
    search_volume: int
    cpc: float = 0.5
    competition: float = 0.3
    competition_level: str = "UNKNOWN"
    keyword_difficulty: float = 0.0
    ranking_pages: list[RankingPage] = field(default_factory=list)
    commercial_score: int = 0
    is_seed: bool = False

    @property
    def domains(self) -> list[str]:
        """Domains of the ranking pages, in rank order."""
        return [page.domain for page in self.ranking_pages if page.domain]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __repr__(self) -> str:
        return f"<KeywordRecord keyword={self.keyword!r} vol={self.search_volume}>"


@dataclass
class KeywordCluster:
    """Group of related keywords sharing a representative term.

    ``members`` keeps discovery order; the first member is always the
    cluster's main keyword.
    """
    cluster_id: int
    main_keyword: str
    theme: Theme
    members: list[KeywordRecord]
    total_search_volume: int = 0
    avg_cpc: float = 0.0
    avg_difficulty: float = 0.0
    total_commercial_score: int = 0
    competitor_domains: list[str] = field(default_factory=list)

    @property
    def keyword_count(self) -> int:
        return len(self.members)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cluster_id": self.cluster_id,
            "main_keyword": self.main_keyword,
            "theme": self.theme.value,
            "keyword_count": self.keyword_count,
            "total_search_volume": self.total_search_volume,
            "avg_cpc": round(self.avg_cpc, 2),
            "avg_difficulty": round(self.avg_difficulty, 1),
            "total_commercial_score": self.total_commercial_score,
            "competitor_domains": list(self.competitor_domains),
            "keywords": [member.to_dict() for member in self.members],
        }

    def __repr__(self) -> str:
        return (
            f"<KeywordCluster id={self.cluster_id} "
            f"main={self.main_keyword!r} size={self.keyword_count}>"
        )
