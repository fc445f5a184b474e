"""Shared pytest fixtures for keyword opportunity tests."""

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'keyword_opportunity' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


@pytest.fixture()
def settings():
    """Default engine settings."""
    from keyword_opportunity.config import EngineSettings
    return EngineSettings()


@pytest.fixture()
def engine(settings):
    """Keyword opportunity engine with default settings."""
    from keyword_opportunity.modules.keyword_research import KeywordOpportunityEngine
    return KeywordOpportunityEngine(settings=settings)


@pytest.fixture()
def running_shoes_records():
    """Two closely related shoe keywords."""
    return [
        {"keyword": "buy running shoes", "search_volume": 1000, "cpc": 1.2, "competition": 0.5},
        {"keyword": "best running shoes", "search_volume": 800, "cpc": 1.0, "competition": 0.4},
    ]


@pytest.fixture()
def sample_records():
    """A mixed set of raw records across several themes."""
    return [
        {"keyword": "buy running shoes", "search_volume": 1000, "cpc": 1.2, "competition": 0.5},
        {"keyword": "best running shoes", "search_volume": 800, "cpc": 1.0, "competition": 0.4},
        {"keyword": "trail running shoes", "search_volume": 600, "cpc": 0.9, "competition_level": "LOW"},
        {"keyword": "how to tie a tie", "search_volume": 300, "cpc": 0.2, "competition_level": "LOW"},
        {"keyword": "tie knot guide", "search_volume": 120, "cpc": 0.3, "competition": 0.1},
        {"keyword": "garden hose price", "search_volume": 2500, "cpc": 2.5, "competition_level": "HIGH"},
        {"keyword": "plumber", "search_volume": 40, "cpc": 6.0, "competition": "MEDIUM"},
        {"keyword": "zero volume keyword", "search_volume": 0, "cpc": 3.0},
    ]


@pytest.fixture()
def sample_ranking_pages():
    """Ranking pages keyed by keyword text."""
    return {
        "buy running shoes": [
            {"url": "https://www.amazon.com/running-shoes", "title": "Running Shoes", "position": 1},
            {"url": "https://www.runnersworld.com/gear", "title": "Gear", "position": 2},
        ],
        "garden hose price": [
            {"url": "https://www.homedepot.com/hoses", "position": 1},
            {"url": "https://hoseguide.net/prices", "position": 2},
            {"url": "https://www.runnersworld.com/off-topic", "position": 3},
        ],
    }


@pytest.fixture()
def make_record():
    """Factory for scored KeywordRecord objects."""
    from keyword_opportunity.models.keyword import KeywordRecord, RankingPage

    def _make(keyword, search_volume=100, cpc=1.0, difficulty=30, score=None, domains=()):
        return KeywordRecord(
            keyword=keyword,
            search_volume=search_volume,
            cpc=cpc,
            keyword_difficulty=difficulty,
            commercial_score=search_volume if score is None else score,
            ranking_pages=[
                RankingPage(url=f"https://{d}/", domain=d, position=i)
                for i, d in enumerate(domains, start=1)
            ],
        )

    return _make


@pytest.fixture()
def make_cluster(make_record):
    """Factory for single-member KeywordCluster objects."""
    from keyword_opportunity.modules.keyword_research.clustering import aggregate_cluster

    def _make(cluster_id, keyword, search_volume=100, difficulty=30, score=None, domains=()):
        record = make_record(
            keyword, search_volume=search_volume, difficulty=difficulty,
            score=score, domains=domains,
        )
        return aggregate_cluster(cluster_id, [record])

    return _make
