"""Tests for similarity strategies, main-term selection, and cluster building."""

import pytest

from keyword_opportunity.models.keyword import Theme
from keyword_opportunity.modules.keyword_research.clustering import (
    aggregate_cluster,
    build_clusters,
)
from keyword_opportunity.modules.keyword_research.similarity import (
    JaccardSimilarity,
    OverlapSimilarity,
    get_similarity_strategy,
)
from keyword_opportunity.utils.text_processing import find_main_term, normalize_keyword_key


# ===========================================================================
# 1. Similarity
# ===========================================================================
class TestSimilarity:

    def test_jaccard(self):
        jaccard = JaccardSimilarity()
        assert jaccard.similarity("buy running shoes", "best running shoes") == 0.5
        assert jaccard.similarity("Running Shoes", "running shoes") == 1.0
        assert jaccard.similarity("garden hose", "running shoes") == 0.0
        assert jaccard.similarity("", "") == 0.0

    def test_overlap(self):
        overlap = OverlapSimilarity()
        assert overlap.similarity("running shoes", "buy running shoes") == 1.0
        assert overlap.similarity("", "running shoes") == 0.0

    def test_registry(self):
        assert isinstance(get_similarity_strategy("jaccard"), JaccardSimilarity)
        assert isinstance(get_similarity_strategy("OVERLAP"), OverlapSimilarity)
        with pytest.raises(ValueError):
            get_similarity_strategy("cosine")


# ===========================================================================
# 2. Main term and keys
# ===========================================================================
class TestMainTerm:

    @pytest.mark.parametrize("keyword,expected", [
        ("best running shoes", "running"),
        ("Buy Running Shoes", "running"),
        ("how to tie a tie", "tie"),
        ("red big cat", "red"),
        ("how to", "how"),
        ("", ""),
    ])
    def test_find_main_term(self, keyword, expected):
        assert find_main_term(keyword) == expected

    def test_normalize_keyword_key(self):
        assert normalize_keyword_key("  Buy   Running SHOES ") == "buy running shoes"


# ===========================================================================
# 3. Cluster aggregation
# ===========================================================================
class TestAggregateCluster:

    def test_aggregates(self, make_record):
        members = [
            make_record("buy running shoes", 1000, cpc=1.2, difficulty=53, score=4500,
                        domains=["amazon.com", "nike.com"]),
            make_record("best running shoes", 800, cpc=1.0, difficulty=40, score=2240,
                        domains=["nike.com", "runnersworld.com"]),
        ]
        cluster = aggregate_cluster(7, members)
        assert cluster.cluster_id == 7
        assert cluster.main_keyword == "buy running shoes"
        assert cluster.theme is Theme.PURCHASE_INTENT
        assert cluster.keyword_count == 2
        assert cluster.total_search_volume == 1800
        assert cluster.avg_cpc == pytest.approx(1.1)
        assert cluster.avg_difficulty == pytest.approx(46.5)
        assert cluster.total_commercial_score == 6740
        assert cluster.competitor_domains == ["amazon.com", "nike.com", "runnersworld.com"]

    def test_empty_members_rejected(self):
        with pytest.raises(ValueError):
            aggregate_cluster(1, [])


# ===========================================================================
# 4. Cluster building
# ===========================================================================
class TestBuildClusters:

    def test_related_keywords_merge(self, make_record):
        records = [
            make_record("best running shoes", 800, score=2240),
            make_record("buy running shoes", 1000, score=4500),
        ]
        clusters = build_clusters(records)
        assert len(clusters) == 1
        assert clusters[0].main_keyword == "buy running shoes"
        assert [m.keyword for m in clusters[0].members] == ["buy running shoes", "best running shoes"]

    def test_main_term_containment_merges(self, make_record):
        # Jaccard is 0.2, but the seed's main term "running" is contained.
        records = [
            make_record("buy running shoes", score=500),
            make_record("marathon running gear", score=100),
        ]
        clusters = build_clusters(records)
        assert len(clusters) == 1
        assert clusters[0].keyword_count == 2

    def test_unrelated_keywords_stay_apart(self, make_record):
        records = [make_record("running shoes", score=500), make_record("garden hose", score=400)]
        assert len(build_clusters(records)) == 2

    def test_threshold_is_strict(self, make_record):
        # Jaccard 0.5 and the main term "elephant" does not occur in the other keyword.
        records = [make_record("tiny elephant toy", score=500), make_record("tiny toy car", score=100)]
        assert len(build_clusters(records, threshold=0.5)) == 2
        assert len(build_clusters(records, threshold=0.3)) == 1

    def test_ids_in_creation_order_list_sorted_by_score(self, make_record):
        records = [
            make_record("alpha widget", score=500),
            make_record("beta gadget", score=400),
            make_record("beta gadget kit", score=300),
        ]
        clusters = build_clusters(records)
        assert [c.cluster_id for c in clusters] == [2, 1]
        assert [c.total_commercial_score for c in clusters] == [700, 500]

    def test_equal_scores_keep_input_order(self, make_record):
        records = [make_record("xray one", score=100), make_record("yankee two", score=100)]
        clusters = build_clusters(records)
        assert [c.main_keyword for c in clusters] == ["xray one", "yankee two"]
        assert [c.cluster_id for c in clusters] == [1, 2]

    def test_processed_set_is_shared(self, make_record):
        records = [make_record("running shoes", score=500), make_record("garden hose", score=400)]
        processed = {"garden hose"}
        clusters = build_clusters(records, processed=processed)
        assert [c.main_keyword for c in clusters] == ["running shoes"]
        assert processed == {"garden hose", "running shoes"}

    def test_every_keyword_in_exactly_one_cluster(self, make_record):
        keywords = [
            "buy running shoes", "best running shoes", "trail running shoes",
            "garden hose", "garden hose price", "hose reel", "how to tie a tie",
            "tie knot guide", "plumber near me", "emergency plumber",
        ]
        records = [make_record(kw, score=1000 - i * 50) for i, kw in enumerate(keywords)]
        clusters = build_clusters(records)
        assigned = [m.keyword for c in clusters for m in c.members]
        assert sorted(assigned) == sorted(keywords)
        assert sum(c.total_search_volume for c in clusters) == sum(r.search_volume for r in records)

    def test_overlap_strategy(self, make_record):
        records = [make_record("tiny elephant toy", score=500), make_record("toy", score=100)]
        clusters = build_clusters(records, similarity=OverlapSimilarity(), threshold=0.9)
        assert len(clusters) == 1

    def test_empty_input(self):
        assert build_clusters([]) == []
