"""Greedy lexical clustering of scored keywords."""

import logging
from typing import Optional, Sequence

from keyword_opportunity.models.keyword import KeywordCluster, KeywordRecord
from keyword_opportunity.modules.keyword_research.intent import identify_theme
from keyword_opportunity.modules.keyword_research.similarity import (
    JaccardSimilarity,
    SimilarityStrategy,
)
from keyword_opportunity.utils.text_processing import find_main_term

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.3


def aggregate_cluster(
    cluster_id: int,
    members: list[KeywordRecord],
) -> KeywordCluster:
    """Build a :class:`KeywordCluster` and its aggregates from *members*.

    The first member is the cluster's main keyword and decides its theme.
    """
    if not members:
        raise ValueError("A keyword cluster needs at least one member")

    count = len(members)
    competitor_domains: list[str] = []
    seen: set[str] = set()
    for member in members:
        for domain in member.domains:
            if domain not in seen:
                seen.add(domain)
                competitor_domains.append(domain)

    seed = members[0]
    return KeywordCluster(
        cluster_id=cluster_id,
        main_keyword=seed.keyword,
        theme=identify_theme(seed.keyword),
        members=members,
        total_search_volume=sum(m.search_volume for m in members),
        avg_cpc=sum(m.cpc for m in members) / count,
        avg_difficulty=sum(m.keyword_difficulty for m in members) / count,
        total_commercial_score=sum(m.commercial_score for m in members),
        competitor_domains=competitor_domains,
    )


def build_clusters(
    records: Sequence[KeywordRecord],
    processed: Optional[set[str]] = None,
    similarity: Optional[SimilarityStrategy] = None,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[KeywordCluster]:
    """Group keywords into clusters in one deterministic greedy pass.

    Records are visited by descending commercial score (ties keep input
    order).  Each unprocessed record seeds a cluster and pulls in every
    other unprocessed record whose similarity exceeds *threshold* or whose
    text contains the seed's main term.  Merge decisions are never revisited.

    Args:
        records: Scored keyword records with unique keywords.
        processed: Keywords already assigned elsewhere.  Updated in place
                   with every keyword this call assigns.
        similarity: Strategy scoring keyword pairs; Jaccard by default.
        threshold: Similarity above which two keywords are merged.

    Returns:
        Clusters ordered by descending total commercial score, with
        ``cluster_id`` numbered 1..N in creation order.
    """
    if processed is None:
        processed = set()
    similarity = similarity or JaccardSimilarity()

    ordered = sorted(records, key=lambda r: -r.commercial_score)
    clusters: list[KeywordCluster] = []

    for record in ordered:
        if record.keyword in processed:
            continue
        processed.add(record.keyword)

        main_term = find_main_term(record.keyword)
        members = [record]
        for other in ordered:
            if other.keyword in processed:
                continue
            score = similarity.similarity(record.keyword, other.keyword)
            has_main_term = bool(main_term) and main_term in other.keyword.lower()
            if score > threshold or has_main_term:
                members.append(other)
                processed.add(other.keyword)

        cluster = aggregate_cluster(len(clusters) + 1, members)
        logger.debug(
            "Cluster %d %r (main term %r): %d keywords",
            cluster.cluster_id, cluster.main_keyword, main_term, cluster.keyword_count,
        )
        clusters.append(cluster)

    clusters.sort(key=lambda c: -c.total_commercial_score)
    logger.info("Created %d clusters from %d keywords", len(clusters), len(records))
    return clusters
