"""Keyword opportunity engine -- raw keyword records in, AnalysisReport out."""

import logging
from typing import Any, Iterable, Mapping, Optional

from keyword_opportunity.config import EngineSettings
from keyword_opportunity.models.keyword import KeywordCluster, KeywordRecord
from keyword_opportunity.models.report import AnalysisReport
from keyword_opportunity.modules.keyword_research.clustering import build_clusters
from keyword_opportunity.modules.keyword_research.difficulty import estimate_difficulty
from keyword_opportunity.modules.keyword_research.normalizer import (
    normalize_ranking_pages,
    normalize_record,
)
from keyword_opportunity.modules.keyword_research.report_builder import assemble_report
from keyword_opportunity.modules.keyword_research.scoring import calculate_commercial_score
from keyword_opportunity.modules.keyword_research.similarity import (
    SimilarityStrategy,
    get_similarity_strategy,
)
from keyword_opportunity.utils.text_processing import normalize_keyword_key

logger = logging.getLogger(__name__)


class KeywordOpportunityEngine:
    """Deduplicate, score, cluster, and prioritise keyword research data.

    The engine is a pure, synchronous transformation: it performs no I/O and
    keeps no state between :meth:`analyze` calls, so identical input always
    produces an identical report.

    Usage::

        engine = KeywordOpportunityEngine()
        report = engine.analyze(
            records=[{"keyword": "buy running shoes", "search_volume": 1000,
                      "cpc": 1.2, "competition": 0.5}],
            business_type="E-commerce",
        )
        print(report.summary.total_search_volume)
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        similarity: Optional[SimilarityStrategy] = None,
    ):
        self.settings = settings or EngineSettings()
        self._similarity = similarity or get_similarity_strategy(self.settings.similarity_strategy)

    # ------------------------------------------------------------------
    # build_keyword_table
    # ------------------------------------------------------------------

    def build_keyword_table(
        self,
        records: Iterable[Mapping[str, Any]],
        related: Optional[Iterable[Mapping[str, Any]]] = None,
        ranking_pages: Optional[Mapping[str, Iterable[Any]]] = None,
        business_type: Optional[str] = None,
    ) -> dict[str, KeywordRecord]:
        """Normalise, deduplicate, and score every usable keyword.

        Seed *records* are registered first, then *related* expansions whose
        keyword is not yet known.  The first occurrence of a keyword wins;
        the table is keyed on the case-folded keyword.  *ranking_pages*
        maps keyword text to observed organic results and replaces any
        pages embedded in the records.
        """
        table: dict[str, KeywordRecord] = {}
        dropped = 0
        duplicates = 0

        sources = ((records, True), (related or (), False))
        for batch, is_seed in sources:
            for raw in batch:
                record = normalize_record(
                    dict(raw),
                    is_seed=is_seed,
                    default_cpc=self.settings.default_cpc,
                    min_search_volume=self.settings.min_search_volume,
                    exclude_technical=self.settings.exclude_technical_keywords,
                    max_ranking_pages=self.settings.max_ranking_pages,
                )
                if record is None:
                    dropped += 1
                    continue
                key = normalize_keyword_key(record.keyword)
                if key in table:
                    duplicates += 1
                    logger.debug("Ignoring duplicate keyword %r", record.keyword)
                    continue
                table[key] = record

        if ranking_pages:
            self._attach_ranking_pages(table, ranking_pages)

        for record in table.values():
            record.keyword_difficulty = estimate_difficulty(
                record, self.settings.high_authority_domains
            )
            record.commercial_score = calculate_commercial_score(
                record.keyword,
                record.search_volume,
                record.cpc,
                record.competition,
                business_type=business_type,
            )

        logger.info(
            "Normalized %d keywords (%d dropped, %d duplicates)",
            len(table), dropped, duplicates,
        )
        return table

    def _attach_ranking_pages(
        self,
        table: dict[str, KeywordRecord],
        ranking_pages: Mapping[str, Iterable[Any]],
    ) -> None:
        for keyword, pages in ranking_pages.items():
            record = table.get(normalize_keyword_key(str(keyword)))
            if record is None:
                logger.debug("Ranking pages for unknown keyword %r ignored", keyword)
                continue
            record.ranking_pages = normalize_ranking_pages(
                pages, max_pages=self.settings.max_ranking_pages
            )

    # ------------------------------------------------------------------
    # cluster
    # ------------------------------------------------------------------

    def cluster(self, records: Iterable[KeywordRecord]) -> list[KeywordCluster]:
        """Cluster scored records with this engine's similarity strategy."""
        processed: set[str] = set()
        return build_clusters(
            list(records),
            processed=processed,
            similarity=self._similarity,
            threshold=self.settings.similarity_threshold,
        )

    # ------------------------------------------------------------------
    # analyze
    # ------------------------------------------------------------------

    def analyze(
        self,
        records: Iterable[Mapping[str, Any]],
        related: Optional[Iterable[Mapping[str, Any]]] = None,
        ranking_pages: Optional[Mapping[str, Iterable[Any]]] = None,
        business_type: Optional[str] = None,
        source_website: Optional[str] = None,
        analysis_date: Optional[str] = None,
    ) -> AnalysisReport:
        """Run the full pipeline and return the assembled report.

        Args:
            records: Raw seed keyword metric records.
            related: Optional raw expansion records (``is_seed=False``).
            ranking_pages: Optional ``keyword -> [page, ...]`` mapping.
            business_type: Business label carried into the report.
            source_website: Analysed website carried into the report.
            analysis_date: Timestamp string carried into the report.

        Returns:
            The :class:`AnalysisReport`.  Input with no usable keywords
            yields an empty report rather than an error.
        """
        table = self.build_keyword_table(
            records,
            related=related,
            ranking_pages=ranking_pages,
            business_type=business_type,
        )
        clusters = self.cluster(table.values())
        return assemble_report(
            clusters,
            settings=self.settings,
            source_website=source_website,
            business_type=business_type,
            analysis_date=analysis_date,
        )
