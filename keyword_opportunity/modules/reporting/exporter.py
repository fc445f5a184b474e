"""Machine-readable export of analysis reports -- JSON and CSV."""

import csv
import io
import json
import logging
import os

from keyword_opportunity.models.report import AnalysisReport

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "cluster_id", "main_keyword", "theme", "keyword", "search_volume",
    "cpc", "competition", "competition_level", "keyword_difficulty",
    "commercial_score", "is_seed", "ranking_domains",
]


class ReportExporter:
    """Serialise an :class:`AnalysisReport` for downstream consumers.

    Usage::

        exporter = ReportExporter()
        payload = exporter.render_json(report)
        exporter.export_to_csv(report, "exports/keywords.csv")
    """

    # ------------------------------------------------------------------
    # In-memory rendering
    # ------------------------------------------------------------------

    @staticmethod
    def render_json(report: AnalysisReport) -> str:
        """Report as pretty-printed JSON."""
        output = json.dumps(report.to_dict(), indent=2, default=str, ensure_ascii=False)
        logger.debug("JSON report rendered (%d chars)", len(output))
        return output

    @staticmethod
    def keyword_rows(report: AnalysisReport) -> list[dict]:
        """One flat row per keyword, in cluster order."""
        rows = []
        for cluster in report.clusters:
            for kw in cluster.members:
                rows.append({
                    "cluster_id": cluster.cluster_id,
                    "main_keyword": cluster.main_keyword,
                    "theme": cluster.theme.value,
                    "keyword": kw.keyword,
                    "search_volume": kw.search_volume,
                    "cpc": round(kw.cpc, 2),
                    "competition": round(kw.competition, 2),
                    "competition_level": kw.competition_level,
                    "keyword_difficulty": kw.keyword_difficulty,
                    "commercial_score": kw.commercial_score,
                    "is_seed": kw.is_seed,
                    "ranking_domains": ";".join(kw.domains),
                })
        return rows

    def keywords_to_csv_bytes(self, report: AnalysisReport) -> bytes:
        """Keyword rows as UTF-8 CSV bytes (header only for an empty report)."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in self.keyword_rows(report):
            writer.writerow(row)
        return output.getvalue().encode("utf-8")

    # ------------------------------------------------------------------
    # File export
    # ------------------------------------------------------------------

    def export_to_json(self, report: AnalysisReport, filepath: str) -> str:
        """Write the JSON report and return its absolute path."""
        _ensure_parent(filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.render_json(report))
        abs_path = os.path.abspath(filepath)
        logger.info("JSON exported: %s", abs_path)
        return abs_path

    def export_to_csv(self, report: AnalysisReport, filepath: str) -> str:
        """Write the keyword CSV and return its absolute path."""
        _ensure_parent(filepath)
        with open(filepath, "wb") as f:
            f.write(self.keywords_to_csv_bytes(report))
        abs_path = os.path.abspath(filepath)
        logger.info("CSV exported: %s (%d clusters)", abs_path, len(report.clusters))
        return abs_path


def _ensure_parent(filepath: str) -> None:
    dirpath = os.path.dirname(filepath)
    if dirpath:
        os.makedirs(dirpath, exist_ok=True)
