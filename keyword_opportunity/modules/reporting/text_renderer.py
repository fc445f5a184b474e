"""
text_renderer.py - Plain-text keyword opportunity report

Renders an AnalysisReport as a fixed-width text document: summary, quick
wins, high-value targets, cluster details, competitors, and action plan.
"""

import logging

from keyword_opportunity.models.keyword import KeywordCluster
from keyword_opportunity.models.report import AnalysisReport

logger = logging.getLogger(__name__)

RULE = "=" * 78
THIN_RULE = "-" * 78


class ReportTextRenderer:
    """Render :class:`AnalysisReport` objects as plain text."""

    def __init__(self, detailed_clusters: int = 10, keywords_per_cluster: int = 5):
        self._detailed_clusters = detailed_clusters
        self._keywords_per_cluster = keywords_per_cluster

    # ------------------------------------------------------------------
    # Public rendering methods
    # ------------------------------------------------------------------

    def render_text(self, report: AnalysisReport) -> str:
        """Render the full report."""
        logger.info("Rendering text report")
        parts = [
            self._section("SEO KEYWORD OPPORTUNITY REPORT"),
            self._build_summary(report),
            self._section("QUICK WINS (Low Competition Opportunities)"),
            self._build_quick_wins(report),
            self._section("HIGH-VALUE TARGETS (High Commercial Intent)"),
            self._build_high_value(report),
            self._section("TOP KEYWORD CLUSTERS"),
            self._build_cluster_details(report),
            self._section("MAIN COMPETITORS"),
            self._build_competitors(report),
            self._section("ACTION PLAN"),
            self._build_action_plan(report),
        ]
        text = "\n".join(parts).rstrip() + "\n"
        logger.info("Text report rendered (%d chars)", len(text))
        return text

    # ------------------------------------------------------------------
    # Section builders
    # ------------------------------------------------------------------

    @staticmethod
    def _section(title: str) -> str:
        return "\n" + RULE + "\n" + title + "\n" + RULE

    def _build_summary(self, report: AnalysisReport) -> str:
        s = report.summary
        lines = []
        if s.source_website:
            lines.append(f"{'Website:':<30}{s.source_website}")
        if s.business_type:
            lines.append(f"{'Business Type:':<30}{s.business_type}")
        if s.analysis_date:
            lines.append(f"{'Analysis Date:':<30}{s.analysis_date}")
        lines.extend([
            f"{'Total Keywords Analyzed:':<30}{s.total_keywords:,}",
            f"{'Clusters Identified:':<30}{s.total_clusters}",
            f"{'Monthly Search Volume:':<30}{s.total_search_volume:,}",
            f"{'Estimated Traffic Potential:':<30}{s.estimated_traffic_potential:,} visits/month",
            f"{'Average CPC:':<30}${s.avg_cpc:.2f}",
            f"{'Average Difficulty:':<30}{round(s.avg_difficulty)}/100",
            f"{'Top Competitor:':<30}{s.top_competitor or 'N/A'}",
        ])
        return "\n".join(lines)

    def _build_quick_wins(self, report: AnalysisReport) -> str:
        if not report.quick_wins:
            return "Focus on building domain authority first to unlock quick wins."
        return "\n".join(
            self._cluster_line(i, cluster, f"{round(cluster.avg_difficulty):>3}/100 difficulty")
            for i, cluster in enumerate(report.quick_wins, start=1)
        )

    def _build_high_value(self, report: AnalysisReport) -> str:
        if not report.high_value:
            return "Build content around main clusters to develop high-value opportunities."
        return "\n".join(
            self._cluster_line(i, cluster, f"{cluster.total_commercial_score:>10,} commercial score")
            for i, cluster in enumerate(report.high_value, start=1)
        )

    @staticmethod
    def _cluster_line(index: int, cluster: KeywordCluster, metric: str) -> str:
        return (
            f"{index:02d}. {cluster.main_keyword}\n"
            f"    {cluster.total_search_volume:>10,} searches/month | "
            f"${cluster.avg_cpc:>5.2f} CPC | {metric} | {cluster.theme.value}\n"
            + "    " + "-" * 74
        )

    def _build_cluster_details(self, report: AnalysisReport) -> str:
        if not report.clusters:
            return "No keyword clusters identified."
        blocks = []
        for index, cluster in enumerate(report.clusters[: self._detailed_clusters], start=1):
            lines = [
                f"+- CLUSTER {index:02d}: {cluster.main_keyword.upper()}",
                f"|  Theme: {cluster.theme.value}",
                f"|  Monthly Search Volume: {cluster.total_search_volume:,}",
                f"|  Average CPC: ${cluster.avg_cpc:.2f}",
                f"|  Difficulty Score: {round(cluster.avg_difficulty)}/100",
                f"|  Commercial Score: {cluster.total_commercial_score:,}",
                f"|  Keywords in Cluster: {cluster.keyword_count}",
                "|",
                "|  TOP KEYWORDS:",
            ]
            for kw in cluster.members[: self._keywords_per_cluster]:
                lines.append(
                    f"|   * {kw.keyword:<35} | {kw.search_volume:>8,} searches | ${kw.cpc:>5.2f} CPC"
                )
            if cluster.keyword_count > self._keywords_per_cluster:
                lines.append("|")
                lines.append(f"|  COMPLETE KEYWORD LIST ({cluster.keyword_count} keywords):")
                for i, kw in enumerate(cluster.members, start=1):
                    lines.append(
                        f"|   {i:02d}. {kw.keyword:<40} | Vol: {kw.search_volume:>8,} | "
                        f"CPC: ${kw.cpc:>5.2f} | Diff: {round(kw.keyword_difficulty):>3}/100"
                    )
            if cluster.competitor_domains:
                lines.append("|")
                lines.append("|  TOP COMPETITORS:")
                for domain in cluster.competitor_domains[:5]:
                    lines.append(f"|   * {domain}")
            lines.append("+" + "-" * 77)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    @staticmethod
    def _build_competitors(report: AnalysisReport) -> str:
        if not report.competitors:
            return "No major competitors identified in analyzed keywords."
        lines = [f"Total Competitors Identified: {len(report.competitors)}", ""]
        for i, entry in enumerate(report.competitors, start=1):
            suffix = "cluster" if entry.frequency == 1 else "clusters"
            lines.append(f"{i:02d}. {entry.domain:<40} {entry.frequency} {suffix}")
        return "\n".join(lines)

    @staticmethod
    def _build_action_plan(report: AnalysisReport) -> str:
        if not report.action_plan:
            return "No recommendations -- no keywords passed the volume filter."
        lines = []
        for i, step in enumerate(report.action_plan, start=1):
            lines.append(f"{i}. [{step.category}] {step.title}")
            lines.append(f"   {step.description}")
            lines.append(THIN_RULE)
        return "\n".join(lines)
