"""Tests for the plain-text renderer and JSON / CSV exporter."""

import csv
import io
import json
import os

import pytest

from keyword_opportunity.modules.reporting import ReportExporter, ReportTextRenderer
from keyword_opportunity.modules.reporting.exporter import CSV_FIELDS


@pytest.fixture()
def shoes_report(engine, running_shoes_records, sample_ranking_pages):
    return engine.analyze(
        running_shoes_records,
        ranking_pages=sample_ranking_pages,
        business_type="E-commerce",
        source_website="shoes.example.com",
    )


@pytest.fixture()
def empty_report(engine):
    return engine.analyze([])


# ===========================================================================
# 1. Text renderer
# ===========================================================================
class TestTextRenderer:

    def test_sections_present(self, shoes_report):
        text = ReportTextRenderer().render_text(shoes_report)
        for title in (
            "SEO KEYWORD OPPORTUNITY REPORT",
            "QUICK WINS (Low Competition Opportunities)",
            "HIGH-VALUE TARGETS (High Commercial Intent)",
            "TOP KEYWORD CLUSTERS",
            "MAIN COMPETITORS",
            "ACTION PLAN",
        ):
            assert title in text

    def test_summary_and_cluster_details(self, shoes_report):
        text = ReportTextRenderer().render_text(shoes_report)
        assert "shoes.example.com" in text
        assert "E-commerce" in text
        assert "1,800" in text
        assert "+- CLUSTER 01: BUY RUNNING SHOES" in text
        assert "Theme: Purchase Intent" in text
        assert "amazon.com" in text

    def test_complete_list_only_for_large_clusters(self, shoes_report):
        assert "COMPLETE KEYWORD LIST" not in ReportTextRenderer().render_text(shoes_report)
        text = ReportTextRenderer(keywords_per_cluster=1).render_text(shoes_report)
        assert "COMPLETE KEYWORD LIST (2 keywords)" in text

    def test_empty_report(self, empty_report):
        text = ReportTextRenderer().render_text(empty_report)
        assert "Focus on building domain authority first to unlock quick wins." in text
        assert "No keyword clusters identified." in text
        assert "No major competitors identified in analyzed keywords." in text
        assert "No recommendations -- no keywords passed the volume filter." in text
        assert text.endswith("\n")


# ===========================================================================
# 2. Exporter
# ===========================================================================
class TestExporter:

    def test_render_json(self, shoes_report):
        data = json.loads(ReportExporter.render_json(shoes_report))
        assert data["summary"]["total_search_volume"] == 1800
        assert data["summary"]["top_competitor"] == "amazon.com"
        assert data["top_clusters"] == [1]
        cluster = data["clusters"][0]
        assert cluster["theme"] == "Purchase Intent"
        assert cluster["keyword_count"] == 2
        assert [k["keyword"] for k in cluster["keywords"]] == ["buy running shoes", "best running shoes"]
        assert data["high_value"][0]["main_keyword"] == "buy running shoes"

    def test_keyword_rows(self, shoes_report):
        rows = ReportExporter.keyword_rows(shoes_report)
        assert len(rows) == 2
        assert rows[0]["cluster_id"] == 1
        assert rows[0]["ranking_domains"] == "amazon.com;runnersworld.com"
        assert rows[1]["ranking_domains"] == ""

    def test_csv_bytes(self, shoes_report):
        payload = ReportExporter().keywords_to_csv_bytes(shoes_report).decode("utf-8")
        reader = csv.DictReader(io.StringIO(payload))
        assert reader.fieldnames == CSV_FIELDS
        rows = list(reader)
        assert [r["keyword"] for r in rows] == ["buy running shoes", "best running shoes"]
        assert rows[0]["commercial_score"] == "4500"

    def test_csv_empty_report_has_header_only(self, empty_report):
        payload = ReportExporter().keywords_to_csv_bytes(empty_report).decode("utf-8")
        assert payload.strip().splitlines() == [",".join(CSV_FIELDS)]

    def test_export_to_json_creates_directories(self, shoes_report, tmp_path):
        target = tmp_path / "exports" / "nested" / "report.json"
        path = ReportExporter().export_to_json(shoes_report, str(target))
        assert os.path.isabs(path) and os.path.exists(path)
        assert json.loads(target.read_text(encoding="utf-8"))["summary"]["total_keywords"] == 2

    def test_export_to_csv(self, shoes_report, tmp_path):
        target = tmp_path / "keywords.csv"
        ReportExporter().export_to_csv(shoes_report, str(target))
        with open(target, newline="", encoding="utf-8") as fh:
            rows = list(csv.DictReader(fh))
        assert len(rows) == 2
        assert rows[1]["theme"] == "Purchase Intent"
