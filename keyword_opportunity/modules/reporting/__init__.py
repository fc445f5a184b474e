"""Reporting module -- human-readable rendering and machine-readable export."""

from keyword_opportunity.modules.reporting.text_renderer import ReportTextRenderer
from keyword_opportunity.modules.reporting.exporter import ReportExporter

__all__ = ["ReportTextRenderer", "ReportExporter"]
