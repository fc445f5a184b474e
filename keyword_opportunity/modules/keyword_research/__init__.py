"""Keyword Research module -- normalisation, scoring, clustering, and opportunity selection."""

from keyword_opportunity.modules.keyword_research.engine import KeywordOpportunityEngine
from keyword_opportunity.modules.keyword_research.loader import load_records, load_ranking_pages

__all__ = ["KeywordOpportunityEngine", "load_records", "load_ranking_pages"]
