"""Application wiring for keyword opportunity analysis."""

import logging
from pathlib import Path
from typing import Any, Optional

from keyword_opportunity.config import EngineSettings, load_settings, resolve_config_path

logger = logging.getLogger(__name__)


class KeywordOpportunityApp:
    """Load configuration once and run analyses from records or files.

    Usage::

        app = KeywordOpportunityApp()
        app.initialize()
        report = app.analyze_files("data/keywords.csv", business_type="SaaS")
        status = app.get_status()
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        env_path: str = ".env",
        settings: Optional[EngineSettings] = None,
    ):
        self._config_path = config_path
        self._env_path = env_path
        self.settings = settings
        self._engine = None
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load settings (unless given) and build the engine."""
        if self._initialized:
            return
        if self.settings is None:
            self.settings = load_settings(self._config_path, env_path=self._env_path)

        from keyword_opportunity.modules.keyword_research import KeywordOpportunityEngine
        self._engine = KeywordOpportunityEngine(settings=self.settings)

        self._initialized = True
        logger.info("KeywordOpportunityApp initialised.")

    @property
    def engine(self):
        self._ensure_initialized()
        return self._engine

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze(self, records: list[dict[str, Any]], **kwargs: Any):
        """Run the engine on in-memory records; see ``KeywordOpportunityEngine.analyze``."""
        self._ensure_initialized()
        return self._engine.analyze(records, **kwargs)

    def analyze_files(
        self,
        records_path: str,
        related_path: Optional[str] = None,
        ranking_pages_path: Optional[str] = None,
        **kwargs: Any,
    ):
        """Load records (and optional expansions / ranking pages) from disk and analyse them."""
        from keyword_opportunity.modules.keyword_research import load_ranking_pages, load_records

        records = load_records(records_path)
        related = load_records(related_path) if related_path else None
        pages = load_ranking_pages(ranking_pages_path) if ranking_pages_path else None
        return self.analyze(records, related=related, ranking_pages=pages, **kwargs)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, dict[str, Any]]:
        """Return the state of configuration and engine."""
        self._ensure_initialized()
        config_path = resolve_config_path(self._config_path)
        config_found = Path(config_path).exists()
        return {
            "config": {
                "status": "ok" if config_found else "warning",
                "details": config_path if config_found else f"{config_path} not found, using defaults",
            },
            "engine": {
                "status": "ok",
                "details": (
                    f"similarity={self.settings.similarity_strategy} "
                    f"threshold={self.settings.similarity_threshold}"
                ),
            },
        }

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Call initialize() before using the application.")
