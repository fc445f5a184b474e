"""Engine settings and YAML / .env configuration loading."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.yaml"
CONFIG_ENV_VAR = "KEYWORD_OPPORTUNITY_CONFIG"
CONFIG_SECTION = "keyword_opportunity"

# Reference, marketplace, and social sites that dominate organic results.
HIGH_AUTHORITY_DOMAINS: tuple[str, ...] = (
    "wikipedia.org", "amazon.com", "youtube.com", "facebook.com", "linkedin.com",
    "reddit.com", "quora.com", "forbes.com", "cnn.com", "bbc.com", "nytimes.com",
    "yelp.com", "trustpilot.com", "glassdoor.com", "indeed.com",
    "walmart.com", "target.com", "bestbuy.com", "homedepot.com", "lowes.com",
    "costco.com", "ebay.com", "etsy.com", "shopify.com",
)


@dataclass
class EngineSettings:
    """Thresholds and limits used by the keyword opportunity engine."""

    # Clustering
    similarity_threshold: float = 0.3
    similarity_strategy: str = "jaccard"

    # Intake
    min_search_volume: int = 1
    default_cpc: float = 0.5
    max_ranking_pages: int = 10
    exclude_technical_keywords: bool = False

    # Difficulty
    high_authority_domains: tuple[str, ...] = field(
        default_factory=lambda: HIGH_AUTHORITY_DOMAINS
    )

    # Opportunity selection
    quick_win_max_difficulty: float = 40.0
    quick_win_min_volume: int = 50
    high_value_min_score: int = 1000
    high_value_max_difficulty: float = 65.0
    top_n_subset: int = 5
    top_n_competitors: int = 10
    top_n_clusters: int = 25
    traffic_capture_rate: float = 0.3

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be within [0, 1], got {self.similarity_threshold!r}"
            )
        for name in ("max_ranking_pages", "top_n_subset", "top_n_competitors", "top_n_clusters"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)!r}")
        if self.default_cpc < 0:
            raise ValueError(f"default_cpc must be non-negative, got {self.default_cpc!r}")
        self.high_authority_domains = tuple(d.lower() for d in self.high_authority_domains)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineSettings":
        """Build settings from a mapping, ignoring unknown keys.

        Raises:
            ValueError: if a value has the wrong type or is out of range.
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key not in known:
                logger.warning("Ignoring unknown setting: %s", key)
                continue
            kwargs[key] = _coerce(key, value, known[key].default)
        return cls(**kwargs)


def _coerce(key: str, value: Any, default: Any) -> Any:
    """Check *value* against the type of the field default."""
    if key == "high_authority_domains":
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{key} must be a list of domain strings")
        return tuple(value)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"{key} must be a boolean, got {value!r}")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{key} must be a number, got {value!r}")
        return float(value)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string, got {value!r}")
        return value
    return value


def resolve_config_path(config_path: Optional[str] = None) -> str:
    """Explicit path, then the environment variable, then the default."""
    return config_path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def load_settings(
    config_path: Optional[str] = None,
    env_path: str = ".env",
) -> EngineSettings:
    """Load :class:`EngineSettings` from ``.env`` and a YAML file.

    Args:
        config_path: YAML file to read.  Falls back to the
                     ``KEYWORD_OPPORTUNITY_CONFIG`` env-var or
                     ``config/settings.yaml``.
        env_path: Optional ``.env`` file loaded before resolving the path.

    Returns:
        Settings built from the ``keyword_opportunity`` section, or the
        defaults when the file is missing.

    Raises:
        ValueError: if the file is not valid YAML or holds invalid settings.
    """
    env_file = Path(env_path)
    if env_file.exists():
        load_dotenv(env_file)
        logger.info("Loaded environment from %s", env_path)

    path = resolve_config_path(config_path)
    config_file = Path(path)
    if not config_file.exists():
        logger.warning("Config file not found: %s -- using defaults.", path)
        return EngineSettings()

    with open(config_file, "r", encoding="utf-8") as fh:
        try:
            config = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(config, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    section = config.get(CONFIG_SECTION, {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section {CONFIG_SECTION!r} in {path} must be a mapping")
    logger.info("Configuration loaded from %s", path)
    return EngineSettings.from_dict(section)
