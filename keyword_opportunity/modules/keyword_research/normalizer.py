"""Keyword normalizer -- turns raw metric records into canonical KeywordRecords."""

import logging
import math
from typing import Any, Optional

from keyword_opportunity.models.keyword import KeywordRecord, RankingPage
from keyword_opportunity.utils.helpers import extract_domain, is_missing, to_float, to_int
from keyword_opportunity.utils.text_processing import is_technical_keyword

logger = logging.getLogger(__name__)

COMPETITION_LEVEL_VALUES: dict[str, float] = {
    "HIGH": 0.8,
    "MEDIUM": 0.5,
    "LOW": 0.2,
}
DEFAULT_COMPETITION = 0.3
DEFAULT_CPC = 0.5
UNKNOWN_LEVEL = "UNKNOWN"


def competition_from_level(level: Optional[str]) -> float:
    """Map a categorical competition label to its numeric value.

    Examples:
        >>> competition_from_level("high")
        0.8
        >>> competition_from_level(None)
        0.3
    """
    if not level:
        return DEFAULT_COMPETITION
    return COMPETITION_LEVEL_VALUES.get(str(level).strip().upper(), DEFAULT_COMPETITION)


def _resolve_competition(raw: dict[str, Any]) -> tuple[float, str]:
    """Return ``(competition, competition_level)`` for a raw record."""
    raw_competition = raw.get("competition")
    raw_level = raw.get("competition_level")

    level = UNKNOWN_LEVEL
    if isinstance(raw_level, str) and raw_level.strip():
        level = raw_level.strip().upper()
    elif isinstance(raw_competition, str) and raw_competition.strip().upper() in COMPETITION_LEVEL_VALUES:
        level = raw_competition.strip().upper()

    numeric = to_float(raw_competition, float("nan"))
    if not math.isnan(numeric):
        return max(0.0, min(1.0, numeric)), level
    return competition_from_level(level), level


def normalize_ranking_pages(
    raw_pages: Any,
    max_pages: int = 10,
) -> list[RankingPage]:
    """Build ordered :class:`RankingPage` objects from raw SERP items.

    Each page's domain is taken from ``domain`` or derived from ``url``;
    pages without a usable domain are dropped.  Pages are ordered by
    position (stable for equal or missing positions) and truncated to
    *max_pages*.  Anything other than a list or tuple of pages (a blank CSV
    cell, a bare string) yields no pages.
    """
    if is_missing(raw_pages):
        return []
    if not isinstance(raw_pages, (list, tuple)):
        logger.warning("Ignoring ranking pages that are not a list: %r", raw_pages)
        return []

    pages: list[RankingPage] = []
    for index, item in enumerate(raw_pages):
        if isinstance(item, RankingPage):
            page = item
        elif isinstance(item, dict):
            url = str(item.get("url") or "")
            domain = extract_domain(str(item.get("domain") or "")) or extract_domain(url)
            position = to_int(
                item.get("position", item.get("rank_group", item.get("rank_absolute"))),
                default=index + 1,
            )
            page = RankingPage(
                url=url,
                title=str(item.get("title") or "No title"),
                domain=domain,
                position=position,
            )
        else:
            logger.debug("Skipping unsupported ranking page item: %r", item)
            continue

        if not page.domain:
            logger.debug("Dropping ranking page without domain: %s", page.url)
            continue
        pages.append(page)

    pages.sort(key=lambda p: p.position if p.position > 0 else float("inf"))
    return pages[:max_pages]


def normalize_record(
    raw: dict[str, Any],
    is_seed: bool = False,
    default_cpc: float = DEFAULT_CPC,
    min_search_volume: int = 1,
    exclude_technical: bool = False,
    max_ranking_pages: int = 10,
) -> Optional[KeywordRecord]:
    """Validate and default one raw keyword metric record.

    Returns ``None`` when the record carries no ranking-opportunity signal:
    empty keyword, volume below *min_search_volume* (zero or missing
    volume is always dropped), or -- with *exclude_technical* -- a
    technical keyword.  Malformed numbers never raise; they fall back to
    defaults.
    """
    keyword = raw.get("keyword")
    if is_missing(keyword):
        logger.warning("Dropping record without keyword: %r", raw)
        return None
    keyword = " ".join(str(keyword).split())

    volume = to_int(raw.get("search_volume", raw.get("volume")), default=0)
    if volume <= 0 or volume < min_search_volume:
        logger.debug("Dropping %r: search volume %d", keyword, volume)
        return None

    if exclude_technical and is_technical_keyword(keyword):
        logger.debug("Dropping technical keyword %r", keyword)
        return None

    cpc = to_float(raw.get("cpc"), default_cpc)
    if cpc < 0:
        logger.debug("Negative cpc for %r replaced with default", keyword)
        cpc = default_cpc

    competition, level = _resolve_competition(raw)
    pages = normalize_ranking_pages(
        raw.get("ranking_pages", raw.get("serp_urls")),
        max_pages=max_ranking_pages,
    )

    return KeywordRecord(
        keyword=keyword,
        search_volume=volume,
        cpc=cpc,
        competition=competition,
        competition_level=level,
        ranking_pages=pages,
        is_seed=is_seed,
    )
