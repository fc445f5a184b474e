"""Commercial opportunity scoring for individual keywords."""

import logging
import math
from typing import Any, Optional

from keyword_opportunity.modules.keyword_research.intent import intent_multiplier
from keyword_opportunity.utils.helpers import round_half_up

logger = logging.getLogger(__name__)

FALLBACK_VOLUME = 100
FALLBACK_CPC = 0.5
FALLBACK_COMPETITION = 0.3
FALLBACK_SCORE = 100
MIN_CPC_FACTOR = 0.1
MIN_COMMERCIAL_SCORE = 10


def _finite(value: Any, fallback: float) -> float:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return fallback if math.isnan(number) or math.isinf(number) else number


def calculate_commercial_score(
    keyword: str,
    search_volume: Any,
    cpc: Any,
    competition: Any,
    business_type: Optional[str] = None,
) -> int:
    """Monetary-opportunity score for a keyword.

    ``round(volume * max(0.1, cpc) * intent_multiplier * (1 + competition))``
    with non-numeric inputs replaced by safe defaults (volume 100, cpc 0.5,
    competition 0.3).  The result never drops below 10.

    Args:
        keyword: Keyword text; drives the intent multiplier.
        search_volume: Monthly search volume.
        cpc: Advertiser cost-per-click.
        competition: Numeric competition in [0, 1].
        business_type: Only used for log context.

    Returns:
        Integer score >= 10.
    """
    volume = _finite(search_volume, FALLBACK_VOLUME)
    cpc_value = _finite(cpc, FALLBACK_CPC)
    competition_value = _finite(competition, FALLBACK_COMPETITION)
    multiplier = intent_multiplier(keyword or "")

    calculation = volume * max(MIN_CPC_FACTOR, cpc_value) * multiplier * (1 + competition_value)
    if math.isnan(calculation) or math.isinf(calculation):
        score = FALLBACK_SCORE
    else:
        score = round_half_up(calculation)

    result = max(MIN_COMMERCIAL_SCORE, score)
    logger.debug(
        "Commercial score %r (%s): %s * %s * %s * %s = %d",
        keyword, business_type or "any business",
        volume, max(MIN_CPC_FACTOR, cpc_value), multiplier, 1 + competition_value, result,
    )
    return result
