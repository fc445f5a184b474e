"""General-purpose helper utilities for keyword opportunity analysis."""

import math
from typing import Any
from urllib.parse import urlparse


def is_missing(value: Any) -> bool:
    """Return True for ``None``, empty strings, and NaN floats."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def to_float(value: Any, default: float) -> float:
    """Coerce *value* to a finite float, falling back to *default*.

    Examples:
        >>> to_float("1.25", 0.5)
        1.25
        >>> to_float(float("nan"), 0.5)
        0.5
        >>> to_float("HIGH", 0.3)
        0.3
    """
    if is_missing(value) or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def to_int(value: Any, default: int = 0) -> int:
    """Coerce *value* to an int (rounding floats), falling back to *default*."""
    result = to_float(value, float("nan"))
    if math.isnan(result):
        return default
    return round_half_up(result)


def format_number(n: int | float) -> str:
    """Format a number with human-readable suffixes.

    Args:
        n: Numeric value.

    Returns:
        Formatted string (e.g. 1500 -> '1.5K', 2500000 -> '2.5M').

    Examples:
        >>> format_number(1500)
        '1.5K'
        >>> format_number(2500000)
        '2.5M'
        >>> format_number(999)
        '999'
    """
    abs_n = abs(n)
    sign = "-" if n < 0 else ""
    if abs_n >= 1_000_000_000:
        return f"{sign}{abs_n / 1_000_000_000:.1f}B"
    if abs_n >= 1_000_000:
        return f"{sign}{abs_n / 1_000_000:.1f}M"
    if abs_n >= 1_000:
        return f"{sign}{abs_n / 1_000:.1f}K"
    if isinstance(n, float):
        return f"{sign}{abs_n:.1f}"
    return f"{sign}{abs_n}"


def extract_domain(url: str) -> str:
    """Extract the bare domain from a URL.

    Strips the protocol, path, port and a leading ``www.``.  Hosts without a
    dot (``localhost``, bare words) are not domains and yield ``""``.

    Examples:
        >>> extract_domain("https://www.example.com/page")
        'example.com'
        >>> extract_domain("localhost:8000")
        ''
    """
    if not url or not isinstance(url, str):
        return ""
    url = url.strip()
    parsed = urlparse(url if "://" in url else f"https://{url}")
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    if "." not in host:
        return ""
    return host


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    Examples:
        >>> round_half_up(82.5)
        83
        >>> round_half_up(82.49)
        82
    """
    return int(math.floor(value + 0.5))
