"""Keyword intent table shared by the commercial scorer and theme classifier.

Rules are evaluated top to bottom and the first rule whose pattern occurs in
the lowercased keyword wins.  The scorer only looks at rules that carry a
multiplier, the classifier only at rules that carry a theme, so a single
ordering serves both:

    multiplier:  buy/purchase/order 2.5 > best/top/review 2.0 >
                 price/cost/cheap 1.8 > hire/service/company 1.6 >
                 how to/what is 0.8 > otherwise 1.0
    theme:       Purchase Intent > Research & Comparison > Educational >
                 Price Research > General
"""

from dataclasses import dataclass
from typing import Optional

from keyword_opportunity.models.keyword import Theme

DEFAULT_MULTIPLIER = 1.0


@dataclass(frozen=True)
class IntentRule:
    """Substring patterns with the multiplier and/or theme they signal."""
    name: str
    patterns: tuple[str, ...]
    multiplier: Optional[float] = None
    theme: Optional[Theme] = None

    def matches(self, keyword_lower: str) -> bool:
        return any(pattern in keyword_lower for pattern in self.patterns)


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule("purchase", ("buy", "purchase"), 2.5, Theme.PURCHASE_INTENT),
    IntentRule("order", ("order",), 2.5),
    IntentRule("research", ("best", "top", "review"), 2.0, Theme.RESEARCH_COMPARISON),
    IntentRule("educational", ("how to", "guide"), theme=Theme.EDUCATIONAL),
    IntentRule("price", ("price", "cost"), 1.8, Theme.PRICE_RESEARCH),
    IntentRule("bargain", ("cheap",), 1.8),
    IntentRule("hire", ("hire", "service", "company"), 1.6),
    IntentRule("informational", ("how to", "what is"), 0.8),
)


def match_rule(keyword: str, require: str) -> Optional[IntentRule]:
    """First rule matching *keyword* that has the attribute *require* set."""
    keyword_lower = keyword.lower()
    for rule in INTENT_RULES:
        if getattr(rule, require) is None:
            continue
        if rule.matches(keyword_lower):
            return rule
    return None


def intent_multiplier(keyword: str) -> float:
    """Buyer-intent multiplier for *keyword*.

    Examples:
        >>> intent_multiplier("buy running shoes")
        2.5
        >>> intent_multiplier("how to tie shoes")
        0.8
    """
    rule = match_rule(keyword, "multiplier")
    return rule.multiplier if rule else DEFAULT_MULTIPLIER


def identify_theme(keyword: str) -> Theme:
    """Label *keyword* with its intent theme.

    Examples:
        >>> identify_theme("best running shoes").value
        'Research & Comparison'
        >>> identify_theme("running shoes").value
        'General'
    """
    rule = match_rule(keyword, "theme")
    return rule.theme if rule else Theme.GENERAL
