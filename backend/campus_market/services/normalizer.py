"""
Campus Market Backend: Score Normalizer
=========================================

What:  Turns a Turkish-locale currency/points string into a float.
How:   "." is the thousands separator, "," the decimal separator, and the
       value may carry a "₺" glyph and arbitrary whitespace.

Examples:
    "1.116,50 ₺"  → 1116.5
    "500"         → 500.0
    "12,50"       → 12.5
    "abc" / ""    → 0.0

Anything that is not a plain decimal number after cleanup normalizes to 0.0,
so such rows sink to the bottom of the ranking instead of being dropped.
"""

import re

CURRENCY_GLYPH = "₺"

_WHITESPACE = re.compile(r"\s+")

# Plain decimal only: rejects "nan", "inf", "1e5" and "1_000",
# all of which float() would otherwise accept.
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def normalize_score(raw: str) -> float:
    """Parse a locale-formatted amount; unparsable input yields 0.0."""
    cleaned = _WHITESPACE.sub("", raw or "")
    cleaned = cleaned.replace(CURRENCY_GLYPH, "")
    cleaned = cleaned.replace(".", "")
    cleaned = cleaned.replace(",", ".", 1)

    if not _DECIMAL.fullmatch(cleaned):
        return 0.0
    return float(cleaned)
