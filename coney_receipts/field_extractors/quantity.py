"""Coney quantity extraction.

Two policies live here. ``extract_quantity`` sums every matching pattern in
its table and falls back to a looser item-family pattern; it feeds the full
record. ``extract_quantity_strict`` only accepts literal coney mentions and
stops at the first matching pattern; it feeds the simplified logging flow,
where over-counting is worse than missing a count.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Sequence, Tuple

from ..models import FieldResult

LOGGER = logging.getLogger(__name__)

PatternRule = Tuple[re.Pattern[str], Callable[[str], int], float]

MATCH_CONFIDENCE = 0.7
FALLBACK_CONFIDENCE = 0.4

QUANTITY_PATTERNS: Sequence[PatternRule] = (
    # "2 Cheese Coney", "2 coney"
    (re.compile(r"(?<!\d)(\d{1,6})[ \t]*(?:cheese[ \t]*)?coney(?!s)", re.IGNORECASE), int, MATCH_CONFIDENCE),
    # "2 Coneys", "2 Cheese Coneys"
    (re.compile(r"(?<!\d)(\d{1,6})[ \t]*(?:cheese[ \t]*)?coneys", re.IGNORECASE), int, MATCH_CONFIDENCE),
    # "Coney 2", but not "Coney 6.30"
    (re.compile(r"coney[ \t]*(\d{1,6})(?![\d.])", re.IGNORECASE), int, MATCH_CONFIDENCE),
    # "3 Way", "2 ways"
    (re.compile(r"(?<!\d)(\d{1,6})[ \t]*-?[ \t]*ways?\b", re.IGNORECASE), int, MATCH_CONFIDENCE),
    # "1 small chili", "2 lg coney"
    (
        re.compile(r"(?<!\d)(\d{1,6})[ \t]*(?:small|sm|medium|med|large|lg)[ \t]*(?:chili|coney)", re.IGNORECASE),
        int,
        MATCH_CONFIDENCE,
    ),
)

# Digits followed by a coney-family word, tolerating OCR misreads of the word
# itself and one short garbled word in between ("2 chz c0ney").
FALLBACK_PATTERN: PatternRule = (
    re.compile(r"(?<!\d)(\d{1,6})[ \t]*(?:[a-z]{1,6}[ \t]+)?(?:c[o0]n[e3]?y|dog)s?\b", re.IGNORECASE),
    int,
    FALLBACK_CONFIDENCE,
)

STRICT_QUANTITY_PATTERNS: Sequence[PatternRule] = (
    (re.compile(r"(?<!\d)(\d{1,6})[ \t]*cheese[ \t]*coney", re.IGNORECASE), int, MATCH_CONFIDENCE),
    (re.compile(r"(?<!\d)(\d{1,6})[ \t]*coneys", re.IGNORECASE), int, MATCH_CONFIDENCE),
    (re.compile(r"coney[ \t]*(\d{1,6})(?![\d.])", re.IGNORECASE), int, MATCH_CONFIDENCE),
)


def _apply(rule: PatternRule, text: str) -> Optional[int]:
    pattern, parse, _ = rule
    match = pattern.search(text)
    if not match:
        return None
    value = parse(match.group(1))
    if value <= 0:
        return None
    LOGGER.debug("quantity_match pattern=%s text=%r value=%d", pattern.pattern, match.group(0), value)
    return value


def extract_quantity(text: str) -> FieldResult[int]:
    """Sum the quantities of every matching pattern.

    Each pattern that matches adds its count and its confidence, so a receipt
    mentioning "2 cheese coney" and "1 small chili" yields 3 at confidence 1.4. The
    confidence is a relative score and is deliberately left unbounded.
    """

    text = text or ""
    total = 0
    confidence = 0.0
    for rule in QUANTITY_PATTERNS:
        value = _apply(rule, text)
        if value is None:
            continue
        total += value
        confidence += rule[2]

    if total > 0:
        return FieldResult(value=total, confidence=confidence)

    value = _apply(FALLBACK_PATTERN, text)
    if value is not None:
        return FieldResult(value=value, confidence=FALLBACK_PATTERN[2])
    return FieldResult.absent()


def extract_quantity_strict(text: str) -> FieldResult[int]:
    """Return the count from the first literal coney mention, if any."""

    text = text or ""
    for rule in STRICT_QUANTITY_PATTERNS:
        value = _apply(rule, text)
        if value is not None:
            return FieldResult(value=value, confidence=rule[2])
    return FieldResult.absent()


__all__ = [
    "FALLBACK_CONFIDENCE",
    "MATCH_CONFIDENCE",
    "extract_quantity",
    "extract_quantity_strict",
]
