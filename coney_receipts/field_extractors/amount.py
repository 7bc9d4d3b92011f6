"""Rule-based total amount extraction."""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..models import FieldResult

LOGGER = logging.getLogger(__name__)

TOTAL_PATTERN = re.compile(r"\btotal[:\s]*\$?\s*(\d+\.\d{2})(?!\d)", re.IGNORECASE)
AMOUNT_PATTERN = re.compile(r"(?<![\d.])\$?(\d+\.\d{2})(?!\d)")

LABELLED_CONFIDENCE = 0.9
LARGEST_AMOUNT_CONFIDENCE = 0.5


def _normalise_number(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def extract_total(text: str) -> FieldResult[float]:
    """Return the receipt total.

    A decimal amount following the word "total" wins outright. Otherwise the
    largest amount anywhere on the receipt is taken as the grand total, at a
    lower confidence since a single line item may be the largest figure.
    """

    text = text or ""
    labelled = TOTAL_PATTERN.search(text)
    if labelled:
        value = _normalise_number(labelled.group(1))
        if value is not None:
            return FieldResult(value=value, confidence=LABELLED_CONFIDENCE)

    amounts: List[float] = []
    for match in AMOUNT_PATTERN.finditer(text):
        value = _normalise_number(match.group(1))
        if value is not None:
            amounts.append(value)
    if not amounts:
        return FieldResult.absent()
    LOGGER.debug("total_fallback candidates=%s", amounts)
    return FieldResult(value=max(amounts), confidence=LARGEST_AMOUNT_CONFIDENCE)


__all__ = ["LABELLED_CONFIDENCE", "LARGEST_AMOUNT_CONFIDENCE", "extract_total"]
