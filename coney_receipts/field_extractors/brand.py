"""Brand detection by keyword and alias scoring against the catalog."""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..catalog import BrandCatalogEntry, get_catalog
from ..models import FieldResult

LOGGER = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.5
ALIAS_WEIGHT = 0.8


def _score_entry(entry: BrandCatalogEntry, lowered: str) -> float:
    score = 0.0
    for keyword in entry.keywords:
        if keyword.lower() in lowered:
            score += KEYWORD_WEIGHT
    for alias in entry.aliases:
        if alias.lower() in lowered:
            score += ALIAS_WEIGHT
    return score


def extract_brand(text: str, catalog: Optional[Iterable[BrandCatalogEntry]] = None) -> FieldResult[str]:
    """Return the best matching canonical brand name.

    The confidence is the entry's summed keyword and alias weights and is not
    capped at 1; several hits on the same brand rank it above a single hit.
    Ties keep the entry that comes first in the catalog.
    """

    entries = get_catalog() if catalog is None else catalog
    lowered = (text or "").lower()
    best_name: Optional[str] = None
    best_score = 0.0
    for entry in entries:
        score = _score_entry(entry, lowered)
        if score > best_score:
            best_name = entry.canonical_name
            best_score = score

    if best_name is None:
        return FieldResult.absent()
    LOGGER.debug("brand_match name=%s score=%.2f", best_name, best_score)
    return FieldResult(value=best_name, confidence=best_score)


__all__ = ["ALIAS_WEIGHT", "KEYWORD_WEIGHT", "extract_brand"]
