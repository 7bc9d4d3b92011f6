"""Combine per-field extraction results into receipt records.

Two scoring models are kept side by side on purpose. The full record blends
each field's confidence with fixed weights; the simplified record used by the
coney logging flow starts from a base score and adds bonuses. They answer
different product questions and are not interchangeable.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .catalog import BrandCatalogEntry
from .field_extractors import (
    extract_brand,
    extract_check_number,
    extract_date,
    extract_date_simple,
    extract_quantity,
    extract_quantity_strict,
    extract_time,
    extract_total,
)
from .models import ExtractionRecord, FieldResult, SimpleExtractionRecord
from .validation import (
    WARNING_LIKELY_FAKE,
    WARNING_NO_INDICATORS,
    detect_fake_receipt,
    has_receipt_indicators,
    validate_receipt,
)

LOGGER = logging.getLogger(__name__)

FIELD_WEIGHTS = {
    "brand": 0.30,
    "quantity": 0.30,
    "date": 0.20,
    "time": 0.10,
    "total": 0.05,
    "check_number": 0.05,
}

BASE_CONFIDENCE = 0.5
QUANTITY_BONUS = 0.3
DATE_BONUS = 0.2
VALID_RECEIPT_BONUS = 0.2

WARNING_NO_CONEY_COUNT = "No coney count detected"
WARNING_NO_DATE = "No date detected"


def weighted_field_confidence(
    *,
    brand: FieldResult,
    quantity: FieldResult,
    date: FieldResult,
    time: FieldResult,
    total: FieldResult,
    check_number: FieldResult,
) -> float:
    """Blend field confidences with fixed weights.

    Missing fields contribute nothing, so a sparse receipt is penalised rather
    than renormalised over the fields that were found. The brand and quantity
    scores can exceed 1, so the blend is capped at 1.
    """

    score = (
        brand.confidence * FIELD_WEIGHTS["brand"]
        + quantity.confidence * FIELD_WEIGHTS["quantity"]
        + date.confidence * FIELD_WEIGHTS["date"]
        + time.confidence * FIELD_WEIGHTS["time"]
        + total.confidence * FIELD_WEIGHTS["total"]
        + check_number.confidence * FIELD_WEIGHTS["check_number"]
    )
    return min(score, 1.0)


def base_plus_bonus_confidence(*, has_quantity: bool, has_date: bool, is_valid_receipt: bool) -> float:
    """Flat base score plus a bonus per satisfied check, capped at 1."""

    confidence = BASE_CONFIDENCE
    if has_quantity:
        confidence += QUANTITY_BONUS
    if has_date:
        confidence += DATE_BONUS
    if is_valid_receipt:
        confidence += VALID_RECEIPT_BONUS
    return min(confidence, 1.0)


def process_receipt_text(
    text: str,
    catalog: Optional[Iterable[BrandCatalogEntry]] = None,
    *,
    raw_text: Optional[str] = None,
) -> ExtractionRecord:
    """Run every field extractor over ``text`` and build the full record.

    ``raw_text`` is stored on the record in place of ``text`` when the caller
    extracted from a cleaned-up copy of the recognised text.
    """

    text = text or ""
    brand = extract_brand(text, catalog)
    quantity = extract_quantity(text)
    date = extract_date(text)
    time = extract_time(text)
    total = extract_total(text)
    check_number = extract_check_number(text)
    validation = validate_receipt(text)

    confidence = weighted_field_confidence(
        brand=brand,
        quantity=quantity,
        date=date,
        time=time,
        total=total,
        check_number=check_number,
    )
    LOGGER.debug(
        "receipt_processed brand=%s quantity=%s date=%s time=%s total=%s check=%s confidence=%.3f",
        brand,
        quantity,
        date,
        time,
        total,
        check_number,
        confidence,
    )

    return ExtractionRecord(
        brand=brand.value,
        quantity=quantity.value,
        date=date.value,
        time=time.value,
        total=total.value,
        check_number=check_number.value,
        confidence=confidence,
        raw_text=text if raw_text is None else raw_text,
        is_valid_receipt=validation.is_valid_receipt,
        warnings=validation.warnings,
    )


def process_simple_receipt_text(text: str) -> SimpleExtractionRecord:
    """Extract only the coney count and date for the logging flow."""

    text = text or ""
    quantity = extract_quantity_strict(text)
    date = extract_date_simple(text)

    warnings: List[str] = []
    is_valid = True

    is_fake = detect_fake_receipt(text)
    if is_fake:
        warnings.append(WARNING_LIKELY_FAKE)
        is_valid = False

    if not has_receipt_indicators(text):
        warnings.append(WARNING_NO_INDICATORS)
        is_valid = False

    if not quantity.found:
        warnings.append(WARNING_NO_CONEY_COUNT)
    if not date.found:
        warnings.append(WARNING_NO_DATE)

    confidence = base_plus_bonus_confidence(
        has_quantity=quantity.found,
        has_date=date.found,
        is_valid_receipt=is_valid,
    )
    LOGGER.debug(
        "simple_receipt_processed coney_count=%s date=%s valid=%s confidence=%.2f",
        quantity.value,
        date.value,
        is_valid,
        confidence,
    )

    return SimpleExtractionRecord(
        coney_count=quantity.value,
        date=date.value,
        confidence=confidence,
        is_valid_receipt=is_valid,
        warnings=tuple(warnings),
        is_likely_fake=is_fake,
    )


__all__ = [
    "FIELD_WEIGHTS",
    "base_plus_bonus_confidence",
    "process_receipt_text",
    "process_simple_receipt_text",
    "weighted_field_confidence",
]
