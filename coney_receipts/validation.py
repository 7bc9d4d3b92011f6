"""Heuristic checks on whether recognised text came from a real receipt.

None of these checks look at individual fields; they scan the whole text for
generic markers. ``has_receipt_indicators`` and ``detect_fake_receipt`` serve
the simplified logging flow, ``validate_receipt`` the full record.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

WARNING_NO_INDICATORS = "No receipt indicators found (total, tax, receipt, etc.)"
WARNING_LIKELY_FAKE = "This appears to be a mock or fake receipt"
WARNING_SHORT_TEXT = "Text is very short - receipts typically have more content"
WARNING_FEW_KEYWORDS = "Missing common receipt keywords (total, date, etc.)"
WARNING_NO_PRICES = "No price information found - receipts typically show item costs"
WARNING_NO_DATE_OR_TIME = "No date or time found - receipts typically show transaction time"
WARNING_NO_FOOD_TERMS = "No restaurant or food-related terms found"
WARNING_NOT_A_RECEIPT = "Content appears to be from social media or messaging, not a receipt"

RECEIPT_INDICATORS: Sequence[re.Pattern[str]] = (
    re.compile(r"total", re.IGNORECASE),
    re.compile(r"subtotal", re.IGNORECASE),
    re.compile(r"tax", re.IGNORECASE),
    re.compile(r"receipt", re.IGNORECASE),
    re.compile(r"check", re.IGNORECASE),
    re.compile(r"order", re.IGNORECASE),
    re.compile(r"\$\d+\.\d{2}"),
    re.compile(r"\d{1,2}:\d{2}"),
)

FAKE_INDICATORS = (
    "figma",
    "mockup",
    "template",
    "sample",
    "test receipt",
    "fake",
    "demo",
    "placeholder",
    "lorem ipsum",
    "design",
    "prototype",
    "wireframe",
)

# Lines a hand-made receipt tends to consist of and nothing else.
TOO_CLEAN_LINES: Sequence[re.Pattern[str]] = (
    re.compile(r"^\s*skyline\s*$", re.IGNORECASE),
    re.compile(r"^\s*\d{2}/\d{2}/\d{2}\s*$"),
    re.compile(r"^\s*\d+\s*coneys?\s*$", re.IGNORECASE),
    re.compile(r"^\s*\$\d+\s*$"),
)
SHORT_RECEIPT_LINES = 4
TOO_CLEAN_RATIO = 0.75
DOLLAR_AMOUNT = re.compile(r"\$(\d+)(\.\d{2})?")
MAX_REALISTIC_AMOUNT = 1000

MIN_TEXT_LENGTH = 50
MIN_KEYWORDS = 3
MIN_PRICES = 2
RECEIPT_KEYWORDS = (
    "total",
    "subtotal",
    "tax",
    "amount",
    "price",
    "cost",
    "receipt",
    "invoice",
    "bill",
    "check",
    "order",
    "date",
    "time",
    "server",
    "cashier",
    "table",
    "thank you",
    "visit",
    "restaurant",
    "chili",
    "coney",
)
FOOD_KEYWORDS = (
    "chili",
    "coney",
    "restaurant",
    "diner",
    "cafe",
    "food",
    "skyline",
    "gold star",
    "dixie",
    "camp washington",
    "empress",
    "price hill",
    "pleasant ridge",
    "blue ash",
)
PRICE_PATTERN = re.compile(r"\$?\d+\.\d{2}")
DATE_PATTERN = re.compile(r"(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})|(\d{4}[/-]\d{1,2}[/-]\d{1,2})")
TIME_PATTERN = re.compile(r"\d{1,2}:\d{2}")
NON_RECEIPT_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"\b(?:selfie|photo|picture|image)\b", re.IGNORECASE),
    re.compile(r"\b(?:social media|facebook|instagram|twitter)\b", re.IGNORECASE),
    re.compile(r"\b(?:email|message|text|chat)\b", re.IGNORECASE),
    re.compile(r"\b(?:document|file|attachment)\b", re.IGNORECASE),
)


@dataclass(frozen=True)
class ReceiptValidation:
    is_valid_receipt: bool
    warnings: Tuple[str, ...]


def has_receipt_indicators(text: str) -> bool:
    """Return ``True`` when any generic receipt marker appears in ``text``."""

    return any(pattern.search(text or "") for pattern in RECEIPT_INDICATORS)


def _looks_hand_made(lines: List[str]) -> bool:
    if not lines or len(lines) > SHORT_RECEIPT_LINES:
        return False
    too_clean = sum(1 for line in lines if any(pattern.search(line) for pattern in TOO_CLEAN_LINES))
    return too_clean >= len(lines) * TOO_CLEAN_RATIO


def detect_fake_receipt(text: str) -> bool:
    """Flag mock-ups, design templates and suspiciously tidy receipts.

    Whole-dollar amounts below $1 and any amount above $1000 are treated as
    unrealistic for a chili parlour.
    """

    lowered = (text or "").lower()
    for indicator in FAKE_INDICATORS:
        if indicator in lowered:
            LOGGER.info("fake_receipt_detected reason=indicator:%s", indicator)
            return True

    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    if _looks_hand_made(lines):
        LOGGER.info("fake_receipt_detected reason=too_clean lines=%d", len(lines))
        return True

    for match in DOLLAR_AMOUNT.finditer(lowered):
        digits = match.group(1).lstrip("0") or "0"
        too_large = len(digits) > len(str(MAX_REALISTIC_AMOUNT)) or int(digits) > MAX_REALISTIC_AMOUNT
        has_cents = match.group(2) is not None
        if too_large or (not has_cents and digits == "0"):
            LOGGER.info("fake_receipt_detected reason=unrealistic_amount:%s", match.group(0))
            return True
    return False


def validate_receipt(text: str) -> ReceiptValidation:
    """Score how receipt-like ``text`` is for the full extraction record."""

    lowered = (text or "").lower()
    warnings: List[str] = []
    is_valid = True

    if len(lowered) < MIN_TEXT_LENGTH:
        warnings.append(WARNING_SHORT_TEXT)
        is_valid = False

    keywords = [keyword for keyword in RECEIPT_KEYWORDS if keyword in lowered]
    if len(keywords) < MIN_KEYWORDS:
        warnings.append(WARNING_FEW_KEYWORDS)
        is_valid = False

    prices = PRICE_PATTERN.findall(lowered)
    if len(prices) < MIN_PRICES:
        warnings.append(WARNING_NO_PRICES)
        is_valid = False

    if not DATE_PATTERN.search(lowered) and not TIME_PATTERN.search(lowered):
        warnings.append(WARNING_NO_DATE_OR_TIME)

    if not any(keyword in lowered for keyword in FOOD_KEYWORDS):
        warnings.append(WARNING_NO_FOOD_TERMS)

    if any(pattern.search(lowered) for pattern in NON_RECEIPT_PATTERNS):
        warnings.append(WARNING_NOT_A_RECEIPT)
        is_valid = False

    # Only soft warnings raised and at least some receipt evidence present.
    if len(warnings) <= 2 and (len(keywords) >= 2 or prices):
        is_valid = True

    return ReceiptValidation(is_valid_receipt=is_valid, warnings=tuple(warnings))


__all__ = [
    "ReceiptValidation",
    "WARNING_LIKELY_FAKE",
    "WARNING_NO_INDICATORS",
    "detect_fake_receipt",
    "has_receipt_indicators",
    "validate_receipt",
]
