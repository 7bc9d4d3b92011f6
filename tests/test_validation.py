from __future__ import annotations

import pytest

from coney_receipts.validation import (
    WARNING_NOT_A_RECEIPT,
    detect_fake_receipt,
    has_receipt_indicators,
    validate_receipt,
)


@pytest.mark.parametrize(
    "text",
    ["TOTAL", "Subtotal", "tax", "Receipt", "check", "Order", "$4.50", "12:30"],
)
def test_receipt_indicators(text: str) -> None:
    assert has_receipt_indicators(f"something {text} something")


def test_no_receipt_indicators() -> None:
    assert not has_receipt_indicators("hello world 42")
    assert not has_receipt_indicators("")


@pytest.mark.parametrize(
    "text",
    [
        "Figma export\n2 cheese coney",
        "SAMPLE RECEIPT\nTotal 4.00",
        "Skyline\n2 coneys\n03/14/24",
        "2 cheese coney\nTotal $5000",
        "Coney $0",
    ],
)
def test_detects_fake_receipts(text: str) -> None:
    assert detect_fake_receipt(text) is True


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Coney $0.50",
        "Skyline Chili\nCheck 22\n2 Cheese Coney 5.98\nTotal $6.39",
    ],
)
def test_accepts_ordinary_text(text: str) -> None:
    assert detect_fake_receipt(text) is False


def test_validate_receipt_accepts_itemised_receipt(skyline_receipt: str) -> None:
    result = validate_receipt(skyline_receipt)
    assert result.is_valid_receipt is True
    assert result.warnings == ()


def test_validate_receipt_rejects_social_media_text() -> None:
    result = validate_receipt("This is a selfie photo from Instagram. #food #yummy #delicious")
    assert result.is_valid_receipt is False
    assert WARNING_NOT_A_RECEIPT in result.warnings


def test_validate_receipt_tolerates_short_receipt_with_keywords() -> None:
    result = validate_receipt("Skyline Chili check 4521 total $12.40 3/14/24")
    assert result.is_valid_receipt is True
    assert len(result.warnings) == 2
