from __future__ import annotations

import pytest

from coney_receipts import ocr_extract
from coney_receipts.ocr_extract import (
    MODE_FULL,
    MODE_SIMPLE,
    RecognitionResult,
    ReviewDecision,
    TextTooLargeError,
    UnknownModeError,
    decide_review,
    extract_from_recognition,
    normalise_text,
)
from coney_receipts.settings import Settings


def test_normalise_text_folds_width_and_whitespace() -> None:
    raw = "ＳＫＹＬＩＮＥ  ＣＨＩＬＩ\r\n\n\t2 cheese\tconey \n"
    assert normalise_text(raw) == "SKYLINE CHILI\n2 cheese coney"


def test_full_mode_auto_accepts_confident_receipt(skyline_receipt: str, settings: Settings) -> None:
    result = extract_from_recognition(
        RecognitionResult(text=skyline_receipt, confidence=0.93),
        mode=MODE_FULL,
        settings=settings,
    )
    assert result.mode == MODE_FULL
    assert result.record.brand == "Skyline Chili"
    assert result.record.quantity == 2
    assert result.decision is ReviewDecision.AUTO_ACCEPT


def test_low_recognition_confidence_requires_confirmation(skyline_receipt: str, settings: Settings) -> None:
    result = extract_from_recognition(
        RecognitionResult(text=skyline_receipt, confidence=0.3),
        mode=MODE_SIMPLE,
        settings=settings,
    )
    assert result.record.coney_count == 2
    assert result.decision is ReviewDecision.CONFIRM


def test_empty_text_is_rejected_in_full_mode(settings: Settings) -> None:
    result = extract_from_recognition(RecognitionResult(text=""), mode=MODE_FULL, settings=settings)
    assert result.record.confidence == 0
    assert result.decision is ReviewDecision.REJECT


def test_empty_text_needs_confirmation_in_simple_mode(settings: Settings) -> None:
    result = extract_from_recognition(RecognitionResult(text="   "), settings=settings)
    assert result.mode == MODE_SIMPLE
    assert result.record.confidence == 0.5
    assert result.decision is ReviewDecision.CONFIRM


def test_oversized_text_is_refused(settings: Settings) -> None:
    with pytest.raises(TextTooLargeError):
        extract_from_recognition(RecognitionResult(text="x" * 2001), settings=settings)


def test_unknown_mode_is_refused(settings: Settings) -> None:
    with pytest.raises(UnknownModeError):
        extract_from_recognition(RecognitionResult(text="total 1.00"), mode="layout", settings=settings)


def test_pipeline_normalises_before_extracting(monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
    seen = {}
    original = ocr_extract.process_simple_receipt_text

    def fake_simple(text: str):
        seen["text"] = text
        return original(text)

    monkeypatch.setattr(ocr_extract, "process_simple_receipt_text", fake_simple)

    extract_from_recognition(RecognitionResult(text="２ Cheese Coney\r\n"), settings=settings)

    assert seen["text"] == "2 Cheese Coney"


def test_full_record_keeps_recognised_text_verbatim(settings: Settings) -> None:
    raw = "Skyline  Chili\r\n\n2 cheese coney\n"

    result = extract_from_recognition(RecognitionResult(text=raw), mode=MODE_FULL, settings=settings)

    assert result.record.raw_text == raw
    assert result.record.brand == "Skyline Chili"
    assert result.record.quantity == 2


@pytest.mark.parametrize(
    "confidence,is_valid,recognition,expected",
    [
        (0.2, True, None, ReviewDecision.REJECT),
        (0.6, True, None, ReviewDecision.CONFIRM),
        (0.9, True, None, ReviewDecision.AUTO_ACCEPT),
        (0.9, False, None, ReviewDecision.CONFIRM),
        (0.9, True, 0.4, ReviewDecision.CONFIRM),
        (0.9, True, 0.8, ReviewDecision.AUTO_ACCEPT),
    ],
)
def test_decide_review(
    confidence: float,
    is_valid: bool,
    recognition,
    expected: ReviewDecision,
    settings: Settings,
) -> None:
    decision = decide_review(
        confidence,
        is_valid_receipt=is_valid,
        recognition_confidence=recognition,
        settings=settings,
    )
    assert decision is expected


def test_pipeline_result_serialises(skyline_receipt: str, settings: Settings) -> None:
    payload = extract_from_recognition(
        RecognitionResult(text=skyline_receipt, confidence=0.9),
        settings=settings,
    ).to_dict()
    assert payload["decision"] == "auto_accept"
    assert payload["record"]["coney_count"] == 2
    assert payload["recognition_confidence"] == 0.9
