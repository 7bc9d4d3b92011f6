"""Receipt extraction pipeline on top of the text recognition service.

Recognition itself happens elsewhere: the caller hands over the text and the
confidence the recognition service reported. This module guards the input
size, normalises the text, runs either the full or the simplified extraction
flow and turns the resulting confidence into a review decision for the UI.
"""
from __future__ import annotations

import enum
import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .aggregator import process_receipt_text, process_simple_receipt_text
from .models import ExtractionRecord, SimpleExtractionRecord
from .settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)

MODE_FULL = "full"
MODE_SIMPLE = "simple"

Record = Union[ExtractionRecord, SimpleExtractionRecord]


class TextTooLargeError(RuntimeError):
    """Raised when recognised text exceeds the configured maximum length."""


class UnknownModeError(ValueError):
    """Raised when an extraction mode other than full/simple is requested."""


class ReviewDecision(str, enum.Enum):
    AUTO_ACCEPT = "auto_accept"
    CONFIRM = "confirm"
    REJECT = "reject"


@dataclass(frozen=True)
class RecognitionResult:
    text: str
    confidence: Optional[float] = None


@dataclass(frozen=True)
class PipelineResult:
    mode: str
    record: Record
    recognition_confidence: Optional[float]
    decision: ReviewDecision

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "record": self.record.to_dict(),
            "recognition_confidence": self.recognition_confidence,
            "decision": self.decision.value,
        }


def _normalise_line(line: str) -> str:
    cleaned = unicodedata.normalize("NFKC", line)
    cleaned = re.sub(r"[\t\f\r\v]+", " ", cleaned)
    cleaned = re.sub(r" {2,}", " ", cleaned)
    return cleaned.strip()


def normalise_text(text: str) -> str:
    """Fold full-width characters and stray whitespace, keeping line breaks."""

    lines = (_normalise_line(line) for line in (text or "").splitlines())
    return "\n".join(line for line in lines if line)


def decide_review(
    confidence: float,
    *,
    is_valid_receipt: bool,
    recognition_confidence: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> ReviewDecision:
    """Map an extraction confidence onto what the UI should do with it.

    Records that failed the receipt checks, or whose text the recognition
    service was unsure about, are never accepted without confirmation.
    """

    settings = settings or get_settings()
    if confidence < settings.review_confidence:
        return ReviewDecision.REJECT
    if confidence < settings.auto_accept_confidence:
        return ReviewDecision.CONFIRM
    if not is_valid_receipt:
        return ReviewDecision.CONFIRM
    if recognition_confidence is not None and recognition_confidence < settings.review_confidence:
        return ReviewDecision.CONFIRM
    return ReviewDecision.AUTO_ACCEPT


def extract_from_recognition(
    recognition: RecognitionResult,
    *,
    mode: str = MODE_SIMPLE,
    settings: Optional[Settings] = None,
) -> PipelineResult:
    """Extract a receipt record from the recognition service's output."""

    settings = settings or get_settings()
    if mode not in (MODE_FULL, MODE_SIMPLE):
        raise UnknownModeError(f"unknown_mode:{mode}")

    raw_text = recognition.text or ""
    if len(raw_text) > settings.max_text_length:
        raise TextTooLargeError(f"text_too_large:{len(raw_text)}>{settings.max_text_length}")

    text = normalise_text(raw_text)
    record: Record
    if mode == MODE_FULL:
        record = process_receipt_text(text, raw_text=raw_text)
    else:
        record = process_simple_receipt_text(text)

    decision = decide_review(
        record.confidence,
        is_valid_receipt=record.is_valid_receipt,
        recognition_confidence=recognition.confidence,
        settings=settings,
    )
    LOGGER.info(
        "receipt_extracted mode=%s confidence=%.3f recognition_confidence=%s decision=%s",
        mode,
        record.confidence,
        recognition.confidence,
        decision.value,
    )
    return PipelineResult(
        mode=mode,
        record=record,
        recognition_confidence=recognition.confidence,
        decision=decision,
    )


__all__ = [
    "MODE_FULL",
    "MODE_SIMPLE",
    "PipelineResult",
    "RecognitionResult",
    "ReviewDecision",
    "TextTooLargeError",
    "UnknownModeError",
    "decide_review",
    "extract_from_recognition",
    "normalise_text",
]
