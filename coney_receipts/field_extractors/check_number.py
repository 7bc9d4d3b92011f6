"""Check / order number extraction."""
from __future__ import annotations

import re
from typing import Sequence

from ..models import FieldResult

CHECK_CONFIDENCE = 0.8

CHECK_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"\bcheck[:\s#]*(\d+)", re.IGNORECASE),
    re.compile(r"\border[:\s#]*(\d+)", re.IGNORECASE),
    re.compile(r"\breceipt[:\s#]*(\d+)", re.IGNORECASE),
    re.compile(r"#\s*(\d+)"),
)


def extract_check_number(text: str) -> FieldResult[str]:
    for pattern in CHECK_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return FieldResult(value=match.group(1), confidence=CHECK_CONFIDENCE)
    return FieldResult.absent()


__all__ = ["CHECK_CONFIDENCE", "extract_check_number"]
