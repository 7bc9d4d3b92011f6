"""Immutable result types shared by the extractors and aggregators."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FieldResult(Generic[T]):
    """A single extracted field and the extractor's certainty.

    An absent ``value`` always carries a confidence of ``0``.
    """

    value: Optional[T] = None
    confidence: float = 0.0

    @property
    def found(self) -> bool:
        return self.value is not None

    @classmethod
    def absent(cls) -> "FieldResult[T]":
        return cls(value=None, confidence=0.0)


@dataclass(frozen=True)
class ExtractionRecord:
    brand: Optional[str]
    quantity: Optional[int]
    date: Optional[str]
    time: Optional[str]
    total: Optional[float]
    check_number: Optional[str]
    confidence: float
    raw_text: str
    is_valid_receipt: bool
    warnings: Tuple[str, ...] = ()
    items: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["items"] = list(self.items)
        payload["warnings"] = list(self.warnings)
        return payload


@dataclass(frozen=True)
class SimpleExtractionRecord:
    coney_count: Optional[int]
    date: Optional[str]
    confidence: float
    is_valid_receipt: bool
    warnings: Tuple[str, ...] = ()
    is_likely_fake: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["warnings"] = list(self.warnings)
        return payload


__all__ = ["ExtractionRecord", "FieldResult", "SimpleExtractionRecord"]
