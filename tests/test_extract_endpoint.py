from __future__ import annotations

import pytest
from fastapi import HTTPException

from coney_receipts.catalog import CatalogError
from coney_receipts.main import ExtractRequest, extract, extract_simple, health
from coney_receipts.settings import Settings


@pytest.mark.asyncio
async def test_extract_returns_full_record(skyline_receipt: str, settings: Settings) -> None:
    response = await extract(ExtractRequest(text=skyline_receipt, ocr_confidence=0.91), settings=settings)

    assert response.mode == "full"
    assert response.decision == "auto_accept"
    assert response.recognition_confidence == 0.91
    record = response.record
    assert record["brand"] == "Skyline Chili"
    assert record["quantity"] == 2
    assert record["date"] == "2024-03-14"
    assert record["check_number"] == "1042"
    assert record["items"] == []


@pytest.mark.asyncio
async def test_extract_simple_returns_warnings(settings: Settings) -> None:
    response = await extract_simple(ExtractRequest(text="total 9.99"), settings=settings)

    assert response.mode == "simple"
    assert response.decision == "confirm"
    assert response.record["is_valid_receipt"] is True
    assert response.record["warnings"] == ["No coney count detected", "No date detected"]


@pytest.mark.asyncio
async def test_extract_rejects_oversized_text(settings: Settings) -> None:
    with pytest.raises(HTTPException) as exc:
        await extract(ExtractRequest(text="x" * (settings.max_text_length + 1)), settings=settings)
    assert exc.value.status_code == 413
    assert exc.value.detail == "text_too_large"


@pytest.mark.asyncio
async def test_extract_reports_catalog_errors(monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
    def broken_catalog():
        raise CatalogError("catalog_unreadable:/missing.json")

    monkeypatch.setattr("coney_receipts.field_extractors.brand.get_catalog", broken_catalog)

    with pytest.raises(HTTPException) as exc:
        await extract(ExtractRequest(text="Skyline"), settings=settings)
    assert exc.value.status_code == 500
    assert exc.value.detail == "brand_catalog_error"


@pytest.mark.asyncio
async def test_health() -> None:
    assert await health() == {"status": "ok"}
