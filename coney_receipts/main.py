"""FastAPI router definitions for the receipt extraction service."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from .catalog import CatalogError
from .ocr_extract import (
    MODE_FULL,
    MODE_SIMPLE,
    RecognitionResult,
    TextTooLargeError,
    extract_from_recognition,
)
from .settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

HTTP_413_TEXT_TOO_LARGE = 413


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logging.getLogger().setLevel(get_settings().log_level)
    yield


app = FastAPI(title="Coney Receipt Extraction Service", lifespan=lifespan)


class ExtractRequest(BaseModel):
    text: str = ""
    ocr_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class ExtractResponse(BaseModel):
    mode: str
    record: Dict[str, Any]
    recognition_confidence: Optional[float] = None
    decision: str


def _run(payload: ExtractRequest, mode: str, settings: Settings) -> ExtractResponse:
    recognition = RecognitionResult(text=payload.text, confidence=payload.ocr_confidence)
    try:
        result = extract_from_recognition(recognition, mode=mode, settings=settings)
    except TextTooLargeError as exc:
        raise HTTPException(status_code=HTTP_413_TEXT_TOO_LARGE, detail="text_too_large") from exc
    except CatalogError as exc:
        LOGGER.exception("Brand catalog error: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="brand_catalog_error") from exc
    return ExtractResponse(**result.to_dict())


@app.post("/extract", response_model=ExtractResponse)
async def extract(payload: ExtractRequest, settings: Settings = Depends(get_settings)) -> ExtractResponse:
    return _run(payload, MODE_FULL, settings)


@app.post("/extract/simple", response_model=ExtractResponse)
async def extract_simple(payload: ExtractRequest, settings: Settings = Depends(get_settings)) -> ExtractResponse:
    return _run(payload, MODE_SIMPLE, settings)


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


__all__ = ["app"]
