from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from coney_receipts.catalog import reset_catalog_state  # noqa: E402
from coney_receipts.settings import Settings, reset_settings_state  # noqa: E402

SETTINGS_ENV_VARS = [
    "AUTO_ACCEPT_CONFIDENCE",
    "REVIEW_CONFIDENCE",
    "MAX_TEXT_LENGTH",
    "BRAND_CATALOG_PATH",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings_state()
    reset_catalog_state()
    yield
    # .env loading writes straight to os.environ, outside monkeypatch's reach.
    for name in SETTINGS_ENV_VARS:
        os.environ.pop(name, None)
    reset_settings_state()
    reset_catalog_state()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        auto_accept_confidence=0.85,
        review_confidence=0.5,
        max_text_length=2000,
        brand_catalog_path=None,
        log_level="INFO",
    )


@pytest.fixture
def skyline_receipt() -> str:
    return "\n".join(
        [
            "SKYLINE CHILI",
            "Norwood #12",
            "Check: 1042   Server: Amy",
            "03/14/2024 12:31 PM",
            "2 Cheese Coney PL      5.98",
            "1 MED Coke             2.89",
            "Subtotal               8.87",
            "Tax                    0.62",
            "Total                  9.49",
            "Thank you for your visit",
        ]
    )
