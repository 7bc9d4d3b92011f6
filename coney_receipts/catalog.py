"""Static catalog of known receipt-issuing chili parlours."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from .settings import get_settings

LOGGER = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when a brand catalog cannot be loaded or is inconsistent."""


@dataclass(frozen=True)
class BrandCatalogEntry:
    canonical_name: str
    keywords: Tuple[str, ...]
    aliases: Tuple[str, ...] = ()


DEFAULT_CATALOG: Tuple[BrandCatalogEntry, ...] = (
    BrandCatalogEntry("Skyline Chili", ("skyline", "chili"), ("skyline chili", "skylinechili")),
    BrandCatalogEntry("Gold Star Chili", ("gold star", "goldstar"), ("gold star chili", "goldstar chili")),
    BrandCatalogEntry("Dixie Chili", ("dixie",), ("dixie chili",)),
    BrandCatalogEntry("Camp Washington Chili", ("camp washington",), ("camp washington chili",)),
    BrandCatalogEntry("Empress Chili", ("empress",), ("empress chili",)),
    BrandCatalogEntry("Price Hill Chili", ("price hill",), ("price hill chili",)),
    BrandCatalogEntry("Pleasant Ridge Chili", ("pleasant ridge",), ("pleasant ridge chili",)),
    BrandCatalogEntry("Blue Ash Chili", ("blue ash",), ("blue ash chili",)),
)


def _clean_terms(values: Any, *, name: str, field_name: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, list) or not all(isinstance(item, str) for item in values):
        raise CatalogError(f"catalog_entry_invalid_{field_name}:{name}")
    terms: List[str] = []
    for item in values:
        term = item.strip().lower()
        if term and term not in terms:
            terms.append(term)
    return tuple(terms)


def build_catalog(entries: Iterable[BrandCatalogEntry]) -> Tuple[BrandCatalogEntry, ...]:
    """Return ``entries`` as a tuple, rejecting duplicate canonical names."""

    seen: List[str] = []
    catalog: List[BrandCatalogEntry] = []
    for entry in entries:
        if entry.canonical_name in seen:
            raise CatalogError(f"duplicate_brand:{entry.canonical_name}")
        seen.append(entry.canonical_name)
        catalog.append(entry)
    return tuple(catalog)


def load_catalog(path: Union[str, Path]) -> Tuple[BrandCatalogEntry, ...]:
    """Load a catalog from a JSON list of ``{canonical_name, keywords, aliases}``."""

    catalog_path = Path(path)
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"catalog_unreadable:{catalog_path}") from exc
    except ValueError as exc:
        raise CatalogError(f"catalog_invalid_json:{catalog_path}") from exc

    if not isinstance(raw, list):
        raise CatalogError("catalog_must_be_a_list")

    entries: List[BrandCatalogEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            raise CatalogError("catalog_entry_must_be_an_object")
        name = item.get("canonical_name")
        if not isinstance(name, str) or not name.strip():
            raise CatalogError("catalog_entry_missing_name")
        name = name.strip()
        entries.append(
            BrandCatalogEntry(
                canonical_name=name,
                keywords=_clean_terms(item.get("keywords"), name=name, field_name="keywords"),
                aliases=_clean_terms(item.get("aliases"), name=name, field_name="aliases"),
            )
        )
    catalog = build_catalog(entries)
    LOGGER.info("Loaded %d brand catalog entries from %s", len(catalog), catalog_path)
    return catalog


@lru_cache()
def _catalog_for_path(path: Optional[Path]) -> Tuple[BrandCatalogEntry, ...]:
    if path is None:
        return build_catalog(DEFAULT_CATALOG)
    return load_catalog(path)


def get_catalog() -> Tuple[BrandCatalogEntry, ...]:
    """Return the catalog for the current ``BRAND_CATALOG_PATH`` setting.

    Catalogs are cached per path, so a settings reset that changes the path
    picks up the new file on the next call.
    """
    return _catalog_for_path(get_settings().brand_catalog_path)


def reset_catalog_state() -> None:
    """Drop cached catalogs so edited files are read again (for tests)."""
    _catalog_for_path.cache_clear()


__all__ = [
    "BrandCatalogEntry",
    "CatalogError",
    "DEFAULT_CATALOG",
    "build_catalog",
    "get_catalog",
    "load_catalog",
    "reset_catalog_state",
]
