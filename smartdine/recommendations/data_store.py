from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .config import DEFAULT_RETRIEVAL_CONFIG
from .models import Restaurant

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: list[str] = [
    "id",
    "name",
    "cuisine",
    "price_range",
    "rating",
    "tags",
    "description",
    "embedding",
]
_TEXT_COLUMNS = [c for c in CATALOG_COLUMNS if c != "rating"]

_restaurants: list[Restaurant] | None = None


def _load(path: Path) -> list[Restaurant]:
    df = pd.read_csv(path, dtype={c: str for c in _TEXT_COLUMNS})
    df = df.reindex(columns=CATALOG_COLUMNS)
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce")

    # NaN -> None so missing attributes stay absent on the model
    df = df.astype(object).where(pd.notna(df), None)

    restaurants = [Restaurant(**record) for record in df.to_dict(orient="records")]
    logger.info("Loaded %d restaurants from %s", len(restaurants), path)
    return restaurants


def find_all(path: Path | None = None) -> list[Restaurant]:
    """Return every restaurant in the catalog, loading it on first call."""
    global _restaurants
    if path is not None:
        return _load(path)
    if _restaurants is None:
        _restaurants = _load(DEFAULT_RETRIEVAL_CONFIG.catalog_path)
    return list(_restaurants)


def reload() -> list[Restaurant]:
    """Drop the in-memory catalog and read it again from disk."""
    global _restaurants
    _restaurants = None
    return find_all()


def save_all(restaurants: list[Restaurant], path: Path | None = None) -> Path:
    """Write the catalog (including serialized embeddings) back to CSV."""
    global _restaurants
    out_path = path or DEFAULT_RETRIEVAL_CONFIG.catalog_path
    rows = [{**r.model_dump(), "embedding": r.embedding} for r in restaurants]
    pd.DataFrame(rows, columns=CATALOG_COLUMNS).to_csv(out_path, index=False)
    if Path(out_path) == DEFAULT_RETRIEVAL_CONFIG.catalog_path:
        _restaurants = None
    return out_path
