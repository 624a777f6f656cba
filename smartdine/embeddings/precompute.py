"""
Offline script to fill in missing restaurant embeddings.

Usage:
    python -m smartdine.embeddings.precompute
"""
from __future__ import annotations

import logging
from pathlib import Path

from ..recommendations.config import DEFAULT_RETRIEVAL_CONFIG
from ..recommendations.data_store import find_all, save_all
from .encoder import embed_restaurant, to_serialized
from .idf import IdfIndex

logger = logging.getLogger(__name__)


def run_precompute(path: Path = DEFAULT_RETRIEVAL_CONFIG.catalog_path) -> int:
    """Embed restaurants that have no stored vector; returns how many were added.

    The IDF is computed over the whole catalog at the time of the run, so
    vectors written here reflect that snapshot only.
    """
    restaurants = find_all(path)
    missing = [r for r in restaurants if not r.embedding]
    if not missing:
        logger.info("All restaurants already have embeddings.")
        return 0

    logger.info("Generating embeddings for %d restaurants ...", len(missing))
    idf = IdfIndex.from_restaurants(restaurants)
    for restaurant in missing:
        restaurant.embedding = to_serialized(embed_restaurant(restaurant, idf))

    save_all(restaurants, path)
    logger.info("Embeddings generated and saved to %s", path)
    return len(missing)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    count = run_precompute()
    print(f"Precompute complete. {count} embeddings written.")
