from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from ..embeddings.encoder import embed_restaurant, from_serialized
from ..embeddings.idf import EMPTY_IDF, IdfIndex
from .keywords import FoodKeywordDetector, get_food_detector, keyword_score
from .models import Restaurant

# (semantic, keyword)
FOOD_SPECIFIC_WEIGHTS = (0.3, 0.7)
GENERAL_WEIGHTS = (0.7, 0.3)


@dataclass(frozen=True)
class ScoredRestaurant:
    restaurant: Restaurant
    score: float


def cosine(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity, or 0.0 for any degenerate pair of vectors (length
    mismatch, all zeros, NaN or infinite components)."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape or a.size == 0:
        return 0.0
    if not np.all(np.isfinite(a)) or not np.all(np.isfinite(b)):
        return 0.0
    if not np.any(a) or not np.any(b):
        return 0.0
    return float(cosine_similarity(a.reshape(1, -1), b.reshape(1, -1))[0, 0])


def restaurant_vector(
    restaurant: Restaurant,
    idf: IdfIndex,
    use_stored: bool = True,
) -> np.ndarray:
    """Stored vector when present, otherwise one built now (and not persisted)."""
    if use_stored and restaurant.embedding:
        return from_serialized(restaurant.embedding)
    return embed_restaurant(restaurant, idf)


def rank(
    query: str,
    query_vector: np.ndarray,
    restaurants: list[Restaurant],
    idf: IdfIndex = EMPTY_IDF,
    top_k: int = 5,
    detector: FoodKeywordDetector | None = None,
    use_stored_embeddings: bool = True,
) -> list[ScoredRestaurant]:
    """Blend semantic and keyword scores and return the best ``top_k``.

    A query naming a specific food drops every restaurant with no keyword
    match and leans on the keyword score; other queries lean on cosine
    similarity.
    """
    detector = detector or get_food_detector()
    specific = detector.has_specific_food(query)
    w_sem, w_kw = FOOD_SPECIFIC_WEIGHTS if specific else GENERAL_WEIGHTS

    scored: list[ScoredRestaurant] = []
    for restaurant in restaurants:
        vector = restaurant_vector(restaurant, idf, use_stored_embeddings)
        sim = cosine(query_vector, vector)
        kw = keyword_score(query, restaurant)

        if specific and kw == 0.0:
            continue

        scored.append(ScoredRestaurant(restaurant, w_sem * sim + w_kw * kw))

    # sorted() is stable, so equal scores keep catalog order
    scored = sorted(scored, key=lambda s: s.score, reverse=True)
    return scored[: max(top_k, 0)]
