from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..embeddings.encoder import embed
from ..embeddings.idf import IdfIndex
from ..llm.openrouter_client import complete
from ..llm.prompts import build_context, build_user_prompt
from ..llm.reconcile import reconcile
from .config import DEFAULT_RETRIEVAL_CONFIG, RetrievalConfig
from .data_store import find_all
from .keywords import FoodKeywordDetector, get_food_detector
from .models import RagResponse, Restaurant
from .ranking import rank

logger = logging.getLogger(__name__)

NO_RESTAURANTS_MESSAGE = "No restaurants available"


def retrieve(
    query: str,
    restaurants: list[Restaurant],
    config: RetrievalConfig = DEFAULT_RETRIEVAL_CONFIG,
    detector: FoodKeywordDetector | None = None,
) -> list[Restaurant]:
    """Top-k restaurants for the query, with IDF computed over ``restaurants``."""
    idf = IdfIndex.from_restaurants(restaurants)
    query_vector = embed(query, idf)
    ranked = rank(
        query,
        query_vector,
        restaurants,
        idf,
        top_k=config.top_k,
        detector=detector,
        use_stored_embeddings=config.use_stored_embeddings,
    )
    return [s.restaurant for s in ranked]


def recommend(
    query: str,
    restaurants: list[Restaurant] | None = None,
    config: RetrievalConfig = DEFAULT_RETRIEVAL_CONFIG,
    detector: FoodKeywordDetector | None = None,
) -> RagResponse:
    start_time = time.time()
    detector = detector or get_food_detector()

    if restaurants is None:
        restaurants = find_all()

    if not restaurants:
        return RagResponse(best_restaurant=None, alternatives=[], explanation=NO_RESTAURANTS_MESSAGE)

    retrieved = retrieve(query, restaurants, config, detector)

    # --- LLM pick & reconciliation ---
    reply = complete(build_user_prompt(query, build_context(retrieved)))
    response, parsed = reconcile(reply, retrieved)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    best = response.best_restaurant
    record_event("rag_search", {
        "query": query,
        "candidates": len(retrieved),
        "food_specific": detector.has_specific_food(query),
        "best_restaurant": best.name if best else None,
        "fallback": not parsed,
        "response_time_ms": elapsed_ms,
    })
    logger.info(
        "Recommended %r for %r from %d candidates in %.1f ms",
        best.name if best else None,
        query,
        len(retrieved),
        elapsed_ms,
    )

    return response
