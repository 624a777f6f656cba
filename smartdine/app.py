from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .recommendations.data_store import find_all, reload
from .recommendations.keywords import get_food_detector
from .recommendations.models import RagRequest, RagResponse
from .recommendations.retrieval import recommend

logger = logging.getLogger(__name__)


def _load_food_keywords() -> None:
    try:
        get_food_detector().refresh(find_all())
    except (OSError, ValueError):
        logger.warning("Failed to load food keywords from catalog", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _load_food_keywords()
    yield


app = FastAPI(title="SmartDine RAG Recommendation API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/rag/recommend", response_model=RagResponse)
def rag_recommend(body: RagRequest) -> RagResponse:
    if body.query is None or not body.query.strip():
        raise HTTPException(status_code=400, detail="Query must not be empty")
    return recommend(body.query)


# ── Maintenance endpoints ────────────────────────────────────────────────


@app.post("/api/rag/refresh")
def rag_refresh() -> dict:
    restaurants = reload()
    food_keywords = get_food_detector().refresh(restaurants)
    return {"restaurants": len(restaurants), "food_keywords": food_keywords}


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
