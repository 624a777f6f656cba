from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "rag_search"]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    food_specific = sum(1 for s in searches if s.get("food_specific"))
    fallbacks = sum(1 for s in searches if s.get("fallback"))
    unresolved = sum(
        1 for s in searches if s.get("candidates") and not s.get("best_restaurant")
    )

    pick_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("best_restaurant"):
            pick_counter[s["best_restaurant"]] += 1
    top_picks = [{"name": n, "count": c} for n, c in pick_counter.most_common(10)]

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "food_specific_rate": _rate(food_specific, total),
        "parse_fallback_rate": _rate(fallbacks, total),
        "unresolved_pick_rate": _rate(unresolved, total),
        "top_picks": top_picks,
    }
