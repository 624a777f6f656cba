from __future__ import annotations

import json
import logging
from typing import Any

from ..recommendations.models import RagResponse, Restaurant

logger = logging.getLogger(__name__)

_JSON_FENCE = "```json"
_FENCE = "```"
_ECHO_LIMIT = 200


def extract_json(reply: str) -> str:
    """Strip markdown fences and surrounding chatter around a JSON object."""
    text = reply.strip()

    if _JSON_FENCE in text:
        text = text[text.index(_JSON_FENCE) + len(_JSON_FENCE):]
        if _FENCE in text:
            text = text[: text.index(_FENCE)]
    elif _FENCE in text:
        text = text[text.index(_FENCE) + len(_FENCE):]
        if _FENCE in text:
            text = text[: text.index(_FENCE)]

    text = text.strip()
    first, last = text.find("{"), text.rfind("}")
    if first != -1 and last != -1 and first < last:
        text = text[first: last + 1]
    return text


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _parse_picks(reply: str) -> tuple[str, list[str], str]:
    data = json.loads(extract_json(reply))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    alternatives = data.get("alternatives")
    if alternatives is None:
        alternatives = []
    if not isinstance(alternatives, list):
        raise ValueError("'alternatives' is not a list")
    if not all(isinstance(a, str) for a in alternatives):
        raise ValueError("'alternatives' must only contain names")

    return _as_text(data.get("bestRestaurant")), alternatives, _as_text(data.get("explanation"))


def find_by_name(name: str | None, restaurants: list[Restaurant]) -> Restaurant | None:
    """First restaurant whose name contains ``name``, ignoring case."""
    if not name or not name.strip():
        return None
    needle = name.lower()
    for r in restaurants:
        if r.name is not None and needle in r.name.lower():
            return r
    return None


def fallback_response(reply: str, retrieved: list[Restaurant]) -> RagResponse:
    return RagResponse(
        best_restaurant=retrieved[0] if retrieved else None,
        alternatives=list(retrieved[1:]),
        explanation=f"LLM returned: {reply[:_ECHO_LIMIT]}... (parsing failed)",
    )


def reconcile(reply: str | None, retrieved: list[Restaurant]) -> tuple[RagResponse, bool]:
    """Like ``parse_response`` but also reports whether the reply parsed."""
    reply = reply or ""
    try:
        best_name, alternative_names, explanation = _parse_picks(reply)
    except Exception:
        logger.warning("Could not parse LLM reply, using retrieval order", exc_info=True)
        return fallback_response(reply, retrieved), False

    alternatives = [
        r for r in (find_by_name(n, retrieved) for n in alternative_names) if r is not None
    ]
    response = RagResponse(
        best_restaurant=find_by_name(best_name, retrieved),
        alternatives=alternatives,
        explanation=explanation,
    )
    return response, True


def parse_response(reply: str | None, retrieved: list[Restaurant]) -> RagResponse:
    """
    Turn the model's reply into a response over the retrieved restaurants.

    Names that match no retrieved restaurant resolve to nothing. Any parse
    failure falls back to the retrieval order.
    """
    return reconcile(reply, retrieved)[0]
