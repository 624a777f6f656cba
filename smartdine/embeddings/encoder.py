from __future__ import annotations

import math
from collections import Counter

import numpy as np

from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from .idf import EMPTY_IDF, IdfIndex
from .tokenizer import tokenize

_INT_MIN = -(2**31)
_SLOTS_PER_TERM = 3


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def java_string_hash(text: str) -> int:
    """Signed 32-bit polynomial hash over UTF-16 code units (``s[0]*31^(n-1) + ...``).

    Pinned so that stored embeddings stay comparable with freshly built ones.
    """
    h = 0
    data = text.encode("utf-16-be")
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & 0xFFFFFFFF
    return _to_int32(h)


def _int32_abs(value: int) -> int:
    # abs(INT_MIN) overflows back to INT_MIN in 32-bit arithmetic; kept as-is.
    return value if value == _INT_MIN else abs(value)


def embed(
    text: str | None,
    idf: IdfIndex = EMPTY_IDF,
    config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> np.ndarray:
    """Encode text into a unit-length (or all-zero) TF-IDF hashed vector.

    Terms are visited from most to least frequent, ties in order of first
    appearance. Each term fills three consecutive slots with
    ``tfidf * sin(hash + i)`` until the vector is full.
    """
    dim = config.dimension
    words = tokenize(text)
    if not words:
        return np.zeros(dim)

    term_freq = Counter(words)
    total = len(words)
    values = [0.0] * dim
    idx = 0

    for term, count in term_freq.most_common():
        if idx >= dim:
            break
        weight = (count / total) * idf.get(term)
        h = _int32_abs(java_string_hash(term))
        for i in range(_SLOTS_PER_TERM):
            if idx >= dim:
                break
            values[idx] = weight * math.sin(_to_int32(h + i))
            idx += 1

    norm = math.sqrt(math.fsum(v * v for v in values))
    if norm > 0:
        values = [v / norm for v in values]
    return np.array(values, dtype=np.float64)


def restaurant_text(restaurant) -> str:
    """Name is repeated to weigh it up; price range is included here."""
    parts = [
        restaurant.name,
        restaurant.name,
        restaurant.cuisine,
        restaurant.price_range,
        restaurant.tags,
        restaurant.description,
    ]
    return "".join(f"{p} " for p in parts if p is not None)


def embed_restaurant(
    restaurant,
    idf: IdfIndex = EMPTY_IDF,
    config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> np.ndarray:
    return embed(restaurant_text(restaurant), idf, config)


def to_serialized(vector: np.ndarray) -> str:
    return "[" + ",".join(f"{float(v):.6f}" for v in vector) + "]"


def from_serialized(
    text: str | None,
    config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> np.ndarray:
    """Decode ``[0.1,0.2,...]``; bad components become 0, length is not checked."""
    if not text:
        return np.zeros(config.dimension)

    body = text.strip()
    if body.startswith("["):
        body = body[1:]
    if body.endswith("]"):
        body = body[:-1]

    values: list[float] = []
    for part in body.split(","):
        try:
            values.append(float(part.strip()))
        except ValueError:
            values.append(0.0)
    return np.array(values, dtype=np.float64)
