from __future__ import annotations

import math
from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping

from .tokenizer import tokenize

UNKNOWN_TERM_WEIGHT = 1.0


def document_text(restaurant) -> str:
    """Text a restaurant contributes to document frequencies.

    Unlike the embedding text this leaves out the price range.
    """
    parts = [restaurant.name, restaurant.cuisine, restaurant.tags, restaurant.description]
    return "".join(f"{p} " for p in parts if p is not None)


class IdfIndex:
    """Immutable term -> inverse document frequency table."""

    def __init__(self, weights: Mapping[str, float] | None = None) -> None:
        self._weights = MappingProxyType(dict(weights or {}))

    @classmethod
    def from_texts(cls, texts: Iterable[str | None]) -> IdfIndex:
        doc_freq: Counter[str] = Counter()
        total_docs = 0
        for text in texts:
            total_docs += 1
            doc_freq.update(set(tokenize(text)))
        return cls({term: math.log(total_docs / df) for term, df in doc_freq.items()})

    @classmethod
    def from_restaurants(cls, restaurants: Iterable) -> IdfIndex:
        return cls.from_texts(document_text(r) for r in restaurants)

    def get(self, term: str) -> float:
        return self._weights.get(term, UNKNOWN_TERM_WEIGHT)

    @property
    def weights(self) -> Mapping[str, float]:
        return self._weights

    def __contains__(self, term: object) -> bool:
        return term in self._weights

    def __len__(self) -> int:
        return len(self._weights)


EMPTY_IDF = IdfIndex()
