from __future__ import annotations

import logging
from typing import Iterable

from ..embeddings.tokenizer import tokenize
from .models import Restaurant

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 3

CORE_FOODS: frozenset[str] = frozenset({
    "pizza", "burger", "biryani", "pasta", "waffle", "waffles", "pancake", "pancakes",
    "sandwich", "sushi", "ramen", "noodles", "dosa", "idli",
    "vada", "samosa", "paratha", "kebab", "shawarma", "falafel",
    "tacos", "taco", "burrito", "nachos", "ice cream", "icecream", "cake", "cakes", "brownie",
    "cookie", "cookies", "donut", "donuts", "croissant", "bagel", "muffin", "cupcake", "cupcakes",
    "momos", "dimsum", "spring roll", "fried rice", "manchurian",
})

NON_FOOD_KEYWORDS: frozenset[str] = frozenset({
    "budget", "cheap", "expensive", "cozy", "romantic", "wifi", "parking",
    "comfort", "healthy", "spicy", "sweet", "study", "night", "late",
    "fastfood", "street", "fine", "casual", "formal", "treat", "snacks",
})

_BASE_MATCH = 1.0
_NAME_BONUS = 3.0
_TAGS_BONUS = 2.0
_CUISINE_BONUS = 2.0


def keyword_score(query: str, restaurant: Restaurant) -> float:
    """Field-weighted substring match of query words against a restaurant.

    The divisor counts every query token, including the short ones that
    were never matched.
    """
    words = tokenize(query)
    name = (restaurant.name or "").lower()
    cuisine = (restaurant.cuisine or "").lower()
    tags = (restaurant.tags or "").lower()
    description = (restaurant.description or "").lower()

    score = 0.0
    matched = 0
    for word in words:
        if len(word) < MIN_KEYWORD_LENGTH:
            continue

        in_name = word in name
        in_cuisine = word in cuisine
        in_tags = word in tags
        if not (in_name or in_cuisine or in_tags or word in description):
            continue

        matched += 1
        score += _BASE_MATCH
        if in_name:
            score += _NAME_BONUS
        if in_tags:
            score += _TAGS_BONUS
        if in_cuisine:
            score += _CUISINE_BONUS

    if matched == 0:
        return 0.0
    return score / max(len(words), 1)


def extract_food_tags(restaurants: Iterable[Restaurant]) -> frozenset[str]:
    tags: set[str] = set()
    for r in restaurants:
        if not r.tags:
            continue
        for raw in r.tags.split(","):
            tag = raw.strip().lower()
            if tag and tag not in NON_FOOD_KEYWORDS:
                tags.add(tag)
    return frozenset(tags)


class FoodKeywordDetector:
    """Decides whether a query asks for a specific dish.

    Catalog tags are only known after ``refresh`` has been called; until
    then only the built-in food list is consulted.
    """

    def __init__(self) -> None:
        self._catalog_food_tags: frozenset[str] = frozenset()

    @property
    def catalog_food_tags(self) -> frozenset[str]:
        return self._catalog_food_tags

    def refresh(self, restaurants: Iterable[Restaurant]) -> int:
        tags = extract_food_tags(restaurants)
        self._catalog_food_tags = tags
        logger.info("Loaded %d food keywords from catalog", len(tags))
        return len(tags)

    def has_specific_food(self, query: str) -> bool:
        query_lower = query.lower()
        if any(food in query_lower for food in CORE_FOODS):
            return True
        return any(tag in query_lower for tag in self._catalog_food_tags)


_detector = FoodKeywordDetector()


def get_food_detector() -> FoodKeywordDetector:
    return _detector
