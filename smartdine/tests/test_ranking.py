import math

import numpy as np

from smartdine.embeddings.encoder import embed, embed_restaurant, to_serialized
from smartdine.embeddings.idf import IdfIndex
from smartdine.recommendations.keywords import (
    CORE_FOODS,
    FoodKeywordDetector,
    extract_food_tags,
    keyword_score,
)
from smartdine.recommendations.models import Restaurant
from smartdine.recommendations.ranking import cosine, rank

CAFE_A = Restaurant(id="1", name="Cafe A", cuisine="Italian", price_range="$", rating=4.2,
                    tags="pizza, casual", description="Thin crust pizza by the slice")
B_BISTRO = Restaurant(id="2", name="B Bistro", cuisine="Italian", price_range="$$", rating=4.5,
                      tags="pizza, pasta", description="Family bistro with wood-fired ovens")
DINNER_CLUB = Restaurant(id="3", name="Romantic Dinner Club", cuisine="French", price_range="$$$$",
                         rating=4.8, tags="romantic, candlelit", description="Quiet tables and a tasting menu")
NOODLE_HUT = Restaurant(id="4", name="Noodle Hut", cuisine="Chinese", price_range="$", rating=3.9,
                        tags="noodles, momos", description="Hand-pulled noodles and dumplings")

CATALOG = [CAFE_A, B_BISTRO, DINNER_CLUB, NOODLE_HUT]


def _detector(restaurants=CATALOG) -> FoodKeywordDetector:
    detector = FoodKeywordDetector()
    detector.refresh(restaurants)
    return detector


def _rank(query, restaurants=CATALOG, top_k=5, **kwargs):
    idf = IdfIndex.from_restaurants(restaurants)
    return rank(query, embed(query, idf), restaurants, idf, top_k=top_k,
                detector=_detector(restaurants), **kwargs)


# ── Cosine ───────────────────────────────────────────────────────────────


class TestCosine:
    def test_identities(self):
        v = embed("wood fired pizza")
        assert math.isclose(cosine(v, v), 1.0, abs_tol=1e-9)
        assert math.isclose(cosine(v, -v), -1.0, abs_tol=1e-9)
        assert cosine(v, np.zeros(100)) == 0.0

    def test_length_mismatch_is_zero(self):
        assert cosine(np.ones(100), np.ones(3)) == 0.0

    def test_unnormalised_vectors(self):
        assert math.isclose(cosine(np.array([3.0, 0.0]), np.array([1.0, 1.0])), 1 / math.sqrt(2))


# ── Keyword score ────────────────────────────────────────────────────────


class TestKeywordScore:
    def test_field_bonuses_add_up(self):
        r = Restaurant(name="Biryani Hub", cuisine="Indian", tags="biryani, spicy",
                       description="Hyderabadi biryani")
        # spicy: 1 + 2 (tags); biryani: 1 + 3 (name) + 2 (tags)
        assert keyword_score("spicy biryani", r) == 4.5

    def test_cuisine_bonus(self):
        assert keyword_score("italian", CAFE_A) == 3.0

    def test_short_tokens_still_count_in_divisor(self):
        assert keyword_score("a pizza", CAFE_A) == 1.5

    def test_no_match_is_zero(self):
        assert keyword_score("sushi", CAFE_A) == 0.0
        assert keyword_score("", CAFE_A) == 0.0

    def test_description_only_match(self):
        assert keyword_score("slice", CAFE_A) == 1.0

    def test_missing_fields(self):
        assert keyword_score("pizza", Restaurant(id="9")) == 0.0


# ── Food keyword detector ────────────────────────────────────────────────


class TestFoodKeywordDetector:
    def test_core_foods_without_refresh(self):
        detector = FoodKeywordDetector()
        assert detector.catalog_food_tags == frozenset()
        assert detector.has_specific_food("Best PIZZA in town")
        assert detector.has_specific_food("craving ice cream tonight")
        assert not detector.has_specific_food("romantic dinner")

    def test_substring_containment(self):
        assert FoodKeywordDetector().has_specific_food("pancakes please")
        assert "pancake" in CORE_FOODS

    def test_catalog_tags_exclude_non_food_words(self):
        tags = extract_food_tags([
            Restaurant(tags="Paneer Tikka, cozy , ,ROMANTIC"),
            Restaurant(tags=None),
        ])
        assert tags == frozenset({"paneer tikka"})

    def test_refresh_adds_catalog_tags(self):
        detector = FoodKeywordDetector()
        assert not detector.has_specific_food("best paneer tikka")
        count = detector.refresh([Restaurant(tags="paneer tikka, budget")])
        assert count == 1
        assert detector.has_specific_food("best paneer tikka")

    def test_refresh_replaces_previous_tags(self):
        detector = FoodKeywordDetector()
        detector.refresh([Restaurant(tags="dumplings")])
        detector.refresh([Restaurant(tags="tapas")])
        assert detector.catalog_food_tags == frozenset({"tapas"})


# ── Ranker ───────────────────────────────────────────────────────────────


class TestRank:
    def test_food_query_filters_to_keyword_matches(self):
        results = _rank("cheap pizza")
        assert {s.restaurant.name for s in results} == {"Cafe A", "B Bistro"}
        assert all(keyword_score("cheap pizza", s.restaurant) > 0 for s in results)

    def test_food_query_uses_keyword_weighting(self):
        idf = IdfIndex.from_restaurants(CATALOG)
        query_vec = embed("cheap pizza", idf)
        results = _rank("cheap pizza")
        for s in results:
            sim = cosine(query_vec, embed_restaurant(s.restaurant, idf))
            expected = 0.3 * sim + 0.7 * keyword_score("cheap pizza", s.restaurant)
            assert math.isclose(s.score, expected)

    def test_general_query_keeps_everyone(self):
        results = _rank("romantic dinner")
        assert len(results) == 4
        assert results[0].restaurant.name == "Romantic Dinner Club"

    def test_general_query_uses_semantic_weighting(self):
        idf = IdfIndex.from_restaurants(CATALOG)
        query_vec = embed("romantic dinner", idf)
        for s in _rank("romantic dinner"):
            sim = cosine(query_vec, embed_restaurant(s.restaurant, idf))
            expected = 0.7 * sim + 0.3 * keyword_score("romantic dinner", s.restaurant)
            assert math.isclose(s.score, expected)

    def test_results_sorted_and_bounded(self):
        results = _rank("quiet italian bistro", top_k=2)
        assert len(results) == 2
        scores = [s.score for s in results]
        assert scores == sorted(scores, reverse=True)

    def test_top_k_zero(self):
        assert _rank("anything", top_k=0) == []

    def test_ties_keep_catalog_order(self):
        twins = [
            Restaurant(id=str(i), name="Twin Diner", cuisine="Diner", tags="coffee")
            for i in range(4)
        ]
        results = _rank("coffee", restaurants=twins, top_k=3)
        assert [s.restaurant.id for s in results] == ["0", "1", "2"]

    def test_no_match_for_food_query_returns_empty(self):
        assert _rank("sushi") == []

    def test_stored_embedding_is_used(self):
        idf = IdfIndex.from_restaurants(CATALOG)
        query_vec = embed("quiet evening", idf)
        stored = NOODLE_HUT.model_copy(update={"embedding": to_serialized(query_vec)})
        results = rank("quiet evening", query_vec, [stored], idf, detector=_detector())
        assert math.isclose(results[0].score, 0.7, abs_tol=1e-5)

    def test_stored_embedding_can_be_ignored(self):
        idf = IdfIndex.from_restaurants(CATALOG)
        query_vec = embed("quiet evening", idf)
        stored = NOODLE_HUT.model_copy(update={"embedding": to_serialized(query_vec)})
        results = rank("quiet evening", query_vec, [stored], idf, detector=_detector(),
                       use_stored_embeddings=False)
        expected = 0.7 * cosine(query_vec, embed_restaurant(NOODLE_HUT, idf))
        assert math.isclose(results[0].score, expected)

    def test_malformed_stored_embedding_scores_zero_similarity(self):
        broken = NOODLE_HUT.model_copy(update={"embedding": "[oops,1.0]"})
        idf = IdfIndex.from_restaurants(CATALOG)
        results = rank("quiet evening", embed("quiet evening", idf), [broken], idf,
                       detector=_detector())
        assert results[0].score == 0.0

    def test_non_finite_stored_embedding_scores_zero_similarity(self):
        components = ["NaN", "Infinity", "1e999", "-Infinity"] + ["0.1"] * 96
        broken = NOODLE_HUT.model_copy(update={"embedding": "[" + ",".join(components) + "]"})
        idf = IdfIndex.from_restaurants(CATALOG)
        results = rank("quiet evening", embed("quiet evening", idf), [broken, DINNER_CLUB], idf,
                       detector=_detector())
        scores = {s.restaurant.name: s.score for s in results}
        assert scores["Noodle Hut"] == 0.0
        assert math.isfinite(scores["Romantic Dinner Club"])


def test_cosine_of_non_finite_vectors_is_zero():
    v = embed("wood fired pizza")
    bad = v.copy()
    bad[0] = np.nan
    assert cosine(v, bad) == 0.0
    bad[0] = np.inf
    assert cosine(bad, v) == 0.0
