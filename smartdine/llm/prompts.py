from __future__ import annotations

from ..recommendations.models import Restaurant

SYSTEM_PROMPT = (
    "You are an intelligent food recommendation assistant. "
    "Use ONLY the provided restaurant data to make recommendations. "
    "Consider price, cuisine, ratings, tags, and descriptions when making recommendations. "
    "IMPORTANT: Respond with ONLY a valid JSON object, no additional text before or after."
)

USER_PROMPT_TEMPLATE = (
    'User query: "{query}"\n\n'
    "Top matching restaurants (already filtered by relevance):\n{context}\n\n"
    "Task: Pick the BEST restaurant from this list that matches the user's query. "
    "Consider:\n"
    "- If they asked for specific food (e.g., pizza, waffle), prioritize restaurants with that item\n"
    "- If they mentioned price (cheap, budget, expensive), consider the price range\n"
    "- If they mentioned mood/occasion (romantic, casual, date night), use tags and description\n"
    "- Rating and cuisine type matter for quality\n\n"
    "Respond with ONLY this JSON format (no markdown, no extra text):\n"
    '{{"bestRestaurant": "Exact Restaurant Name", '
    '"alternatives": ["Alternative Name 1", "Alternative Name 2"], '
    '"explanation": "Brief explanation (2-3 sentences) why this restaurant best matches '
    'their request, mentioning specific features"}}'
)


def _fmt(value: object) -> str:
    return "N/A" if value is None else str(value)


def build_context(restaurants: list[Restaurant]) -> str:
    lines = []
    for i, r in enumerate(restaurants, start=1):
        rating = f"{r.rating:.1f}" if r.rating is not None else "N/A"
        lines.append(
            f"{i}. {_fmt(r.name)} - Cuisine: {_fmt(r.cuisine)}, Price: {_fmt(r.price_range)}, "
            f"Rating: {rating}, Tags: {_fmt(r.tags)}, Description: {_fmt(r.description)}\n"
        )
    return "".join(lines)


def build_user_prompt(query: str, context: str) -> str:
    return USER_PROMPT_TEMPLATE.format(query=query, context=context)
