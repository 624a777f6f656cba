"""
Retrieval-augmented recommendation engine.

Responsibilities:
- Load the restaurant catalog.
- Score restaurants against a free-text query (keyword match + cosine similarity).
- Hard-filter to matching restaurants when the query names a specific food.
- Hand the top candidates to the LLM and return its reconciled pick.
"""
