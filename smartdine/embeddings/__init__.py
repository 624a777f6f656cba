"""
Embeddings layer for hybrid retrieval.

Responsibilities:
- Tokenize restaurant and query text.
- Compute inverse document frequencies over the current catalog.
- Build fixed-size TF-IDF weighted hashed vectors for queries and restaurants.
- Serialize vectors to and from the catalog's decimal-list string form.
"""
