from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "restaurants.csv"


@dataclass(frozen=True)
class RetrievalConfig:
    top_k: int = 5
    catalog_path: Path = Path(os.getenv("SMARTDINE_CATALOG", str(_DEFAULT_CATALOG)))
    # When False, restaurant vectors are always rebuilt against the request's IDF.
    use_stored_embeddings: bool = True


DEFAULT_RETRIEVAL_CONFIG = RetrievalConfig()
