from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmbeddingConfig:
    dimension: int = 100


DEFAULT_EMBEDDING_CONFIG = EmbeddingConfig()
