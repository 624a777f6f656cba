from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("OPENROUTER_API_KEY", "")
    url: str = "https://openrouter.ai/api/v1/chat/completions"
    model: str = "mistralai/mistral-7b-instruct"
    temperature: float = 0.3
    timeout: float = 30.0
    max_tokens: int = 500
    enabled: bool = True


DEFAULT_LLM_CONFIG = LLMConfig()
