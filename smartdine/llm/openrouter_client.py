from __future__ import annotations

import json
import logging

import httpx

from .config import DEFAULT_LLM_CONFIG, LLMConfig
from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def error_reply(explanation: str) -> str:
    """Reply that parses cleanly but names no restaurant."""
    return json.dumps({
        "bestRestaurant": "Error",
        "alternatives": [],
        "explanation": explanation,
    })


FAILED_REPLY = error_reply("Failed to get LLM response")


def complete(
    user_prompt: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    client: httpx.Client | None = None,
) -> str:
    """
    Send the prompt to the chat-completion endpoint and return the model text.

    Never raises: a disabled client, non-2xx status or malformed body yields
    ``FAILED_REPLY``; connection errors and timeouts yield an error reply
    carrying the exception message.
    """
    if not config.enabled or not config.api_key:
        logger.warning("OpenRouter API key not configured, skipping LLM call")
        return FAILED_REPLY

    payload = {
        "model": config.model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
    }

    try:
        if client is None:
            response = httpx.post(config.url, json=payload, headers=headers, timeout=config.timeout)
        else:
            response = client.post(config.url, json=payload, headers=headers, timeout=config.timeout)
    except httpx.HTTPError as exc:
        logger.warning("OpenRouter call failed", exc_info=True)
        return error_reply(f"API call failed: {exc}")

    if not response.is_success:
        logger.warning("OpenRouter returned HTTP %d", response.status_code)
        return FAILED_REPLY

    try:
        return response.json()["choices"][0]["message"]["content"] or ""
    except (ValueError, KeyError, IndexError, TypeError):
        logger.warning("Unexpected OpenRouter response body", exc_info=True)
        return FAILED_REPLY
