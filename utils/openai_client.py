"""OpenAI-compatible chat completions client (JSON mode) over plain HTTP."""

import logging
import os
from typing import Optional

import requests

logger = logging.getLogger(__name__)


def openai_chat_json(
    system_prompt: str,
    user_prompt: str,
    api_key: Optional[str] = None,
    model: str = "gpt-4o",
    temperature: float = 0.3,
    base_url: str = "https://api.openai.com/v1",
    timeout: int = 120,
) -> str:
    """
    Send one chat completion request asking for a JSON object reply.

    Args:
        system_prompt: System message content
        user_prompt: User message content
        api_key: Bearer credential (defaults to OPENAI_API_KEY env var)
        model: Model name
        temperature: Sampling temperature
        base_url: API root, e.g. https://api.openai.com/v1
        timeout: Request timeout in seconds

    Returns:
        The message content of the first choice (a JSON string)

    Raises:
        ValueError: If the API key is not set or the reply has no content
        requests.HTTPError: On a non-success status code
    """
    api_key = api_key or os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY is not set.")

    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
        "response_format": {"type": "json_object"},
    }

    response = requests.post(
        f"{base_url.rstrip('/')}/chat/completions",
        json=payload,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
        timeout=timeout,
    )

    if response.status_code != 200:
        logger.error(f"API error {response.status_code}: {response.text[:500]}")
        response.raise_for_status()

    data = response.json()
    choices = data.get("choices") or []
    content = choices[0].get("message", {}).get("content") if choices else None
    if not content:
        raise ValueError("Chat completion returned no message content")
    return content
