"""Provider-agnostic JSON chat call for OpenAI, Ollama and Gemini."""

import logging
from typing import Any, Dict, Optional

import ollama

from config import Config
from utils.gemini_client import gemini_generate_json
from utils.openai_client import openai_chat_json
from utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "ollama", "gemini")


def _truncate(text: str, limit: int = 500) -> str:
    return f"{text[:limit]}{'... [truncated]' if len(text) > limit else ''}"


def llm_generate(
    system_prompt: str,
    user_prompt: str,
    config: Config,
    rate_limiter: Optional[RateLimiter] = None,
) -> Dict[str, Any]:
    """
    Provider-agnostic JSON-mode LLM call. Uses provider/model from ``config``.
    Returns a dict with a 'response' key holding the raw reply text.
    Logs request and response for debugging.
    """
    provider = config.llm_provider

    if rate_limiter is not None:
        rate_limiter.wait_if_needed()

    logger.info(
        f"[LLM REQUEST] Provider: {provider}, Prompt: {_truncate(user_prompt, 200)}"
    )

    if provider == "openai":
        response_text = openai_chat_json(
            system_prompt,
            user_prompt,
            api_key=config.openai.api_key,
            model=config.openai.model,
            temperature=config.openai.temperature,
            base_url=config.openai.base_url,
            timeout=config.openai.timeout,
        )
    elif provider == "gemini":
        if not config.gemini.api_key:
            raise ValueError("GEMINI_API_KEY not set in config.")
        response_text = gemini_generate_json(
            system_prompt,
            user_prompt,
            api_key=config.gemini.api_key,
            model=config.gemini.model,
            temperature=config.gemini.temperature,
        )
    elif provider == "ollama":
        client = ollama.Client(host=config.ollama.base_url)
        result = client.chat(
            model=config.ollama.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            format="json",
            options={"temperature": config.ollama.temperature},
        )
        response_text = result["message"]["content"]
    else:
        raise ValueError(
            f"Unknown LLM provider '{provider}' (expected one of {', '.join(SUPPORTED_PROVIDERS)})"
        )

    logger.info(f"[LLM RESPONSE] Provider: {provider}, Response: {_truncate(str(response_text))}")
    return {"response": response_text}
