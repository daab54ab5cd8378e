"""Gemini API client for JSON completions using the google.generativeai SDK."""

import logging
import os
from typing import Optional

import google.generativeai as genai

logger = logging.getLogger(__name__)


def gemini_generate_json(
    system_prompt: str,
    user_prompt: str,
    api_key: Optional[str] = None,
    model: str = "gemini-2.0-flash",
    temperature: float = 0.3,
) -> str:
    """
    Generate a JSON reply with Gemini.

    The system prompt is passed as the model's system instruction and the
    response MIME type is pinned to application/json. Retries are left to the
    caller.

    Args:
        system_prompt: Instructions for the model
        user_prompt: Content to act on
        api_key: Gemini API key (defaults to GEMINI_API_KEY env var)
        model: Gemini model name
        temperature: Sampling temperature (0.0-1.0)

    Returns:
        Raw response text (a JSON string)

    Raises:
        ValueError: If API key is not set
    """
    api_key = api_key or os.getenv("GEMINI_API_KEY")
    if not api_key:
        raise ValueError("GEMINI_API_KEY is not set.")
    genai.configure(api_key=api_key)

    generation_config = {
        "temperature": temperature,
        "response_mime_type": "application/json",
    }

    model_instance = genai.GenerativeModel(
        model_name=model,
        generation_config=generation_config,  # type: ignore[arg-type]
        system_instruction=system_prompt,
    )

    response = model_instance.generate_content(user_prompt)
    return response.text  # type: ignore[no-any-return]
