"""Category oracle: one JSON request/response exchange with the model backend."""

import json
import logging
import time
from typing import Any, Callable, Dict, Optional

from config import Config
from core.errors import BackendError, CategorizationError
from utils.llm_provider import llm_generate
from utils.rate_limiter import RateLimiter, build_rate_limiter

logger = logging.getLogger(__name__)

GenerateFn = Callable[..., Dict[str, Any]]


def parse_json_response(response_text: str) -> Any:
    """Parse a model reply, tolerating a surrounding markdown code fence."""
    text = response_text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return json.loads(text.strip())


class CategoryOracle:
    """Calls the configured backend and retries failed or unparseable replies."""

    def __init__(
        self,
        config: Config,
        generate: GenerateFn = llm_generate,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """
        Initialize oracle client.

        Args:
            config: Full configuration; provider settings and retry policy are read from it
            generate: Provider call, ``generate(system_prompt, user_prompt, config, rate_limiter)``
            rate_limiter: Optional pacing shared by every call (built from config if omitted)
        """
        self.config = config
        self.max_retries = config.categorization.max_retries
        self.retry_delay = config.categorization.retry_delay
        self._generate = generate
        self.rate_limiter = rate_limiter or build_rate_limiter(config)

    def call(self, system_prompt: str, user_prompt: str, retries: int = 0) -> Any:
        """
        Send both prompts and return the parsed JSON reply.

        Retries the whole exchange up to ``max_retries`` times with a fixed
        delay, then raises BackendError.
        """
        try:
            response = self._generate(
                system_prompt, user_prompt, self.config, self.rate_limiter
            )
            return parse_json_response(str(response["response"]))
        except CategorizationError:
            raise
        except Exception as e:
            if retries < self.max_retries:
                logger.warning(
                    f"Backend call failed ({e}); retrying ({retries + 1}/{self.max_retries})..."
                )
                time.sleep(self.retry_delay)
                return self.call(system_prompt, user_prompt, retries + 1)
            logger.error(f"Backend call failed after {retries + 1} attempts: {e}")
            raise BackendError(
                f"Backend call failed after {retries + 1} attempts: {e}",
                attempts=retries + 1,
            ) from e
