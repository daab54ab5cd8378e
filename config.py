"""Configuration management for the LLM categorizer."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from core.errors import ConfigError


class CategorizationConfig(BaseModel):
    """Parameters of one categorization run.

    Frozen: recursive calls derive a new instance instead of mutating this one.
    """

    model_config = ConfigDict(frozen=True)

    item_count: int = Field(default=1_000_000, gt=0)  # Total items to categorize
    category_count: int = Field(default=1_000, gt=0)  # Target number of leaf categories
    sample_size: int = Field(default=100, gt=0)  # Items shown to the model when proposing
    step_category_amount: int = Field(default=20, gt=0)  # Categories proposed per level
    batch_size: int = Field(default=50, gt=0)  # Items per assignment call
    max_retries: int = Field(default=3, gt=0)
    retry_delay: float = Field(default=1.0, ge=0)  # Seconds between retries
    max_depth: int = Field(default=8, ge=0)
    keep_unassigned: bool = True  # Emit an "Unassigned" leaf instead of dropping items

    @model_validator(mode="after")
    def _check_counts(self) -> "CategorizationConfig":
        if self.category_count > self.item_count:
            raise ValueError(
                f"category_count ({self.category_count}) must not exceed "
                f"item_count ({self.item_count})"
            )
        return self

    @property
    def items_per_category(self) -> int:
        """Target maximum items per category at this level."""
        return -(-self.item_count // self.category_count)

    def derive(self, item_count: int, category_count: int) -> "CategorizationConfig":
        """Return a child configuration for a shrunken sub-problem."""
        return build_categorization_config(
            {**self.model_dump(), "item_count": item_count, "category_count": category_count}
        )


class OpenAIConfig(BaseModel):
    """OpenAI-compatible chat completions configuration."""

    api_key: Optional[str] = None
    model: str = "gpt-4o"
    temperature: float = 0.3
    base_url: str = "https://api.openai.com/v1"
    timeout: int = 120


class OllamaConfig(BaseModel):
    """Ollama configuration."""

    model: str = "llama3.1:8b"
    temperature: float = 0.3
    base_url: str = "http://localhost:11434"


class GeminiConfig(BaseModel):
    """Gemini API configuration."""

    api_key: Optional[str] = None
    model: str = "gemini-2.0-flash"
    temperature: float = 0.3


class RateLimitConfig(BaseModel):
    """Request pacing for backend calls."""

    enabled: bool = False
    rpm_limit: int = 60  # Requests per minute
    max_requests: Optional[int] = None  # Hard cap for a whole run


class ProcessingConfig(BaseModel):
    """Processing configuration."""

    workers: int = 1  # Parallel assignment batches
    show_progress: bool = True


class Config(BaseModel):
    """Main configuration."""

    llm_provider: str = Field(default="openai")  # openai, ollama or gemini
    categorization: CategorizationConfig = Field(default_factory=CategorizationConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)

    # Runtime parameters (set via CLI)
    output_dir: Optional[Path] = None
    seed: Optional[int] = None

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    def to_yaml(self, path: Path):
        """Save configuration to YAML file (secrets and runtime fields excluded)."""
        data = self.model_dump(
            exclude={
                "output_dir": True,
                "seed": True,
                "openai": {"api_key"},
                "gemini": {"api_key"},
            }
        )
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def load_env(self):
        """Load .env and pick up API keys and LLM provider if present."""
        load_dotenv()
        openai_key = os.getenv("OPENAI_API_KEY")
        if openai_key and not self.openai.api_key:
            self.openai.api_key = openai_key
        gemini_key = os.getenv("GEMINI_API_KEY")
        if gemini_key and not self.gemini.api_key:
            self.gemini.api_key = gemini_key
        provider = os.getenv("LLM_PROVIDER")
        if provider:
            self.llm_provider = provider

    def with_overrides(self, overrides: Dict[str, Any]) -> "Config":
        """Return a copy whose categorization section has ``overrides`` applied."""
        merged = {**self.categorization.model_dump(), **overrides}
        return self.model_copy(update={"categorization": build_categorization_config(merged)})


def build_categorization_config(values: Dict[str, Any]) -> CategorizationConfig:
    """Validate ``values`` into a CategorizationConfig, raising ConfigError on failure."""
    try:
        return CategorizationConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid categorization config: {e}") from e
