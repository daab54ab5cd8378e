"""Exception types raised by the categorization pipeline."""


class CategorizationError(Exception):
    """Base class for all categorization failures."""


class ConfigError(CategorizationError):
    """Configuration values are invalid."""


class BackendError(CategorizationError):
    """The model backend failed or returned unparseable output after all retries."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class SchemaMismatch(CategorizationError):
    """The backend reply parsed as JSON but lacks the expected fields."""


class RecursionLimitError(CategorizationError):
    """Subdivision went deeper than the configured maximum depth."""


class NoProgressError(CategorizationError):
    """A subdivision step failed to shrink the item set."""


class RateLimitExceeded(CategorizationError):
    """The per-run request budget has been used up."""
