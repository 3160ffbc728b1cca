from dataclasses import dataclass, field
from typing import Optional

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.0-flash-001"
API_KEY_ENV_VAR = "OPENROUTER_API_KEY"


@dataclass
class RetryConfig:
    """Configuration for retrying backend calls with exponential backoff.

    Attributes:
        max_retries: Total number of attempts before giving up (default: 3)
        initial_delay: Delay in seconds after the first failure (default: 1.0)
        max_delay: Upper bound for any single delay (default: 30.0)
        exponential_base: Growth factor between delays (default: 2.0)
    """

    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0

    def get_delay(self, attempt: int) -> float:
        """Calculate the delay after a failed attempt.

        Formula: initial_delay * (exponential_base ** attempt), capped at max_delay.
        With the defaults this is 1s, 2s, 4s, ...

        Args:
            attempt: The attempt that just failed (0-indexed)

        Returns:
            Delay in seconds to wait before the next attempt
        """
        delay = self.initial_delay * (self.exponential_base**attempt)
        return min(delay, self.max_delay)


@dataclass
class BackendConfig:
    """Connection settings for the OpenAI-compatible chat completion endpoint.

    Attributes:
        api_key: Credential for the endpoint, usually taken from OPENROUTER_API_KEY
        base_url: Endpoint base URL (default: OpenRouter)
        model: Model identifier sent with every request
        temperature: Sampling temperature (default: 0.2)
        request_timeout: Per-request timeout in seconds handed to the client
    """

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = 0.2
    request_timeout: float = 60.0


@dataclass
class TranslationConfig:
    """Settings for a patch run.

    Attributes:
        retry_config: Retry behaviour for each backend batch
        backend_config: Endpoint, model and credential
        batch_size: Number of entries sent in one backend request (default: 50)
        max_concurrent_files: Language files processed per window (default: 10)
        max_concurrent_batches: Backend requests in flight per file (default: 5)
    """

    retry_config: RetryConfig = field(default_factory=RetryConfig)
    backend_config: BackendConfig = field(default_factory=BackendConfig)
    batch_size: int = 50
    max_concurrent_files: int = 10
    max_concurrent_batches: int = 5


# Process-wide default, replaced by the CLI once options are parsed
_translation_config = TranslationConfig()


def get_translation_config() -> TranslationConfig:
    """Get the global translation configuration."""
    return _translation_config


def set_translation_config(config: TranslationConfig) -> None:
    """Set the global translation configuration."""
    global _translation_config
    _translation_config = config
