import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

from loguru import logger

from translation_patcher.models.config import RetryConfig, get_translation_config

T = TypeVar("T")


@dataclass
class RetryResult(Generic[T]):
    """Outcome of retry_with_backoff.

    Attributes:
        result: Value returned by the successful attempt, None if every attempt failed
        errors: Exceptions raised by the failed attempts, in order
    """

    result: Optional[T] = None
    errors: List[Exception] = field(default_factory=list)
    succeeded: bool = False


async def retry_with_backoff(
    async_func: Callable[..., Awaitable[T]],
    *args: Any,
    config: Optional[RetryConfig] = None,
    **kwargs: Any,
) -> RetryResult[T]:
    """
    Retry an async function with exponential backoff.

    Every exception is treated the same way. After the last attempt the
    collected errors are returned rather than raised.

    Args:
        async_func: The async function to call
        *args: Positional arguments for the function
        config: RetryConfig instance (uses global config if None)
        **kwargs: Keyword arguments for the function

    Returns:
        RetryResult holding the value (or None) and the errors of failed attempts
    """
    if config is None:
        config = get_translation_config().retry_config

    name = getattr(async_func, "__name__", repr(async_func))
    errors: List[Exception] = []

    for attempt in range(config.max_retries):
        try:
            value = await async_func(*args, **kwargs)
            return RetryResult(result=value, errors=errors, succeeded=True)
        except Exception as e:
            errors.append(e)
            if attempt < config.max_retries - 1:
                delay = config.get_delay(attempt)
                logger.warning(
                    f"Attempt {attempt + 1} of {name} failed, retrying in {delay:.1f}s: {str(e)[:200]}"
                )
                await asyncio.sleep(delay)
            else:
                logger.error(f"All {config.max_retries} attempts of {name} failed: {e}")

    return RetryResult(result=None, errors=errors, succeeded=False)
