"""Input validation for values coming from the command line."""

import re
from pathlib import Path
from typing import Optional

from translation_patcher.models.config import DEFAULT_MODEL


def validate_file_path(file_path: Path) -> Path:
    """Validate that a file path exists and is a regular file.

    Args:
        file_path: Base or patched reference file

    Returns:
        The validated path

    Raises:
        FileNotFoundError: If file does not exist
        IsADirectoryError: If path points to a directory
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.is_dir():
        raise IsADirectoryError(f"Path is a directory, not a file: {file_path}")

    if not file_path.is_file():
        raise ValueError(f"Path is not a regular file: {file_path}")

    return file_path


def validate_directory_path(dir_path: Path) -> Path:
    """Validate that a directory path exists and is writable.

    Language files in the directory are overwritten in place, so the
    directory must accept writes.

    Args:
        dir_path: Folder holding the language files

    Returns:
        The validated path

    Raises:
        FileNotFoundError: If directory does not exist
        NotADirectoryError: If path is not a directory
        PermissionError: If directory is not writable
    """
    if not dir_path.exists():
        raise FileNotFoundError(f"Directory not found: {dir_path}")

    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")

    if not dir_path.stat().st_mode & 0o200:
        raise PermissionError(f"Directory is not writable: {dir_path}")

    return dir_path


def validate_api_key(api_key: Optional[str], service: str) -> str:
    """Validate API key for the translation backend.

    Ensures API key is provided and meets minimum format requirements.

    Args:
        api_key: The API key to validate
        service: Name of the backend (for error messages)

    Returns:
        The API key with surrounding whitespace removed

    Raises:
        ValueError: If API key is missing or too short
        TypeError: If API key is not a string
    """
    if not api_key:
        raise ValueError(f"{service} requires a valid API key")

    if not isinstance(api_key, str):
        raise TypeError(f"API key must be a string, got {type(api_key)}")

    api_key = api_key.strip()

    if len(api_key) < 5:
        raise ValueError(f"{service} API key appears invalid (too short)")

    return api_key


def validate_model_name(model: Optional[str]) -> str:
    """Validate a model identifier such as 'google/gemini-2.0-flash-001'.

    Provider prefixes ('/') and variant tags (':free') are accepted.

    Args:
        model: Model name to validate

    Returns:
        The validated model name, or the default model if None

    Raises:
        ValueError: If model name is empty or malformed
        TypeError: If model name is not a string
    """
    if model is None:
        return DEFAULT_MODEL

    if not isinstance(model, str):
        raise TypeError(f"Model name must be a string, got {type(model)}")

    model = model.strip()

    if not model:
        raise ValueError("Model name cannot be empty")

    if not re.match(r"^[a-zA-Z0-9\-_.:/]+$", model):
        raise ValueError(f"Invalid model name format: {model}")

    return model


def validate_timeout(timeout: float) -> float:
    """Validate the backend request timeout in seconds.

    Ensures timeout is a positive number within reasonable bounds.

    Args:
        timeout: Timeout in seconds

    Returns:
        The validated timeout value

    Raises:
        ValueError: If timeout is not positive or above 600 seconds
        TypeError: If timeout is not a number
    """
    if not isinstance(timeout, (int, float)):
        raise TypeError(f"Timeout must be a number, got {type(timeout)}")

    if timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout}")

    if timeout > 600:
        raise ValueError(f"Timeout is very large ({timeout}s), max recommended is 600s")

    return float(timeout)


def validate_retry_count(max_retries: int) -> int:
    """Validate the number of attempts per backend batch.

    The count includes the first attempt, so it must be at least 1.

    Args:
        max_retries: Attempts per batch

    Returns:
        The validated retry count

    Raises:
        ValueError: If retry count is below 1 or above 10
        TypeError: If retry count is not an integer
    """
    if not isinstance(max_retries, int):
        raise TypeError(f"Retry count must be an integer, got {type(max_retries)}")

    if max_retries < 1:
        raise ValueError(f"Retry count must be at least 1, got {max_retries}")

    if max_retries > 10:
        raise ValueError(
            f"Retry count is very high ({max_retries}), max recommended is 10"
        )

    return max_retries


def validate_concurrent_requests(max_concurrent: int) -> int:
    """Validate a concurrency limit for files or batches.

    Ensures concurrency is a positive integer within reasonable bounds.

    Args:
        max_concurrent: Maximum number of files or requests in flight

    Returns:
        The validated concurrency value

    Raises:
        ValueError: If value is not positive or above 100
        TypeError: If value is not an integer
    """
    if not isinstance(max_concurrent, int):
        raise TypeError(
            f"Concurrent requests must be an integer, got {type(max_concurrent)}"
        )

    if max_concurrent <= 0:
        raise ValueError(f"Concurrent requests must be positive, got {max_concurrent}")

    if max_concurrent > 100:
        raise ValueError(
            f"Concurrent requests is very high ({max_concurrent}), max recommended is 100"
        )

    return max_concurrent


def validate_batch_size(batch_size: int) -> int:
    """Validate the number of entries sent to the backend in one request.

    Args:
        batch_size: Entries per request

    Returns:
        The validated batch size

    Raises:
        ValueError: If batch size is not positive or above 500
        TypeError: If batch size is not an integer
    """
    if not isinstance(batch_size, int):
        raise TypeError(f"Batch size must be an integer, got {type(batch_size)}")

    if batch_size <= 0:
        raise ValueError(f"Batch size must be positive, got {batch_size}")

    if batch_size > 500:
        raise ValueError(
            f"Batch size is very high ({batch_size}), max recommended is 500"
        )

    return batch_size
