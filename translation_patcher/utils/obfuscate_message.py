"""
This module is to be used with loguru to remove potentially sensitive information
such as the user's name or API credentials from log output.
"""

import re

# OpenAI/OpenRouter style secret keys, e.g. sk-or-v1-0123abcd...
_API_KEY_PATTERN = re.compile(r"\b(sk-(?:or-v\d+-)?)[A-Za-z0-9_\-]{8,}")
_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+", re.IGNORECASE)


def obfuscate_message(
    message: str, anonymize_path: bool = True, redact_keys: bool = True
) -> str:
    """
    Obfuscate the message such that it does not reveal user information.

    The message may contain a path, in which case the path will be anonymized,
    or an API key, in which case everything after the key prefix is redacted.

    Args:
        message: The message to obfuscate.
        anonymize_path: Whether to anonymize the path in the message.
        redact_keys: Whether to redact API keys in the message.

    Returns:
        The obfuscated message.
    """
    if anonymize_path:
        message = _anonymize_path(message)
    if redact_keys:
        message = _redact_api_keys(message)

    return message


def _anonymize_path(message: str) -> str:
    """
    Anonymize the path in the message such that
    it does not reveal user information such as usernames.

    OS agnostic.
    """
    # Windows - Only remove the username, keep the drive letter
    message = re.sub(r"([A-Z]:\\Users\\)[^\\]+\\", r"\1...\\", message)
    # Linux - Only remove the username
    message = re.sub(r"/home/[^/]+/", r"/home/.../", message)
    # macOS
    message = re.sub(r"/Users/[^/]+/", r"/Users/.../", message)

    return message


def _redact_api_keys(message: str) -> str:
    message = _API_KEY_PATTERN.sub(r"\1***", message)
    message = _BEARER_PATTERN.sub(r"\1***", message)
    return message
