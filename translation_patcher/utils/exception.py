from typing import Any


class TranslationPatcherError(Exception):
    pass


class TranslationLoadError(TranslationPatcherError):
    """
    Raised when a translation JSON source cannot be read
    or does not contain a JSON object
    """

    def __init__(self, source: Any, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load translation from {source}: {reason}")


class TranslationResponseError(TranslationPatcherError):
    """
    Raised when the translation backend returns content that is not
    a JSON object of strings
    """

    pass
