import sys
from typing import TYPE_CHECKING, Optional, TextIO

from loguru import logger

from translation_patcher.utils.obfuscate_message import obfuscate_message

if TYPE_CHECKING:
    import loguru


def formatter(record: "loguru.Record") -> str:
    """Custom formatter for loguru logger"""
    format_string = "[{time:YYYY-MM-DD HH:mm:ss}] {level}: "

    record["extra"]["obfuscated_message"] = obfuscate_message(record["message"])
    return format_string + "{extra[obfuscated_message]}\n{exception}"


def setup_logging(debug: bool = False, sink: Optional[TextIO] = None) -> None:
    """Replace loguru's default handler with the patcher's console sink.

    Args:
        debug: Also emit DEBUG records (prompts sent to the backend)
        sink: Stream to write to, stderr by default
    """
    # Remove the default stderr logger
    logger.remove()

    logger.add(
        sink if sink is not None else sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=formatter,
        colorize=False,
    )
