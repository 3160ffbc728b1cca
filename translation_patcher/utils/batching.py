from typing import List, Sequence, TypeVar

T = TypeVar("T")


def batch(items: Sequence[T], batch_size: int) -> List[List[T]]:
    """Split items into contiguous chunks of batch_size.

    The last chunk may be smaller. Order is preserved, so concatenating the
    chunks gives back the original sequence.

    Args:
        items: The ordered items to split
        batch_size: Maximum number of items per chunk

    Returns:
        List of chunks, empty if items is empty

    Raises:
        ValueError: If batch_size is smaller than 1
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be positive, got {batch_size}")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]
