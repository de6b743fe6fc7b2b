"""Split message sequences into server-sized chunks."""

from itertools import islice
from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def chunked(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Lazily yield consecutive lists of at most ``size`` items, in input order.

    The last chunk may be shorter; empty input yields no chunks.

    Raises:
        ValueError: if ``size`` is not positive.
    """
    if size <= 0:
        raise ValueError(f"chunk size must be > 0, got {size}")
    return _iter_chunks(iter(items), size)


def _iter_chunks(it: Iterator[T], size: int) -> Iterator[list[T]]:
    while chunk := list(islice(it, size)):
        yield chunk
