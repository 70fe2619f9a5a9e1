#
# SeqPrint Sequence Tools
#

# Standard library -----------------------------------------------------------------------------------------------------

import collections.abc as abc
from typing import Any, Callable, Iterable, Iterator, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type

# Classes --------------------------------------------------------------------------------------------------------------

T = TypeVar('T')


class LazyIterable(abc.Iterable):
    """
    Restartable lazy iterable.

    Every iter() call runs the factory again, so each pass starts from the beginning
    and no state is shared between passes.
    """

    def __init__(self, factory: Callable[[], Iterator[T]]):
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return self._factory()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._factory.__name__})"


# Methods --------------------------------------------------------------------------------------------------------------

def chunk(source: Iterable[T], size: int) -> LazyIterable:
    """
    Split an iterable into lists of fixed size.

    The last chunk holds the remainder and may be shorter. An empty source yields no chunks.
    Arguments are validated immediately, the source is read lazily on each pass.

    Args:
        source: The iterable to split.
        size: Chunk length, a positive int.

    Returns:
        Restartable iterable of lists.

    Raises:
        TypeError: If source is not iterable or size is not an int.
        ValueError: If size <= 0.

    Examples:
        >>> list(chunk(range(1, 8), 3))
        [[1, 2, 3], [4, 5, 6], [7]]
        >>> list(chunk([], 2))
        []
    """
    _validate_source(source)
    _validate_int("size", size)
    if size <= 0:
        raise ValueError(f"size must be a positive int, got {size}")

    def chunks() -> Iterator[list[T]]:
        batch = []
        for item in source:
            batch.append(item)
            if len(batch) == size:
                yield batch
                batch = []
        if batch:
            yield batch

    return LazyIterable(chunks)


def is_alphabetical(
    source: Iterable[T],
    key: Callable[[T], str],
    comparer: Callable[[str, str], int] | None = None,
) -> bool:
    """
    Check whether items are sorted in ascending order of their keys.

    Adjacent keys are compared with comparer(previous, current), a negative, zero or
    positive int like C-style compare functions. Equal keys count as sorted.
    Stops reading the source at the first pair out of order.

    Args:
        source: The iterable to check.
        key: Selects the string to compare from each item.
        comparer: Compare function, ordinal_compare if None.

    Returns:
        True if source has 0 or 1 items or all adjacent pairs are ordered.

    Raises:
        TypeError: If source is not iterable, key or comparer is not callable.

    Examples:
        >>> is_alphabetical(["Alice", "Bob", "Charlie"], key=str)
        True
        >>> is_alphabetical(["Charlie", "Alice", "Bob"], key=str)
        False
        >>> is_alphabetical(["alpha", "Beta"], key=str, comparer=ordinal_ignore_case_compare)
        True
    """
    _validate_source(source)
    if not callable(key):
        raise TypeError(f"key must be callable, got {fmt_type(key)}")
    if comparer is None:
        comparer = ordinal_compare
    elif not callable(comparer):
        raise TypeError(f"comparer must be callable or None, got {fmt_type(comparer)}")

    it = iter(source)
    try:
        previous = key(next(it))
    except StopIteration:
        return True

    for item in it:
        current = key(item)
        if comparer(previous, current) > 0:
            return False
        previous = current
    return True


def ordinal_compare(a: str, b: str) -> int:
    """Compare strings by Unicode code points, returns -1, 0 or 1."""
    return (a > b) - (a < b)


def ordinal_ignore_case_compare(a: str, b: str) -> int:
    """Compare upper-cased strings by Unicode code points, returns -1, 0 or 1."""
    return ordinal_compare(a.upper(), b.upper())


def slice_seq(source: Iterable[T], start: int | None = None, end: int | None = None, step: int = 1) -> LazyIterable:
    """
    Slice any iterable with Python slice semantics.

    Negative start/end count from the end of the source. Both bounds are clamped to
    [0, len(source)] after that, so out-of-range bounds never raise. When start >= end
    the result is empty. Sources that are not Sequences are materialized on each pass.

    Args:
        source: The iterable to slice.
        start: First index, 0 if None.
        end: Stop index (exclusive), len(source) if None.
        step: Positive stride.

    Returns:
        Restartable iterable of the selected items.

    Raises:
        TypeError: If source is not iterable or start/end/step are not int.
        ValueError: If step <= 0.

    Examples:
        >>> list(slice_seq(range(1, 11), -3))
        [8, 9, 10]
        >>> list(slice_seq(range(1, 11), 0, None, 2))
        [1, 3, 5, 7, 9]
        >>> list(slice_seq(iter("abcdef"), None, -4))
        ['a', 'b']
    """
    _validate_source(source)
    for name, value in (("start", start), ("end", end)):
        if value is not None:
            _validate_int(name, value)
    _validate_int("step", step)
    if step <= 0:
        raise ValueError(f"step must be a positive int, got {step}")

    def items() -> Iterator[T]:
        seq = source if isinstance(source, abc.Sequence) else list(source)
        length = len(seq)
        lo = _slice_bound(start, length, default=0)
        hi = _slice_bound(end, length, default=length)
        for i in range(lo, hi, step):
            yield seq[i]

    return LazyIterable(items)


# Private Methods ------------------------------------------------------------------------------------------------------

def _slice_bound(value: int | None, length: int, default: int) -> int:
    if value is None:
        return default
    if value < 0:
        value += length
    return max(0, min(value, length))


def _validate_int(name: str, value: Any):
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {fmt_type(value)}")


def _validate_source(source: Any):
    if source is None:
        raise TypeError("source must be iterable, got None")
    if not isinstance(source, abc.Iterable):
        raise TypeError(f"source must be iterable, got {fmt_type(source)}")
