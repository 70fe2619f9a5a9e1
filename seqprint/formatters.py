"""
Recursive, type-aware pretty-printer for nested collections, mappings and records.

Every value is classified into exactly one RenderCategory, then rendered by the matching
formatter. Collections and records recurse into their children through the same dispatch,
so arbitrarily nested structures render deterministically:

    >>> fmt_any([[1, 2], {"a": None}])
    '[ [ 1, 2 ], [ "a": null ] ]'

The fmt_any() function is the main entry point, print_any() writes its result to a text sink.
"""

# Standard library -----------------------------------------------------------------------------------------------------

import collections.abc as abc
import datetime as dt
import inspect
import numbers
import os
import sys
import uuid

from dataclasses import dataclass, replace as dataclasses_replace
from enum import Enum, unique
from typing import Any, Callable, Literal, TextIO

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import is_builtin, record_fields
from .utils import fmt_type

BINARY_TYPES = (bytes, bytearray, memoryview)

# Types rendered with str() even when they expose public properties
SCALAR_TYPES = (
    numbers.Number,
    Enum,
    os.PathLike,
    dt.date,
    dt.time,
    dt.timedelta,
    uuid.UUID,
)

BRACKETS = {
    "square": ("[", "]"),
    "curly": ("{", "}"),
}


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class RenderCategory(str, Enum):
    """
    Rendering rule applied to a value, listed in classification priority order.

    Members are str subclasses, so they compare equal to their plain string values.
    """
    NULL = "null"
    CHAR_SEQUENCE = "char_sequence"
    TEXT = "text"
    BINARY_BLOB = "binary_blob"
    MAP_LIKE = "map_like"
    SEQUENCE_LIKE = "sequence_like"
    RECORD = "record"
    SCALAR = "scalar"


# Categories a top-level formatter may override
FORMATTABLE = frozenset({RenderCategory.NULL, RenderCategory.TEXT, RenderCategory.SCALAR})


@dataclass(frozen=True)
class PrintOptions:
    """
    Rendering configuration for fmt_any() and print_any().

    Attributes:
        brackets: Collection bracket style, "square" renders `[ 1, 2 ]`, "curly" (legacy) renders `{ 1, 2 }`.
                  Records always render in braces.
        null: Literal used for None.
        char_sequences: Render non-empty collections of one-character strings as one quoted string.
        detect_cycles: Render a container already on the recursion path as cycle_marker.
        max_depth: Render containers nested deeper than max_depth as cycle_marker. None is unbounded,
                   0 renders only the top-level value's own elements.
        cycle_marker: Placeholder for cyclic or too deep containers and records.
        scalar_types: Types always rendered with str(), even when they expose properties.
        fields: Field reflection function, returns ordered (name, value) pairs of a record.

    Presets:
        legacy(): curly brackets for collections
        debug(): deep but bounded recursion
        compact(): shallow recursion for one-line log messages
    """
    brackets: Literal["square", "curly"] = "square"
    null: str = "null"
    char_sequences: bool = True
    detect_cycles: bool = True
    max_depth: int | None = None
    cycle_marker: str = "..."
    scalar_types: tuple[type, ...] = SCALAR_TYPES
    fields: Callable[[Any], list[tuple[str, Any]]] = record_fields

    def __post_init__(self):
        if self.brackets not in BRACKETS:
            raise ValueError(f"brackets must be one of {tuple(BRACKETS)}, got {self.brackets!r}")
        if self.max_depth is not None:
            if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
                raise TypeError(f"max_depth must be int or None, got {fmt_type(self.max_depth)}")
            if self.max_depth < 0:
                raise ValueError(f"max_depth must be >= 0 or None, got {self.max_depth}")
        for name in ("null", "cycle_marker"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name} must be str, got {fmt_type(value)}")
        if not isinstance(self.scalar_types, tuple) or not all(isinstance(t, type) for t in self.scalar_types):
            raise TypeError(f"scalar_types must be a tuple of types, got {self.scalar_types!r}")
        if not callable(self.fields):
            raise TypeError(f"fields must be callable, got {fmt_type(self.fields)}")

    @classmethod
    def legacy(cls) -> "PrintOptions":
        return cls(brackets="curly")

    @classmethod
    def debug(cls) -> "PrintOptions":
        return cls(max_depth=8)

    @classmethod
    def compact(cls) -> "PrintOptions":
        return cls(max_depth=2)

    def merge(self, **kwargs) -> "PrintOptions":
        """Return a copy with the given fields replaced."""
        return dataclasses_replace(self, **kwargs)

    @property
    def open_close(self) -> tuple[str, str]:
        return BRACKETS[self.brackets]


_PRESETS: dict[str, Callable[[], PrintOptions]] = {
    "default": PrintOptions,
    "legacy": PrintOptions.legacy,
    "debug": PrintOptions.debug,
    "compact": PrintOptions.compact,
}

_options = PrintOptions()


# Methods --------------------------------------------------------------------------------------------------------------

def configure(preset: str | None = None, **kwargs) -> PrintOptions:
    """
    Set module default options used when no explicit `opts` is passed.

    Starts from the named preset, or from the current defaults if preset is None,
    then replaces the given fields.

    Args:
        preset: One of "default", "legacy", "debug", "compact" or None.
        **kwargs: PrintOptions fields to override.

    Returns:
        The new default PrintOptions.

    Raises:
        ValueError: If preset is unknown.

    Examples:
        >>> _ = configure(preset="legacy")
        >>> fmt_any([1, 2])
        '{ 1, 2 }'
    """
    global _options
    if preset is None:
        base = _options
    else:
        try:
            base = _PRESETS[preset]()
        except KeyError:
            raise ValueError(f"unknown preset {preset!r}, expected one of {tuple(_PRESETS)}") from None
    _options = base.merge(**kwargs)
    return _options


def get_options() -> PrintOptions:
    """Current module default options."""
    return _options


def classify(obj: Any, *, opts: PrintOptions | None = None) -> RenderCategory:
    """
    Determine which rendering rule applies to a value.

    Checks run in strict priority order, first match wins:
        1. NULL           - None
        2. CHAR_SEQUENCE  - non-empty sized collection of one-character strings
        3. TEXT           - str
        4. BINARY_BLOB    - bytes, bytearray, memoryview
        5. MAP_LIKE       - collections.abc.Mapping
        6. SEQUENCE_LIKE  - any other iterable
        7. RECORD         - object exposing at least one public readable field
        8. SCALAR         - everything else

    Iterables that are not sized collections (iterators, generators, lazy views) are never
    consumed here, so they classify as SEQUENCE_LIKE. fmt_any() materializes them into a
    list before classifying, so a generator of characters still renders as one string.

    Examples:
        >>> classify(["a", "b"])
        <RenderCategory.CHAR_SEQUENCE: 'char_sequence'>
        >>> classify(b"abc")
        <RenderCategory.BINARY_BLOB: 'binary_blob'>
        >>> classify(3.14)
        <RenderCategory.SCALAR: 'scalar'>
    """
    category, _ = _classify(obj, _resolve_options(opts))
    return category


def fmt_any(obj: Any, formatter: Callable[[Any], str] | None = None, *, opts: PrintOptions | None = None) -> str:
    """
    Render any value to a deterministic single-line string.

    Args:
        obj: Any Python object. Iterators and other unsized iterables are consumed.
        formatter: Optional element formatter. Overrides rendering of None, str and scalar
                   elements of the outermost collection or mapping only (and of obj itself
                   when obj is such a value). Nested collections always render with defaults.
        opts: Rendering options, module defaults from get_options() if None.

    Returns:
        Rendered text without line terminator.

    Raises:
        TypeError: If formatter is not callable or opts is not PrintOptions.

    Examples:
        >>> fmt_any([1, "two", None])
        '[ 1, "two", null ]'
        >>> fmt_any(["Wayne", ["Alfred"]], formatter=str.upper)
        '[ WAYNE, [ "Alfred" ] ]'
        >>> fmt_any(bytes(5))
        'byte[5]'
    """
    opts = _resolve_options(opts)
    _validate_formatter(formatter)
    return _fmt(obj, opts=opts, formatter=formatter, depth=0, path=set())


def fmt_scalar(obj: Any, *, opts: PrintOptions | None = None) -> str:
    """
    Render a value as an atomic token.

    None renders as the null literal, str in double quotes (embedded quotes and control
    characters are not escaped), binary blobs as their length `byte[N]`, collections of
    one-character strings as one quoted string. Anything else renders with str().

    Examples:
        >>> fmt_scalar("hello")
        '"hello"'
        >>> fmt_scalar(bytearray(3))
        'byte[3]'
        >>> fmt_scalar(("a", "b"))
        '"ab"'
    """
    opts = _resolve_options(opts)
    category, _ = _classify(obj, opts)
    return _fmt_scalar(obj, category, opts)


def fmt_sequence(
    seq: Any,
    formatter: Callable[[Any], str] | None = None,
    *,
    opts: PrintOptions | None = None,
) -> str:
    """
    Render an iterable elementwise in brackets.

    Unlike fmt_any(), a collection of one-character strings renders as a bracketed
    sequence here. Text, binary blobs and non-iterables delegate to fmt_any().

    Examples:
        >>> fmt_sequence(["a", "b"])
        '[ "a", "b" ]'
        >>> fmt_sequence(iter(()))
        '[ ]'
        >>> fmt_sequence("text")
        '"text"'
    """
    opts = _resolve_options(opts)
    _validate_formatter(formatter)
    if not isinstance(seq, abc.Iterable) or isinstance(seq, (str, *BINARY_TYPES)):
        return _fmt(seq, opts=opts, formatter=formatter, depth=0, path=set())
    return _fmt_container(seq, RenderCategory.SEQUENCE_LIKE, None, opts=opts, formatter=formatter, depth=0,
                          path=set())


def fmt_mapping(
    mp: Any,
    formatter: Callable[[Any], str] | None = None,
    *,
    opts: PrintOptions | None = None,
) -> str:
    """
    Render a mapping as `"key": value` entries in iteration order.

    Keys are stringified and quoted regardless of their type. Values render recursively.
    Non-mapping inputs delegate to fmt_any().

    Examples:
        >>> fmt_mapping({"Wayne": 1, "Lucius": 2})
        '[ "Wayne": 1, "Lucius": 2 ]'
        >>> fmt_mapping({1: {"x": [True]}})
        '[ "1": [ "x": [ True ] ] ]'
    """
    opts = _resolve_options(opts)
    _validate_formatter(formatter)
    if not isinstance(mp, abc.Mapping):
        return _fmt(mp, opts=opts, formatter=formatter, depth=0, path=set())
    return _fmt_container(mp, RenderCategory.MAP_LIKE, None, opts=opts, formatter=formatter, depth=0, path=set())


def fmt_record(obj: Any, *, opts: PrintOptions | None = None) -> str:
    """
    Render an object's public fields as `{ name: value, ... }`.

    Objects without readable fields fall back to str(). Values that classify as anything
    but RECORD (scalar types, collections, text) delegate to fmt_any(). Exceptions raised
    by property getters propagate.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Item:
        ...     title: str
        ...     tags: list
        >>> fmt_record(Item("Alpha", ["a1", "b2"]))
        '{ title: "Alpha", tags: [ "a1", "b2" ] }'
        >>> fmt_record([1, 2])
        '[ 1, 2 ]'
    """
    opts = _resolve_options(opts)
    category, pairs = _classify(obj, opts)
    if category is not RenderCategory.RECORD:
        return _fmt(obj, opts=opts, formatter=None, depth=0, path=set())
    return _fmt_container(obj, category, pairs, opts=opts, formatter=None, depth=0, path=set())


def print_any(
    obj: Any,
    formatter: Callable[[Any], str] | None = None,
    file: TextIO | None = None,
    *,
    opts: PrintOptions | None = None,
) -> None:
    """
    Render a value and write it as one line to a text sink.

    The whole line is rendered before anything is written. The sink is never
    flushed or closed.

    Args:
        obj: Any Python object.
        formatter: Optional top-level element formatter, see fmt_any().
        file: Object with a write(str) method, sys.stdout at call time if None.
        opts: Rendering options, module defaults if None.

    Examples:
        >>> print_any(["Wayne", "Lucius", "Alfred"], lambda n: f"[{n}]")
        [ [Wayne], [Lucius], [Alfred] ]
    """
    text = fmt_any(obj, formatter, opts=opts)
    sink = sys.stdout if file is None else file
    sink.write(text + "\n")


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify(obj: Any, opts: PrintOptions) -> tuple[RenderCategory, list[tuple[str, Any]] | None]:
    """Classify a value, returning the record fields too when they were read."""
    if obj is None:
        return RenderCategory.NULL, None
    if opts.char_sequences and _is_char_sequence(obj):
        return RenderCategory.CHAR_SEQUENCE, None
    if isinstance(obj, str):
        return RenderCategory.TEXT, None
    if isinstance(obj, BINARY_TYPES):
        return RenderCategory.BINARY_BLOB, None
    if isinstance(obj, abc.Mapping):
        return RenderCategory.MAP_LIKE, None
    if isinstance(obj, abc.Iterable):
        return RenderCategory.SEQUENCE_LIKE, None
    if _is_opaque(obj, opts):
        return RenderCategory.SCALAR, None
    pairs = _fields(obj, opts)
    if pairs:
        return RenderCategory.RECORD, pairs
    return RenderCategory.SCALAR, None


def _fields(obj: Any, opts: PrintOptions) -> list[tuple[str, Any]]:
    pairs = opts.fields(obj)
    if not isinstance(pairs, (list, tuple)):
        raise TypeError(f"fields function must return a list of (name, value) pairs, got {fmt_type(pairs)}")
    return list(pairs)


def _fmt(obj: Any, *, opts: PrintOptions, formatter: Callable[[Any], str] | None, depth: int,
         path: set[int]) -> str:
    """Classify and dispatch, the recursion step shared by all containers."""
    source = obj
    # Sized collections are classified in place, other iterables are read once up front
    if isinstance(obj, abc.Iterable) and not isinstance(obj, (abc.Collection, *BINARY_TYPES)):
        if opts.detect_cycles and id(source) in path:
            return opts.cycle_marker
        obj = list(obj)

    category, pairs = _classify(obj, opts)

    if formatter is not None and category in FORMATTABLE:
        return str(formatter(obj))

    if category in (RenderCategory.MAP_LIKE, RenderCategory.SEQUENCE_LIKE, RenderCategory.RECORD):
        # The cycle key is the caller's object, not the list it was read into
        return _fmt_container(obj, category, pairs, opts=opts, formatter=formatter, depth=depth, path=path,
                              key=id(source))

    return _fmt_scalar(obj, category, opts)


def _fmt_container(obj: Any, category: RenderCategory, pairs: list[tuple[str, Any]] | None, *,
                   opts: PrintOptions, formatter: Callable[[Any], str] | None, depth: int, path: set[int],
                   key: int | None = None) -> str:
    """Render a mapping, sequence or record, guarding against cycles and excessive depth."""
    if opts.max_depth is not None and depth > opts.max_depth:
        return opts.cycle_marker

    if key is None:
        key = id(obj)
    if opts.detect_cycles:
        if key in path:
            return opts.cycle_marker
        path.add(key)

    # The formatter applies to elements of the outermost container only
    child_formatter = formatter if depth == 0 and category is not RenderCategory.RECORD else None

    def child(value: Any) -> str:
        return _fmt(value, opts=opts, formatter=child_formatter, depth=depth + 1, path=path)

    try:
        if category is RenderCategory.RECORD:
            parts = [f"{name}: {child(value)}" for name, value in pairs]
            open_ch, close_ch = "{", "}"
        elif category is RenderCategory.MAP_LIKE:
            parts = [f'"{_fmt_key(k, opts)}": {child(v)}' for k, v in list(obj.items())]
            open_ch, close_ch = opts.open_close
        else:
            parts = [child(x) for x in list(obj)]
            open_ch, close_ch = opts.open_close
    finally:
        path.discard(key)

    if not parts:
        return f"{open_ch} {close_ch}"
    return f"{open_ch} " + ", ".join(parts) + f" {close_ch}"


def _fmt_key(key: Any, opts: PrintOptions) -> str:
    return opts.null if key is None else str(key)


def _fmt_scalar(obj: Any, category: RenderCategory, opts: PrintOptions) -> str:
    if category is RenderCategory.NULL:
        return opts.null
    if category is RenderCategory.TEXT:
        return f'"{obj}"'
    if category is RenderCategory.CHAR_SEQUENCE:
        return '"' + "".join(obj) + '"'
    if category is RenderCategory.BINARY_BLOB:
        # Element count, a 0-d memoryview holds a single element
        count = 1 if isinstance(obj, memoryview) and obj.ndim == 0 else len(obj)
        return f"byte[{count}]"
    return str(obj)


def _is_char_sequence(obj: Any) -> bool:
    """Non-empty sized collection whose every element is a one-character str."""
    if not isinstance(obj, abc.Collection) or isinstance(obj, (str, *BINARY_TYPES, abc.Mapping)):
        return False
    if len(obj) == 0:
        return False
    return all(isinstance(c, str) and len(c) == 1 for c in obj)


def _is_opaque(obj: Any, opts: PrintOptions) -> bool:
    """Values never reflected into fields: scalars, builtins, classes, functions and modules."""
    if isinstance(obj, opts.scalar_types) or is_builtin(obj):
        return True
    return (inspect.isclass(obj) or
            inspect.isroutine(obj) or
            inspect.ismodule(obj))


def _resolve_options(opts: PrintOptions | None) -> PrintOptions:
    if opts is None:
        return _options
    if not isinstance(opts, PrintOptions):
        raise TypeError(f"opts must be PrintOptions or None, got {fmt_type(opts)}")
    return opts


def _validate_formatter(formatter: Any):
    if formatter is not None and not callable(formatter):
        raise TypeError(f"formatter must be callable or None, got {fmt_type(formatter)}")
