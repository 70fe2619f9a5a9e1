"""
SeqPrint attribute inspection.

Field reflection for arbitrary user objects: which public data members an object exposes,
in the order they were declared.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import re

from dataclasses import fields as dataclass_fields, is_dataclass
from typing import Any, Literal, overload

# Built-in types that never expose fields
IGNORED_TYPES = (
    int, float, bool, str, list, tuple, dict, set, frozenset,
    bytes, bytearray, complex, memoryview, range, type(None)
)

_DESCRIPTOR_TYPES = (property, staticmethod, classmethod)


# Methods --------------------------------------------------------------------------------------------------------------

def is_builtin(obj: Any) -> bool:
    """
    Check whether obj is a plain builtin value or a builtin class.

    Such values are rendered with str() and never reflected into record fields,
    so ``object()``, ``slice(1, 2)`` or ``int`` do not turn into records.
    Callables, modules and descriptors are not values and always return False.

    Examples:
        >>> is_builtin(slice(1, 2)), is_builtin(int)
        (True, True)
        >>> is_builtin(len), is_builtin(property())
        (False, False)
    """
    if inspect.isroutine(obj) or inspect.ismodule(obj) or isinstance(obj, _DESCRIPTOR_TYPES):
        return False
    owner = obj if isinstance(obj, type) else type(obj)
    return getattr(owner, "__module__", None) == "builtins"


@overload
def search_attrs(
        obj: Any,
        *,
        format: Literal["list"] = "list",
        include_private: bool = False,
        include_properties: bool = False,
        include_methods: bool = False,
        exclude_none: bool = False,
        pattern: str | None = None,
        sort: bool = False,
        skip_errors: bool = False,
) -> list[str]: ...


@overload
def search_attrs(
        obj: Any,
        *,
        format: Literal["dict"],
        include_private: bool = False,
        include_properties: bool = False,
        include_methods: bool = False,
        exclude_none: bool = False,
        pattern: str | None = None,
        sort: bool = False,
        skip_errors: bool = False,
) -> dict[str, Any]: ...


@overload
def search_attrs(
        obj: Any,
        *,
        format: Literal["items"],
        include_private: bool = False,
        include_properties: bool = False,
        include_methods: bool = False,
        exclude_none: bool = False,
        pattern: str | None = None,
        sort: bool = False,
        skip_errors: bool = False,
) -> list[tuple[str, Any]]: ...


def search_attrs(
        obj: Any,
        *,
        format: Literal["list", "dict", "items"] = "list",
        include_private: bool = False,
        include_properties: bool = False,
        include_methods: bool = False,
        exclude_none: bool = False,
        pattern: str | None = None,
        sort: bool = False,
        skip_errors: bool = False,
) -> list[str] | dict[str, Any] | list[tuple[str, Any]]:
    """
    Search for attributes in an object in declaration order.

    By default, returns only public, non-callable data attribute names. Use parameters
    to expand or narrow the search, and choose output format.

    Names are collected in this order, each name reported once:
        1. dataclass fields, in field definition order
        2. instance attributes, in assignment order (``obj.__dict__``)
        3. ``__slots__`` members, base classes first
        4. class-level attributes and properties, base classes first, in definition order

    Args:
        obj: The object to inspect for attributes
        format: Output format:
            - "list": list of unique attribute names (default)
            - "dict": dictionary mapping names to values
            - "items": list of (name, value) tuples, compatible with dict() constructor
        include_private: If True, includes private attributes (starting with '_').
        include_properties: If True, includes property descriptors
        include_methods: If True, includes callable attributes (methods, functions)
        exclude_none: If True, excludes attributes with None values
        pattern: Optional regex pattern to filter attribute names.
                Must match the entire name (use '.*pattern.*' for substring matching)
        sort: If True, sorts attribute names alphabetically instead of declaration order.
        skip_errors: If True, silently skips attributes that raise errors on access.
                    If False, the original exception propagates. Unset ``__slots__``
                    members are always skipped.

    Returns:
        - If format="list": list[str] of attribute names
        - If format="dict": dict[str, Any] mapping names to values
        - If format="items": list[tuple[str, Any]] of (name, value) pairs

    Raises:
        ValueError: If pattern is an invalid regex or format is invalid

    Examples:
        >>> class MyClass:
        ...     public = 1
        ...     _private = 2
        ...     none_val = None
        ...     @property
        ...     def prop(self):
        ...         return 3
        ...     def method(self):
        ...         pass
        >>> obj = MyClass()
        >>> search_attrs(obj)
        ['public', 'none_val']
        >>> search_attrs(obj, format="items", include_properties=True)
        [('public', 1), ('none_val', None), ('prop', 3)]
        >>> search_attrs(obj, exclude_none=True)
        ['public']
    """
    if format not in ("list", "dict", "items"):
        raise ValueError(f"format must be 'list', 'dict', or 'items' literal, got {format!r}")

    compiled_pattern = None
    if pattern is not None:
        try:
            compiled_pattern = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {pattern!r}") from e

    if isinstance(obj, IGNORED_TYPES) or (inspect.isclass(obj) and obj in IGNORED_TYPES):
        return _search_attrs_empty_result(format)

    result_names = []
    result_values = []

    for attr_name in _search_attrs_declared(obj):
        # Always skip dunder
        if attr_name.startswith('__') and attr_name.endswith('__'):
            continue

        if not include_private and attr_name.startswith('_'):
            continue

        if compiled_pattern and not compiled_pattern.fullmatch(attr_name):
            continue

        is_property = _search_attrs_is_property(obj, attr_name)
        if is_property and not include_properties:
            continue

        try:
            attr_value = getattr(obj, attr_name)
        except AttributeError:
            if skip_errors or _search_attrs_is_slot(obj, attr_name):
                continue
            raise
        except Exception:
            if skip_errors:
                continue
            raise

        if not include_methods and not is_property and callable(attr_value):
            continue

        if exclude_none and attr_value is None:
            continue

        result_names.append(attr_name)
        result_values.append(attr_value)

    pairs = list(zip(result_names, result_values))
    if sort:
        pairs.sort(key=lambda pair: pair[0])

    if format == "list":
        return [name for name, _ in pairs]
    elif format == "dict":
        return dict(pairs)
    else:  # items
        return pairs


def record_fields(obj: Any) -> list[tuple[str, Any]]:
    """
    Public readable fields of a record as ordered (name, value) pairs.

    Includes data attributes and properties, excludes methods and private names.
    Exceptions raised by property getters propagate to the caller.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Point:
        ...     x: int
        ...     y: int
        >>> record_fields(Point(1, 2))
        [('x', 1), ('y', 2)]
    """
    return search_attrs(obj, format="items", include_properties=True)


# Private Methods ------------------------------------------------------------------------------------------------------

def _search_attrs_declared(obj: Any) -> list[str]:
    """Collect candidate attribute names in declaration order, without duplicates."""
    names: dict[str, None] = {}
    is_class = inspect.isclass(obj)
    cls = obj if is_class else type(obj)
    mro = [klass for klass in reversed(cls.__mro__) if klass.__module__ != "builtins"]

    if not is_class:
        if is_dataclass(obj):
            for f in dataclass_fields(obj):
                names.setdefault(f.name)

        instance_dict = getattr(obj, "__dict__", None)
        if isinstance(instance_dict, dict):
            for name in instance_dict:
                names.setdefault(name)

        for klass in mro:
            slots = klass.__dict__.get("__slots__", ())
            for name in (slots,) if isinstance(slots, str) else slots:
                names.setdefault(name)

    for klass in mro:
        for name in klass.__dict__:
            names.setdefault(name)

    return list(names)


def _search_attrs_empty_result(format: str) -> list | dict:
    """Return appropriate empty result based on format."""
    if format == "dict":
        return {}
    return []


def _search_attrs_is_property(obj: Any, attr_name: str) -> bool:
    """Check if an attribute is a property descriptor."""
    try:
        if inspect.isclass(obj):
            descriptor = getattr(obj, attr_name, None)
        else:
            descriptor = getattr(type(obj), attr_name, None)
        return isinstance(descriptor, property)
    except (AttributeError, TypeError):
        return False


def _search_attrs_is_slot(obj: Any, attr_name: str) -> bool:
    """Check if an attribute is a __slots__ member descriptor (unset slots raise AttributeError)."""
    if inspect.isclass(obj):
        return False
    return inspect.ismemberdescriptor(getattr(type(obj), attr_name, None))

