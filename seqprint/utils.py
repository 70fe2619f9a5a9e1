"""
SeqPrint Utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns 'module.Name' for non-builtin classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(None)
        'NoneType'
        >>> class C: ...
        >>> class_name(C, fully_qualified=True)
        'seqprint.utils.C'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    module = getattr(cls, "__module__", None)
    if fully_qualified and module and module != "builtins":
        return f"{module}.{cls.__name__}"
    return cls.__name__


def fmt_type(obj: Any) -> str:
    """
    Format type information of an object for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(None)
        '<NoneType>'
    """
    return f"<{class_name(obj)}>"
