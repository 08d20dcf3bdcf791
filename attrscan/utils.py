"""
Attrscan Utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    Builtin classes are never module-qualified.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns 'module.Class' for non-builtin classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class Widget: ...
        >>> class_name(Widget(), fully_qualified=True)
        '__main__.Widget'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    module = getattr(cls, "__module__", None)
    if fully_qualified and module and module != "builtins":
        return f"{module}.{cls.__qualname__}"
    return cls.__name__


def is_blank(text: str | None) -> bool:
    """Return True if text is None, empty or whitespace only."""
    return text is None or not text.strip()


def contains_ignore_case(text: str, fragment: str) -> bool:
    """
    Check whether fragment occurs in text, ignoring case.

    Uses str.casefold(), so caseless matching also covers non-ASCII letters
    (e.g. 'STRASSE' contains 'straße').

    Examples:
        >>> contains_ignore_case("Widget", "DGE")
        True
        >>> contains_ignore_case("Widget", "")
        True
    """
    return fragment.casefold() in text.casefold()
