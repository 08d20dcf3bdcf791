"""
Type-aware formatters for exception and warning messages.

Robust against broken __repr__ implementations and oversized values, since
they are used on arbitrary objects found during attribute traversal.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, max_repr: int = 120, show_module: bool = False) -> str:
    """Format type information for exception messages.

    Args:
        obj: Any Python object or type.
        max_repr: Maximum length of the type name before truncation.
        show_module: Whether to include the module name for non-builtin types.

    Returns:
        Formatted type string like "<type: int>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
    """
    try:
        name = class_name(obj, fully_qualified=show_module)
    except AttributeError:
        name = str(obj if isinstance(obj, type) else type(obj))
    return f"<type: {_fmt_truncate(name, max_repr)}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception and warning messages.

    Args:
        x: Any Python object to format.
        max_repr: Maximum length of the value's repr before truncation.

    Returns:
        Formatted string like "<int: 42>".

    Notes:
        - For quoted reprs (strings), the ellipsis is placed outside the quotes.
        - Inner ">" is escaped to avoid clashing with the wrapper brackets.
        - A failing __repr__ is reported instead of raised.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hel'...>"
    """
    t = type(x).__name__
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"
    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """Truncate s to max_len characters, keeping the closing quote of quoted reprs."""
    if max_len <= 0 or len(s) <= max_len:
        return s
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        keep = max(max_len - len(ellipsis) - 1, 1)
        return s[:keep] + s[0] + ellipsis
    keep = max(max_len - len(ellipsis), 1)
    return s[:keep] + ellipsis
