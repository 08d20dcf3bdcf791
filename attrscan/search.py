"""
Free-text search across the attributes of arbitrary objects.

Search is best-effort: an attribute that cannot be read or converted to text
counts as "no match" and never aborts the search.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import warnings

from typing import Any, Collection, Iterable, Literal, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import enumerate_attrs
from .formatters import fmt_type, fmt_value
from .sentinels import is_absent
from .utils import contains_ignore_case, is_blank

__all__ = [
    'search',
    'filter_items',
]

T = TypeVar("T")


# Methods --------------------------------------------------------------------------------------------------------------

def search(item: Any,
           filter_text: str,
           *,
           exclude: Collection[str] | None = None,
           on_error: Literal["skip", "warn"] = "skip") -> bool:
    """
    Test whether filter_text occurs in any searchable attribute of item, ignoring case.

    Attributes are visited in declaration order. Search-ignored attributes and
    attributes whose value is None or unset are skipped; every other value is
    converted with str() and tested for case-insensitive containment. The first
    match returns True and no further attributes are read.

    An empty filter is contained in every text, so search(item, "") is True iff
    item has at least one non-null, non-excluded attribute. Callers that want
    "empty filter matches everything" must short-circuit themselves, as
    filter_items() does.

    Args:
        item: The object to search. None and builtin values have no attributes.
        filter_text: Text to look for.
        exclude: Additional attribute names to skip for this call.
        on_error: What to do when reading or converting an attribute fails:
            - "skip" (default): treat the attribute as not matching
            - "warn": same, and emit a RuntimeWarning

    Returns:
        bool: True on the first matching attribute, False otherwise.

    Raises:
        TypeError: If filter_text is not a str.
        ValueError: If on_error is invalid.

    Examples:
        >>> @dataclass
        ... class Part:
        ...     name: str = "Widget"
        ...     tag: Annotated[str, SearchIgnore()] = "x"
        >>> search(Part(), "WIDG")
        True
        >>> search(Part(), "x")
        False
    """
    if not isinstance(filter_text, str):
        raise TypeError(f"filter_text must be a str, but found {fmt_type(filter_text)}")
    if on_error not in ("skip", "warn"):
        raise ValueError(f"on_error must be 'skip' or 'warn' literal, got {fmt_value(on_error)}")

    for attr in enumerate_attrs(item, exclude=exclude):
        if attr.excluded:
            continue
        try:
            value = attr.read(item)
            if is_absent(value):
                continue
            if contains_ignore_case(str(value), filter_text):
                return True
        except Exception as e:
            if on_error == "warn":
                warnings.warn(
                    f"Failed to search attribute {attr.name!r} of {fmt_type(item, show_module=True)}: "
                    f"{type(e).__name__}: {e}",
                    RuntimeWarning,
                    stacklevel=2
                )

    return False


def filter_items(items: Iterable[T],
                 filter_text: str | None,
                 *,
                 exclude: Collection[str] | None = None) -> list[T]:
    """
    Return the items whose attributes match filter_text.

    A None, empty or whitespace-only filter keeps every item. Otherwise, items
    are kept in order when search() matches them; None items are dropped.

    Examples:
        >>> filter_items(parts, "bolt")
        [Part(name='Bolt M6'), Part(name='bolt M8')]
        >>> filter_items(parts, "  ") == list(parts)
        True
    """
    if is_blank(filter_text):
        return list(items)
    return [item for item in items if item is not None and search(item, filter_text, exclude=exclude)]
