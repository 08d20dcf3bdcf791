"""
Declarative search-ignore markers.

A class, property or field tagged with one of these markers is skipped by the
search engine. The copy engine still sees it. Markers are read by the attribute
enumerator and never written by it.

Supported declarations:

    >>> @search_ignore                          # the whole class
    ... class Secret: ...

    >>> class Item:
    ...     __search_ignore__ = {"etag"}        # names declared on the class
    ...     note: Annotated[str, SearchIgnore()] = ""
    ...
    ...     @search_ignore                      # a single property
    ...     @property
    ...     def checksum(self) -> str: ...

    >>> @dataclass
    ... class Record:
    ...     tag: str = field(default="", metadata={SEARCH_IGNORE: True})
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import types

from typing import Annotated, Any, Final, TypeVar, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type

__all__ = [
    'SEARCH_IGNORE',
    'SearchIgnore',
    'search_ignore',
    'has_search_ignore',
    'hint_has_search_ignore',
    'ignored_names',
]

T = TypeVar("T")

SEARCH_IGNORE: Final[str] = "attrscan.search_ignore"
"""Key for dataclasses.field(metadata=...) marking a field as search-ignored."""

_FLAG: Final[str] = "__attrscan_search_ignore__"


# Classes --------------------------------------------------------------------------------------------------------------

class SearchIgnore:
    """
    Marker for typing.Annotated metadata.

    Example:
        >>> class Item:
        ...     tag: Annotated[str, SearchIgnore()] = "x"
    """
    __slots__ = ()

    def __repr__(self) -> str:
        return "SearchIgnore()"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, SearchIgnore)

    def __hash__(self) -> int:
        return hash(SearchIgnore)


# Methods --------------------------------------------------------------------------------------------------------------

def search_ignore(obj: T) -> T:
    """
    Mark a class, property, cached_property or function as ignored by search.

    Can be stacked above or below @property. Returns obj unchanged apart from the marker.

    Raises:
        TypeError: If obj is not a class, property, cached_property or function,
                   or if it is a property without a getter.
    """
    if isinstance(obj, property):
        if obj.fget is None:
            raise TypeError("search_ignore requires a property with a getter")
        setattr(obj.fget, _FLAG, True)
    elif isinstance(obj, functools.cached_property):
        setattr(obj.func, _FLAG, True)
    elif isinstance(obj, (type, types.FunctionType)):
        setattr(obj, _FLAG, True)
    else:
        raise TypeError(f"search_ignore expects a class, property or function, but found {fmt_type(obj)}")
    return obj


def has_search_ignore(obj: Any) -> bool:
    """
    Check whether obj carries the search-ignore marker.

    Classes inherit the marker from their bases. Never raises.
    """
    try:
        if isinstance(obj, property):
            obj = obj.fget
        elif isinstance(obj, functools.cached_property):
            obj = obj.func
        if obj is None:
            return False
        return getattr(obj, _FLAG, False) is True
    except Exception:
        return False


def hint_has_search_ignore(hint: Any) -> bool:
    """Return True if a type hint is Annotated[..., SearchIgnore()] (or the bare SearchIgnore class)."""
    if isinstance(hint, str):
        # Unevaluated annotation, e.g. under `from __future__ import annotations`
        return hint.startswith(("Annotated[", "typing.Annotated[")) and "SearchIgnore" in hint
    if get_origin(hint) is not Annotated:
        return False
    return any(isinstance(m, SearchIgnore) or m is SearchIgnore for m in hint.__metadata__)


def ignored_names(cls: type) -> frozenset[str]:
    """
    Collect the names listed in __search_ignore__ across the class hierarchy.

    A subclass declaring its own collection extends, never replaces, the names of its bases.
    """
    names = set()
    for klass in getattr(cls, "__mro__", ()):
        declared = vars(klass).get("__search_ignore__")
        if not declared:
            continue
        if isinstance(declared, str):
            names.add(declared)
        else:
            names.update(declared)
    return frozenset(names)
