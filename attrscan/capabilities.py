"""
Capability classification for the copy and search engines.

A capability is a named set of operations a type opts into. Checks rely on
runtime type metadata only and never on value contents:

    - Copyable: nested values of this type are copied field by field instead of aliased
    - Searchable: instances can be matched against a free-text filter
    - list-like: ordered, indexable, mutable containers such as list

Types opt in by subclassing the mixin, or by registering a third-party class:

    >>> Copyable.register(ThirdPartyModel)
"""

# Standard library -----------------------------------------------------------------------------------------------------
import abc
import collections.abc

from typing import Any, ClassVar, Collection, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .search import search

__all__ = [
    'Copyable',
    'Searchable',
    'is_copyable',
    'is_list_like',
    'is_type_of',
]


# Classes --------------------------------------------------------------------------------------------------------------

class Copyable(abc.ABC):
    """
    Opt-in capability for structural copying.

    When the copy engine meets a Copyable value in a source attribute, it copies
    the value field by field into the corresponding target attribute instead of
    assigning the reference.

    Example:
        >>> @dataclass
        ... class Address(Copyable):
        ...     city: str = ""
        >>> home = Address().copy_from(Address("Oslo"))
        >>> home.city
        'Oslo'
    """
    __slots__ = ()

    def copy_from(self, source: Any, *, options: Any = None) -> Self:
        """
        Copy the public attributes of source into this instance.

        Args:
            source: Object of corresponding shape.
            options: Optional attrscan.copier.CopyOptions.

        Returns:
            self, to allow chaining.
        """
        from .copier import copy_into

        copy_into(self, source, options=options)
        return self


class Searchable(abc.ABC):
    """
    Opt-in capability for free-text matching.

    Subclasses may list attribute names to skip in `__search_ignore__`.
    """
    __slots__ = ()

    __search_ignore__: ClassVar[Collection[str]] = ()

    def matches(self, filter_text: str, *, exclude: Collection[str] | None = None) -> bool:
        """Return True if filter_text occurs in any non-excluded attribute, ignoring case."""
        return search(self, filter_text, exclude=exclude)


# Methods --------------------------------------------------------------------------------------------------------------

def is_type_of(value: Any, capability: type) -> bool:
    """
    Check whether the runtime type of value implements a capability.

    Args:
        value: Any object instance.
        capability: An ABC, a runtime-checkable Protocol or a plain class.

    Returns:
        bool: False for None, for class objects and for capabilities that do
              not support isinstance() checks. Never raises.

    Examples:
        >>> is_type_of([1, 2], collections.abc.MutableSequence)
        True
        >>> is_type_of(None, Copyable)
        False
    """
    if value is None or isinstance(value, type):
        return False
    try:
        return isinstance(value, capability)
    except TypeError:
        return False


def is_list_like(value: Any) -> bool:
    """
    Check whether value is an ordered, indexable, insertion-preserving container.

    True for list, collections.UserList and other MutableSequence
    implementations; False for bytearray, str, tuple, mappings, sets and None.
    """
    return is_type_of(value, collections.abc.MutableSequence) and not isinstance(value, bytearray)


def is_copyable(value: Any) -> bool:
    """Check whether the type of value opts into the Copyable capability."""
    return is_type_of(value, Copyable)
