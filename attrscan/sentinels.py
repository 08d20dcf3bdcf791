"""
Sentinel objects for attribute values that are declared but not set.

An unset slot, or an annotated field that never received a value, is neither
None nor an error: attribute readers report it as MISSING. Use identity checks
(`value is MISSING`), never equality with other values.

Example:
    >>> value = descriptor.read(obj)
    >>> if is_absent(value):
    ...     return  # nothing to search or copy
"""

from typing import Any, Final

__all__ = [
    'MISSING',
    'MissingType',
    'is_absent',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class MissingType:
    """
    Sentinel type for MISSING.

    Marks an attribute that is declared on a class but holds no value on the instance.
    """
    __slots__ = ()

    _instance: 'MissingType | None' = None

    def __new__(cls) -> 'MissingType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<MISSING>'

    def __bool__(self) -> bool:
        """MISSING is falsy, like None."""
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

MISSING: Final[MissingType] = MissingType()
"""
Sentinel representing a declared attribute without a value.

Distinguishes "attribute not set" from "attribute set to None".
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def is_absent(value: Any) -> bool:
    """Return True if value is None or MISSING."""
    return value is None or value is MISSING
