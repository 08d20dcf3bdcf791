"""
Attribute enumeration for arbitrary object instances.

Discovers the public, readable data attributes of an object's runtime type in
declaration order, together with their writability and search-exclusion flags.
Both the search and the copy engines are built on enumerate_attrs().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import functools
import inspect
import re
import types

from dataclasses import dataclass
from typing import Any, ClassVar, Collection, Literal, get_origin, overload

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value
from .markers import SEARCH_IGNORE, has_search_ignore, hint_has_search_ignore, ignored_names
from .sentinels import MISSING, is_absent

AttrKind = Literal["field", "slot", "property", "descriptor", "class"]

# Builtin value types are leaves: they expose no attributes, and their members
# are not attributes of subclasses either
_LEAF_TYPES = (
    int, float, bool, complex, str, bytes, bytearray, memoryview,
    list, tuple, dict, set, frozenset, range, type(None),
)

_NOTHING = object()

_TPFLAGS_HEAPTYPE = 1 << 9


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class AttrDescriptor:
    """
    A public, readable data attribute discovered on an object's runtime type.

    Attributes:
        name (str): Attribute name.
        owner (type): The class that declares the attribute; the runtime type for
            attributes found only in the instance __dict__.
        kind (str): "field" (annotated or instance attribute), "slot", "property"
            (property or cached_property), "descriptor" (other data descriptors)
            or "class" (plain class-level value).
        writable (bool): Whether the attribute can be assigned on the instance.
        excluded (bool): Whether the attribute is search-ignored.
    """
    name: str
    owner: type
    kind: AttrKind
    writable: bool = True
    excluded: bool = False

    def read(self, obj: Any) -> Any:
        """
        Read the attribute value from obj.

        Returns MISSING for a declared field or slot that holds no value on obj.
        Exceptions raised by property getters and descriptors propagate.
        """
        if self.kind in ("field", "slot"):
            try:
                return getattr(obj, self.name)
            except AttributeError:
                return MISSING
        return getattr(obj, self.name)

    def write(self, obj: Any, value: Any) -> None:
        """
        Assign value to the attribute on obj.

        Raises:
            AttributeError: If the attribute is not writable.
        """
        if not self.writable:
            raise AttributeError(f"attribute {self.name!r} of {fmt_type(obj)} is read-only")
        setattr(obj, self.name, value)


# Methods --------------------------------------------------------------------------------------------------------------

def enumerate_attrs(obj: Any, *, exclude: Collection[str] | None = None) -> list[AttrDescriptor]:
    """
    Enumerate the public, readable data attributes of obj.

    Attributes are discovered on the concrete runtime type, walking the class
    hierarchy from the base class to the most derived one. Within each class the
    order is: annotations, __slots__, then other class-level entries in definition
    order. Attributes found only in the instance __dict__ come last. Values are not
    read; use AttrDescriptor.read().

    Args:
        obj: Any object instance.
        exclude: Additional attribute names to mark as excluded for this call.

    Returns:
        list[AttrDescriptor] in stable declaration order. Empty for None, classes,
        and builtin values such as int, str, list or dict.

    Notes:
        - Names starting with '_' are never included.
        - Methods, classmethods, staticmethods, nested classes, ClassVar and
          InitVar annotations are never included.
        - Properties without a getter are not readable and are not included.
        - An attribute is excluded when it, its declaring class or the runtime
          class carries the search_ignore marker, when it is listed in a class
          __search_ignore__ collection, annotated with SearchIgnore, flagged in
          dataclass field metadata, or named in `exclude`.
        - Frozen dataclass attributes are never writable. Neither are
          attributes implemented in C, such as date.year or namedtuple fields.
        - Only exact builtin values are leaves. For subclasses of builtin types
          (namedtuple, str or int subclasses) the members inherited from the
          builtin base are skipped, and their own attributes are included.

    Examples:
        >>> @dataclass
        ... class Part:
        ...     name: str = ""
        >>> [a.name for a in enumerate_attrs(Part("bolt"))]
        ['name']
    """
    if obj is None or isinstance(obj, type) or type(obj) in _LEAF_TYPES:
        return []
    if isinstance(exclude, str):
        raise TypeError(f"exclude must be a collection of names, but found {fmt_value(exclude)}")

    cls = type(obj)
    instance_dict = _instance_dict(obj)
    frozen = _is_frozen_dataclass(cls)
    assignable = not frozen and instance_dict is not None
    class_ignored = has_search_ignore(cls)
    excluded_names = ignored_names(cls) | frozenset(exclude or ())
    field_meta = _dataclass_field_metadata(cls)

    found: dict[str, AttrDescriptor] = {}

    for owner in reversed(cls.__mro__):
        if owner is object or owner in _LEAF_TYPES:
            continue
        hints = _own_annotations(owner)
        namespace = vars(owner)

        for name in _declared_names(owner, hints):
            hint = hints.get(name, _NOTHING)
            if hint is not _NOTHING and _is_class_level_hint(hint):
                found.pop(name, None)
                continue

            attr = namespace.get(name, _NOTHING)
            kind, writable, marked = _classify(attr, hint, owner=owner, assignable=assignable, frozen=frozen)
            if kind is None:
                # Overridden by a method or a write-only property
                found.pop(name, None)
                continue

            excluded = (
                    marked
                    or class_ignored
                    or has_search_ignore(owner)
                    or name in excluded_names
                    or (hint is not _NOTHING and hint_has_search_ignore(hint))
                    or field_meta.get(name, False)
            )
            found[name] = AttrDescriptor(name=name, owner=owner, kind=kind,
                                         writable=writable, excluded=excluded)

    for name in instance_dict or ():
        if not _is_public(name) or name in found:
            continue
        found[name] = AttrDescriptor(name=name, owner=cls, kind="field",
                                     writable=not frozen,
                                     excluded=class_ignored or name in excluded_names)

    return list(found.values())


def attr_map(obj: Any, *, exclude: Collection[str] | None = None) -> frozendict:
    """
    Return an immutable name -> AttrDescriptor mapping for obj.

    Same descriptors as enumerate_attrs(), keyed by attribute name.
    """
    return frozendict((attr.name, attr) for attr in enumerate_attrs(obj, exclude=exclude))


def is_search_excluded(attribute: Any) -> bool:
    """
    Check whether an attribute is excluded from search.

    Accepts an AttrDescriptor (its `excluded` flag is returned) or a raw
    declaration: a class, property, cached_property or function carrying the
    search_ignore marker. Never raises.
    """
    if isinstance(attribute, AttrDescriptor):
        return attribute.excluded
    return has_search_ignore(attribute)


def get_attr_text(obj: Any, name: str) -> str:
    """
    Get the text form of a public attribute value.

    Returns:
        str(value), or an empty string if the attribute is not found, unset or None.

    Raises:
        Any exception raised by the attribute getter.
    """
    for attr in enumerate_attrs(obj):
        if attr.name == name:
            value = attr.read(obj)
            return "" if is_absent(value) else str(value)
    return ""


@overload
def search_attrs(
        obj: Any,
        *,
        format: Literal["list"] = "list",
        include_excluded: bool = True,
        exclude_none: bool = False,
        pattern: str | None = None,
        attr_type: type | tuple[type, ...] | None = None,
        sort: bool = False,
        skip_errors: bool = True,
) -> list[str]: ...


@overload
def search_attrs(
        obj: Any,
        *,
        format: Literal["dict"],
        include_excluded: bool = True,
        exclude_none: bool = False,
        pattern: str | None = None,
        attr_type: type | tuple[type, ...] | None = None,
        sort: bool = False,
        skip_errors: bool = True,
) -> dict[str, Any]: ...


@overload
def search_attrs(
        obj: Any,
        *,
        format: Literal["items"],
        include_excluded: bool = True,
        exclude_none: bool = False,
        pattern: str | None = None,
        attr_type: type | tuple[type, ...] | None = None,
        sort: bool = False,
        skip_errors: bool = True,
) -> list[tuple[str, Any]]: ...


def search_attrs(
        obj: Any,
        *,
        format: Literal["list", "dict", "items"] = "list",
        include_excluded: bool = True,
        exclude_none: bool = False,
        pattern: str | None = None,
        attr_type: type | tuple[type, ...] | None = None,
        sort: bool = False,
        skip_errors: bool = True,
) -> list[str] | dict[str, Any] | list[tuple[str, Any]]:
    """
    Query the attributes of an object with filtering and output formats.

    A convenience view over enumerate_attrs() for interactive inspection and
    reporting: only public, readable data attributes are considered, in
    declaration order. Neither search() nor copy_into() goes through it.

    Args:
        obj: The object to inspect
        format: Output format:
            - "list": list of attribute names (default)
            - "dict": dictionary mapping names to values
            - "items": list of (name, value) tuples
        include_excluded: If False, drops search-ignored attributes
        exclude_none: If True, drops attributes whose value is None or unset
        pattern: Optional regex that must match the entire attribute name
        attr_type: Optional type or tuple of types the value must be an instance of
        sort: If True, sorts by attribute name. Default keeps declaration order.
        skip_errors: If True, silently skips attributes that raise on access.
                     If False, the original exception propagates.

    Returns:
        - If format="list": list[str] of attribute names
        - If format="dict": dict[str, Any] mapping names to values
        - If format="items": list[tuple[str, Any]] of (name, value) pairs

    Raises:
        ValueError: If pattern is an invalid regex or format is invalid

    Examples:
        >>> @dataclass
        ... class Part:
        ...     name: str = "bolt"
        ...     size: int | None = None
        >>> search_attrs(Part(), format="dict")
        {'name': 'bolt', 'size': None}
        >>> search_attrs(Part(), exclude_none=True)
        ['name']
        >>> search_attrs(Part(), attr_type=str, format="items")
        [('name', 'bolt')]
    """
    if format not in ("list", "dict", "items"):
        raise ValueError(f"format must be 'list', 'dict', or 'items' literal, got {fmt_value(format)}")

    compiled_pattern = None
    if pattern is not None:
        try:
            compiled_pattern = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {pattern!r}") from e

    # Values are read only when a filter or the output format needs them
    need_value = format != "list" or exclude_none or attr_type is not None

    pairs = []
    for attr in enumerate_attrs(obj):
        if not include_excluded and attr.excluded:
            continue
        if compiled_pattern and not compiled_pattern.fullmatch(attr.name):
            continue

        value = None
        if need_value:
            try:
                value = attr.read(obj)
            except Exception:
                if skip_errors:
                    continue
                raise
            if exclude_none and is_absent(value):
                continue
            if attr_type is not None and not isinstance(value, attr_type):
                continue

        pairs.append((attr.name, value))

    if sort:
        pairs.sort(key=lambda pair: pair[0])

    if format == "list":
        return [name for name, _ in pairs]
    elif format == "dict":
        return dict(pairs)
    else:  # items
        return pairs


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify(attr: Any, hint: Any, *,
              owner: type, assignable: bool, frozen: bool) -> tuple[AttrKind | None, bool, bool]:
    """
    Classify a class-namespace entry declared on owner.

    Setters of descriptors implemented in C cannot be inspected, so slots of
    builtin types and data descriptors of builtin descriptor types (getset
    descriptors, namedtuple fields) are reported as read-only.

    Returns:
        (kind, writable, marked) where kind is None for entries that are not
        readable data attributes.
    """
    if attr is _NOTHING:
        # Annotation without a class-level value
        return "field", assignable, False
    if isinstance(attr, property):
        if attr.fget is None:
            return None, False, False
        return "property", attr.fset is not None and not frozen, has_search_ignore(attr)
    if isinstance(attr, functools.cached_property):
        return "property", assignable, has_search_ignore(attr)
    if isinstance(attr, types.MemberDescriptorType):
        return "slot", not frozen and _is_heap_type(owner), False
    if isinstance(attr, (staticmethod, classmethod)) or callable(attr):
        return None, False, False
    if hasattr(type(attr), "__get__"):
        if hasattr(type(attr), "__set__"):
            return "descriptor", not frozen and _is_heap_type(type(attr)), False
        return "descriptor", assignable, False
    return ("field" if hint is not _NOTHING else "class"), assignable, False


def _declared_names(owner: type, hints: dict[str, Any]) -> list[str]:
    """Public names declared by owner: annotations, then __slots__, then namespace order."""
    slots = vars(owner).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    names = dict.fromkeys(hints)
    names.update(dict.fromkeys(slots))
    names.update(dict.fromkeys(vars(owner)))
    return [name for name in names if _is_public(name)]


def _dataclass_field_metadata(cls: type) -> dict[str, bool]:
    """Map dataclass field names to their SEARCH_IGNORE metadata flag."""
    if not dataclasses.is_dataclass(cls):
        return {}
    return {f.name: bool(f.metadata.get(SEARCH_IGNORE, False)) for f in dataclasses.fields(cls)}


def _instance_dict(obj: Any) -> dict | None:
    """Return obj.__dict__ or None for objects without one."""
    try:
        dict_ = object.__getattribute__(obj, "__dict__")
    except (AttributeError, TypeError):
        return None
    return dict_ if isinstance(dict_, dict) else None


def _is_class_level_hint(hint: Any) -> bool:
    """True for ClassVar and InitVar annotations, which declare no instance attribute."""
    if isinstance(hint, str):
        bare = hint.removeprefix("typing.").removeprefix("dataclasses.")
        return bare.startswith(("ClassVar", "InitVar"))
    if isinstance(hint, dataclasses.InitVar) or hint is dataclasses.InitVar:
        return True
    return hint is ClassVar or get_origin(hint) is ClassVar


def _is_frozen_dataclass(cls: type) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def _is_heap_type(cls: type) -> bool:
    """True for classes created by a class statement or type(), False for builtin (static) types."""
    return bool(getattr(cls, "__flags__", 0) & _TPFLAGS_HEAPTYPE)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _own_annotations(owner: type) -> dict[str, Any]:
    """Annotations declared directly on owner, evaluated when possible."""
    try:
        return inspect.get_annotations(owner, eval_str=True)
    except Exception:
        try:
            return inspect.get_annotations(owner)
        except Exception:
            return {}
