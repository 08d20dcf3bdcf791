"""
Structural copy of attribute values between object instances.

copy_into() transfers every readable attribute of a source object to the
writable attribute of the same name on a target object. Nested Copyable values
are copied field by field rather than aliased, up to a bounded depth.

Unlike search, copying is correctness-sensitive: a source attribute that cannot
be read aborts the whole copy.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import copy

from collections.abc import Collection, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Final

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import AttrDescriptor, attr_map, enumerate_attrs
from .capabilities import is_copyable, is_list_like
from .formatters import fmt_type, fmt_value
from .sentinels import MISSING

__all__ = [
    'MAX_DEPTH',
    'CopyOptions',
    'copy_into',
]

MAX_DEPTH: Final[int] = 32
"""Default nesting limit for recursive copies of Copyable values."""


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class CopyOptions:
    """
    Configuration for copy_into().

    Attributes:
        max_depth: Maximum nesting level for recursive copies of Copyable values.
                   At the limit, nested values are assigned by reference.
                   0 disables recursion entirely.
        copy_none: If True, None values in the source overwrite the target.
                   Default False keeps the target value.
        copy_lists: If True, list-like values are assigned as a shallow copy of
                    the container, so target and source do not share it.
        exclude: Attribute names never copied.

    Examples:
        >>> copy_into(target, source, options=CopyOptions(max_depth=4))
        >>> copy_into(target, source, options=CopyOptions.shallow())
    """
    max_depth: int = MAX_DEPTH
    copy_none: bool = False
    copy_lists: bool = True
    exclude: Collection[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate field types and normalize exclude to a frozenset."""
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise TypeError(f"max_depth must be an int, but found {fmt_type(self.max_depth)}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >=0, but got {fmt_value(self.max_depth)}")
        for name in ("copy_none", "copy_lists"):
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"CopyOptions.{name} must be a bool, but found {fmt_type(val)}")
        if isinstance(self.exclude, str) or not isinstance(self.exclude, Collection):
            raise TypeError(f"exclude must be a collection of names, but found {fmt_value(self.exclude)}")
        self.exclude = frozenset(self.exclude)

    @classmethod
    def shallow(cls) -> "CopyOptions":
        """Options that assign every value by reference, without recursion."""
        return cls(max_depth=0)

    @classmethod
    def strict(cls) -> "CopyOptions":
        """Options that make the target mirror the source, None values included."""
        return cls(copy_none=True)


class _CopyContext:
    """
    State of one top-level copy_into() call.

    Created per call and passed down the recursion, so concurrent copies never
    share depth tracking.

    Attributes:
        options: Effective CopyOptions.
        depth: Current nesting level, 0 at top level.
        memo: id(source object) -> target object produced for it.
        source_graph: id -> object for the source and every Copyable reachable
            from it. Such objects are read from, never written into.
    """

    def __init__(self, options: CopyOptions, source: Any) -> None:
        self.options = options
        self.depth = 0
        self.memo: dict[int, Any] = {}
        self.source_graph = _reachable_copyables(source)
        self._path: list[str] = []
        # Keeps memoized sources alive so their ids are not reused mid-copy
        self._sources: list[Any] = []

    def in_source_graph(self, obj: Any) -> bool:
        return id(obj) in self.source_graph

    @property
    def can_recurse(self) -> bool:
        return self.depth < self.options.max_depth

    def remember(self, source: Any, target: Any) -> None:
        self.memo[id(source)] = target
        self._sources.append(source)

    def attr_path(self, name: str) -> str:
        return ".".join([*self._path, name])

    @contextmanager
    def nested(self, name: str) -> Iterator[None]:
        """Enter one nesting level; restored on every exit path."""
        self.depth += 1
        self._path.append(name)
        try:
            yield
        finally:
            self._path.pop()
            self.depth -= 1


# Methods --------------------------------------------------------------------------------------------------------------

def copy_into(target: Any, source: Any, *, options: CopyOptions | None = None) -> None:
    """
    Copy the public attribute values of source into target.

    For each readable attribute of source, in declaration order:
        - skipped if target has no writable attribute of that name (shape
          mismatches are not errors) or the name is in options.exclude
        - skipped if the value is unset, or None (unless options.copy_none)
        - a value already copied during this call (shared or cyclic reference)
          is replaced by the object produced for it
        - a Copyable value is copied recursively into the target's current
          attribute value when that is an object of the same type outside the
          source graph, otherwise into a fresh copy.copy() of the value; never
          aliased, and nothing reachable from source is ever written
        - a list-like value is assigned as a shallow copy of the container
        - any other value, and any value at the depth limit, is assigned as is

    Args:
        target: Object receiving the values.
        source: Object of corresponding shape providing the values.
        options: CopyOptions; CopyOptions() defaults if None.

    Raises:
        TypeError: If target or source is None, or options is not a CopyOptions.
        Exception: Any exception raised while reading a source attribute propagates
            unchanged, with a note naming the attribute path.

    Notes:
        - Idempotent: copying the same source twice leaves target unchanged.
        - Self-referential graphs terminate: each source object is copied once
          per call, and recursion is bounded by options.max_depth.
        - Private attributes (leading '_') are never copied; a fresh nested copy
          shares them with the source object it was made from.

    Examples:
        >>> @dataclass
        ... class Part(Copyable):
        ...     name: str = ""
        >>> @dataclass
        ... class Widget(Copyable):
        ...     name: str = ""
        ...     part: Part | None = None
        >>> src = Widget("W1", Part("bolt"))
        >>> dst = Widget()
        >>> copy_into(dst, src)
        >>> dst.part == src.part, dst.part is src.part
        (True, False)
    """
    if not isinstance(options, (CopyOptions, type(None))):
        raise TypeError(f"options must be a CopyOptions instance, but found {fmt_type(options)}")
    if target is None:
        raise TypeError("copy target must not be None")
    if source is None:
        raise TypeError("copy source must not be None")
    if target is source:
        return

    ctx = _CopyContext(options or CopyOptions(), source)
    _copy_attrs(target, source, ctx)


# Private Methods ------------------------------------------------------------------------------------------------------

def _copy_attrs(target: Any, source: Any, ctx: _CopyContext) -> None:
    """Copy attributes of source into target at the current context depth."""
    ctx.remember(source, target)
    target_attrs = attr_map(target)

    for attr in enumerate_attrs(source):
        if attr.name in ctx.options.exclude:
            continue
        dest = target_attrs.get(attr.name)
        if dest is None or not dest.writable:
            continue

        try:
            value = attr.read(source)
        except Exception as e:
            e.add_note(f"while copying attribute {ctx.attr_path(attr.name)!r} "
                       f"from {fmt_type(source, show_module=True)}")
            raise

        if value is MISSING:
            continue
        if value is None:
            if ctx.options.copy_none:
                dest.write(target, None)
            continue

        dest.write(target, _copy_value(value, dest, target, ctx))


def _copy_value(value: Any, dest: AttrDescriptor, target: Any, ctx: _CopyContext) -> Any:
    """Return the object to assign to target.<dest.name> for a non-null source value."""
    if id(value) in ctx.memo:
        return ctx.memo[id(value)]

    if is_copyable(value) and ctx.can_recurse:
        nested = dest.read(target)
        if nested is value or type(nested) is not type(value) or ctx.in_source_graph(nested):
            nested = copy.copy(value)
        with ctx.nested(dest.name):
            _copy_attrs(nested, value, ctx)
        return nested

    if is_list_like(value) and ctx.options.copy_lists:
        return copy.copy(value)

    return value


def _reachable_copyables(source: Any) -> dict[int, Any]:
    """
    Collect source and every Copyable reachable from it through public
    attributes, directly or as elements of list-like values.

    Attributes that fail to read are left out: the copy pass reads them again
    and reports the error with its attribute path.
    """
    graph = {id(source): source}
    stack = [source]
    while stack:
        obj = stack.pop()
        for attr in enumerate_attrs(obj):
            try:
                value = attr.read(obj)
            except Exception:
                continue
            for item in (value if is_list_like(value) else (value,)):
                if is_copyable(item) and id(item) not in graph:
                    graph[id(item)] = item
                    stack.append(item)
    return graph
