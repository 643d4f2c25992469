"""
Deep freeze and unfreeze for plain-data trees.

Only plain mappings (exact dicts, and FrozenMappings produced here) are
traversed. Every other value, lists and class instances included, is an
opaque leaf: carried by reference and never frozen internally.

freeze() turns each plain mapping of the tree into a FrozenMapping.
unfreeze() rebuilds fresh dicts from a (possibly frozen) tree.
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

import attrbag.errors as errors


class NodeKind(_enum.Enum):
    """Closed set of node kinds that bounds freeze/unfreeze recursion."""

    MAPPING = "mapping"
    """A plain mapping: traversed, frozen and unfrozen."""

    OPAQUE = "opaque"
    """Any other value: a leaf carried by reference."""


class FrozenMapping(_abc.Mapping[str, _typing.Any]):
    """
    Read-only mapping produced by freeze().

    Frozen at every level: plain mapping children are frozen on
    construction, so a FrozenMapping never holds a writable dict.

    Writes raise ImmutabilityViolation, including the dict-style mutators
    (update, setdefault, pop, popitem, clear) that plain Mapping lacks.

    Example:
        >>> frozen = freeze({"a": {"b": 1}})
        >>> frozen["a"]["b"]
        1
        >>> frozen["a"]["b"] = 99  # ImmutabilityViolation
    """

    __slots__ = ("_data",)

    def __init__(self, data: _abc.Mapping[str, _typing.Any]) -> None:
        """
        Wrap a mapping in a read-only container.

        Args:
            data: The mapping to wrap. Its key table is copied, so later
                  changes to ``data`` are not visible through this view.
                  Plain mapping children are frozen too.
        """
        self._data: dict[str, _typing.Any] = {
            key: freeze(value) if node_kind(value) is NodeKind.MAPPING else value
            for key, value in data.items()
        }

    def __getitem__(self, key: str) -> _typing.Any:
        return self._data[key]

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"FrozenMapping({self._data!r})"

    def __eq__(self, other: object) -> bool:
        """Compare equal to any Mapping with same content."""
        if isinstance(other, _abc.Mapping):
            return dict(self) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        """FrozenMapping is not hashable (values may be mutable)."""
        raise TypeError(f"unhashable type: '{type(self).__name__}'")

    def _read_only(self, *args: _typing.Any, **kwargs: _typing.Any) -> _typing.NoReturn:
        raise errors.ImmutabilityViolation(
            f"'{type(self).__name__}' is guarded and cannot be modified"
        )

    __setitem__ = _read_only
    __delitem__ = _read_only
    update = _read_only
    setdefault = _read_only
    pop = _read_only
    popitem = _read_only
    clear = _read_only


def node_kind(value: _typing.Any) -> NodeKind:
    """
    Classify a value for freeze/unfreeze recursion.

    Exact dicts and FrozenMappings are MAPPING. Dict subclasses are class
    instances with their own semantics, so they stay OPAQUE like lists,
    tuples and scalars.
    """
    if type(value) is dict or isinstance(value, FrozenMapping):
        return NodeKind.MAPPING
    return NodeKind.OPAQUE


def is_frozen(value: _typing.Any) -> bool:
    """Check if a value is a FrozenMapping."""
    return isinstance(value, FrozenMapping)


def ensure_mutable(value: _typing.Any) -> None:
    """
    Raise if a node is frozen.

    Raises:
        ImmutabilityViolation: If ``value`` is a FrozenMapping.
    """
    if is_frozen(value):
        raise errors.ImmutabilityViolation(
            f"'{type(value).__name__}' is guarded and cannot be modified"
        )


def freeze(node: _abc.Mapping[str, _typing.Any]) -> FrozenMapping:
    """
    Deeply freeze a plain mapping.

    Plain mapping children are frozen first, then the node itself. Opaque
    children (lists, class instances, scalars) are carried by reference.

    Args:
        node: The mapping to freeze.

    Returns:
        A FrozenMapping. Freezing an already-frozen mapping returns it
        unchanged.

    Example:
        >>> frozen = freeze({"a": {"b": [1, 2]}})
        >>> type(frozen["a"]).__name__
        'FrozenMapping'
        >>> type(frozen["a"]["b"]).__name__
        'list'
    """
    if isinstance(node, FrozenMapping):
        return node
    return FrozenMapping(node)


def unfreeze(node: _abc.Mapping[str, _typing.Any]) -> dict[str, _typing.Any]:
    """
    Build a fully mutable copy of a (possibly frozen) mapping.

    Plain mapping children become new dicts. Every other value is shared
    with ``node``, not copied.

    Args:
        node: The mapping to unfreeze.

    Returns:
        A new dict structurally equal to ``node``.
    """
    return {
        key: unfreeze(value) if node_kind(value) is NodeKind.MAPPING else value
        for key, value in node.items()
    }
