"""
Nested path access for attribute trees.

A path addresses a location inside a tree of mappings, sequences and
objects. Each segment is resolved against the current node:

- Mappings: the segment is looked up as a key
- Sequences (not str/bytes): the segment must be a non-negative index
- Other objects: the segment is a public attribute name

Path strings use a separator (default "."), and bracket indices are
accepted as an alternative spelling of index segments:

    >>> parse_path("servers[0].host")
    ('servers', '0', 'host')

Writes go through set_path() / unset_path(). A write that reaches a
FrozenMapping raises ImmutabilityViolation from the node itself.
"""

from __future__ import annotations

import collections.abc as _abc
import re as _re
import typing as _typing

import attrbag.constants as constants
import attrbag.support._frozen as _frozen
import attrbag.support._types as _types


# Sentinel for "segment not found" (None is a legitimate stored value)
class _MissingType:
    """Sentinel type marking an unresolved path segment."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


MISSING = _MissingType()

_BRACKET_INDEX = _re.compile(r"\[(\d+)\]")

# Values that can never hold children
_SCALARS = (str, bytes, bytearray, int, float, complex, bool, type(None))


def parse_path(
    path: str,
    separator: str = constants.DEFAULT_PATH_SEPARATOR,
) -> _types.Path:
    """
    Split a path string into segments.

    Args:
        path: Path string such as "a.b.c" or "items[0].name".
        separator: Segment separator.

    Returns:
        Tuple of segments. An empty string yields an empty tuple.
    """
    if not path:
        return ()
    if "[" in path:
        leading = path.startswith("[")
        path = _BRACKET_INDEX.sub(lambda match: separator + match.group(1), path)
        if leading:
            path = path[len(separator):]
    return tuple(path.split(separator))


def to_path(
    root: _typing.Any,
    key: _types.KeyPath,
    separator: str = constants.DEFAULT_PATH_SEPARATOR,
) -> _types.Path:
    """
    Normalize a caller-supplied key into a path tuple.

    A string that is itself a top-level key of ``root`` is not split, so
    flat keys such as "a.b" stay addressable. Pre-split sequences are used
    as-is, which also allows non-string keys.

    Args:
        root: The tree the path will be resolved against.
        key: String path, sequence of segments, or None.
        separator: Segment separator for string paths.

    Returns:
        Tuple of segments. None and "" yield an empty tuple (the whole tree).
    """
    if key is None:
        return ()
    if isinstance(key, str):
        if not key:
            return ()
        if isinstance(root, _abc.Mapping) and key in root:
            return (key,)
        return parse_path(key, separator)
    if isinstance(key, _abc.Sequence):
        return tuple(key)
    # Single non-string key (e.g. an int key loaded from YAML)
    return (key,)


def as_index(segment: _typing.Any) -> int | None:
    """Return ``segment`` as a non-negative list index, or None."""
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _is_sequence(node: _typing.Any) -> bool:
    return isinstance(node, _abc.Sequence) and not isinstance(node, (str, bytes, bytearray))


def _is_attribute(segment: _typing.Any) -> bool:
    return isinstance(segment, str) and bool(segment) and not segment.startswith("_")


def child(node: _typing.Any, segment: _typing.Any) -> _typing.Any:
    """
    Resolve one segment against a node.

    Returns:
        The child value, or MISSING if the segment does not exist.
    """
    if isinstance(node, _abc.Mapping):
        try:
            return node[segment] if segment in node else MISSING
        except TypeError:
            # Unhashable segment
            return MISSING
    if _is_sequence(node):
        index = as_index(segment)
        if index is not None and index < len(node):
            return node[index]
        return MISSING
    if isinstance(node, _SCALARS):
        return MISSING
    if _is_attribute(segment) and hasattr(node, segment):
        return getattr(node, segment)
    return MISSING


def get_path(
    root: _typing.Any,
    path: _types.Path,
    default: _typing.Any = None,
) -> _typing.Any:
    """
    Get the value at ``path``, or ``default`` if any segment is absent.

    An empty path returns ``root`` itself.
    """
    node = root
    for segment in path:
        node = child(node, segment)
        if node is MISSING:
            return default
    return node


def has_path(root: _typing.Any, path: _types.Path) -> bool:
    """
    Check if every segment of ``path`` exists.

    A stored value of None still counts as present. An empty path is
    never present.
    """
    if not path:
        return False
    return get_path(root, path, MISSING) is not MISSING


def _assign(node: _typing.Any, segment: _typing.Any, value: _typing.Any) -> None:
    """Write ``value`` at a single segment of ``node``."""
    if isinstance(node, _abc.Mapping):
        # FrozenMapping raises ImmutabilityViolation here
        node[segment] = value  # type: ignore[index]
        return
    if _is_sequence(node):
        index = as_index(segment)
        if index is None:
            raise TypeError(
                f"Sequence segments must be non-negative indices, got {segment!r}"
            )
        if isinstance(node, _abc.MutableSequence) and index >= len(node):
            node.extend([None] * (index - len(node)))
            node.append(value)
            return
        node[index] = value  # type: ignore[index]
        return
    if isinstance(node, _SCALARS):
        raise TypeError(f"Cannot assign into {type(node).__name__} value")
    if not _is_attribute(segment):
        raise TypeError(f"Cannot assign attribute {segment!r} on {type(node).__name__}")
    setattr(node, segment, value)


def set_path(root: _typing.Any, path: _types.Path, value: _typing.Any) -> None:
    """
    Set ``value`` at ``path``, creating intermediate nodes as needed.

    Missing or scalar intermediates are replaced with a new list when the
    next segment is an index, otherwise with a new dict.

    Raises:
        ValueError: If ``path`` is empty.
        ImmutabilityViolation: If the write reaches a frozen node.
        TypeError: If a segment cannot be written on the node it targets.
    """
    if not path:
        raise ValueError("Cannot set a value at an empty path")

    node = root
    for position, segment in enumerate(path[:-1]):
        current = child(node, segment)
        if current is MISSING or isinstance(current, _SCALARS):
            current = [] if as_index(path[position + 1]) is not None else {}
            _assign(node, segment, current)
        node = current

    _assign(node, path[-1], value)


def unset_path(root: _typing.Any, path: _types.Path) -> bool:
    """
    Remove the entry at ``path`` if present.

    Returns:
        True if something was removed, False if the path was absent.

    Raises:
        ImmutabilityViolation: If the deletion reaches a frozen node, even
            when the key itself is absent from it.
    """
    if not path:
        return False

    node = root
    for segment in path[:-1]:
        current = child(node, segment)
        if current is MISSING:
            _frozen.ensure_mutable(node)
            return False
        node = current

    final = path[-1]
    if isinstance(node, _abc.Mapping):
        if _frozen.is_frozen(node) or child(node, final) is not MISSING:
            del node[final]  # type: ignore[attr-defined]
            return True
        return False
    if _is_sequence(node):
        index = as_index(final)
        if index is not None and index < len(node):
            del node[index]  # type: ignore[attr-defined]
            return True
        return False
    if not isinstance(node, _SCALARS) and child(node, final) is not MISSING:
        delattr(node, final)
        return True
    return False
