"""
Selector dataclasses for pluck() and filter().

A selector extracts something from an item (pluck) or decides whether an
item is kept (filter). Callers may pass shorthand forms, which
as_selector() resolves to one of the dataclasses below:

    >>> as_selector("profile.name")
    PathValue(path='profile.name')
    >>> as_selector(("active", True))
    PathEquals(path='active', value=True)
    >>> as_selector({"role": "admin"})
    PartialMatch(pattern={'role': 'admin'})
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import typing as _typing

import attrbag.constants as constants
import attrbag.support._paths as _paths
import attrbag.support._types as _types


@_dataclasses.dataclass(frozen=True, slots=True)
class Selector:
    """Base class for selectors."""

    pass


@_dataclasses.dataclass(frozen=True, slots=True)
class Identity(Selector):
    """Select the item itself."""

    pass


@_dataclasses.dataclass(frozen=True, slots=True)
class Predicate(Selector):
    """Call a function with (item, key)."""

    fn: _types.Iteratee


@_dataclasses.dataclass(frozen=True, slots=True)
class PathValue(Selector):
    """Select the value at a path inside the item."""

    path: _types.KeyPath


@_dataclasses.dataclass(frozen=True, slots=True)
class PathEquals(Selector):
    """Check that the value at a path inside the item equals ``value``."""

    path: _types.KeyPath
    value: _typing.Any


@_dataclasses.dataclass(frozen=True, slots=True)
class PartialMatch(Selector):
    """Check that the item contains every key/value of ``pattern``."""

    pattern: _abc.Mapping[str, _typing.Any]


def as_selector(selector: _typing.Any) -> Selector:
    """
    Resolve a selector shorthand.

    Args:
        selector: A Selector, None, a path string, a (path, value) pair,
            a mapping, or a callable.

    Returns:
        The matching Selector instance.

    Raises:
        TypeError: If ``selector`` has none of the accepted forms.
    """
    if isinstance(selector, Selector):
        return selector
    if selector is None:
        return Identity()
    if isinstance(selector, str):
        return PathValue(selector)
    if isinstance(selector, (tuple, list)) and len(selector) == 2:
        return PathEquals(selector[0], selector[1])
    if isinstance(selector, _abc.Mapping):
        return PartialMatch(selector)
    if callable(selector):
        return Predicate(selector)
    raise TypeError(f"Unsupported selector type: {type(selector).__name__}")


def is_match(item: _typing.Any, pattern: _typing.Any) -> bool:
    """
    Partial deep comparison of ``item`` against ``pattern``.

    - Mapping pattern: every key must resolve in ``item`` and match
    - List/tuple pattern: every element must match some element of ``item``
    - Anything else: equality
    """
    if isinstance(pattern, _abc.Mapping):
        for key, expected in pattern.items():
            actual = _paths.child(item, key)
            if actual is _paths.MISSING or not is_match(actual, expected):
                return False
        return True
    if isinstance(pattern, (list, tuple)):
        if not isinstance(item, (list, tuple)):
            return False
        return all(
            any(is_match(candidate, expected) for candidate in item)
            for expected in pattern
        )
    return bool(item == pattern)


def apply_selector(
    selector: Selector,
    item: _typing.Any,
    key: _typing.Any,
    separator: str = constants.DEFAULT_PATH_SEPARATOR,
) -> _typing.Any:
    """
    Apply a resolved selector to one item.

    Args:
        selector: The selector to apply.
        item: The item (a top-level value of the bag).
        key: The item's key, passed to predicates.
        separator: Separator used to parse path selectors.

    Returns:
        The selected value (pluck) or a truthy/falsy verdict (filter).
    """
    if isinstance(selector, Identity):
        return item
    if isinstance(selector, Predicate):
        return selector.fn(item, key)
    if isinstance(selector, PathValue):
        return _paths.get_path(item, _paths.to_path(item, selector.path, separator))
    if isinstance(selector, PathEquals):
        path = _paths.to_path(item, selector.path, separator)
        actual = _paths.get_path(item, path, _paths.MISSING)
        return actual is not _paths.MISSING and bool(actual == selector.value)
    if isinstance(selector, PartialMatch):
        return is_match(item, selector.pattern)
    raise TypeError(f"Unknown Selector type: {type(selector).__name__}")
