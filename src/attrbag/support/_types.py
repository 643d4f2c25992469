"""
Type aliases for the support package.

- Path: Tuple of segments representing a nested key path
- KeyPath: Anything a caller may pass where a path is expected
- Iteratee: Callback receiving (value, key) for map/each style helpers
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

# Parsed path
# Example: ("config", "model", "name") represents config.model.name
Path: _typing.TypeAlias = tuple[str, ...]

# Unparsed path as accepted by Bag methods
# None and "" both address the whole tree
KeyPath: _typing.TypeAlias = str | _abc.Sequence[str] | None

# Callback for map/each: receives (value, key-or-index)
Iteratee: _typing.TypeAlias = _abc.Callable[[_typing.Any, _typing.Any], _typing.Any]
