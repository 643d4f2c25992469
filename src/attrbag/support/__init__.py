"""
Support utilities for Bag: deep freeze, nested paths, and selectors.

Example:
    >>> from attrbag.support import freeze, get_path
    >>> frozen = freeze({"a": {"b": 1}})
    >>> get_path(frozen, ("a", "b"))
    1
"""

from attrbag.support._frozen import (
    FrozenMapping,
    NodeKind,
    ensure_mutable,
    freeze,
    is_frozen,
    node_kind,
    unfreeze,
)
from attrbag.support._paths import (
    MISSING,
    get_path,
    has_path,
    parse_path,
    set_path,
    to_path,
    unset_path,
)
from attrbag.support._selectors import (
    Identity,
    PartialMatch,
    PathEquals,
    PathValue,
    Predicate,
    Selector,
    apply_selector,
    as_selector,
    is_match,
)
from attrbag.support._types import Iteratee, KeyPath, Path

__all__ = [
    "MISSING",
    "FrozenMapping",
    "Identity",
    "Iteratee",
    "KeyPath",
    "NodeKind",
    "PartialMatch",
    "Path",
    "PathEquals",
    "PathValue",
    "Predicate",
    "Selector",
    "apply_selector",
    "as_selector",
    "ensure_mutable",
    "freeze",
    "get_path",
    "has_path",
    "is_frozen",
    "is_match",
    "node_kind",
    "parse_path",
    "set_path",
    "to_path",
    "unfreeze",
    "unset_path",
]
