"""
attrbag - path-addressable attribute containers with a guarded mode.

A Bag stores a nested mapping, reads and writes it with "a.b.c" paths,
and can deep-freeze its data so that only explicit mutate() calls change it.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("attrbag")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from attrbag.bag import AttributeModel, Bag  # noqa: E402
from attrbag.config import BagSettings  # noqa: E402
from attrbag.errors import (  # noqa: E402
    BagError,
    ImmutabilityViolation,
    NotInvocable,
    SerializationError,
)
from attrbag.support import FrozenMapping, freeze, unfreeze  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "AttributeModel",
    "Bag",
    "BagError",
    "BagSettings",
    "FrozenMapping",
    "ImmutabilityViolation",
    "NotInvocable",
    "SerializationError",
    "freeze",
    "unfreeze",
]
