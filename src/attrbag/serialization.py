"""
YAML text conversion for bag attribute trees.

Provides:
- BagDumper: SafeDumper that also represents FrozenMapping and pydantic models
- dump(): tree (or Bag) to YAML text
- load(): YAML text to a plain dict

Only strings are handled here. Reading and writing files is left to the
caller.

Example:
    >>> dump({"server": {"port": 8080}})
    'server:\\n  port: 8080\\n'
    >>> load("server:\\n  port: 8080\\n")
    {'server': {'port': 8080}}
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import attrbag.errors as errors
import attrbag.support as support


class BagDumper(_yaml.SafeDumper):
    """
    YAML dumper for bag attribute trees.

    Extends SafeDumper with representers for:
    - FrozenMapping (guarded trees dump like plain dicts)
    - pydantic BaseModel (values wrapped by a pydantic attribute model)

    Bag registers its own representer in attrbag.bag.
    """

    pass


def _frozen_mapping_representer(
    dumper: BagDumper,
    data: support.FrozenMapping,
) -> _yaml.Node:
    """Represent a FrozenMapping as a regular YAML mapping."""
    return dumper.represent_dict(dict(data))


def _pydantic_model_representer(
    dumper: BagDumper,
    data: _pydantic.BaseModel,
) -> _yaml.Node:
    """Represent a pydantic model by its python-mode dump."""
    return dumper.represent_data(data.model_dump(mode="python"))


BagDumper.add_representer(support.FrozenMapping, _frozen_mapping_representer)
BagDumper.add_multi_representer(_pydantic.BaseModel, _pydantic_model_representer)


def dump(value: _typing.Any) -> str:
    """
    Render a tree as YAML text.

    Key order is preserved. Values that YAML cannot represent safely
    (arbitrary class instances) raise yaml.representer.RepresenterError.

    Args:
        value: A Bag, a mapping, or any plain-data tree.

    Returns:
        YAML document as a string.
    """
    return _yaml.dump(value, Dumper=BagDumper, sort_keys=False, allow_unicode=True)


def load(text: str) -> dict[str, _typing.Any]:
    """
    Parse YAML text into a plain dict.

    Args:
        text: YAML document. Empty text loads as an empty mapping.

    Returns:
        The top-level mapping.

    Raises:
        SerializationError: If the text is not valid YAML or its top level
            is not a mapping.
    """
    try:
        data = _yaml.safe_load(text)
    except _yaml.YAMLError as e:
        raise errors.SerializationError(f"Invalid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, _abc.Mapping):
        raise errors.SerializationError(
            f"YAML must contain a mapping at the top level, got {type(data).__name__}"
        )
    return dict(data)
