"""
Shared pytest fixtures for attrbag tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import attrbag
import attrbag.config as config
import attrbag.constants as constants


@_pytest.fixture(autouse=True)
def isolated_settings() -> _typing.Iterator[None]:
    """Run each test without ATTRBAG_* environment variables and with fresh default settings."""
    clean = {k: v for k, v in _os.environ.items() if not k.startswith(constants.ENV_PREFIX)}
    with _mock.patch.dict(_os.environ, clean, clear=True):
        config.default_settings.cache_clear()
        yield
    config.default_settings.cache_clear()


@_pytest.fixture
def bag() -> attrbag.Bag:
    """Unguarded bag with nested mappings, a list and scalars."""
    return attrbag.Bag(
        {
            "a": {"b": 1},
            "name": "demo",
            "servers": [{"host": "alpha", "port": 80}, {"host": "beta", "port": 443}],
        }
    )


@_pytest.fixture
def guarded_bag() -> attrbag.Bag:
    """Same data as ``bag``, guarded at construction."""
    return attrbag.Bag(
        {
            "a": {"b": 1},
            "name": "demo",
            "servers": [{"host": "alpha", "port": 80}, {"host": "beta", "port": 443}],
        },
        guarded=True,
    )


@_pytest.fixture
def users_bag() -> attrbag.Bag:
    """Bag keyed by user id, for query helpers."""
    return attrbag.Bag(
        {
            "u1": {"name": "ada", "role": "admin", "active": True, "tags": ["ops", "dev"]},
            "u2": {"name": "bob", "role": "user", "active": False, "tags": ["dev"]},
            "u3": {"name": "cy", "role": "user", "active": True, "tags": []},
        }
    )
