"""
Shared constants for attrbag.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Path syntax
DEFAULT_PATH_SEPARATOR = "."
"""Default separator between path segments ("a.b.c")."""

RESERVED_PATH_CHARACTERS = frozenset("[]")
"""Characters that can never be used as a path separator.

Brackets are reserved for index segments such as ``items[0]``. Digits
and whitespace are rejected separately by BagSettings.
"""

# Binding defaults
DEFAULT_BIND_RECEIVER = True
"""Whether Bag.call() passes the parent node to plain functions."""

DEFAULT_BIND_INCLUDED_FUNCTIONS = True
"""Whether Bag.include() binds plain functions to the bag as methods."""

# Environment
ENV_PREFIX = "ATTRBAG_"
"""Prefix for environment variables read by BagSettings."""
