"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with ATTRBAG_ prefix
3. Field defaults (attrbag.constants)

Example:
  ATTRBAG_PATH_SEPARATOR=/
  ATTRBAG_BIND_RECEIVER=false
"""

import functools as _functools

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import attrbag.constants as constants


class BagSettings(_pydantic_settings.BaseSettings):
    """
    attrbag configuration settings.

    All settings can be overridden via environment variables with the
    ATTRBAG_ prefix. Instances are immutable so a single instance can be
    shared by every Bag.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
        frozen=True,
    )

    path_separator: str = _pydantic.Field(
        default=constants.DEFAULT_PATH_SEPARATOR,
        min_length=1,
        max_length=1,
    )
    """Separator between path segments."""

    bind_receiver: bool = constants.DEFAULT_BIND_RECEIVER
    """Pass the parent node as first argument when Bag.call() invokes a plain function."""

    bind_included_functions: bool = constants.DEFAULT_BIND_INCLUDED_FUNCTIONS
    """Bind plain functions passed to Bag.include() as methods of the bag."""

    @_pydantic.field_validator("path_separator")
    @classmethod
    def _validate_path_separator(cls, value: str) -> str:
        """Reject separators that collide with bracket index syntax."""
        if value in constants.RESERVED_PATH_CHARACTERS or value.isspace() or value.isdigit():
            raise ValueError(f"path_separator cannot be {value!r}")
        return value


@_functools.cache
def default_settings() -> BagSettings:
    """
    Return the process-wide default settings.

    Environment variables are read once, on first call. Tests that change
    the environment call ``default_settings.cache_clear()``.
    """
    return BagSettings()
