"""
Configuration module for attrbag.

Uses pydantic-settings for environment variable loading.
"""

from attrbag.config.settings import BagSettings, default_settings

__all__ = ["BagSettings", "default_settings"]
