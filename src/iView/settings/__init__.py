"""User settings for iView."""

from .manager import SettingsManager, default_cache_dir, default_settings_path
from .schema import DEFAULT_SETTINGS, SETTINGS_SCHEMA, merge_with_defaults

__all__ = [
    "DEFAULT_SETTINGS",
    "SETTINGS_SCHEMA",
    "SettingsManager",
    "default_cache_dir",
    "default_settings_path",
    "merge_with_defaults",
]
