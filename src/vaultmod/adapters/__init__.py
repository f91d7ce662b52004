"""Concrete implementations of the core ports."""

from .buffer_editor import BufferEditor
from .fs_vault import FsVault
from .settings_store import Settings, SettingsStore

__all__ = [
    "BufferEditor",
    "FsVault",
    "Settings",
    "SettingsStore",
]
