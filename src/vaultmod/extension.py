"""Wiring of vaultmod features to a host editor."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .adapters.settings_store import Settings, SettingsStore
from .config import VaultModConfig
from .core.model import KeyEvent, LinkClick
from .core.ports import Confirmer, CreateMiddleware, Editor, Notifier, Scheduler, Workspace
from .core.scheduler import TaskGroup
from .features.block_alias import BlockAliasFeature
from .features.creation_guard import CreationGuard, PhantomLinkTracker
from .features.properties_fold import FoldCache, PropertiesFolder

logger = logging.getLogger(__name__)


class HostVault(Protocol):
    def exists(self, path: str) -> bool:
        pass

    def resolve(self, linkpath: str) -> str | None:
        pass

    def register_create_middleware(self, middleware: CreateMiddleware) -> Any:
        pass

    def unregister_create_middleware(self, middleware: CreateMiddleware) -> None:
        pass


@dataclass
class Host:
    """Everything the extension needs from the editor it runs in."""
    vault: HostVault
    notifier: Notifier
    confirmer: Confirmer
    workspace: Workspace
    scheduler: Scheduler


class Extension:
    def __init__(self, host: Host, store: SettingsStore, config: VaultModConfig):
        self.host = host
        self.store = store
        self.config = config
        self.settings = Settings()

        # Deferred work of this extension only
        self.tasks = TaskGroup(host.scheduler)

        timing = config.timing
        self.block_alias = BlockAliasFeature(
            host.notifier,
            self.tasks,
            delay_ms=timing.keystroke_delay_ms,
            max_length=config.rewrite.max_input_length,
        )
        self.block_alias.enabled = False
        self.tracker = PhantomLinkTracker(
            host.vault, self.tasks, window_ms=timing.phantom_window_ms
        )
        self.guard = CreationGuard(
            host.vault,
            host.confirmer,
            host.notifier,
            self.tracker,
            confirm_all=lambda: self.settings.confirm_all_new_notes,
            confirm_phantom_only=lambda: self.settings.confirm_phantom_notes_only,
        )
        self.fold_cache = FoldCache()
        self.folder = PropertiesFolder(
            host.workspace, self.tasks, self.fold_cache, delay_ms=timing.fold_delay_ms
        )
        self.guard_registered = False
        self.folding_enabled = False
        self.loaded = False

    def load(self, announce: bool = True) -> bool:
        try:
            self.settings = self.store.load()
            self.update_feature_states()
            self.loaded = True
            if announce:
                self.host.notifier.notify("vaultmod loaded")
            return True
        except Exception:
            logger.exception("Error loading vaultmod")
            self.host.notifier.notify("Error loading vaultmod")
            return False

    def save_settings(self) -> None:
        self.store.save(self.settings)

    def set_setting(self, name: str, value: bool) -> None:
        """Change one feature toggle, persist it and re-apply feature states."""
        self.settings.set(name, value)
        self.save_settings()
        self.update_feature_states()

    def update_feature_states(self) -> None:
        self._update_block_alias()
        self._update_creation_guard()
        self._update_properties_fold()

    def _update_block_alias(self) -> None:
        self.block_alias.enabled = self.settings.block_reference_alias

    def _update_creation_guard(self) -> None:
        self._unregister_guard()
        if self.settings.confirm_all_new_notes or self.settings.confirm_phantom_notes_only:
            self.host.vault.register_create_middleware(self.guard)
            self.guard_registered = True

    def _unregister_guard(self) -> None:
        if self.guard_registered:
            self.host.vault.unregister_create_middleware(self.guard)
            self.guard_registered = False

    def _update_properties_fold(self) -> None:
        # Toggling the feature starts a fresh session
        self.fold_cache.clear()
        self.folding_enabled = self.settings.auto_hide_properties

    # Host events

    def on_key(self, event: KeyEvent, editor: Editor) -> bool:
        return self.block_alias.handle_key(event, editor)

    def on_link_click(self, click: LinkClick) -> bool:
        if not self.guard_registered:
            return False
        return self.tracker.on_link_click(click)

    def on_active_note_change(self, path: str | None) -> bool:
        if not self.folding_enabled:
            return False
        return self.folder.on_active_note_change(path)

    def run_manual_command(self, editor: Editor) -> int:
        """Process Block References (Manual)."""
        return self.block_alias.process_document(editor)

    def unload(self) -> None:
        try:
            self.block_alias.enabled = False
            self.folding_enabled = False
            self._unregister_guard()
            self.tracker.clear()
            self.tasks.cancel_all()
            self.fold_cache.clear()
            self.loaded = False
        except Exception:
            logger.exception("Error unloading vaultmod")
