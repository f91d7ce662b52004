"""Confirmation before new notes are created."""

import logging
from pathlib import PurePosixPath
from typing import Any, Callable

from ..core.model import LinkClick
from ..core.ports import Confirmer, CreateNext, DeferredTask, LinkResolver, NoteExists, Notifier, Scheduler
from ..errors import NoteCreationCancelled

logger = logging.getLogger(__name__)


def note_name(path: str) -> str:
    """Display name of a note: last path segment without ".md"."""
    name = PurePosixPath(path).name
    return name[:-3] if name.endswith(".md") else name


class PhantomLinkTracker:
    """
    Remembers that a link to a missing note was just followed, for a short
    window, so creation that follows can be attributed to it.
    """

    def __init__(self, resolver: LinkResolver, scheduler: Scheduler, window_ms: int = 1000):
        self.resolver = resolver
        self.scheduler = scheduler
        self.window_ms = window_ms
        self.active = False
        self._reset: DeferredTask | None = None

    def on_link_click(self, click: LinkClick) -> bool:
        """Record a click; returns True if it was a phantom link."""
        if not click.internal or not click.href:
            return False
        if self.resolver.resolve(click.href) is not None:
            return False

        logger.debug("Phantom link clicked: %s", click.href)
        self.active = True
        if self._reset is not None:
            self._reset.cancel()
        self._reset = self.scheduler.call_later(self.window_ms, self.clear)
        return True

    def clear(self) -> None:
        self.active = False
        if self._reset is not None:
            self._reset.cancel()
            self._reset = None


class CreationGuard:
    """Creation middleware that asks before a new note is written."""

    def __init__(
        self,
        vault: NoteExists,
        confirmer: Confirmer,
        notifier: Notifier,
        tracker: PhantomLinkTracker,
        confirm_all: Callable[[], bool],
        confirm_phantom_only: Callable[[], bool],
    ):
        self.vault = vault
        self.confirmer = confirmer
        self.notifier = notifier
        self.tracker = tracker
        self.confirm_all = confirm_all
        self.confirm_phantom_only = confirm_phantom_only

    def needs_confirmation(self, path: str) -> bool:
        if not path.endswith(".md"):
            return False
        if self.vault.exists(path):
            return False
        if self.confirm_all():
            return True
        return self.confirm_phantom_only() and self.tracker.active

    def __call__(self, path: str, data: str, create_next: CreateNext) -> Any:
        if not self.needs_confirmation(path):
            return create_next(path, data)

        name = note_name(path)
        if not self.confirmer.confirm(name):
            self.notifier.notify("Note creation cancelled")
            raise NoteCreationCancelled(path)

        result = create_next(path, data)
        self.notifier.notify(f"✅ Created note: {name}")
        return result
