"""Fold the properties block the first time a note is opened."""

import logging

from ..core.ports import Scheduler, Workspace

logger = logging.getLogger(__name__)

FOLD_PROPERTIES_COMMAND = "editor:toggle-fold-properties"


def has_properties(content: str) -> bool:
    """True if the note opens with a closed "---" frontmatter block."""
    return content.startswith("---\n") and content.find("\n---\n") > 0


class FoldCache:
    """Notes already handled this session, keyed by vault path."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def mark(self, key: str) -> bool:
        """Add key; False if it was already there."""
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def evict(self, key: str) -> None:
        self._seen.discard(key)

    def clear(self) -> None:
        self._seen.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)


class PropertiesFolder:
    def __init__(
        self,
        workspace: Workspace,
        scheduler: Scheduler,
        cache: FoldCache | None = None,
        delay_ms: int = 100,
    ):
        self.workspace = workspace
        self.scheduler = scheduler
        self.cache = cache if cache is not None else FoldCache()
        self.delay_ms = delay_ms

    def on_active_note_change(self, path: str | None) -> bool:
        """Schedule a fold for a note seen for the first time. Returns True if scheduled."""
        if not path:
            return False
        if not self.cache.mark(path):
            return False
        self.scheduler.call_later(self.delay_ms, lambda: self._fold(path))
        return True

    def _fold(self, path: str) -> None:
        try:
            # The user may have moved on during the delay
            if self.workspace.active_note() != path:
                return
            content = self.workspace.read_note(path)
            if content and has_properties(content):
                self.workspace.execute_command(FOLD_PROPERTIES_COMMAND)
        except Exception:
            # The fold command is not available in every view
            logger.debug("Could not fold properties for %s", path, exc_info=True)
