from typing import Any, Callable, Protocol

from .model import Cursor


class Editor(Protocol):
    """
    Text buffer of the active note. Lines are zero-based.
    """

    def get_line(self, line: int) -> str:
        pass

    def set_line(self, line: int, text: str) -> None:
        pass

    def get_cursor(self) -> Cursor:
        pass

    def set_cursor(self, cursor: Cursor) -> None:
        pass

    def replace_range(self, text: str, at: Cursor) -> None:
        pass

    def get_value(self) -> str:
        pass

    def set_value(self, text: str) -> None:
        pass


class Notifier(Protocol):
    """
    Transient user-visible messages.
    """

    def notify(self, message: str) -> None:
        pass


class Confirmer(Protocol):
    """
    Ask the user whether a new note should be created.
    """

    def confirm(self, file_name: str) -> bool:
        pass


class Workspace(Protocol):
    """
    The host's view of which note is open and what commands it knows.
    """

    def active_note(self) -> str | None:
        pass

    def read_note(self, path: str) -> str | None:
        pass

    def execute_command(self, command_id: str) -> bool:
        pass


class LinkResolver(Protocol):
    """
    Resolve a link path to a note path; None for phantom links.
    """

    def resolve(self, linkpath: str) -> str | None:
        pass


class NoteExists(Protocol):
    def exists(self, path: str) -> bool:
        pass


class DeferredTask(Protocol):
    done: bool
    cancelled: bool

    def cancel(self) -> None:
        pass


class Scheduler(Protocol):
    """
    Run a callback once after a delay. Effects scheduled here must be
    idempotent; a task may be cancelled before it runs.
    """

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> DeferredTask:
        pass

    def cancel_all(self) -> None:
        pass


CreateNext = Callable[[str, str], Any]
# (path, data, create_next) -> whatever the vault's create returns
CreateMiddleware = Callable[[str, str, CreateNext], Any]
