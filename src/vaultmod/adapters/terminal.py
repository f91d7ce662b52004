"""Host adapters for running vaultmod from a terminal."""

import sys


class TerminalNotifier:
    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)
        if not self.quiet:
            print(message, file=sys.stderr)


class TerminalConfirmer:
    """Ask on stdin; assume_yes answers every prompt with yes."""

    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes

    def confirm(self, file_name: str) -> bool:
        if self.assume_yes:
            return True
        try:
            answer = input(f'Do you want to create the note "{file_name}"? [y/N] ')
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")


class HeadlessWorkspace:
    """A workspace with no open note; commands are never available."""

    def active_note(self) -> str | None:
        return None

    def read_note(self, path: str) -> str | None:
        return None

    def execute_command(self, command_id: str) -> bool:
        return False
