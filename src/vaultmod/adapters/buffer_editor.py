from ..core.model import Cursor


class BufferEditor:
    """In-memory editor buffer; lines split on "\\n"."""

    def __init__(self, text: str = "", cursor: Cursor | None = None):
        self._lines = text.split("\n")
        self._cursor = cursor or Cursor(0, 0)

    def get_line(self, line: int) -> str:
        return self._lines[line]

    def set_line(self, line: int, text: str) -> None:
        self._lines[line] = text

    def get_cursor(self) -> Cursor:
        return self._cursor

    def set_cursor(self, cursor: Cursor) -> None:
        self._cursor = cursor

    def replace_range(self, text: str, at: Cursor) -> None:
        current = self._lines[at.line]
        merged = current[:at.ch] + text + current[at.ch:]
        self._lines[at.line:at.line + 1] = merged.split("\n")

    def get_value(self) -> str:
        return "\n".join(self._lines)

    def set_value(self, text: str) -> None:
        self._lines = text.split("\n")
        last = len(self._lines) - 1
        if self._cursor.line > last:
            self._cursor = Cursor(last, len(self._lines[last]))

    def type_text(self, text: str) -> None:
        """Insert text at the cursor and move the cursor past it."""
        self.replace_range(text, self._cursor)
        self._cursor = Cursor(self._cursor.line, self._cursor.ch + len(text))
