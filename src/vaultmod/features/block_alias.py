"""Block reference aliasing: space-after-link trigger and manual command."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..core.model import Cursor, KeyEvent, RewriteResult
from ..core.ports import Editor, Notifier, Scheduler
from ..core.rewriter import BLOCK_MARKER, MAX_INPUT_LENGTH, rewrite_document, rewrite_line

logger = logging.getLogger(__name__)

SPACE = "Space"


def should_trigger(line: str, cursor_ch: int) -> bool:
    """A space typed here may complete a block reference."""
    before_cursor = line[:cursor_ch]
    return before_cursor.endswith("]]") and BLOCK_MARKER in before_cursor


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class BlockAliasFeature:
    def __init__(
        self,
        notifier: Notifier,
        scheduler: Scheduler,
        delay_ms: int = 10,
        max_length: int = MAX_INPUT_LENGTH,
    ):
        self.notifier = notifier
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.max_length = max_length
        self.enabled = True

    def handle_key(self, event: KeyEvent, editor: Editor) -> bool:
        """Swallow a space typed right after a block reference and rewrite the line.

        The rewrite runs as a deferred task; if it changes nothing the space
        is inserted where it was typed. Returns True if the key was taken.
        """
        if not self.enabled or event.code != SPACE:
            return False

        cursor = editor.get_cursor()
        line = editor.get_line(cursor.line)
        if not should_trigger(line, cursor.ch):
            return False

        event.prevent_default()
        self.scheduler.call_later(self.delay_ms, lambda: self._rewrite_at(editor, cursor))
        return True

    def _rewrite_at(self, editor: Editor, cursor: Cursor) -> None:
        current = editor.get_line(cursor.line)
        processed, count = rewrite_line(current, self.max_length)
        if count and processed != current:
            editor.set_line(cursor.line, processed)
            editor.set_cursor(Cursor(cursor.line, len(processed)))
            self.notifier.notify("✅ Added dash and alias to block reference")
        else:
            editor.replace_range(" ", cursor)
            editor.set_cursor(Cursor(cursor.line, cursor.ch + 1))

    def process_document(self, editor: Editor) -> int:
        """Manual command: alias every block reference in the buffer.

        Returns the number of links rewritten. Host errors are reported
        through the notifier, never raised.
        """
        if not self.enabled:
            self.notifier.notify("Block Reference Alias feature is disabled")
            return 0

        try:
            content = editor.get_value()

            if not content.strip():
                self.notifier.notify("ℹ️ Document is empty")
                return 0

            if BLOCK_MARKER not in content:
                self.notifier.notify("ℹ️ No block reference wikilinks found")
                return 0

            processed, count = rewrite_document(content, self.max_length)

            if count > 0:
                editor.set_value(processed)
                self.notifier.notify(
                    f"✅ Added dashes and aliases to {plural(count, 'block reference')}"
                )
            else:
                self.notifier.notify("ℹ️ No block references needed aliases")
            return count
        except Exception as e:
            logger.exception("Error processing document")
            self.notifier.notify(f"❌ Error: {e}")
            return 0


def process_file(
    file_path: Path,
    dry_run: bool = True,
    max_length: int = MAX_INPUT_LENGTH,
) -> RewriteResult:
    """Alias block references in a note file.

    Args:
        file_path: Path to the note file
        dry_run: If True, don't write changes
        max_length: Files longer than this are left alone

    Returns:
        RewriteResult for the file contents
    """
    raw_text = file_path.read_text(encoding="utf-8")
    result = rewrite_document(raw_text, max_length)

    if not dry_run and result.count:
        # Atomic write using temp file
        tmp_path = file_path.with_suffix(".md.tmp")
        try:
            tmp_path.write_text(result.text, encoding="utf-8")
            tmp_path.replace(file_path)
        except Exception:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

    return result


@dataclass
class BatchResult:
    """Outcome of rewriting several note files."""

    counts: dict[str, int] = field(default_factory=dict)  # links rewritten per file
    failed: dict[str, str] = field(default_factory=dict)  # path -> error message

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def process_files(
    paths: list[Path],
    dry_run: bool = True,
    max_length: int = MAX_INPUT_LENGTH,
) -> BatchResult:
    """Run process_file over each path; unreadable files are recorded and skipped."""
    batch = BatchResult()
    for path in paths:
        try:
            result = process_file(path, dry_run=dry_run, max_length=max_length)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path, e)
            batch.failed[str(path)] = str(e)
            continue
        batch.counts[str(path)] = result.count
    return batch
