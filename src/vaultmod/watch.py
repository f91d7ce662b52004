"""Watch mode for vaultmod - alias block references as notes are saved."""

import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .core.rewriter import MAX_INPUT_LENGTH
from .features.block_alias import BatchResult, process_files

logger = logging.getLogger(__name__)


class DebounceHandler(FileSystemEventHandler):
    """File system event handler with debouncing."""

    def __init__(
        self,
        vault_path: Path,
        on_batch: Callable[[set[Path]], Any],
        debounce_ms: int = 150,
    ):
        super().__init__()
        self.vault_path = vault_path
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms

        self.changed: set[Path] = set()
        self.last_event_time = 0.0

    def _should_skip(self, path: Path) -> bool:
        """Check if file should be skipped."""
        name = path.name

        # Skip hidden files
        if name.startswith("."):
            return True

        # Skip temp/swap files
        if name.endswith("~") or name.endswith(".swp") or name.endswith(".tmp"):
            return True

        # Only process .md files
        if not name.endswith(".md"):
            return True

        return False

    def _track(self, path: Path) -> None:
        if self._should_skip(path):
            return
        self.changed.add(path)
        self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._track(Path(str(event.src_path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._track(Path(str(event.src_path)))

    def on_moved(self, event: FileSystemEvent) -> None:
        # Atomic saves land as a move onto the note
        if event.is_directory:
            return
        self._track(Path(str(event.dest_path)))

    def check_and_flush(self) -> None:
        """Check if debounce period has elapsed and flush if so."""
        if not self.changed:
            return

        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        """Process accumulated events."""
        if not self.changed:
            return

        changed = set(self.changed)
        self.changed.clear()

        if self.on_batch:
            self.on_batch(changed)


def rewrite_batch(paths: set[Path], max_length: int = MAX_INPUT_LENGTH) -> BatchResult:
    """Alias block references in each existing file; files that can't be read are reported."""
    existing = [path for path in sorted(paths) if path.is_file()]
    batch = process_files(existing, dry_run=False, max_length=max_length)
    batch.counts = {path: count for path, count in batch.counts.items() if count}
    return batch


def watch_vault(
    vault_path: Path,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
    max_length: int = MAX_INPUT_LENGTH,
) -> int:
    """
    Watch vault directory and alias block references in changed notes.

    Rewriting is idempotent, so the watcher's own writes settle after one
    extra event with nothing left to change.

    Args:
        vault_path: Path to vault directory
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Output JSON events instead of human-readable
        max_length: Files longer than this are left alone

    Returns:
        Exit code
    """
    if not vault_path.exists():
        print(f"Error: Vault not found: {vault_path}", file=sys.stderr)
        return 1

    running = True

    def handle_batch(changed: set[Path]) -> None:
        """Handle a batch of changes."""
        start_time = time.time()

        try:
            batch = rewrite_batch(changed, max_length)
            counts = batch.counts
            duration_ms = int((time.time() - start_time) * 1000)

            if json_output:
                event = {
                    "type": "batch",
                    "rewritten": counts,
                    "failed": batch.failed,
                    "scanned": len(changed),
                    "duration_ms": duration_ms,
                }
                print(json.dumps(event), flush=True)
            elif not quiet and counts:
                total = sum(counts.values())
                print(
                    f"Aliased {total} block reference(s) in {len(counts)} note(s) ({duration_ms}ms)",
                    flush=True,
                )
            if not quiet:
                for path, error in batch.failed.items():
                    print(f"Skipped {path}: {error}", file=sys.stderr, flush=True)
        except Exception as e:
            logger.exception("Watch batch failed")
            if json_output:
                print(json.dumps({"type": "error", "message": str(e)}), flush=True)
            else:
                print(f"Error: {e}", file=sys.stderr, flush=True)

    # Set up signal handlers for graceful shutdown
    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    handler = DebounceHandler(vault_path, handle_batch, debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(vault_path), recursive=True)

    if not quiet and not json_output:
        print(f"Watching {vault_path} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()

    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        # Flush any pending events before shutdown
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
