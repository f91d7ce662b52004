import logging
from pathlib import Path
from typing import Iterable

from ..core.ports import CreateMiddleware
from ..errors import NoteExistsError, NotePathError

logger = logging.getLogger(__name__)


class FsVault:
    """
    Vault rooted at a directory. Paths are vault-relative with "/" separators.

    Note creation runs through a middleware chain; middleware is registered
    and unregistered explicitly, outermost first.
    """

    def __init__(self, root: Path):
        self.root = root
        self._middleware: list[CreateMiddleware] = []

    def _path(self, path: str) -> Path:
        p = self.root / path
        # The resolved path must stay under the root
        if not p.resolve().is_relative_to(self.root.resolve()):
            raise NotePathError(path)
        return p

    def exists(self, path: str) -> bool:
        return self._path(path).exists()

    def read(self, path: str) -> str | None:
        p = self._path(path)
        return p.read_text(encoding="utf-8") if p.is_file() else None

    def list_notes(self) -> Iterable[str]:
        if not self.root.exists():
            return []
        for p in sorted(self.root.rglob("*.md")):
            rel = p.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            yield rel.as_posix()

    def resolve(self, linkpath: str) -> str | None:
        """Resolve a wikilink path to a note path, or None for a phantom link."""
        target = linkpath.split("|", 1)[0].split("#", 1)[0].strip()
        if not target:
            return None
        if not target.endswith(".md"):
            target += ".md"
        try:
            if self._path(target).is_file():
                return target
        except NotePathError:
            return None
        name = Path(target).name
        for note in self.list_notes():
            if Path(note).name == name:
                return note
        return None

    # Creation pipeline

    def register_create_middleware(self, middleware: CreateMiddleware) -> CreateMiddleware:
        self._middleware.append(middleware)
        return middleware

    def unregister_create_middleware(self, middleware: CreateMiddleware) -> None:
        try:
            self._middleware.remove(middleware)
        except ValueError:
            pass

    @property
    def middleware(self) -> list[CreateMiddleware]:
        return list(self._middleware)

    def create(self, path: str, data: str = "") -> Path:
        chain = list(self._middleware)

        def call(index: int, path: str, data: str) -> Path:
            if index == len(chain):
                return self._create_file(path, data)
            return chain[index](path, data, lambda p, d: call(index + 1, p, d))

        return call(0, path, data)

    def _create_file(self, path: str, data: str) -> Path:
        p = self._path(path)
        if p.exists():
            raise NoteExistsError(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(data, encoding="utf-8")
        logger.debug("Created %s", p)
        return p
