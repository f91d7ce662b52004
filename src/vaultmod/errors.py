"""Exceptions raised by vaultmod host-side operations."""


class VaultModError(Exception):
    """Base class for vaultmod errors."""


class NoteCreationCancelled(VaultModError):
    """The user declined to create a new note."""

    def __init__(self, path: str):
        super().__init__("Note creation cancelled by user")
        self.path = path


class NoteExistsError(VaultModError):
    """A note was created on a path that already exists."""

    def __init__(self, path: str):
        super().__init__(f"Note already exists: {path}")
        self.path = path


class UnknownSettingError(VaultModError):
    """A setting name that the extension does not know."""

    def __init__(self, name: str):
        super().__init__(f"Unknown setting: {name}")
        self.name = name


class NotePathError(VaultModError):
    """A note path that points outside the vault."""

    def __init__(self, path: str):
        super().__init__(f"Note path is outside the vault: {path}")
        self.path = path
