"""vaultmod - block-reference aliasing and note-creation guards for a Markdown vault."""

__version__ = "0.1.0"
