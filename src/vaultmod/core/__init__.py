"""Host-agnostic core: block-reference rewriting, value types and ports."""

from .model import Cursor, KeyEvent, LinkClick, RewriteResult
from .rewriter import BLOCK_MARKER, rewrite_document, rewrite_line

__all__ = [
    "BLOCK_MARKER",
    "Cursor",
    "KeyEvent",
    "LinkClick",
    "RewriteResult",
    "rewrite_document",
    "rewrite_line",
]
