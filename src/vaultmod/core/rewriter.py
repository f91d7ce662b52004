"""Block-reference alias rewriting.

A block reference is a wikilink whose anchor follows the ``#‣`` marker
(``#`` + U+2023 TRIANGULAR BULLET)::

    [[Note A#‣some text ABCD]]

When the anchor ends in a block identifier (4+ characters from A-Z0-9) the
link is rewritten into a dashed, aliased form::

     - [[Note A#‣some text ABCD|ABCD]]

Links that already carry an alias are left alone, which also makes the
rewrite idempotent.
"""

import logging
import re

from .model import RewriteResult

logger = logging.getLogger(__name__)

BLOCK_MARKER = "#‣"

# Inputs above this size are returned untouched.
MAX_INPUT_LENGTH = 1_000_000

# The candidate link content after "[[": one maximal run without "|", "]" or a
# newline, so a link never spans lines and never includes an alias. The run is
# never backtracked into, which keeps the scan linear.
_LINK_OPEN = re.compile(r"\[\[([^|\]\n]*)")
_BLOCK_ID_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")


def block_identifier(link_content: str) -> str | None:
    """Return the block identifier at the end of ``target#‣anchor``, if any."""
    last_marker = link_content.rfind(BLOCK_MARKER)
    if last_marker == -1:
        return None
    tail = link_content[last_marker + len(BLOCK_MARKER):]
    start = len(tail)
    while start > 0 and tail[start - 1] in _BLOCK_ID_CHARS:
        start -= 1
    block_id = tail[start:]
    return block_id if len(block_id) >= 4 else None


def is_block_link(link_content: str) -> bool:
    """True for ``target#‣anchor`` with a non-empty target and anchor."""
    marker = link_content.find(BLOCK_MARKER, 1)
    return marker != -1 and marker + len(BLOCK_MARKER) < len(link_content)


def _rewrite(text: str, max_length: int) -> RewriteResult:
    if not isinstance(text, str):
        return RewriteResult(text, 0)
    if len(text) > max_length:
        logger.warning("Skipping block reference rewrite: %d chars exceeds limit of %d",
                       len(text), max_length)
        return RewriteResult(text, 0)
    if BLOCK_MARKER not in text:
        return RewriteResult(text, 0)

    try:
        out: list[str] = []
        count = 0
        pos = 0
        done = 0
        while True:
            m = _LINK_OPEN.search(text, pos)
            if m is None:
                break
            link_content = m.group(1)
            end = m.end()
            # A later "[[" inside the same run only sees a suffix of it, so
            # when this one fails they all do.
            if not text.startswith("]]", end) or not is_block_link(link_content):
                pos = max(end, m.start() + 1)
                continue
            block_id = block_identifier(link_content)
            if block_id is not None:
                out.append(text[done:m.start()])
                out.append(f" - [[{link_content}|{block_id}]]")
                done = end + 2
                count += 1
            pos = end + 2
        out.append(text[done:])
    except Exception:
        logger.exception("Error rewriting block references")
        return RewriteResult(text, 0)
    return RewriteResult("".join(out), count)


def rewrite_line(line: str, max_length: int = MAX_INPUT_LENGTH) -> RewriteResult:
    """Add a dash and an alias to every unaliased block reference in a line.

    Args:
        line: A single line of text
        max_length: Lines longer than this are returned unchanged

    Returns:
        RewriteResult with the rewritten line and the number of links rewritten.
        Never raises; on any failure the line comes back unchanged with count 0.
    """
    return _rewrite(line, max_length)


def rewrite_document(text: str, max_length: int = MAX_INPUT_LENGTH) -> RewriteResult:
    """Apply the block-reference rewrite to a whole document in one pass.

    Returns:
        RewriteResult with the rewritten document and the total number of
        links rewritten. Never raises.
    """
    return _rewrite(text, max_length)
