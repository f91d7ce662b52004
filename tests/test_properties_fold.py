"""Tests for automatic properties folding."""

import pytest

from vaultmod.features.properties_fold import (
    FOLD_PROPERTIES_COMMAND,
    FoldCache,
    PropertiesFolder,
    has_properties,
)

WITH_PROPS = "---\ntags: [a]\n---\n# Body\n"


@pytest.mark.parametrize("content,expected", [
    (WITH_PROPS, True),
    ("---\n---\nbody", True),
    ("---\na: 1\n---\n", True),
    ("# Title\n---\na: 1\n---\n", False),
    ("---\nunterminated: yes\n", False),
    ("", False),
])
def test_has_properties(content, expected):
    """Test frontmatter detection."""
    assert has_properties(content) is expected


def test_fold_cache():
    """Test the per-session cache operations."""
    cache = FoldCache()
    assert cache.mark("a.md")
    assert not cache.mark("a.md")
    assert "a.md" in cache
    assert len(cache) == 1

    cache.evict("a.md")
    assert "a.md" not in cache
    assert cache.mark("a.md")

    cache.clear()
    assert len(cache) == 0


def test_folds_once_per_session(workspace, scheduler):
    """Test that a note is folded the first time it becomes active."""
    workspace.notes["a.md"] = WITH_PROPS
    workspace.active = "a.md"
    folder = PropertiesFolder(workspace, scheduler, delay_ms=100)

    assert folder.on_active_note_change("a.md")
    assert workspace.commands == []
    scheduler.advance(100)
    assert workspace.commands == [FOLD_PROPERTIES_COMMAND]

    assert not folder.on_active_note_change("a.md")
    scheduler.advance(100)
    assert workspace.commands == [FOLD_PROPERTIES_COMMAND]


def test_skips_when_no_longer_active(workspace, scheduler):
    """Test that switching away before the delay cancels the fold."""
    workspace.notes["a.md"] = WITH_PROPS
    workspace.active = "a.md"
    folder = PropertiesFolder(workspace, scheduler, delay_ms=100)

    folder.on_active_note_change("a.md")
    workspace.active = "b.md"
    scheduler.advance(100)
    assert workspace.commands == []
    # Still counted as seen
    assert "a.md" in folder.cache


def test_skips_notes_without_properties(workspace, scheduler):
    """Test that notes without frontmatter are left alone."""
    workspace.notes["plain.md"] = "# Just a body\n"
    workspace.active = "plain.md"
    folder = PropertiesFolder(workspace, scheduler)

    folder.on_active_note_change("plain.md")
    scheduler.advance(100)
    assert workspace.commands == []


def test_ignores_empty_path(workspace, scheduler):
    """Test views without a file."""
    folder = PropertiesFolder(workspace, scheduler)
    assert not folder.on_active_note_change(None)
    assert not folder.on_active_note_change("")
    assert scheduler.pending() == 0


def test_command_failure_is_dropped(workspace, scheduler):
    """Test that a missing fold command doesn't escape the deferred task."""
    workspace.notes["a.md"] = WITH_PROPS
    workspace.active = "a.md"
    workspace.fail_commands = True
    folder = PropertiesFolder(workspace, scheduler)

    folder.on_active_note_change("a.md")
    assert scheduler.advance(100) == 1
