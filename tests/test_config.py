"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

from vaultmod.config import load_config
from vaultmod.core.rewriter import MAX_INPUT_LENGTH


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config()
        finally:
            os.chdir(orig_cwd)

    assert config.vault.root == Path("./vault")
    assert config.vault.settings == Path("./vault") / ".vaultmod" / "settings.yaml"
    assert config.timing.keystroke_delay_ms == 10
    assert config.timing.phantom_window_ms == 1000
    assert config.timing.fold_delay_ms == 100
    assert config.rewrite.max_input_length == MAX_INPUT_LENGTH


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "vaultmod.toml"
        config_path.write_text("""
[vault]
root = "my-vault"
settings = "prefs.yaml"

[timing]
keystroke_delay_ms = 0
phantom_window_ms = 2500
fold_delay_ms = 50

[rewrite]
max_input_length = 4096
""")

        config = load_config(config_path=config_path)

        assert config.vault.root == Path("my-vault")
        assert config.vault.settings == Path("prefs.yaml")
        assert config.timing.keystroke_delay_ms == 0
        assert config.timing.phantom_window_ms == 2500
        assert config.timing.fold_delay_ms == 50
        assert config.rewrite.max_input_length == 4096


def test_load_config_search_vault():
    """Test config search in vault directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        vault_path = Path(tmpdir) / "vault"
        vault_path.mkdir()
        (vault_path / "vaultmod.toml").write_text("""
[timing]
fold_delay_ms = 250
""")

        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config(vault_path=vault_path)
        finally:
            os.chdir(orig_cwd)

        assert config.vault.root == vault_path
        assert config.vault.settings == vault_path / ".vaultmod" / "settings.yaml"
        assert config.timing.fold_delay_ms == 250
