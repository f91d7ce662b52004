"""Configuration loader for vaultmod.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .core.rewriter import MAX_INPUT_LENGTH


@dataclass
class VaultConfig:
    """Vault-specific configuration."""
    root: Path
    settings: Path


@dataclass
class TimingConfig:
    """Delays for deferred work, in milliseconds."""
    keystroke_delay_ms: int = 10
    phantom_window_ms: int = 1000
    fold_delay_ms: int = 100


@dataclass
class RewriteConfig:
    """Block-reference rewrite limits."""
    max_input_length: int = MAX_INPUT_LENGTH


@dataclass
class VaultModConfig:
    """Complete vaultmod configuration."""
    vault: VaultConfig
    timing: TimingConfig
    rewrite: RewriteConfig


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> VaultModConfig:
    """
    Load configuration from vaultmod.toml.
    
    Search order:
    1. config_path (if provided)
    2. cwd/vaultmod.toml
    3. vault_path/vaultmod.toml
    
    Args:
        config_path: Explicit path to config file
        vault_path: Vault root path for fallback search
    
    Returns:
        VaultModConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "vaultmod.toml")
    if vault_path:
        search_paths.append(vault_path / "vaultmod.toml")
    
    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break
    
    # Parse vault config; an explicit vault path wins over the file
    vault_data = toml_data.get("vault", {})
    vault_root = Path(vault_path or vault_data.get("root", "./vault"))
    settings_path = Path(vault_data.get("settings", vault_root / ".vaultmod" / "settings.yaml"))
    
    vault_config = VaultConfig(
        root=vault_root,
        settings=settings_path,
    )
    
    timing_data = toml_data.get("timing", {})
    timing_config = TimingConfig(
        keystroke_delay_ms=int(timing_data.get("keystroke_delay_ms", 10)),
        phantom_window_ms=int(timing_data.get("phantom_window_ms", 1000)),
        fold_delay_ms=int(timing_data.get("fold_delay_ms", 100)),
    )
    
    rewrite_data = toml_data.get("rewrite", {})
    rewrite_config = RewriteConfig(
        max_input_length=int(rewrite_data.get("max_input_length", MAX_INPUT_LENGTH))
    )
    
    return VaultModConfig(
        vault=vault_config,
        timing=timing_config,
        rewrite=rewrite_config,
    )
