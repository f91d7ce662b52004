"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_vault import FsVault
from .adapters.settings_store import SettingsStore
from .adapters.terminal import HeadlessWorkspace, TerminalConfirmer, TerminalNotifier
from .config import VaultModConfig, load_config
from .core.scheduler import TimerScheduler
from .extension import Extension, Host


@dataclass
class Runtime:
    """Container for all wired components."""
    vault: FsVault
    store: SettingsStore
    extension: Extension
    notifier: TerminalNotifier
    config: VaultModConfig


def build_runtime(
    vault_path: Path | None = None,
    config_path: Path | None = None,
    quiet: bool = False,
    assume_yes: bool = False,
) -> Runtime:
    """Build and wire all components for a vault."""
    config = load_config(config_path=config_path, vault_path=vault_path)
    
    vault = FsVault(config.vault.root)
    store = SettingsStore(config.vault.settings)
    notifier = TerminalNotifier(quiet=quiet)
    host = Host(
        vault=vault,
        notifier=notifier,
        confirmer=TerminalConfirmer(assume_yes=assume_yes),
        workspace=HeadlessWorkspace(),
        scheduler=TimerScheduler(),
    )
    extension = Extension(host, store, config)
    
    return Runtime(
        vault=vault,
        store=store,
        extension=extension,
        notifier=notifier,
        config=config,
    )
