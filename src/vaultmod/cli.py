"""CLI for vaultmod - block-reference aliases and guarded note creation."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.settings_store import Settings
from .core.model import LinkClick
from .core.rewriter import rewrite_line
from .errors import NoteCreationCancelled
from .features.block_alias import plural, process_files
from .runtime import build_runtime


def cmd_rewrite_line(args: argparse.Namespace, rt: Any) -> int:
    """Rewrite a single line and print it."""
    result = rewrite_line(args.text, rt.config.rewrite.max_input_length)

    if args.json:
        print(json.dumps({"text": result.text, "count": result.count}, ensure_ascii=False))
    else:
        print(result.text)
    return 0


def _rewrite_files(paths: list[Path], args: argparse.Namespace, rt: Any) -> int:
    if not rt.extension.settings.block_reference_alias:
        print("Block Reference Alias feature is disabled", file=sys.stderr)
        return 1

    for path in paths:
        if not path.is_file():
            print(f"Not a file: {path}", file=sys.stderr)
            return 1

    batch = process_files(
        paths,
        dry_run=args.dry_run,
        max_length=rt.config.rewrite.max_input_length,
    )
    results = [{"path": path, "count": count} for path, count in batch.counts.items()]

    if args.json:
        print(json.dumps({
            "files": results,
            "failed": batch.failed,
            "total": batch.total,
            "dry_run": args.dry_run,
        }))
    elif not args.quiet:
        for item in results:
            if item["count"]:
                print(f"{item['path']}: {plural(item['count'], 'block reference')}")
        verb = "Would alias" if args.dry_run else "Aliased"
        print(f"{verb} {plural(batch.total, 'block reference')} in {len(results)} file(s)")

    for path, error in batch.failed.items():
        print(f"Skipped {path}: {error}", file=sys.stderr)

    return 1 if batch.failed else 0


def cmd_rewrite_file(args: argparse.Namespace, rt: Any) -> int:
    """Alias block references in the given files."""
    return _rewrite_files([Path(p) for p in args.paths], args, rt)


def cmd_rewrite_vault(args: argparse.Namespace, rt: Any) -> int:
    """Alias block references in every note of the vault."""
    if not rt.vault.root.exists():
        print(f"Error: Vault not found: {rt.vault.root}", file=sys.stderr)
        return 1
    paths = [rt.vault.root / note for note in rt.vault.list_notes()]
    return _rewrite_files(paths, args, rt)


def cmd_settings_show(args: argparse.Namespace, rt: Any) -> int:
    """Print feature settings."""
    settings = rt.extension.settings
    values = {name: getattr(settings, name) for name in Settings.names()}

    if args.json:
        print(json.dumps(values, indent=2))
    else:
        for name, value in values.items():
            print(f"{name}: {'on' if value else 'off'}")
    return 0


def cmd_settings_set(args: argparse.Namespace, rt: Any) -> int:
    """Turn a feature on or off."""
    value = args.value == "on"
    rt.extension.set_setting(args.name, value)

    if not args.quiet:
        print(f"{args.name}: {args.value}")
    return 0


def cmd_new(args: argparse.Namespace, rt: Any) -> int:
    """Create a note through the guarded creation pipeline."""
    path = args.name if args.name.endswith(".md") else f"{args.name}.md"

    if args.phantom:
        # As if a link to this note had just been followed
        rt.extension.on_link_click(LinkClick(href=args.name))

    try:
        created = rt.vault.create(path, args.content or "")
    except NoteCreationCancelled:
        return 1

    if not args.quiet:
        print(created)
    return 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Watch vault and alias block references as notes change."""
    from .watch import watch_vault

    if not rt.extension.settings.block_reference_alias:
        print("Block Reference Alias feature is disabled", file=sys.stderr)
        return 1

    return watch_vault(
        vault_path=rt.vault.root,
        debounce_ms=args.debounce_ms,
        quiet=args.quiet,
        json_output=args.json,
        max_length=rt.config.rewrite.max_input_length,
    )


def version_string() -> str:
    return (
        f"vaultmod {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultmod", description="Block reference aliases and note creation guards"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/vaultmod.toml, vault/vaultmod.toml)",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to vault directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # rewrite command
    parser_rewrite = subparsers.add_parser("rewrite", help="Alias block references")
    rewrite_sub = parser_rewrite.add_subparsers(dest="rewrite_cmd", required=True)

    parser_rewrite_line = rewrite_sub.add_parser("line", help="Rewrite one line of text")
    parser_rewrite_line.add_argument("text", help="Line to rewrite")

    parser_rewrite_file = rewrite_sub.add_parser("file", help="Rewrite note files")
    parser_rewrite_file.add_argument("paths", nargs="+", help="Note files")
    parser_rewrite_file.add_argument(
        "--dry-run", action="store_true", help="Report without writing"
    )

    parser_rewrite_vault = rewrite_sub.add_parser("vault", help="Rewrite every note in the vault")
    parser_rewrite_vault.add_argument(
        "--dry-run", action="store_true", help="Report without writing"
    )

    # settings command
    parser_settings = subparsers.add_parser("settings", help="Manage feature settings")
    settings_sub = parser_settings.add_subparsers(dest="settings_cmd", required=True)
    settings_sub.add_parser("show", help="Show feature settings")
    parser_settings_set = settings_sub.add_parser("set", help="Turn a feature on or off")
    parser_settings_set.add_argument("name", choices=Settings.names(), help="Setting name")
    parser_settings_set.add_argument("value", choices=["on", "off"], help="New value")

    # new command
    parser_new = subparsers.add_parser("new", help="Create a note, confirming if configured")
    parser_new.add_argument("name", help="Vault-relative note path")
    parser_new.add_argument("--content", default=None, help="Initial note content")
    parser_new.add_argument(
        "--phantom", action="store_true",
        help="Treat creation as following a link to a missing note"
    )
    parser_new.add_argument(
        "-y", "--yes", action="store_true", help="Answer yes to confirmation prompts"
    )

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Watch vault and alias block references")
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=150,
        help="Debounce window in milliseconds (default: 150)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    rt = build_runtime(
        vault_path=args.vault,
        config_path=args.config,
        quiet=args.quiet or args.json,
        assume_yes=getattr(args, "yes", False),
    )

    handlers = {
        "new": cmd_new,
        "watch": cmd_watch,
    }

    if args.cmd == "rewrite":
        rewrite_handlers = {
            "line": cmd_rewrite_line,
            "file": cmd_rewrite_file,
            "vault": cmd_rewrite_vault,
        }
        handler = rewrite_handlers.get(args.rewrite_cmd)
    elif args.cmd == "settings":
        settings_handlers = {
            "show": cmd_settings_show,
            "set": cmd_settings_set,
        }
        handler = settings_handlers.get(args.settings_cmd)
    else:
        handler = handlers.get(args.cmd)

    if handler:
        try:
            if not rt.extension.load(announce=False):
                sys.exit(1)
            exit_code = handler(args, rt)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            exit_code = 1
        finally:
            rt.extension.unload()
        sys.exit(exit_code)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
