"""CLI interface for paged-menu."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import yaml

from . import __version__, config
from .errors import MenuError
from .menu import run_menu

EXIT_CANCELLED = 1
EXIT_MENU_ERROR = 2
EXIT_INTERRUPTED = 130


def load_menu_file(path: str) -> Any:
    """Read a menu definition (label, list of labels, or mapping) from YAML."""
    if path == "-":
        raise ValueError("Reading a menu from stdin is not supported; keys are read from it")
    menu_path = Path(path)
    if not menu_path.is_file():
        raise ValueError(f"Not a file: {menu_path}")
    with open(menu_path) as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {menu_path}: {exc}") from exc


def format_result(value: Any) -> str | None:
    """Text printed for a confirmed value, or None when nothing is printed."""
    if value is None:
        return None
    if isinstance(value, list):
        return "\n".join(value)
    return str(value)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="paged-menu",
        description="Show a paged selection menu in the terminal and print the choice.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "keys: arrows/Home/End move, PgUp/PgDn page, Enter confirm, Esc/Backspace back\n"
            "multi-select: Space toggle, Insert check all, Delete uncheck all"
        ),
    )
    parser.add_argument("--version", action="version", version=f"paged-menu {__version__}")
    parser.add_argument("menu_file", nargs="?", help="YAML file with a label, list or mapping")
    parser.add_argument("--item", action="append", dest="items", metavar="LABEL",
                        help="Menu label (repeatable; used instead of MENU_FILE)")
    parser.add_argument("--title", help="Menu title (default from config, else 'Menu')")
    parser.add_argument("--sort", action="store_true", default=None, help="Sort entries by label")
    parser.add_argument("--multi", action="store_true", default=None,
                        help="Multi-select mode with checkboxes")
    parser.add_argument("--debug", action="store_true", help="Write a debug log")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = config.load_config()
    config.configure_logging(args.debug or config.is_debug_enabled(cfg))

    if args.items and args.menu_file:
        parser.error("use either MENU_FILE or --item, not both")

    if args.items:
        entries = args.items
    elif args.menu_file:
        try:
            entries = load_menu_file(args.menu_file)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_MENU_ERROR
    else:
        parser.print_help()
        return EXIT_MENU_ERROR

    title = args.title if args.title is not None else cfg.get("title", "Menu")
    sort = args.sort if args.sort is not None else bool(cfg.get("sort", False))
    multi = args.multi if args.multi is not None else bool(cfg.get("multi_select", False))

    try:
        result = run_menu(
            entries,
            title=title,
            sort=sort,
            multi_select=multi,
            theme=config.get_theme(cfg),
        )
    except MenuError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MENU_ERROR
    except KeyboardInterrupt:
        print()
        return EXIT_INTERRUPTED

    if not result.confirmed:
        return EXIT_CANCELLED
    text = format_result(result.value)
    if text:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
