"""Format `.wit` files in place, or check that they are already formatted.

Usage:
  wit-fmt tests/ --tab-size 2
  wit-fmt --check wit/
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterable
from pathlib import Path

from wit_formatter.env import env_bool, env_int
from wit_formatter.formatting.config import FormatConfig
from wit_formatter.formatting.formatter import format_wit
from wit_formatter.logging_setup import configure_console_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_WOULD_CHANGE = 1
EXIT_ERROR = 2


def _atomic_write_text(path: Path, content: str) -> None:
    tmp = path.with_suffix(path.suffix + f".{os.getpid()}.tmp")
    with tmp.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    tmp.replace(path)


def iter_wit_files(paths: Iterable[Path]) -> tuple[list[Path], list[Path]]:
    """Expand files and directories into `.wit` files; also return missing paths."""

    found: list[Path] = []
    missing: list[Path] = []
    for p in paths:
        if p.is_dir():
            found.extend(sorted(x for x in p.rglob("*.wit") if x.is_file()))
        elif p.is_file():
            found.append(p)
        else:
            missing.append(p)
    return found, missing


def format_path(path: Path, config: FormatConfig, *, check: bool) -> bool:
    """Format one file; returns True when its content changes (or would change)."""

    original = path.read_text(encoding="utf-8")
    formatted = format_wit(original, config)
    if formatted == original:
        return False
    if check:
        logger.info("would reformat %s", path)
    else:
        _atomic_write_text(path, formatted)
        logger.info("reformatted %s", path)
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="wit-fmt", add_help=True)
    parser.add_argument("paths", nargs="*", default=["."], help="Files or directories (default: .)")
    parser.add_argument("--check", action="store_true", help="Do not write; exit 1 if any file would change")
    parser.add_argument(
        "--tab-size",
        type=int,
        default=env_int("WIT_FORMATTER_TAB_SIZE", 4),
        help="Spaces per indent level (default: 4)",
    )
    parser.add_argument(
        "--use-tabs",
        action="store_true",
        default=not env_bool("WIT_FORMATTER_INSERT_SPACES", True),
        help="Indent with one tab per level",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_console_logging(args.log_level)

    if args.tab_size < 1:
        parser.error("--tab-size must be a positive integer")
    config = FormatConfig(tab_size=args.tab_size, insert_spaces=not args.use_tabs)

    files, missing = iter_wit_files(Path(p) for p in args.paths)
    for p in missing:
        logger.error("no such file or directory: %s", p)

    changed = 0
    failed = len(missing)
    for f in files:
        try:
            if format_path(f, config, check=args.check):
                changed += 1
        except (OSError, UnicodeDecodeError) as e:
            logger.error("failed to format %s: %s", f, e)
            failed += 1

    verb = "would change" if args.check else "changed"
    logger.info("processed %s .wit files, %s %s", len(files), verb, changed)

    if failed:
        return EXIT_ERROR
    if args.check and changed:
        return EXIT_WOULD_CHANGE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
