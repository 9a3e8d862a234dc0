"""Command-line helpers for selection bar configuration and date presets.

Usage:
    python -m selection_bar.cli check selection_bar.toml
    python -m selection_bar.cli presets standard --today 2024-03-15
    python -m selection_bar.cli expand 2024-03-30 2024-04-01
"""

from __future__ import annotations

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Final

from selection_bar.config import ConfigError, ListType, PresetFamily, load_config
from selection_bar.date_range import DateRange, expand_days, format_date
from selection_bar.presets import get_presets

logger: Final[logging.Logger] = logging.getLogger(__name__)


def _iso_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'") from exc


def _build_arg_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Inspect selection bar configuration and date presets.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug-level logging.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Validate a configuration file.")
    check.add_argument("path", type=Path, help="Selection bar TOML file.")

    presets = commands.add_parser("presets", help="Print date presets.")
    presets.add_argument(
        "family",
        choices=[f.value for f in PresetFamily if f is not PresetFamily.NONE],
        help="Preset family.",
    )
    presets.add_argument(
        "--today",
        type=_iso_date,
        default=None,
        help="Reference date (YYYY-MM-DD). Defaults to the current date.",
    )

    expand = commands.add_parser("expand", help="Print every day in a range.")
    expand.add_argument("start", type=_iso_date, help="First day (YYYY-MM-DD).")
    expand.add_argument("end", type=_iso_date, help="Last day (YYYY-MM-DD).")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _check(path: Path) -> int:
    try:
        config = load_config(path)
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("Configuration check failed: %s", exc)
        return 1

    print(f"Surface: {config.surface_id}")
    print(f"List items: {len(config.list_items)}")
    for index, item in enumerate(config.list_items):
        target = item.variable_name if item.list_type is ListType.VARIABLE else (
            item.field_name
        )
        initial = item.initial_selection or "-"
        print(
            f"  [{index}] {item.list_type.value:<16} {target or '-':<24} "
            f"initial={initial} ({item.initial_selection_mode.value})"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code: 0 on success, 1 on error.
    """
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "check":
        return _check(args.path)

    if args.command == "presets":
        today = args.today or datetime.date.today()
        for preset in get_presets(PresetFamily(args.family), today):
            print(
                f"{preset.label:<12} {format_date(preset.start)} "
                f"{format_date(preset.end)}"
            )
        return 0

    for day in expand_days(DateRange.between(args.start, args.end)):
        print(format_date(day))
    return 0


if __name__ == "__main__":
    sys.exit(main())
