"""
Buff sheet inspection CLI.

Run:
    cd backend
    python -m buffsheet.tools.buff_cli incoming "Sy-gex" --roster data/units.json
    python -m buffsheet.tools.buff_cli outgoing "Thaddeus Noble" --level 30
    python -m buffsheet.tools.buff_cli incoming "Bellator" --json
"""
import argparse
import json
import logging
import sys
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from buffsheet.config import settings
from buffsheet.engine import RosterBuffIndex
from buffsheet.roster_repository import RosterLoadError, load_roster


def _unit_label(unit: Any) -> str:
    name = unit.get("name") if isinstance(unit, dict) else getattr(unit, "name", "")
    return str(name or "?")


def _render_table(console: Console, title: str, unit_header: str, entries: List[Any], unit_attr: str) -> None:
    table = Table(title=title, border_style="cyan", show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column(unit_header, style="bright_cyan")
    table.add_column("Buffs", style="white")
    table.add_column("Melee", justify="right")
    table.add_column("Melee+", justify="right")
    table.add_column("Range", justify="right")
    table.add_column("Range+", justify="right")
    table.add_column("Total", style="bold", justify="right")

    for rank, entry in enumerate(entries, start=1):
        totals = entry.buff_data.totals
        table.add_row(
            str(rank),
            _unit_label(getattr(entry, unit_attr)),
            ", ".join(buff.buff_name for buff in entry.buffs),
            str(totals.buffed_melee),
            str(totals.buffed_bonus_melee),
            str(totals.buffed_range),
            str(totals.buffed_bonus_range),
            str(totals.combined),
        )

    console.print(table)


def main(argv: Optional[Sequence[str]] = None) -> int:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--roster", default=settings.roster_path, help="roster JSON file")
    common.add_argument("--level", type=int, default=settings.reference_level, help="reference level")
    common.add_argument("--json", action="store_true", help="print raw results as JSON")

    parser = argparse.ArgumentParser(description="Roster buff sheet CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    incoming_parser = subparsers.add_parser("incoming", parents=[common], help="Who can buff this unit")
    incoming_parser.add_argument("unit")

    outgoing_parser = subparsers.add_parser("outgoing", parents=[common], help="Whom this unit can buff")
    outgoing_parser.add_argument("unit")

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.WARNING))
    console = Console()

    try:
        roster = load_roster(args.roster)
    except RosterLoadError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    index = RosterBuffIndex(roster, level=args.level)
    try:
        focal = index.unit(args.unit)
    except KeyError:
        print(f"Unknown unit: {args.unit}", file=sys.stderr)
        return 2

    if args.command == "incoming":
        entries = index.incoming(focal)
        title = f"Buffs on {_unit_label(focal)} (level {index.level})"
        unit_header, unit_attr = "Source", "source_unit"
    else:
        entries = index.outgoing(focal)
        title = f"Buffs from {_unit_label(focal)} (level {index.level})"
        unit_header, unit_attr = "Target", "target_unit"

    if args.json:
        print(json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False, indent=2))
    elif not entries:
        console.print(f"[dim]No buffs found for {_unit_label(focal)}[/dim]")
    else:
        _render_table(console, title, unit_header, entries, unit_attr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
