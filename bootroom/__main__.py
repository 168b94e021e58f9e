"""Entry point for the bootroom package."""

import argparse
import datetime
import logging
from dataclasses import replace


def _demo(game_format: str, formation_id: str | None) -> None:
    """Fill a lineup for the format, then print it with its diff against a rotated copy."""
    from rich.console import Console
    from rich.table import Table

    from bootroom.core.models import MatchLineup, PlayerDirectory, PlayerRef
    from bootroom.editor import LineupEditor

    console = Console()
    names = [
        "Ayo", "Ben", "Callum", "Dara", "Eoin", "Femi", "Gus", "Hal", "Ian",
        "Jude", "Kofi", "Liam", "Milo", "Niall", "Ollie", "Pat",
    ]
    directory = PlayerDirectory(
        [PlayerRef(id=i + 1, jersey_number=i + 1, name=name) for i, name in enumerate(names)]
    )

    editor = LineupEditor(directory, game_format=game_format)
    if formation_id and formation_id != editor.formation.id and not editor.change_formation(formation_id):
        console.print(f"[yellow]Unknown formation {formation_id}, using {editor.formation.id}[/yellow]")

    players = list(directory)
    for player, slot in zip(players, editor.formation.slots):
        editor.store.assign(player.id, slot.id)
    for player in players[editor.slot_count:editor.slot_count + 3]:
        editor.store.move_to_bench(player.id)

    table = Table(title=f"{editor.formation.name} ({editor.game_format.value})")
    table.add_column("Slot")
    table.add_column("Label")
    table.add_column("Tier")
    table.add_column("#", justify="right")
    table.add_column("Player")
    for slot in sorted(editor.resolved_slots(), key=lambda s: (s.tier.depth, s.x)):
        player = directory.get(slot.player_id)
        table.add_row(str(slot.slot_id), slot.label, slot.tier.value, str(player.jersey_number), player.name)
    console.print(table)

    console.print(f"Detected formation: [bold]{editor.detected_formation or '-'}[/bold]")
    console.print(f"Bench: {', '.join(p.name for p in editor.bench_players()) or '-'}")

    # Last week's lineup with the bench players starting in the last three slots
    snapshot = editor.snapshot()
    rotated = list(snapshot.lineup)
    for i, pid in enumerate(snapshot.bench):
        index = len(rotated) - 1 - i
        if index < 0:
            break
        rotated[index] = replace(rotated[index], player_id=pid)
    today = datetime.date.today()
    matches = [
        MatchLineup(id=1, date=today - datetime.timedelta(days=7), lineup=tuple(rotated), formation=editor.formation.id),
        MatchLineup(id=2, date=today, lineup=tuple(snapshot.lineup), formation=editor.formation.id),
    ]
    editor.load_match(matches[1])
    diff = editor.lineup_diff(matches)
    if diff is not None:
        console.print(
            f"Changes from last match: {diff.total_changes} "
            f"(spine {diff.spine_changes}) {diff.message or ''}"
        )


def main() -> None:
    """Main entry point for the Bootroom application."""
    parser = argparse.ArgumentParser(
        description="Bootroom - football lineup editor",
        prog="bootroom",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Build and print a sample lineup",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API",
    )
    parser.add_argument(
        "--format",
        type=str,
        default="11v11",
        help="Game format for the demo (default: 11v11)",
    )
    parser.add_argument(
        "--formation",
        type=str,
        default=None,
        help="Formation id for the demo (default: the format's default)",
    )
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every lineup transition",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        from bootroom.api.main import run_api

        run_api(host=args.host, port=args.port)
    elif args.demo:
        _demo(args.format, args.formation)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
