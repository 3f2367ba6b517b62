"""
Torneo - Tournament manager for six groups of three and an eight-team playoff

Entry point for the application.
"""

import argparse
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from config import init_config, init_logging, APP_NAME, APP_VERSION
from engine.state import MatchType, Sport, TournamentState
from engine.tournament import is_group_stage_complete
from models.schemas import (
    GoalScoreEntry,
    SetScoreEntry,
    TeamRename,
    TournamentDetails,
    TournamentSummary,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME.lower(), description=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument("--database", help="SQLAlchemy URL (default: application database)")
    parser.add_argument("--verbose", action="store_true", help="Log debug output")

    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Create a tournament from a setup CSV")
    import_cmd.add_argument("csv_file")

    commands.add_parser("list", help="List stored tournaments")

    show_cmd = commands.add_parser("show", help="Show groups and playoff of a tournament")
    show_cmd.add_argument("tournament_id")

    export_cmd = commands.add_parser("export", help="Export a tournament to CSV")
    export_cmd.add_argument("tournament_id")
    export_cmd.add_argument("output", nargs="?")

    delete_cmd = commands.add_parser("delete", help="Delete a tournament")
    delete_cmd.add_argument("tournament_id")

    score_cmd = commands.add_parser(
        "score",
        help="Record a match result",
        description="General sport: two goal counts (3 1). "
                    "Volleyball: the points of every set (25-20 23-25 15-10).",
    )
    score_cmd.add_argument("tournament_id")
    score_cmd.add_argument("match_id", type=int)
    score_cmd.add_argument("result", nargs="+")
    score_cmd.add_argument("--cards", nargs=2, type=int, default=[0, 0],
                           metavar=("TEAM1", "TEAM2"), help="Green cards shown to each team")

    playoffs_cmd = commands.add_parser("playoffs", help="Seed the playoff bracket")
    playoffs_cmd.add_argument("tournament_id")
    playoffs_cmd.add_argument("--force", action="store_true",
                              help="Generate even if group matches are still unplayed")

    override_cmd = commands.add_parser("override", help="Force the winner of a playoff match")
    override_cmd.add_argument("tournament_id")
    override_cmd.add_argument("match_id", type=int)
    override_cmd.add_argument("team_id", type=int)

    rename_cmd = commands.add_parser("rename", help="Rename a team")
    rename_cmd.add_argument("tournament_id")
    rename_cmd.add_argument("team_id", type=int)
    rename_cmd.add_argument("name")

    edit_cmd = commands.add_parser("edit", help="Change tournament name and sport")
    edit_cmd.add_argument("tournament_id")
    edit_cmd.add_argument("name")
    edit_cmd.add_argument("sport", choices=[s.value for s in Sport])

    return parser


def _print_state(state: TournamentState) -> None:
    summary = TournamentSummary.from_state(state)
    print(f"{summary.name} [{summary.sport.value}] - {summary.status.value}")
    for group in state.groups:
        print(f"\n{group.id}")
        for position, team in enumerate(state.group_teams(group), start=1):
            print(f"  {position}. #{team.id:<3} {team.name:<30} {team.points:>3} pts  {team.played} played")
        for match in group.matches:
            team1 = state.team_name(match.team1_id)
            team2 = state.team_name(match.team2_id)
            result = f"{match.team1_score}-{match.team2_score}" if match.played else "-"
            print(f"     #{match.id:<3} {team1} vs {team2}  {result}")

    if state.playoff:
        print("\nPlayoffs")
        for match in state.playoff.matches:
            team1 = state.team_name(match.team1_id, "TBD")
            team2 = state.team_name(match.team2_id, "TBD")
            result = f"{match.team1_score}-{match.team2_score}" if match.played else "-"
            print(f"  {match.round.value:<2} #{match.id}  {team1} vs {team2}  {result}")
        if summary.champion_name:
            print(f"\nChampion: {summary.champion_name}")


def _parse_set(token: str) -> tuple[int, int]:
    try:
        team1, team2 = token.split("-")
        return int(team1), int(team2)
    except ValueError:
        raise ValueError(f"Set scores look like 25-20, got '{token}'") from None


def _score_entry(state: TournamentState, result: list[str], cards: list[int]):
    """Validate command-line result tokens for the tournament's sport."""
    if state.sport == Sport.VOLLEYBALL:
        sets = [_parse_set(token) for token in result]
        return SetScoreEntry(
            team1_set_scores=[s[0] for s in sets],
            team2_set_scores=[s[1] for s in sets],
            team1_green_cards=cards[0],
            team2_green_cards=cards[1],
        )

    if len(result) != 2:
        raise ValueError("Give exactly two goal counts, e.g. 3 1")
    return GoalScoreEntry(
        team1_score=result[0],
        team2_score=result[1],
        team1_green_cards=cards[0],
        team2_green_cards=cards[1],
    )


def _match_type(state: TournamentState, match_id: int) -> Optional[MatchType]:
    if state.playoff and state.playoff.find_match(match_id):
        return MatchType.PLAYOFF
    if any(g.find_match(match_id) for g in state.groups):
        return MatchType.GROUP
    return None


def _report(result, message: str) -> int:
    if result.notice:
        print(f"Rejected: {result.notice.message}", file=sys.stderr)
        return 1
    print(message)
    return 0


def _validation_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for Torneo."""
    args = build_parser().parse_args(argv)

    # Initialize configuration and directories
    init_config()
    init_logging(logging.DEBUG if args.verbose else logging.INFO)

    from app import TorneoApp

    app = TorneoApp(database_url=args.database)
    service = app.tournaments

    try:
        if args.command == "import":
            state = app.import_csv(args.csv_file)
            print(f"Created {state.name} ({state.id})")
        elif args.command == "list":
            for summary in service.list_tournaments():
                champion = f"  champion: {summary.champion_name}" if summary.champion_name else ""
                print(f"{summary.id}  {summary.name}  [{summary.sport.value}]  {summary.status.value}{champion}")
        elif args.command == "show":
            _print_state(service.get_tournament(args.tournament_id))
        elif args.command == "export":
            path = app.export_csv(args.tournament_id, args.output)
            if path is None:
                print("Export failed", file=sys.stderr)
                return 1
            print(f"Exported to {path}")
        elif args.command == "delete":
            service.delete_tournament(args.tournament_id)
            print(f"Deleted {args.tournament_id}")

        elif args.command == "score":
            state = service.get_tournament(args.tournament_id)
            match_type = _match_type(state, args.match_id)
            if match_type is None:
                print(f"Error: no match {args.match_id} in this tournament", file=sys.stderr)
                return 1
            entry = _score_entry(state, args.result, args.cards)
            result = service.record_result(
                args.tournament_id, args.match_id, entry.to_match_score(), match_type
            )
            return _report(result, f"Recorded match {args.match_id}")

        elif args.command == "playoffs":
            state = service.get_tournament(args.tournament_id)
            if not args.force and not is_group_stage_complete(state):
                pending = sum(1 for g in state.groups for m in g.matches if not m.played)
                print(f"Error: {pending} group matches still to play (use --force to seed anyway)",
                      file=sys.stderr)
                return 1
            result = service.generate_playoffs(args.tournament_id)
            return _report(result, "Playoffs generated")

        elif args.command == "override":
            result = service.override_winner(args.tournament_id, args.match_id, args.team_id)
            winner = result.state.team_name(args.team_id, f"team {args.team_id}")
            return _report(result, f"{winner} wins match {args.match_id}")

        elif args.command == "rename":
            rename = TeamRename(team_id=args.team_id, new_name=args.name)
            state = service.get_tournament(args.tournament_id)
            group = state.group_of(rename.team_id)
            if group is None:
                print(f"Error: no team {rename.team_id} in this tournament", file=sys.stderr)
                return 1
            result = service.rename_team(args.tournament_id, rename.team_id, rename.new_name)
            return _report(result, f"Team {rename.team_id} ({group.id}) is now {rename.new_name}")

        elif args.command == "edit":
            details = TournamentDetails(name=args.name, sport=args.sport)
            result = service.edit_details(args.tournament_id, details.name, details.sport)
            return _report(result, f"Updated {details.name} [{details.sport.value}]")

    except ValidationError as exc:
        print(f"Error: {_validation_message(exc)}", file=sys.stderr)
        return 1
    except ValueError as exc:
        # Includes CsvImportError
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
