"""
Command-line entry point for the Doubles Court Scheduling System.
Loads a roster, generates the session schedule and prints it.
"""

import sys
import json
import argparse
import logging
from datetime import datetime

from doubles_scheduler.api.schemas import PlayerModel, SettingsModel, to_player
from doubles_scheduler.core.logging_config import setup_logging
from doubles_scheduler.services.scheduler import generate_schedule
from doubles_scheduler.services.validator import ScheduleValidator
from doubles_scheduler.services.csv_export import export_schedule_csv


def _hhmm(value: str):
    return datetime.strptime(value, "%H:%M").time()


def load_roster_file(path: str, max_level: int):
    """Read a JSON list of players ({id, name, gender, level, selected})."""
    with open(path, "r", encoding="utf-8") as f:
        rows = json.load(f)
    return [to_player(PlayerModel.model_validate(row), max_level) for row in rows]


def main():
    parser = argparse.ArgumentParser(
        description='Doubles Court Scheduling System - assign players, teams and officials to courts'
    )
    parser.add_argument('--roster', help='JSON roster file (default: read the roster sheet)')
    parser.add_argument('--courts', type=int, default=None, help='Number of courts')
    parser.add_argument('--date', type=lambda s: datetime.strptime(s, "%Y-%m-%d").date(), default=None,
                        help='Session date YYYY-MM-DD (default: today)')
    parser.add_argument('--start', type=_hhmm, default=None, help='Start time HH:MM')
    parser.add_argument('--end', type=_hhmm, default=None, help='End time HH:MM')
    parser.add_argument('--officials', type=int, choices=[0, 1, 2, 3], default=None,
                        help='Officials per court')
    parser.add_argument('--reroll', type=int, default=0, help='Reshuffle tie-breaks')
    parser.add_argument('--extended-levels', action='store_true', help='Use the 1-12 level scale')
    parser.add_argument('--csv', help='Write the schedule to this CSV file')
    parser.add_argument('--write-sheet', action='store_true', help='Write the schedule to Google Sheets')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    overrides = {
        "courts": args.courts,
        "session_date": args.date,
        "start_time": args.start,
        "end_time": args.end,
        "officials_per_court": args.officials,
        "reroll": args.reroll,
        "max_level": 12 if args.extended_levels else 8,
    }
    settings = SettingsModel(**{k: v for k, v in overrides.items() if v is not None}).to_settings()

    print("\n" + "=" * 80)
    print("DOUBLES COURT SCHEDULING SYSTEM")
    print("=" * 80)

    if args.roster:
        players = load_roster_file(args.roster, settings.max_level)
    else:
        from doubles_scheduler.services.sheets_reader import RosterReader
        players = RosterReader().load_roster(settings.max_level)

    selected = [p for p in players if p.selected]
    print(f"Players: {len(selected)} selected of {len(players)}")
    print(f"Courts: {settings.courts}   Window: {settings.start_time:%H:%M}-{settings.end_time:%H:%M}")

    result = generate_schedule(players, settings)
    if result.is_empty:
        print("\nCannot schedule: not enough players or the time window is shorter than one slot.")
        return 1

    print(f"Format: {'short' if result.used_short else 'long'} games, {len(result.slots)} slots")
    print("=" * 80)
    for match in result.matches:
        officials = ", ".join(p.name for p in match.officials_list) or "-"
        flag = "  (relaxed)" if match.relaxed else ""
        print(f"{match}   officials: {officials}{flag}")

    validation = ScheduleValidator(settings).validate_schedule(result.matches)
    print("=" * 80)
    print(validation.get_summary())

    if args.csv:
        with open(args.csv, "w", encoding="utf-8", newline="") as f:
            f.write(export_schedule_csv(result.matches))
        print(f"CSV written to {args.csv}")

    if args.write_sheet:
        from doubles_scheduler.services.sheets_writer import ScheduleWriter
        sheet_name = ScheduleWriter().write_schedule(result.matches)
        print(f"Schedule written to sheet '{sheet_name}'")

    return 0


if __name__ == "__main__":
    sys.exit(main())
