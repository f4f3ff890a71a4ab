"""
CSV export of a schedule (opens directly in Excel).
"""

import csv
import io
from typing import List, Sequence

from doubles_scheduler.models import MatchAssignment, Player

CSV_HEADER = [
    "Time", "Court",
    "A1", "A1 (Gender/Lv)", "A2", "A2 (Gender/Lv)",
    "B1", "B1 (Gender/Lv)", "B2", "B2 (Gender/Lv)",
    "Umpire", "Line Judge 1", "Line Judge 2",
]


def player_tag(player: Player) -> str:
    return f"{player.gender.value}/Lv.{player.level}"


def match_row(match: MatchAssignment) -> List[str]:
    """One schedule row: time range, court label, players with tags, officials."""
    row = [
        f"{match.start.strftime('%H:%M')}-{match.end.strftime('%H:%M')}",
        f"Court {match.court}",
    ]
    for player in match.players:
        row.extend([player.name, player_tag(player)])
    for official in (match.officials.umpire, match.officials.line1, match.officials.line2):
        row.append(official.name if official else "")
    return row


def schedule_rows(matches: Sequence[MatchAssignment]) -> List[List[str]]:
    ordered = sorted(matches, key=lambda m: (m.slot_index, m.court))
    return [CSV_HEADER] + [match_row(m) for m in ordered]


def export_schedule_csv(matches: Sequence[MatchAssignment]) -> str:
    """
    Render matches as CSV text with a UTF-8 BOM and CRLF line endings.
    Returns an empty string when there is nothing to export.
    """
    if not matches:
        return ""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerows(schedule_rows(matches))
    return "\ufeff" + buffer.getvalue()
