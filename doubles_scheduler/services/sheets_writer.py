"""
Google Sheets writer for the Doubles Court Scheduling System.
Writes generated schedules and per-match results back to Google Sheets.
"""

import gspread
from gspread.utils import rowcol_to_a1
from google.oauth2.service_account import Credentials
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from doubles_scheduler.models import MatchAssignment
from doubles_scheduler.core.config import (
    SPREADSHEET_ID, get_google_credentials, RESULTS_SHEET_NAME, SCHEDULE_SHEET_PREFIX
)
from doubles_scheduler.core.logging_config import get_logger
from doubles_scheduler.services.csv_export import schedule_rows, CSV_HEADER

logger = get_logger(__name__)

RESULT_HEADER = ["Time", "id", "Match", "Court", "Team A", "Team B", "Game", "Score A", "Score B", "Status", "Note"]
RESULT_FIELDS = ["id", "match", "court", "team1", "team2", "game_index", "score1", "score2", "status", "note"]


class ScheduleWriter:
    """
    Writes schedule data back to Google Sheets.
    """

    def __init__(self, spreadsheet: Optional[gspread.Spreadsheet] = None):
        """Initialize the Google Sheets client unless a spreadsheet is given."""
        if spreadsheet is None:
            client = gspread.authorize(self._get_credentials())
            spreadsheet = client.open_by_key(SPREADSHEET_ID)
        self.spreadsheet = spreadsheet

    def _get_credentials(self) -> Credentials:
        return get_google_credentials()

    def _worksheet(self, title: str, rows: int = 100, cols: int = 20):
        try:
            return self.spreadsheet.worksheet(title)
        except gspread.exceptions.WorksheetNotFound:
            return self.spreadsheet.add_worksheet(title=title, rows=rows, cols=cols)

    def write_schedule(self, matches: Sequence[MatchAssignment], sheet_name: Optional[str] = None) -> str:
        """
        Replace the contents of a schedule sheet with one row per match.

        Args:
            matches: The schedule to write
            sheet_name: Target sheet; defaults to "<prefix> <session date>"

        Returns:
            The sheet title written to
        """
        if sheet_name is None:
            day = matches[0].start.strftime("%Y-%m-%d") if matches else datetime.now().strftime("%Y-%m-%d")
            sheet_name = f"{SCHEDULE_SHEET_PREFIX} {day}"

        data = schedule_rows(matches)
        sheet = self._worksheet(sheet_name, rows=max(100, len(data) + 10), cols=len(CSV_HEADER))
        sheet.clear()
        sheet.update(range_name="A1", values=data)
        sheet.format(f"A1:{rowcol_to_a1(1, len(CSV_HEADER))}", {
            'textFormat': {'bold': True},
            'backgroundColor': {'red': 0.8, 'green': 0.8, 'blue': 0.8}
        })

        logger.info("Wrote %d matches to %s", len(matches), sheet_name)
        return sheet_name

    def upsert_match_result(self, payload: Dict) -> Dict:
        """
        Record a match result keyed by match id: overwrite the row with the
        same id in column B, or append a new row.

        Raises:
            ValueError: If the payload has no id
        """
        match_id = str(payload.get("id") or "").strip()
        if not match_id:
            raise ValueError("id is required")

        sheet = self._worksheet(RESULTS_SHEET_NAME, cols=len(RESULT_HEADER))
        ids = sheet.col_values(2)
        start = 1 if ids and ids[0].strip().lower() == "id" else 0

        row_number = None
        for i in range(start, len(ids)):
            if str(ids[i]).strip() == match_id:
                row_number = i + 1
                break

        row = [datetime.now().strftime("%Y-%m-%d %H:%M:%S")]
        row += ["" if payload.get(f) is None else payload.get(f) for f in RESULT_FIELDS]

        if not ids:
            sheet.update(
                range_name=f"A1:{rowcol_to_a1(1, len(RESULT_HEADER))}",
                values=[RESULT_HEADER],
                value_input_option="USER_ENTERED"
            )

        if row_number is not None:
            sheet.update(
                range_name=f"A{row_number}:{rowcol_to_a1(row_number, len(row))}",
                values=[row],
                value_input_option="USER_ENTERED"
            )
            logger.info("Updated result for %s at row %d", match_id, row_number)
            return {"ok": True, "mode": "update", "row": row_number}

        sheet.append_row(row, value_input_option="USER_ENTERED", insert_data_option="INSERT_ROWS")
        logger.info("Appended result for %s", match_id)
        return {"ok": True, "mode": "append"}
