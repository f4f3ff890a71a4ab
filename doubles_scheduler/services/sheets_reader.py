"""
Google Sheets roster reader for the Doubles Court Scheduling System.
Reads the player list and converts rows to Player models.
"""

import gspread
from google.oauth2.service_account import Credentials
from typing import Dict, List, Optional, Sequence

from doubles_scheduler.models import Player, parse_gender, clamp_level
from doubles_scheduler.core.config import (
    SPREADSHEET_ID, get_google_credentials, ROSTER_SHEET_NAME, ROSTER_RANGE, DEFAULT_MAX_LEVEL
)
from doubles_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)

# Accepted header spellings per field, first match wins
HEADER_ALIASES = {
    "id": ["ID", "id", "Id", "編號"],
    "name": ["Name", "name", "姓名", "名稱"],
    "gender": ["Gender", "gender", "性別"],
    "level": ["Level", "level", "Lv", "等級"],
    "selected": ["Selected", "selected", "Attending", "出席"],
}

_FALSE_VALUES = {"false", "no", "n", "0", "否"}


def _get(row: Dict[str, str], field: str) -> str:
    for key in HEADER_ALIASES[field]:
        value = row.get(key)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return ""


def _parse_selected(value: str) -> bool:
    """Blank means attending; only an explicit 'no' deselects."""
    if not value:
        return True
    return value.lower() not in _FALSE_VALUES


def rows_to_players(values: Sequence[Sequence[str]], max_level: int = DEFAULT_MAX_LEVEL) -> List[Player]:
    """
    Convert raw sheet values (first row = headers) to players.

    Rows without a name are skipped. Missing ids become p1, p2, ... by row
    position; missing levels become 1; all levels are clamped to the scale.
    """
    if not values:
        return []

    headers = [str(h).strip() for h in values[0]]
    players = []
    for i, raw in enumerate(values[1:], start=1):
        row = {h: (raw[j] if j < len(raw) else "") for j, h in enumerate(headers)}
        name = _get(row, "name")
        if not name:
            continue
        players.append(Player(
            id=_get(row, "id") or f"p{i}",
            name=name,
            gender=parse_gender(_get(row, "gender")),
            level=clamp_level(_get(row, "level") or None, max_level),
            selected=_parse_selected(_get(row, "selected")),
        ))
    return players


class RosterReader:
    """Reads the roster sheet and converts it to Player models."""

    def __init__(self, spreadsheet: Optional[gspread.Spreadsheet] = None):
        """
        Args:
            spreadsheet: Already opened spreadsheet; opened from config when omitted
        """
        if spreadsheet is None:
            client = gspread.authorize(self._get_credentials())
            spreadsheet = client.open_by_key(SPREADSHEET_ID)
        self.spreadsheet = spreadsheet
        self._roster_cache: Dict[int, List[Player]] = {}

    def _get_credentials(self) -> Credentials:
        return get_google_credentials()

    def load_values(self) -> List[List[str]]:
        if ROSTER_RANGE:
            return self.spreadsheet.values_get(ROSTER_RANGE).get("values", [])
        return self.spreadsheet.worksheet(ROSTER_SHEET_NAME).get_all_values()

    def load_roster(self, max_level: int = DEFAULT_MAX_LEVEL) -> List[Player]:
        """Load all players from the roster sheet."""
        if max_level in self._roster_cache:
            return self._roster_cache[max_level]

        values = self.load_values()
        players = rows_to_players(values, max_level)
        logger.info("Loaded %d players (%d selected) from roster sheet",
                    len(players), sum(1 for p in players if p.selected))
        self._roster_cache[max_level] = players
        return players
