"""
Services for scheduling, validation, export and Google Sheets integration.
"""

from .scheduler import ScheduleGenerator, generate_schedule
from .validator import ScheduleValidator
from .manual_adjust import swap_players, CellNotFoundError
from .csv_export import export_schedule_csv

__all__ = [
    "ScheduleGenerator",
    "generate_schedule",
    "ScheduleValidator",
    "swap_players",
    "CellNotFoundError",
    "export_schedule_csv"
]
