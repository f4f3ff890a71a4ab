"""
Data models for the scheduling system.
"""

from .models import (
    Gender,
    Player,
    Settings,
    TimeSlot,
    Officials,
    Team,
    MatchAssignment,
    CellRef,
    ScheduleResult,
    SchedulingConstraint,
    ScheduleValidationResult,
    parse_gender,
    clamp_level
)

__all__ = [
    "Gender",
    "Player",
    "Settings",
    "TimeSlot",
    "Officials",
    "Team",
    "MatchAssignment",
    "CellRef",
    "ScheduleResult",
    "SchedulingConstraint",
    "ScheduleValidationResult",
    "parse_gender",
    "clamp_level"
]
