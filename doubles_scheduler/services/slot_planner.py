"""
Turns a session window into fixed-length time slots.
"""

from datetime import datetime, timedelta
from typing import List, Tuple

from doubles_scheduler.models import Settings, TimeSlot


def use_short_format(active_players: int, courts: int, threshold: int) -> bool:
    """Short games are used once there are more players than `courts * threshold`."""
    return active_players > max(1, courts) * threshold


def generate_time_slots(start: datetime, end: datetime, slot_minutes: int) -> List[TimeSlot]:
    """
    Emit back-to-back slots of `slot_minutes` from `start` for as long as a slot
    still ends at or before `end`. A window shorter than one slot yields [].
    """
    if slot_minutes <= 0:
        raise ValueError("slot_minutes must be positive")

    slots = []
    step = timedelta(minutes=slot_minutes)
    current = start
    while current + step <= end:
        slots.append(TimeSlot(index=len(slots), start=current, end=current + step))
        current += step
    return slots


def plan_slots(settings: Settings, active_players: int) -> Tuple[List[TimeSlot], bool]:
    """
    Pick the slot length for this roster size and lay out the session.

    Returns:
        (slots, used_short)
    """
    used_short = use_short_format(active_players, settings.courts, settings.short_match_threshold)
    slot_minutes = settings.slot_minutes_short if used_short else settings.slot_minutes_long
    slots = generate_time_slots(settings.start_datetime, settings.end_datetime, slot_minutes)
    return slots, used_short
