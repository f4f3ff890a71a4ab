"""
Shared fixtures for the scheduler tests.
"""

from datetime import date, datetime, time, timedelta

import pytest

from doubles_scheduler.models import Gender, Player, Settings

SESSION_DATE = date(2026, 10, 18)
SESSION_START = time(10, 0)


@pytest.fixture
def make_roster():
    """Build p1..pn, genders taken cyclically from `genders` ("M"/"F"/"O")."""
    codes = {"M": Gender.MALE, "F": Gender.FEMALE, "O": Gender.OTHER}

    def _make(n, genders="MF", levels=None):
        players = []
        for i in range(1, n + 1):
            level = levels[i - 1] if levels else (i % 8) + 1
            players.append(Player(
                id=f"p{i}",
                name=f"Player {i}",
                gender=codes[genders[(i - 1) % len(genders)]],
                level=level,
            ))
        return players

    return _make


@pytest.fixture
def make_settings():
    """Settings whose window fits exactly `slots` slots of `minutes` each."""
    def _make(slots=3, courts=1, minutes=10, **overrides):
        end = datetime.combine(SESSION_DATE, SESSION_START) + timedelta(minutes=minutes * slots)
        return Settings(
            courts=courts,
            slot_minutes_long=minutes,
            slot_minutes_short=minutes,
            session_date=SESSION_DATE,
            start_time=SESSION_START,
            end_time=end.time(),
            **overrides
        )

    return _make
