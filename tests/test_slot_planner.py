"""
Tests for slot length selection and time slot generation.
"""

from datetime import datetime

import pytest

from doubles_scheduler.services.slot_planner import (
    use_short_format, generate_time_slots, plan_slots
)


def _at(hour, minute):
    return datetime(2026, 10, 18, hour, minute)


def test_short_format_only_above_threshold():
    assert use_short_format(15, 2, 7) is True
    assert use_short_format(14, 2, 7) is False
    # Zero courts still count as one
    assert use_short_format(8, 0, 7) is True


def test_slots_are_back_to_back():
    slots = generate_time_slots(_at(10, 0), _at(11, 0), 12)

    assert [s.index for s in slots] == [0, 1, 2, 3, 4]
    assert slots[0].start == _at(10, 0)
    assert slots[-1].end == _at(11, 0)
    for prev, nxt in zip(slots, slots[1:]):
        assert prev.end == nxt.start


def test_partial_slot_is_dropped():
    slots = generate_time_slots(_at(10, 10), _at(12, 0), 12)

    assert len(slots) == 9
    assert slots[-1].end == _at(11, 58)


def test_window_shorter_than_one_slot():
    assert generate_time_slots(_at(10, 0), _at(10, 5), 8) == []
    assert generate_time_slots(_at(12, 0), _at(10, 0), 8) == []


def test_non_positive_slot_length_rejected():
    with pytest.raises(ValueError):
        generate_time_slots(_at(10, 0), _at(11, 0), 0)


def test_plan_slots_picks_length_by_roster_size(make_settings):
    settings = make_settings(slots=6, courts=2, minutes=12)
    settings.slot_minutes_short = 8

    slots, used_short = plan_slots(settings, 14)
    assert used_short is False
    assert len(slots) == 6

    slots, used_short = plan_slots(settings, 15)
    assert used_short is True
    assert len(slots) == 9
    assert all((s.end - s.start).total_seconds() == 8 * 60 for s in slots)
