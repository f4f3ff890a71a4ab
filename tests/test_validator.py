"""
Tests for schedule validation.
"""

from datetime import datetime, timedelta

from doubles_scheduler.models import MatchAssignment, Officials
from doubles_scheduler.services.scheduler import generate_schedule
from doubles_scheduler.services.validator import ScheduleValidator

START = datetime(2026, 10, 18, 10, 0)


def _match(slot, court, team1, team2, officials=()):
    start = START + timedelta(minutes=10 * slot)
    return MatchAssignment(
        court, slot, start, start + timedelta(minutes=10),
        (tuple(team1), tuple(team2)), Officials.from_group(tuple(officials))
    )


def test_generated_schedule_is_valid(make_roster, make_settings):
    settings = make_settings(slots=4, courts=2)
    result = generate_schedule(make_roster(16), settings)

    validation = ScheduleValidator(settings).validate_schedule(result.matches)

    assert validation.is_valid
    assert validation.hard_constraint_violations == []


def test_double_booking(make_roster, make_settings):
    p = make_roster(8)
    matches = [
        _match(0, 1, p[0:2], p[2:4]),
        _match(0, 2, p[4:6], (p[6], p[0])),
    ]

    result = ScheduleValidator(make_settings()).validate_schedule(matches)

    assert not result.is_valid
    assert result.hard_constraint_violations[0].constraint_type == "double_booking"
    assert result.hard_constraint_violations[0].affected_players == [p[0]]


def test_player_in_two_roles(make_roster, make_settings):
    p = make_roster(6)
    matches = [_match(0, 1, p[0:2], p[2:4], officials=(p[4], p[0]))]

    result = ScheduleValidator(make_settings()).validate_schedule(matches)

    assert not result.is_valid
    assert result.hard_constraint_violations[0].constraint_type == "duplicate_role"


def test_fairness_limits_are_soft(make_roster, make_settings):
    p = make_roster(4)
    matches = [_match(slot, 1, p[0:2], p[2:4]) for slot in range(3)]
    settings = make_settings(max_same_teammate=1, max_same_opponent=2, max_consecutive_plays=2)

    result = ScheduleValidator(settings).validate_schedule(matches)

    kinds = [v.constraint_type for v in result.soft_constraint_violations]
    assert result.is_valid
    assert kinds.count("teammate_limit") == 2
    assert kinds.count("opponent_limit") == 4
    assert kinds.count("consecutive_plays") == 4
    # 2 * 50 * 2 teammates, 4 * 50 * 1 opponents, 4 * 30 * 1 streaks
    assert result.total_penalty_score == 200 + 200 + 120


def test_longest_streaks(make_roster):
    p = make_roster(8)
    matches = [
        _match(0, 1, p[0:2], p[2:4]),
        _match(1, 1, (p[0], p[4]), p[5:7]),
        _match(3, 1, (p[0], p[1]), (p[7], p[4])),
    ]

    streaks = {player.id: n for player, n in ScheduleValidator.longest_streaks(matches).items()}

    assert streaks["p1"] == 2
    assert streaks["p2"] == 1
    assert streaks["p5"] == 1
    assert streaks["p8"] == 1


def test_to_dict(make_roster, make_settings):
    p = make_roster(4)
    matches = [_match(0, 1, p[0:2], p[2:4]), _match(0, 2, p[0:2], p[2:4])]

    data = ScheduleValidator(make_settings()).validate_schedule(matches).to_dict()

    assert data["is_valid"] is False
    assert data["hard_violations"] == 4
    assert {v["type"] for v in data["violations"]} >= {"double_booking"}


def test_uneven_officiating_is_reported(make_roster, make_settings):
    p = make_roster(5)
    matches = [_match(slot, 1, p[0:2], p[2:4], officials=(p[4],)) for slot in range(0, 6, 2)]

    result = ScheduleValidator(make_settings(officials_per_court=1)).validate_schedule(matches)

    assert result.is_valid
    assert "officiating_load" in [v.constraint_type for v in result.soft_constraint_violations]


def test_shared_official_on_two_courts(make_roster, make_settings):
    p = make_roster(9)
    matches = [
        _match(0, 1, p[0:2], p[2:4], officials=(p[8],)),
        _match(0, 2, p[4:6], p[6:8], officials=(p[8],)),
    ]

    shared = ScheduleValidator(make_settings(officials_per_court=1, share_officials_across_courts=True))
    separate = ScheduleValidator(make_settings(officials_per_court=1))

    assert shared.validate_schedule(matches).is_valid
    assert not separate.validate_schedule(matches).is_valid


def test_shared_official_cannot_play_elsewhere(make_roster, make_settings):
    p = make_roster(8)
    matches = [
        _match(0, 1, p[0:2], p[2:4], officials=(p[4],)),
        _match(0, 2, p[4:6], p[6:8]),
    ]

    result = ScheduleValidator(
        make_settings(officials_per_court=1, share_officials_across_courts=True)
    ).validate_schedule(matches)

    assert not result.is_valid
    assert result.hard_constraint_violations[0].affected_players == [p[4]]
