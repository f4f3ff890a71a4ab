"""
Tests for candidate enumeration.
"""

import random

from doubles_scheduler.core.config import CANDIDATE_POOL_LIMIT, MAX_OFFICIAL_GROUPS
from doubles_scheduler.services.candidates import CandidateGenerator
from doubles_scheduler.services.ledger import FairnessLedger


def _generator(players, settings):
    ledger = FairnessLedger(p.id for p in players)
    return CandidateGenerator(players, settings, ledger, random.Random(7)), ledger


def test_candidates_have_distinct_officials(make_roster, make_settings):
    players = make_roster(7)
    generator, _ = _generator(players, make_settings(officials_per_court=3))

    candidates = generator.generate(0, set(), set())

    assert candidates
    for c in candidates:
        assert c.strict and not c.relaxed
        assert len(c.officials) == 3
        assert len(set(c.playing) | set(c.officials)) == 7


def test_no_officials_available(make_roster, make_settings):
    players = make_roster(4)
    generator, _ = _generator(players, make_settings(officials_per_court=3))

    assert generator.generate(0, set(), set()) == []


def test_too_few_free_players(make_roster, make_settings):
    players = make_roster(8)
    generator, _ = _generator(players, make_settings(officials_per_court=0))

    assert generator.generate(0, {"p1", "p2", "p3", "p4", "p5"}, set()) == []


def test_busy_players_are_excluded(make_roster, make_settings):
    players = make_roster(11)
    generator, _ = _generator(players, make_settings(officials_per_court=1))
    playing, officiating = {"p1", "p2", "p3", "p4"}, {"p5"}

    candidates = generator.generate(0, playing, officiating)

    assert candidates
    for c in candidates:
        assert not (set(c.playing) | set(c.officials)) & (playing | officiating)


def test_pool_is_bounded(make_roster, make_settings):
    players = make_roster(12)
    generator, _ = _generator(players, make_settings())

    pool = generator.playing_pool(0, set())

    assert len(pool) == CANDIDATE_POOL_LIMIT
    assert len(set(pool)) == CANDIDATE_POOL_LIMIT


def test_pool_prefers_least_played(make_roster, make_settings):
    players = make_roster(12)
    generator, ledger = _generator(players, make_settings(officials_per_court=0))
    ledger.commit(("p1", "p2"), ("p3", "p4"), (), 0)

    pool = generator.playing_pool(2, set())

    assert not {"p1", "p2", "p3", "p4"} & set(pool)


def test_strict_candidates_respect_teammate_limit(make_roster, make_settings):
    players = make_roster(8)
    generator, ledger = _generator(players, make_settings(officials_per_court=0, max_same_teammate=1))
    ledger.commit(("p1", "p2"), ("p3", "p4"), (), 0)

    candidates = generator.generate(1, set(), set())

    assert candidates and all(c.strict for c in candidates)
    for c in candidates:
        assert set(c.team1) != {"p1", "p2"} and set(c.team2) != {"p1", "p2"}


def test_soft_candidates_when_nothing_strict(make_roster, make_settings):
    players = make_roster(4)
    generator, ledger = _generator(players, make_settings(
        officials_per_court=0, max_same_teammate=1, max_same_opponent=1, max_consecutive_plays=5
    ))
    ledger.commit(("p1", "p2"), ("p3", "p4"), (), 0)

    candidates = generator.generate(1, set(), set())

    assert candidates
    assert all(not c.strict and c.relaxed for c in candidates)


def test_rest_rule_relaxed_when_pool_runs_short(make_roster, make_settings):
    players = make_roster(4)
    generator, ledger = _generator(players, make_settings(officials_per_court=0, max_consecutive_plays=1))
    ledger.commit(("p1", "p2"), ("p3", "p4"), (), 0)

    candidates = generator.generate(1, set(), set())

    assert candidates
    assert all(c.rest_relaxed and c.relaxed for c in candidates)


def test_official_groups_least_used_first(make_roster, make_settings):
    players = make_roster(14)
    generator, ledger = _generator(players, make_settings(officials_per_court=2))
    ledger.commit(("p1", "p2"), ("p3", "p4"), ("p5", "p6"), 0)
    bench = [p.id for p in players[4:]]

    groups = generator.official_groups(bench)

    assert len(groups) == MAX_OFFICIAL_GROUPS
    assert groups[0] == ("p7", "p8")
    assert all(len(g) == 2 for g in groups)
    assert not any({"p5", "p6"} & set(g) for g in groups)


def test_official_groups_without_officials(make_roster, make_settings):
    generator, _ = _generator(make_roster(4), make_settings(officials_per_court=0))

    assert generator.official_groups(["p1"]) == [()]


def test_rank_splits_prefers_mixed(make_roster, make_settings):
    players = make_roster(4, genders="MMFF", levels=[3, 3, 3, 3])
    generator, _ = _generator(players, make_settings(prefer_mixed=True))

    team1, team2 = generator.rank_splits(("p1", "p2", "p3", "p4"))[0]

    assert set(team1) != {"p1", "p2"} and set(team2) != {"p1", "p2"}
