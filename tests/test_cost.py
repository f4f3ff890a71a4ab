"""
Tests for match cost scoring.
"""

import random

import pytest

from doubles_scheduler.core.config import TIE_BREAK_JITTER
from doubles_scheduler.services.candidates import MatchCandidate
from doubles_scheduler.services.cost import CostEvaluator
from doubles_scheduler.services.ledger import FairnessLedger


def _candidate(team1, team2, officials=()):
    return MatchCandidate(tuple(team1), tuple(team2), tuple(officials), True, False)


def _evaluator(players, settings):
    ledger = FairnessLedger(p.id for p in players)
    return CostEvaluator(players, settings, ledger, random.Random(1)), ledger


def test_skill_balance(make_roster, make_settings):
    players = make_roster(4, genders="M", levels=[8, 1, 8, 1])
    evaluator, _ = _evaluator(players, make_settings())

    balanced = evaluator.cost(_candidate(("p1", "p2"), ("p3", "p4")), 0)
    lopsided = evaluator.cost(_candidate(("p1", "p3"), ("p2", "p4")), 0)

    assert lopsided - balanced == pytest.approx(14 * 0.2, abs=2 * TIE_BREAK_JITTER)


def test_mixed_bonus_only_when_preferred(make_roster, make_settings):
    players = make_roster(4, genders="MMFF", levels=[3, 3, 3, 3])

    evaluator, _ = _evaluator(players, make_settings(prefer_mixed=True))
    mixed = evaluator.cost(_candidate(("p1", "p3"), ("p2", "p4")), 0)
    same = evaluator.cost(_candidate(("p1", "p2"), ("p3", "p4")), 0)
    assert mixed - same == pytest.approx(-10, abs=2 * TIE_BREAK_JITTER)

    evaluator, _ = _evaluator(players, make_settings(prefer_mixed=False))
    mixed = evaluator.cost(_candidate(("p1", "p3"), ("p2", "p4")), 0)
    same = evaluator.cost(_candidate(("p1", "p2"), ("p3", "p4")), 0)
    assert mixed - same == pytest.approx(0, abs=2 * TIE_BREAK_JITTER)


def test_repeat_partner_penalty(make_roster, make_settings):
    players = make_roster(6, genders="M", levels=[4] * 6)
    evaluator, ledger = _evaluator(players, make_settings(max_same_teammate=1))
    ledger.commit(("p1", "p2"), ("p3", "p4"), (), 0)

    repeat = evaluator.cost(_candidate(("p1", "p2"), ("p5", "p6")), 5)
    fresh = evaluator.cost(_candidate(("p1", "p5"), ("p2", "p6")), 5)

    assert repeat - fresh == pytest.approx(50, abs=2 * TIE_BREAK_JITTER)


def test_consecutive_play_penalty(make_roster, make_settings):
    players = make_roster(8, genders="M", levels=[4] * 8)
    evaluator, ledger = _evaluator(players, make_settings(max_consecutive_plays=1))
    ledger.commit(("p1", "p2"), ("p3", "p4"), (), 0)

    tired = evaluator.cost(_candidate(("p1", "p5"), ("p6", "p7")), 1)
    rested = evaluator.cost(_candidate(("p8", "p5"), ("p6", "p7")), 1)

    # 30 for the streak, plus 2 for the wider play-load spread
    assert tired - rested == pytest.approx(32, abs=2 * TIE_BREAK_JITTER)


def test_jitter_is_small(make_roster, make_settings):
    players = make_roster(4, levels=[5] * 4)
    evaluator, _ = _evaluator(players, make_settings())
    candidate = _candidate(("p1", "p2"), ("p3", "p4"))

    costs = [evaluator.cost(candidate, 0) for _ in range(50)]

    assert max(costs) - min(costs) <= TIE_BREAK_JITTER
    assert len(set(costs)) > 1


def test_select_cheapest(make_roster, make_settings):
    players = make_roster(4, genders="M", levels=[8, 1, 8, 1])
    evaluator, _ = _evaluator(players, make_settings())
    balanced = _candidate(("p1", "p2"), ("p3", "p4"))
    lopsided = _candidate(("p1", "p3"), ("p2", "p4"))

    assert evaluator.select([lopsided, balanced], 0) is balanced
    assert evaluator.select([], 0) is None
