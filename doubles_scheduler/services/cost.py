"""
Match cost scoring. Lower is better.
"""

import random
from typing import Dict, List, Optional, Sequence

from doubles_scheduler.models import Player, Settings
from doubles_scheduler.core.config import COST_WEIGHTS, TIE_BREAK_JITTER
from doubles_scheduler.services.candidates import MatchCandidate
from doubles_scheduler.services.gender_roles import is_mixed_pair
from doubles_scheduler.services.ledger import FairnessLedger, opponent_keys


class CostEvaluator:
    """
    Scores candidates against the current ledger.

    Terms, in the order they are added:
    teammate overflow, opponent overflow, consecutive-play overflow,
    mixed-team bonus, play-load spread, officiating-load spread,
    skill imbalance and a small seeded jitter.
    """

    def __init__(self, players: Sequence[Player], settings: Settings,
                 ledger: FairnessLedger, rng: random.Random,
                 weights: Optional[Dict[str, float]] = None):
        self.by_id: Dict[str, Player] = {p.id: p for p in players}
        self.settings = settings
        self.ledger = ledger
        self.rng = rng
        self.weights = dict(COST_WEIGHTS, **(weights or {}))

    def cost(self, candidate: MatchCandidate, slot_index: int) -> float:
        w = self.weights
        s = self.settings
        score = 0.0

        for team in (candidate.team1, candidate.team2):
            count = self.ledger.partner_count(*team) + 1
            if count > s.max_same_teammate:
                score += w["partner_overflow"] * (count - s.max_same_teammate)

        for key in opponent_keys(candidate.team1, candidate.team2):
            count = self.ledger.opponent_counts.get(key, 0) + 1
            if count > s.max_same_opponent:
                score += w["opponent_overflow"] * (count - s.max_same_opponent)

        for pid in candidate.playing:
            if self.ledger.played_previous_slot(pid, slot_index):
                streak = self.ledger.streaks[pid] + 1
                if streak > s.max_consecutive_plays:
                    score += w["consecutive_overflow"] * (streak - s.max_consecutive_plays)

        if s.prefer_mixed:
            for x, y in (candidate.team1, candidate.team2):
                if is_mixed_pair(self.by_id[x], self.by_id[y], s):
                    score += w["mixed_bonus"]

        score += w["play_load"] * self.ledger.play_spread_with(candidate.playing)
        if candidate.officials:
            score += w["officiating_load"] * self.ledger.officiating_spread_with(candidate.officials)

        score += w["skill_balance"] * abs(self._team_level(candidate.team1) - self._team_level(candidate.team2))

        score += (self.rng.random() - 0.5) * TIE_BREAK_JITTER
        return score

    def select(self, candidates: List[MatchCandidate], slot_index: int) -> Optional[MatchCandidate]:
        """Cheapest candidate; the jitter already separates exact ties."""
        if not candidates:
            return None
        costs = [self.cost(c, slot_index) for c in candidates]
        best = min(range(len(candidates)), key=costs.__getitem__)
        return candidates[best]

    def _team_level(self, team) -> int:
        return sum(self.by_id[pid].level for pid in team)
