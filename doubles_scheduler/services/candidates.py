"""
Candidate enumeration for one court in one slot.

A candidate is a full proposal for a court: two teams of two plus the
officiating group. Enumeration is bounded (top-N pool, capped officiating
groups) since exhaustive search over large rosters is not tractable.
"""

import itertools
import random
from dataclasses import dataclass
from typing import Dict, List, Sequence, Set, Tuple

from doubles_scheduler.models import Player, Settings
from doubles_scheduler.core.config import (
    CANDIDATE_POOL_LIMIT, MAX_OFFICIAL_GROUPS, PAIRING_WEIGHTS
)
from doubles_scheduler.services.gender_roles import is_mixed_pair
from doubles_scheduler.services.ledger import FairnessLedger, opponent_keys

IdTeam = Tuple[str, str]


@dataclass(frozen=True)
class MatchCandidate:
    team1: IdTeam
    team2: IdTeam
    officials: Tuple[str, ...]
    strict: bool          # no teammate/opponent limit exceeded
    rest_relaxed: bool    # someone plays past the consecutive-play limit

    @property
    def playing(self) -> Tuple[str, ...]:
        return (*self.team1, *self.team2)

    @property
    def relaxed(self) -> bool:
        return not self.strict or self.rest_relaxed


class CandidateGenerator:
    """
    Builds the candidate list for the next court of a slot.

    Shares the run's ledger and random generator with the cost evaluator;
    the order in which random draws happen is part of the run's determinism.
    """

    def __init__(self, players: Sequence[Player], settings: Settings,
                 ledger: FairnessLedger, rng: random.Random):
        self.by_id: Dict[str, Player] = {p.id: p for p in players}
        self.ids: List[str] = [p.id for p in players]
        self.settings = settings
        self.ledger = ledger
        self.rng = rng

    def generate(self, slot_index: int, playing_now: Set[str],
                 officiating_now: Set[str]) -> List[MatchCandidate]:
        """
        Args:
            slot_index: Slot being filled
            playing_now: Players already on a court in this slot
            officiating_now: Players already officiating in this slot

        Returns:
            Strict candidates if any exist, otherwise the soft ones.
            An empty list means the court cannot be filled.
        """
        busy = playing_now | officiating_now
        pool = self.playing_pool(slot_index, busy)
        if len(pool) < 4:
            return []

        # Officials may cover several courts at once when sharing is on, but never play
        cannot_officiate = set(playing_now)
        if not self.settings.share_officials_across_courts:
            cannot_officiate |= officiating_now

        strict: List[MatchCandidate] = []
        soft: List[MatchCandidate] = []

        for four in itertools.combinations(pool, 4):
            rest_relaxed = any(
                not self.ledger.is_playable(pid, slot_index, self.settings.max_consecutive_plays)
                for pid in four
            )
            bench = [pid for pid in self.ids if pid not in four and pid not in cannot_officiate]
            groups = self.official_groups(bench)

            for team1, team2 in self.rank_splits(four):
                hard_ok = not self.ledger.exceeds_pair_limits(
                    team1, team2,
                    self.settings.max_same_teammate,
                    self.settings.max_same_opponent
                )
                for group in groups:
                    candidate = MatchCandidate(team1, team2, group, hard_ok, rest_relaxed)
                    (strict if hard_ok else soft).append(candidate)

        return strict if strict else soft

    def playing_pool(self, slot_index: int, busy: Set[str]) -> List[str]:
        """
        Players who may take the court, least-played first, trimmed to the
        search bound after a seeded shuffle of the leading entries.
        """
        max_consec = self.settings.max_consecutive_plays
        pool = [pid for pid in self.ids
                if pid not in busy and self.ledger.is_playable(pid, slot_index, max_consec)]
        if len(pool) < 4:
            # Rather break the rest rule than leave the court empty
            pool = [pid for pid in self.ids if pid not in busy]

        pool.sort(key=lambda pid: (self.ledger.play_counts[pid], self.ledger.streaks[pid]))
        if len(pool) > 1:
            top = min(CANDIDATE_POOL_LIMIT, len(pool))
            for i in range(top - 1, 0, -1):
                j = int(self.rng.random() * (i + 1))
                pool[i], pool[j] = pool[j], pool[i]
            pool = pool[:top]
        return pool

    def rank_splits(self, four: Sequence[str]) -> List[Tuple[IdTeam, IdTeam]]:
        """The three ways to split four players into two teams, most promising first."""
        a, b, c, d = four
        splits = [((a, b), (c, d)), ((a, c), (b, d)), ((a, d), (b, c))]
        return sorted(splits, key=lambda s: (self._split_score(*s), self.rng.random()))

    def _split_score(self, team1: IdTeam, team2: IdTeam) -> float:
        score = 0.0
        if self.settings.prefer_mixed:
            for x, y in (team1, team2):
                if is_mixed_pair(self.by_id[x], self.by_id[y], self.settings):
                    score += PAIRING_WEIGHTS["mixed_team"]
        score += PAIRING_WEIGHTS["repeat_partner"] * (
            self.ledger.partner_count(*team1) + self.ledger.partner_count(*team2)
        )
        score += PAIRING_WEIGHTS["repeat_opponent"] * sum(
            self.ledger.opponent_counts.get(k, 0) for k in opponent_keys(team1, team2)
        )
        return score

    def official_groups(self, bench: Sequence[str]) -> List[Tuple[str, ...]]:
        """
        Sliding windows over the bench ordered by officiating count, so the
        least-used officials are tried first.
        """
        size = self.settings.officials_per_court
        if size == 0:
            return [()]
        ranked = sorted(bench, key=lambda pid: self.ledger.officiating_counts[pid])
        groups = [tuple(ranked[i:i + size]) for i in range(len(ranked) - size + 1)]
        return groups[:MAX_OFFICIAL_GROUPS]
