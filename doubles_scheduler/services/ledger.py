"""
Fairness bookkeeping for a single scheduling run.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

PairKey = Tuple[str, str]


def pair_key(a: str, b: str) -> PairKey:
    return (a, b) if a < b else (b, a)


def opponent_keys(team1: Sequence[str], team2: Sequence[str]) -> List[PairKey]:
    """The four cross-team pairs of a doubles match."""
    return [pair_key(x, y) for x in team1 for y in team2]


class FairnessLedger:
    """
    Per-run counters: who partnered whom, who faced whom, how often each
    player has played or officiated, and each player's current streak.

    Counts only move through `commit`, once per committed match. A ledger
    belongs to exactly one run and is dropped when the run returns.
    """

    def __init__(self, player_ids: Iterable[str]):
        self.player_ids: List[str] = list(player_ids)
        self.partner_counts: Dict[PairKey, int] = defaultdict(int)
        self.opponent_counts: Dict[PairKey, int] = defaultdict(int)
        self.play_counts: Dict[str, int] = {pid: 0 for pid in self.player_ids}
        self.officiating_counts: Dict[str, int] = {pid: 0 for pid in self.player_ids}
        self.streaks: Dict[str, int] = {pid: 0 for pid in self.player_ids}
        self.last_played: Dict[str, Optional[int]] = {pid: None for pid in self.player_ids}

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def partner_count(self, a: str, b: str) -> int:
        return self.partner_counts.get(pair_key(a, b), 0)

    def opponent_count(self, a: str, b: str) -> int:
        return self.opponent_counts.get(pair_key(a, b), 0)

    def played_previous_slot(self, pid: str, slot_index: int) -> bool:
        last = self.last_played[pid]
        return last is not None and slot_index - last == 1

    def streak_if_playing(self, pid: str, slot_index: int) -> int:
        """Streak the player would have after playing in `slot_index`."""
        if self.played_previous_slot(pid, slot_index):
            return self.streaks[pid] + 1
        return 1

    def is_playable(self, pid: str, slot_index: int, max_consecutive: int) -> bool:
        """False when playing this slot would run the player past the rest limit."""
        return not (self.played_previous_slot(pid, slot_index)
                    and self.streaks[pid] >= max_consecutive)

    def exceeds_pair_limits(self, team1: Sequence[str], team2: Sequence[str],
                            max_teammate: int, max_opponent: int) -> bool:
        if self.partner_count(*team1) + 1 > max_teammate:
            return True
        if self.partner_count(*team2) + 1 > max_teammate:
            return True
        return any(self.opponent_counts.get(k, 0) + 1 > max_opponent
                   for k in opponent_keys(team1, team2))

    def play_spread_with(self, extra: Iterable[str]) -> int:
        """max - min play count if `extra` each played once more."""
        return _spread(self.play_counts, extra)

    def officiating_spread_with(self, extra: Iterable[str]) -> int:
        return _spread(self.officiating_counts, extra)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def commit(self, team1: Sequence[str], team2: Sequence[str],
               officials: Sequence[str], slot_index: int):
        """Record one match. Not reversible."""
        self.partner_counts[pair_key(*team1)] += 1
        self.partner_counts[pair_key(*team2)] += 1
        for key in opponent_keys(team1, team2):
            self.opponent_counts[key] += 1

        for pid in (*team1, *team2):
            self.streaks[pid] = self.streak_if_playing(pid, slot_index)
            self.last_played[pid] = slot_index
            self.play_counts[pid] += 1

        for pid in officials:
            self.officiating_counts[pid] += 1


def _spread(counts: Dict[str, int], extra: Iterable[str]) -> int:
    if not counts:
        return 0
    simulated = dict(counts)
    for pid in extra:
        simulated[pid] += 1
    values = simulated.values()
    return max(values) - min(values)
