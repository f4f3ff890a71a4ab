"""
Schedule validation module for the Doubles Court Scheduling System.
Checks a produced (or manually edited) schedule against the session's limits.
"""

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from doubles_scheduler.models import (
    MatchAssignment, Player, Settings, SchedulingConstraint, ScheduleValidationResult
)
from doubles_scheduler.core.config import COST_WEIGHTS
from doubles_scheduler.core.logging_config import get_logger
from doubles_scheduler.services.ledger import pair_key

logger = get_logger(__name__)


class ScheduleValidator:
    """
    Validates schedules.

    Hard violations make a schedule unusable (someone in two places at once).
    Fairness limits are reported as soft violations since the generator is
    allowed to exceed them when nothing else fits, and manual swaps may too.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def validate_schedule(self, matches: Sequence[MatchAssignment]) -> ScheduleValidationResult:
        """
        Validate a complete schedule against all constraints.

        Args:
            matches: The assignments to validate

        Returns:
            ScheduleValidationResult with all violations found
        """
        result = ScheduleValidationResult(is_valid=True)

        self._check_distinct_roles(matches, result)
        self._check_double_booking(matches, result)
        self._check_teammate_limit(matches, result)
        self._check_opponent_limit(matches, result)
        self._check_consecutive_plays(matches, result)
        self._check_officiating_load(matches, result)

        logger.info(
            "Validated %d match(es): valid=%s hard=%d soft=%d penalty=%.2f",
            len(matches), result.is_valid,
            len(result.hard_constraint_violations),
            len(result.soft_constraint_violations),
            result.total_penalty_score
        )
        return result

    def _check_distinct_roles(self, matches, result):
        """Each player fills at most one role in a match."""
        for match in matches:
            ids = [p.id for p in match.involved]
            if len(ids) != len(set(ids)):
                result.add_violation(SchedulingConstraint(
                    constraint_type="duplicate_role",
                    severity="hard",
                    description=f"Match {match.match_id} uses the same player in more than one role",
                    affected_matches=[match],
                    penalty_score=1000.0
                ))

    def _check_double_booking(self, matches, result):
        """
        No player appears on two courts in the same slot. With shared officials
        a player may officiate several courts, but still never plays on one
        court while booked on another.
        """
        shared = self.settings.share_officials_across_courts
        by_slot: Dict[int, Dict[str, List[MatchAssignment]]] = defaultdict(lambda: defaultdict(list))
        players: Dict[str, Player] = {}
        for match in matches:
            for p in match.involved:
                players[p.id] = p
                if match not in by_slot[match.slot_index][p.id]:
                    by_slot[match.slot_index][p.id].append(match)

        for slot_index, usage in sorted(by_slot.items()):
            for pid, slot_matches in usage.items():
                if len(slot_matches) < 2:
                    continue
                if shared and not any(pid in {p.id for p in m.players} for m in slot_matches):
                    continue
                result.add_violation(SchedulingConstraint(
                    constraint_type="double_booking",
                    severity="hard",
                    description=f"{players[pid].name} is booked on {len(slot_matches)} courts in slot {slot_index + 1}",
                    affected_players=[players[pid]],
                    affected_matches=slot_matches,
                    penalty_score=1000.0
                ))

    def _check_teammate_limit(self, matches, result):
        limit = self.settings.max_same_teammate
        counts, names = self._pair_counts(matches, teammates=True)
        for key, count in sorted(counts.items()):
            if count > limit:
                result.add_violation(SchedulingConstraint(
                    constraint_type="teammate_limit",
                    severity="soft",
                    description=f"{names[key[0]].name} and {names[key[1]].name} are partners {count} times (max {limit})",
                    affected_players=[names[key[0]], names[key[1]]],
                    penalty_score=COST_WEIGHTS["partner_overflow"] * (count - limit)
                ))

    def _check_opponent_limit(self, matches, result):
        limit = self.settings.max_same_opponent
        counts, names = self._pair_counts(matches, teammates=False)
        for key, count in sorted(counts.items()):
            if count > limit:
                result.add_violation(SchedulingConstraint(
                    constraint_type="opponent_limit",
                    severity="soft",
                    description=f"{names[key[0]].name} and {names[key[1]].name} face each other {count} times (max {limit})",
                    affected_players=[names[key[0]], names[key[1]]],
                    penalty_score=COST_WEIGHTS["opponent_overflow"] * (count - limit)
                ))

    def _check_consecutive_plays(self, matches, result):
        limit = self.settings.max_consecutive_plays
        for player, streak in self.longest_streaks(matches).items():
            if streak > limit:
                result.add_violation(SchedulingConstraint(
                    constraint_type="consecutive_plays",
                    severity="soft",
                    description=f"{player.name} plays {streak} slots in a row (max {limit})",
                    affected_players=[player],
                    penalty_score=COST_WEIGHTS["consecutive_overflow"] * (streak - limit)
                ))

    def _check_officiating_load(self, matches, result):
        """Informational: officiating duty should be spread over the whole roster."""
        if self.settings.officials_per_court == 0:
            return
        counts: Dict[str, int] = {}
        for match in matches:
            for p in match.involved:
                counts.setdefault(p.id, 0)
            for p in match.officials_list:
                counts[p.id] += 1
        if not counts:
            return
        spread = max(counts.values()) - min(counts.values())
        if spread > 1:
            result.add_violation(SchedulingConstraint(
                constraint_type="officiating_load",
                severity="soft",
                description=f"Officiating counts differ by {spread} between players",
                penalty_score=COST_WEIGHTS["officiating_load"] * spread
            ))

    @staticmethod
    def longest_streaks(matches: Sequence[MatchAssignment]) -> Dict[Player, int]:
        """Longest run of back-to-back slots each player is on court."""
        slots_by_player: Dict[str, set] = defaultdict(set)
        players: Dict[str, Player] = {}
        for match in matches:
            for p in match.players:
                players[p.id] = p
                slots_by_player[p.id].add(match.slot_index)

        streaks = {}
        for pid, slots in slots_by_player.items():
            best = run = 0
            previous = None
            for slot_index in sorted(slots):
                run = run + 1 if previous is not None and slot_index == previous + 1 else 1
                best = max(best, run)
                previous = slot_index
            streaks[players[pid]] = best
        return streaks

    @staticmethod
    def _pair_counts(matches, teammates: bool) -> Tuple[Dict[Tuple[str, str], int], Dict[str, Player]]:
        counts: Dict[Tuple[str, str], int] = defaultdict(int)
        names: Dict[str, Player] = {}
        for match in matches:
            team1, team2 = match.teams
            for p in match.players:
                names[p.id] = p
            if teammates:
                for a, b in (team1, team2):
                    counts[pair_key(a.id, b.id)] += 1
            else:
                for a in team1:
                    for b in team2:
                        counts[pair_key(a.id, b.id)] += 1
        return counts, names
