"""
Schedule generator for doubles sessions.

Greedy, slot by slot and court by court: for each cell the candidate
generator proposes matches, the cost evaluator picks the cheapest one and
the committer records it in the run's fairness ledger. There is no
backtracking; a cell that cannot be filled is skipped along with the
remaining courts of that slot.

Given the same roster, settings and reroll value the output is identical.
"""

import dataclasses
import random
from typing import List, Sequence, Set

from doubles_scheduler.models import (
    Player, Settings, TimeSlot, Officials, MatchAssignment, ScheduleResult, clamp_level
)
from doubles_scheduler.core.config import SEED_PLAYER_FACTOR, SEED_COURT_FACTOR
from doubles_scheduler.core.logging_config import get_logger
from doubles_scheduler.services.candidates import CandidateGenerator, MatchCandidate
from doubles_scheduler.services.cost import CostEvaluator
from doubles_scheduler.services.ledger import FairnessLedger
from doubles_scheduler.services.slot_planner import plan_slots

logger = get_logger(__name__)


def run_seed(player_count: int, courts: int, reroll: int) -> int:
    return reroll + player_count * SEED_PLAYER_FACTOR + courts * SEED_COURT_FACTOR


def resolve_roster(players: Sequence[Player], settings: Settings) -> List[Player]:
    """
    Selected players only, with levels clamped to the configured scale.

    Raises:
        ValueError: If two selected players share an id
    """
    roster = []
    seen = set()
    for player in players:
        if not player.selected:
            continue
        if player.id in seen:
            raise ValueError(f"Duplicate player id in roster: {player.id}")
        seen.add(player.id)
        roster.append(dataclasses.replace(player, level=clamp_level(player.level, settings.max_level)))
    return roster


class ScheduleGenerator:
    """
    Runs one scheduling pass. Every call to `generate` starts from a fresh
    ledger and a freshly seeded random generator.
    """

    def __init__(self, players: Sequence[Player], settings: Settings):
        self.settings = settings
        self.players = resolve_roster(players, settings)
        self.courts = max(1, settings.courts)

    def generate(self) -> ScheduleResult:
        slots, used_short = plan_slots(self.settings, len(self.players))
        result = ScheduleResult(used_short=used_short, slots=slots)

        logger.info(
            "Scheduling %d players on %d court(s): %d %s slot(s)",
            len(self.players), self.courts, len(slots), "short" if used_short else "long"
        )
        if len(self.players) < 4:
            logger.info("Fewer than 4 selected players, nothing to schedule")
            return result
        if not slots:
            logger.info("Session window is shorter than one slot, nothing to schedule")
            return result

        self.ledger = FairnessLedger(p.id for p in self.players)
        self.rng = random.Random(run_seed(len(self.players), self.courts, self.settings.reroll))
        self.by_id = {p.id: p for p in self.players}
        self.candidates = CandidateGenerator(self.players, self.settings, self.ledger, self.rng)
        self.evaluator = CostEvaluator(self.players, self.settings, self.ledger, self.rng)

        for slot in slots:
            self._fill_slot(slot, result)

        logger.info(
            "Generated %d match(es), %d relaxed, %d cell(s) skipped",
            len(result.matches), result.relaxed_count, len(result.skipped_cells)
        )
        return result

    def _fill_slot(self, slot: TimeSlot, result: ScheduleResult):
        playing_now: Set[str] = set()
        officiating_now: Set[str] = set()

        for court in range(1, self.courts + 1):
            options = self.candidates.generate(slot.index, playing_now, officiating_now)
            chosen = self.evaluator.select(options, slot.index)
            if chosen is None:
                # The pool only shrinks within a slot, later courts cannot fare better
                skipped = [(slot.index, c) for c in range(court, self.courts + 1)]
                result.skipped_cells.extend(skipped)
                logger.debug("Slot %d: no feasible match from court %d on", slot.index, court)
                break

            self._commit(chosen, slot.index, playing_now, officiating_now)
            match = self._to_assignment(chosen, slot, court)
            if match.relaxed:
                logger.debug("Slot %d court %d filled with relaxed limits", slot.index, court)
            result.matches.append(match)

    def _commit(self, candidate: MatchCandidate, slot_index: int,
                playing_now: Set[str], officiating_now: Set[str]):
        self.ledger.commit(candidate.team1, candidate.team2, candidate.officials, slot_index)
        playing_now.update(candidate.playing)
        officiating_now.update(candidate.officials)

    def _to_assignment(self, candidate: MatchCandidate, slot: TimeSlot, court: int) -> MatchAssignment:
        p = self.by_id
        return MatchAssignment(
            court=court,
            slot_index=slot.index,
            start=slot.start,
            end=slot.end,
            teams=(
                (p[candidate.team1[0]], p[candidate.team1[1]]),
                (p[candidate.team2[0]], p[candidate.team2[1]]),
            ),
            officials=Officials.from_group(tuple(p[pid] for pid in candidate.officials)),
            relaxed=candidate.relaxed,
        )


def generate_schedule(players: Sequence[Player], settings: Settings) -> ScheduleResult:
    """Entry point used by the API, the worker and the CLI."""
    return ScheduleGenerator(players, settings).generate()
