"""
Manual post-generation edits.

A swap exchanges two playing positions in an already produced schedule. It
does not consult or update any fairness counters: a person making an override
may knowingly break the generator's limits. Callers wanting a check afterwards
run `ScheduleValidator` themselves.
"""

import dataclasses
from typing import List, Sequence

from doubles_scheduler.models import CellRef, MatchAssignment, Player


class CellNotFoundError(LookupError):
    """Raised when a cell reference does not point at a playing position."""


def _find_match(matches: Sequence[MatchAssignment], cell: CellRef) -> int:
    for i, match in enumerate(matches):
        if match.slot_index == cell.slot_index and match.court == cell.court:
            if cell.team_index not in (0, 1) or cell.position not in (0, 1):
                raise CellNotFoundError(f"No position {cell.team_index}/{cell.position} in a doubles match")
            return i
    raise CellNotFoundError(f"No match at slot {cell.slot_index}, court {cell.court}")


def _with_player(match: MatchAssignment, team_index: int, position: int, player: Player) -> MatchAssignment:
    teams = [list(match.teams[0]), list(match.teams[1])]
    teams[team_index][position] = player
    return dataclasses.replace(match, teams=(tuple(teams[0]), tuple(teams[1])))


def swap_players(matches: Sequence[MatchAssignment], a: CellRef, b: CellRef) -> List[MatchAssignment]:
    """
    Exchange the players at two cells. Returns a new list; `matches` is left untouched.

    Raises:
        CellNotFoundError: If either cell does not exist
    """
    result = list(matches)
    ia = _find_match(result, a)
    ib = _find_match(result, b)
    if a == b:
        return result

    player_a = result[ia].teams[a.team_index][a.position]
    player_b = result[ib].teams[b.team_index][b.position]

    result[ia] = _with_player(result[ia], a.team_index, a.position, player_b)
    # Same match: apply the second write on top of the first
    result[ib] = _with_player(result[ib], b.team_index, b.position, player_a)
    return result
