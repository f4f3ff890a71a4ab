"""
Data models for the Doubles Court Scheduling System.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, time
from typing import List, Optional, Tuple, Dict
from enum import Enum

from doubles_scheduler.core.config import (
    DEFAULT_COURTS, DEFAULT_SLOT_MINUTES_LONG, DEFAULT_SLOT_MINUTES_SHORT,
    DEFAULT_SHORT_MATCH_THRESHOLD, DEFAULT_START_TIME, DEFAULT_END_TIME,
    DEFAULT_MAX_SAME_TEAMMATE, DEFAULT_MAX_SAME_OPPONENT, DEFAULT_MAX_CONSECUTIVE_PLAYS,
    DEFAULT_STRONG_FEMALE_AS_MALE, DEFAULT_STRONG_LEVEL_THRESHOLD,
    DEFAULT_OFFICIALS_PER_COURT, DEFAULT_PLAYER_LEVEL, DEFAULT_MAX_LEVEL, LEVEL_RANGES,
    OFFICIAL_ROLES
)


class Gender(Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "Other"


_GENDER_ALIASES = {
    "m": Gender.MALE, "男": Gender.MALE, "male": Gender.MALE, "♂": Gender.MALE,
    "f": Gender.FEMALE, "女": Gender.FEMALE, "female": Gender.FEMALE, "♀": Gender.FEMALE,
}


def parse_gender(value) -> Gender:
    """Map a free-text gender cell to a Gender; unknown values become OTHER."""
    if isinstance(value, Gender):
        return value
    return _GENDER_ALIASES.get(str(value or "").strip().lower(), Gender.OTHER)


def clamp_level(value, max_level: int = DEFAULT_MAX_LEVEL) -> int:
    """Clamp a level into 1..max_level. Missing or unparsable values become the default level."""
    if value is None or value == "":
        return DEFAULT_PLAYER_LEVEL
    try:
        level = int(float(value))
    except (TypeError, ValueError):
        return DEFAULT_PLAYER_LEVEL
    return max(1, min(max_level, level))


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    gender: Gender = Gender.OTHER
    level: int = DEFAULT_PLAYER_LEVEL
    selected: bool = True

    def __str__(self):
        return f"{self.name} ({self.gender.value}/Lv.{self.level})"


@dataclass
class Settings:
    """
    Knobs for one scheduling run.

    `reroll` only feeds the tie-break seed: bumping it reshuffles equally good
    choices without touching any hard limit.
    """
    courts: int = DEFAULT_COURTS
    slot_minutes_long: int = DEFAULT_SLOT_MINUTES_LONG
    slot_minutes_short: int = DEFAULT_SLOT_MINUTES_SHORT
    short_match_threshold: int = DEFAULT_SHORT_MATCH_THRESHOLD
    prefer_mixed: bool = True
    session_date: date = field(default_factory=date.today)
    start_time: time = DEFAULT_START_TIME
    end_time: time = DEFAULT_END_TIME
    max_same_teammate: int = DEFAULT_MAX_SAME_TEAMMATE
    max_same_opponent: int = DEFAULT_MAX_SAME_OPPONENT
    max_consecutive_plays: int = DEFAULT_MAX_CONSECUTIVE_PLAYS
    strong_female_as_male: bool = DEFAULT_STRONG_FEMALE_AS_MALE
    strong_level_threshold: int = DEFAULT_STRONG_LEVEL_THRESHOLD
    reroll: int = 0
    officials_per_court: int = DEFAULT_OFFICIALS_PER_COURT
    share_officials_across_courts: bool = False
    max_level: int = DEFAULT_MAX_LEVEL

    def __post_init__(self):
        if self.slot_minutes_long <= 0 or self.slot_minutes_short <= 0:
            raise ValueError("Slot lengths must be positive minutes")
        if not 0 <= self.officials_per_court <= len(OFFICIAL_ROLES):
            raise ValueError(f"officials_per_court must be between 0 and {len(OFFICIAL_ROLES)}")
        if self.max_level not in LEVEL_RANGES:
            raise ValueError(f"max_level must be one of {LEVEL_RANGES}")

    @property
    def start_datetime(self) -> datetime:
        return datetime.combine(self.session_date, self.start_time)

    @property
    def end_datetime(self) -> datetime:
        return datetime.combine(self.session_date, self.end_time)


@dataclass(frozen=True)
class TimeSlot:
    index: int
    start: datetime
    end: datetime

    def __str__(self):
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


@dataclass(frozen=True)
class Officials:
    umpire: Optional[Player] = None
    line1: Optional[Player] = None
    line2: Optional[Player] = None

    @classmethod
    def from_group(cls, group: Tuple[Player, ...]) -> "Officials":
        """Fill roles in order umpire, line judge 1, line judge 2."""
        return cls(**dict(zip(OFFICIAL_ROLES, group)))

    def members(self) -> List[Player]:
        return [p for p in (self.umpire, self.line1, self.line2) if p is not None]


Team = Tuple[Player, Player]


@dataclass(frozen=True)
class MatchAssignment:
    court: int
    slot_index: int
    start: datetime
    end: datetime
    teams: Tuple[Team, Team]
    officials: Officials = field(default_factory=Officials)
    relaxed: bool = False  # a hard fairness or rest limit was exceeded to fill this court

    @property
    def match_id(self) -> str:
        return f"S{self.slot_index + 1}-C{self.court}"

    @property
    def players(self) -> List[Player]:
        return [*self.teams[0], *self.teams[1]]

    @property
    def officials_list(self) -> List[Player]:
        return self.officials.members()

    @property
    def involved(self) -> List[Player]:
        return self.players + self.officials_list

    def __str__(self):
        t1 = " / ".join(p.name for p in self.teams[0])
        t2 = " / ".join(p.name for p in self.teams[1])
        return f"[{self.start.strftime('%H:%M')}] Court {self.court}: {t1} vs {t2}"


@dataclass(frozen=True)
class CellRef:
    """One playing position in a produced schedule."""
    slot_index: int
    court: int
    team_index: int
    position: int


@dataclass
class ScheduleResult:
    matches: List[MatchAssignment] = field(default_factory=list)
    used_short: bool = False
    slots: List[TimeSlot] = field(default_factory=list)
    skipped_cells: List[Tuple[int, int]] = field(default_factory=list)  # (slot_index, court)

    @property
    def relaxed_count(self) -> int:
        return sum(1 for m in self.matches if m.relaxed)

    @property
    def is_empty(self) -> bool:
        return not self.matches


@dataclass
class SchedulingConstraint:
    constraint_type: str
    severity: str
    description: str
    affected_players: List[Player] = field(default_factory=list)
    affected_matches: List[MatchAssignment] = field(default_factory=list)
    penalty_score: float = 0.0


@dataclass
class ScheduleValidationResult:
    is_valid: bool
    hard_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    soft_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    total_penalty_score: float = 0.0

    def add_violation(self, constraint: SchedulingConstraint):
        if constraint.severity == 'hard':
            self.hard_constraint_violations.append(constraint)
            self.is_valid = False
        else:
            self.soft_constraint_violations.append(constraint)
        self.total_penalty_score += constraint.penalty_score

    def get_summary(self) -> str:
        summary = f"Schedule Valid: {self.is_valid}\n"
        summary += f"Hard Violations: {len(self.hard_constraint_violations)}\n"
        summary += f"Soft Violations: {len(self.soft_constraint_violations)}\n"
        summary += f"Total Penalty Score: {self.total_penalty_score:.2f}\n"
        return summary

    def to_dict(self) -> Dict:
        return {
            "is_valid": self.is_valid,
            "hard_violations": len(self.hard_constraint_violations),
            "soft_violations": len(self.soft_constraint_violations),
            "total_penalty": self.total_penalty_score,
            "violations": [
                {"type": c.constraint_type, "severity": c.severity, "description": c.description}
                for c in self.hard_constraint_violations + self.soft_constraint_violations
            ],
        }
