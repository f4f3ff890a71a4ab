"""
Request/response models for the scheduling API and their conversions to
the core data models.
"""

from datetime import date, datetime, time
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from doubles_scheduler.models import (
    Player, Settings, Officials, MatchAssignment, CellRef, ScheduleResult,
    parse_gender, clamp_level
)
from doubles_scheduler.core.config import (
    DEFAULT_COURTS, DEFAULT_SLOT_MINUTES_LONG, DEFAULT_SLOT_MINUTES_SHORT,
    DEFAULT_SHORT_MATCH_THRESHOLD, DEFAULT_START_TIME, DEFAULT_END_TIME,
    DEFAULT_MAX_SAME_TEAMMATE, DEFAULT_MAX_SAME_OPPONENT, DEFAULT_MAX_CONSECUTIVE_PLAYS,
    DEFAULT_STRONG_FEMALE_AS_MALE, DEFAULT_STRONG_LEVEL_THRESHOLD,
    DEFAULT_OFFICIALS_PER_COURT, DEFAULT_MAX_LEVEL
)
from doubles_scheduler.services.scheduler import generate_schedule
from doubles_scheduler.services.validator import ScheduleValidator


class PlayerModel(BaseModel):
    """A roster entry. A missing level is treated as 1."""
    id: str
    name: str
    gender: str = "Other"
    level: Optional[int] = None
    selected: bool = True


class SettingsModel(BaseModel):
    """Session settings; every field has the club's usual default."""
    courts: int = Field(DEFAULT_COURTS, ge=1)
    slot_minutes_long: int = Field(DEFAULT_SLOT_MINUTES_LONG, gt=0)
    slot_minutes_short: int = Field(DEFAULT_SLOT_MINUTES_SHORT, gt=0)
    short_match_threshold: int = Field(DEFAULT_SHORT_MATCH_THRESHOLD, ge=1)
    prefer_mixed: bool = True
    session_date: Optional[date] = None
    start_time: time = DEFAULT_START_TIME
    end_time: time = DEFAULT_END_TIME
    max_same_teammate: int = Field(DEFAULT_MAX_SAME_TEAMMATE, ge=1)
    max_same_opponent: int = Field(DEFAULT_MAX_SAME_OPPONENT, ge=1)
    max_consecutive_plays: int = Field(DEFAULT_MAX_CONSECUTIVE_PLAYS, ge=1)
    strong_female_as_male: bool = DEFAULT_STRONG_FEMALE_AS_MALE
    strong_level_threshold: int = Field(DEFAULT_STRONG_LEVEL_THRESHOLD, ge=1)
    reroll: int = 0
    officials_per_court: int = Field(DEFAULT_OFFICIALS_PER_COURT, ge=0, le=3)
    share_officials_across_courts: bool = False
    max_level: Literal[8, 12] = DEFAULT_MAX_LEVEL

    def to_settings(self) -> Settings:
        fields = self.model_dump(exclude={"session_date"})
        return Settings(session_date=self.session_date or date.today(), **fields)


class CellModel(BaseModel):
    slot_index: int
    court: int
    team_index: int = Field(ge=0, le=1)
    position: int = Field(ge=0, le=1)

    def to_cell(self) -> CellRef:
        return CellRef(self.slot_index, self.court, self.team_index, self.position)


class MatchModel(BaseModel):
    """Response model for a single match."""
    match_id: str
    court: int
    slot_index: int
    start: datetime
    end: datetime
    time_range: str
    teams: List[List[PlayerModel]]
    umpire: Optional[PlayerModel] = None
    line1: Optional[PlayerModel] = None
    line2: Optional[PlayerModel] = None
    relaxed: bool = False


class ScheduleRequest(BaseModel):
    """Roster in the body, or read from the roster sheet when omitted."""
    players: Optional[List[PlayerModel]] = None
    settings: SettingsModel = Field(default_factory=SettingsModel)


class ScheduleResponse(BaseModel):
    """Response model for schedule generation."""
    success: bool
    message: str
    total_matches: int
    used_short: bool
    relaxed_matches: int
    skipped_cells: List[List[int]]
    matches: List[MatchModel]
    validation: Dict
    generation_time: float


class SwapRequest(BaseModel):
    matches: List[MatchModel]
    a: CellModel
    b: CellModel
    revalidate: bool = False
    settings: SettingsModel = Field(default_factory=SettingsModel)


class SwapResponse(BaseModel):
    matches: List[MatchModel]
    validation: Optional[Dict] = None


class MatchListRequest(BaseModel):
    matches: List[MatchModel]
    settings: SettingsModel = Field(default_factory=SettingsModel)


class MatchResultRequest(BaseModel):
    """One result row for the results sheet, keyed by match id."""
    id: str = Field(min_length=1)
    match: Optional[str] = None
    court: Optional[str] = None
    team1: Optional[str] = None
    team2: Optional[str] = None
    game_index: Optional[int] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    status: Literal["pending", "live", "done"] = "pending"
    note: Optional[str] = None


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def to_player(model: PlayerModel, max_level: int = DEFAULT_MAX_LEVEL) -> Player:
    return Player(
        id=model.id,
        name=model.name,
        gender=parse_gender(model.gender),
        level=clamp_level(model.level, max_level),
        selected=model.selected,
    )


def from_player(player: Optional[Player]) -> Optional[PlayerModel]:
    if player is None:
        return None
    return PlayerModel(
        id=player.id,
        name=player.name,
        gender=player.gender.value,
        level=player.level,
        selected=player.selected,
    )


def from_match(match: MatchAssignment) -> MatchModel:
    return MatchModel(
        match_id=match.match_id,
        court=match.court,
        slot_index=match.slot_index,
        start=match.start,
        end=match.end,
        time_range=f"{match.start.strftime('%H:%M')}-{match.end.strftime('%H:%M')}",
        teams=[[from_player(p) for p in team] for team in match.teams],
        umpire=from_player(match.officials.umpire),
        line1=from_player(match.officials.line1),
        line2=from_player(match.officials.line2),
        relaxed=match.relaxed,
    )


def to_match(model: MatchModel, max_level: int = DEFAULT_MAX_LEVEL) -> MatchAssignment:
    if len(model.teams) != 2 or any(len(team) != 2 for team in model.teams):
        raise ValueError(f"Match {model.match_id} must have two teams of two players")

    def convert(p: Optional[PlayerModel]) -> Optional[Player]:
        return to_player(p, max_level) if p is not None else None

    team1, team2 = ([convert(p) for p in team] for team in model.teams)
    return MatchAssignment(
        court=model.court,
        slot_index=model.slot_index,
        start=model.start,
        end=model.end,
        teams=(tuple(team1), tuple(team2)),
        officials=Officials(convert(model.umpire), convert(model.line1), convert(model.line2)),
        relaxed=model.relaxed,
    )


def schedule_response(result: ScheduleResult, validation: Dict, generation_time: float) -> ScheduleResponse:
    if result.is_empty:
        message = "Cannot schedule: not enough players or the time window is shorter than one slot"
    else:
        message = f"Schedule generated successfully with {len(result.matches)} matches"
    return ScheduleResponse(
        success=not result.is_empty,
        message=message,
        total_matches=len(result.matches),
        used_short=result.used_short,
        relaxed_matches=result.relaxed_count,
        skipped_cells=[[slot, court] for slot, court in result.skipped_cells],
        matches=[from_match(m) for m in result.matches],
        validation=validation,
        generation_time=generation_time,
    )


def build_schedule_response(players: List[Player], settings: Settings) -> ScheduleResponse:
    """Generate, validate and package a schedule. Shared by the API and the worker."""
    started = datetime.now()
    result = generate_schedule(players, settings)
    validation = ScheduleValidator(settings).validate_schedule(result.matches)
    generation_time = (datetime.now() - started).total_seconds()
    return schedule_response(result, validation.to_dict(), generation_time)
