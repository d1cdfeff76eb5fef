"""Shared entity and result types for the standings engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from math import floor


class EventType(str, Enum):
    """How an event is contested and how placements count as finishes."""

    TOURNAMENT = "TOURNAMENT"
    SCORED = "SCORED"
    COMBINED_TEAM = "COMBINED_TEAM"


class EventStatus(str, Enum):
    """Forward-only event lifecycle; COMPLETED is terminal."""

    UPCOMING = "UPCOMING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(floor(value + 0.5))


def creation_order_key(created_at: datetime | None, entity_id: str) -> tuple[bool, datetime, str]:
    """Stable secondary sort key: undated entities first, then creation time, then id."""
    return (created_at is not None, created_at or datetime.min, entity_id)


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    base_rating: int | None = None
    experience: int = 0
    wins: int = 0
    is_active: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True)
class EventRating:
    """A player's rating scoped to one event."""

    player_id: str
    event_id: str
    rating: float
    games_played: int = 0


@dataclass(frozen=True)
class EloHistoryEntry:
    """One appended rating change; ``event_id=None`` marks an overall-rating change."""

    player_id: str
    event_id: str | None
    timestamp: datetime
    old_rating: float
    new_rating: float


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    color: str = ""
    abbreviation: str | None = None
    captain_id: str | None = None
    logo: str | None = None
    year: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class TeamMember:
    team_id: str
    player_id: str
    year: int | None = None


@dataclass(frozen=True)
class Event:
    """Tournament event with its placement reward table and recorded result."""

    id: str
    name: str
    event_type: EventType
    status: EventStatus
    points: tuple[int, ...] = ()
    final_standings: tuple[str, ...] | None = None
    abbreviation: str = ""
    symbol: str = ""
    year: int | None = None
    start_time: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == EventStatus.COMPLETED

    def points_for(self, placement: int) -> int:
        """Reward for a 0-based placement; zero beyond the points table."""
        if 0 <= placement < len(self.points):
            return self.points[placement]
        return 0


@dataclass(frozen=True)
class EventResult:
    event_id: str
    event_name: str
    event_symbol: str
    event_abbreviation: str
    points: int
    position: int
    is_projected: bool


@dataclass(frozen=True)
class TeamStanding:
    """Aggregated standing for one team across a set of events."""

    team_id: str
    team_name: str
    team_abbreviation: str
    team_color: str
    team_logo: str | None
    earned_points: int
    projected_points: int
    first_place_finishes: int
    second_place_finishes: int
    event_results: tuple[EventResult, ...]

    @property
    def total_points(self) -> int:
        return self.earned_points + self.projected_points

    def result_for(self, event_id: str) -> EventResult | None:
        for result in self.event_results:
            if result.event_id == event_id:
                return result
        return None


@dataclass(frozen=True)
class DataIssue:
    """A skipped piece of inconsistent input reported alongside a result."""

    kind: str
    message: str
    event_id: str | None = None
    entity_id: str | None = None


@dataclass(frozen=True)
class RankedPlayer:
    player_id: str
    name: str
    rating: int
    rank: int
    experience: int = 0
    trend: int | None = None


@dataclass(frozen=True)
class PlayerEventRanking:
    event_id: str
    event_name: str
    event_abbreviation: str
    event_symbol: str
    rating: int
    global_rank: int
    games_played: int
    trend: int | None = None


@dataclass(frozen=True)
class HistoryPoint:
    day: date
    rating: int
    synthetic: bool = False


@dataclass(frozen=True)
class EventHistory:
    event_id: str
    event_name: str
    event_abbreviation: str
    event_symbol: str
    points: tuple[HistoryPoint, ...]
    vote_count: int


@dataclass(frozen=True)
class PlayerHistory:
    player_id: str
    overall_history: tuple[HistoryPoint, ...]
    event_histories: tuple[EventHistory, ...]
    overall_vote_count: int


@dataclass(frozen=True)
class MemberRating:
    player_id: str
    player_name: str
    rating: int
    is_captain: bool = False
    trend: int | None = None


@dataclass(frozen=True)
class TeamRatingSummary:
    team_id: str
    team_name: str
    members: tuple[MemberRating, ...]
    average_rating: int | None
    average_trend: int | None = None


@dataclass(frozen=True)
class MatchupProbabilities:
    team1_rating: float
    team2_rating: float
    team1_win_probability: float
    team2_win_probability: float
    team1_win_percentage: int
    team2_win_percentage: int
