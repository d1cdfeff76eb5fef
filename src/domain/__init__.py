"""Rating aggregation and standings domain modules."""

from domain.common import Event, EventStatus, EventType, Player, Team, TeamMember
from domain.config import EngineConfig
from domain.errors import InvalidStateError, NotFoundError, StandingsEngineError
from domain.protocol import RatingStore

__all__ = [
    "EngineConfig",
    "Event",
    "EventStatus",
    "EventType",
    "InvalidStateError",
    "NotFoundError",
    "Player",
    "RatingStore",
    "StandingsEngineError",
    "Team",
    "TeamMember",
]
