"""Read contract the engine requires from its storage collaborator."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from domain.common import EloHistoryEntry, Event, EventRating, Player, Team, TeamMember


@runtime_checkable
class RatingStore(Protocol):
    """Read-only access to players, teams, events and rating rows.

    Lookups by id return ``None`` for unknown ids; the engine decides whether a
    missing entity is an error. Roster rows without a year match every season.
    """

    def get_player(self, player_id: str) -> Player | None: ...

    def list_players(self) -> Sequence[Player]: ...

    def list_active_players(self) -> Sequence[Player]: ...

    def get_event_ratings(
        self,
        player_id: str | None = None,
        event_id: str | None = None,
    ) -> Sequence[EventRating]: ...

    def get_elo_history(
        self,
        player_id: str,
        event_id: str | None = None,
    ) -> Sequence[EloHistoryEntry]: ...

    def list_teams(self, year: int | None = None) -> Sequence[Team]: ...

    def list_team_members(
        self,
        team_id: str | None = None,
        year: int | None = None,
    ) -> Sequence[TeamMember]: ...

    def get_captain(self, team_id: str) -> Player | None: ...

    def list_events(self, year: int | None = None) -> Sequence[Event]: ...


__all__ = ["RatingStore"]
