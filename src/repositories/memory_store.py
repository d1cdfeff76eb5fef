"""In-memory implementation of the engine's read contract."""

from __future__ import annotations

from dataclasses import dataclass

from domain.common import EloHistoryEntry, Event, EventRating, Player, Team, TeamMember


@dataclass(frozen=True)
class InMemoryRatingStore:
    """Serve reads from tuples held in memory, in the order they were given."""

    players: tuple[Player, ...] = ()
    event_ratings: tuple[EventRating, ...] = ()
    elo_history: tuple[EloHistoryEntry, ...] = ()
    teams: tuple[Team, ...] = ()
    team_members: tuple[TeamMember, ...] = ()
    events: tuple[Event, ...] = ()

    def get_player(self, player_id: str) -> Player | None:
        return next((player for player in self.players if player.id == player_id), None)

    def list_players(self) -> list[Player]:
        return list(self.players)

    def list_active_players(self) -> list[Player]:
        return [player for player in self.players if player.is_active]

    def get_event_ratings(
        self,
        player_id: str | None = None,
        event_id: str | None = None,
    ) -> list[EventRating]:
        return [
            rating
            for rating in self.event_ratings
            if (player_id is None or rating.player_id == player_id)
            and (event_id is None or rating.event_id == event_id)
        ]

    def get_elo_history(self, player_id: str, event_id: str | None = None) -> list[EloHistoryEntry]:
        entries = [
            entry
            for entry in self.elo_history
            if entry.player_id == player_id and (event_id is None or entry.event_id == event_id)
        ]
        return sorted(entries, key=lambda entry: entry.timestamp)

    def list_teams(self, year: int | None = None) -> list[Team]:
        return [team for team in self.teams if year is None or team.year == year]

    def list_team_members(
        self,
        team_id: str | None = None,
        year: int | None = None,
    ) -> list[TeamMember]:
        return [
            member
            for member in self.team_members
            if (team_id is None or member.team_id == team_id)
            and (year is None or member.year is None or member.year == year)
        ]

    def get_captain(self, team_id: str) -> Player | None:
        team = next((team for team in self.teams if team.id == team_id), None)
        if team is None or team.captain_id is None:
            return None
        return self.get_player(team.captain_id)

    def list_events(self, year: int | None = None) -> list[Event]:
        return [event for event in self.events if year is None or event.year == year]


__all__ = ["InMemoryRatingStore"]
