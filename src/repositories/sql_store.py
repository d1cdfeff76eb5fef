"""SQLAlchemy-backed implementation of the engine's read contract."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, String, cast, or_, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import Session

from domain.common import (
    EloHistoryEntry,
    Event,
    EventRating,
    EventStatus,
    EventType,
    Player,
    Team,
    TeamMember,
)
from domain.errors import InvalidStateError
from repositories.tables import elo_history, event_ratings, events, players, team_members, teams

logger = logging.getLogger(__name__)


def _row_to_player(row: RowMapping) -> Player:
    return Player(
        id=row["id"],
        name=row["name"],
        base_rating=row["eloRating"],
        experience=int(row["experience"] or 0),
        wins=int(row["wins"] or 0),
        is_active=True if row["isActive"] is None else bool(row["isActive"]),
        created_at=row["createdAt"],
    )


def _row_to_team(row: RowMapping) -> Team:
    return Team(
        id=row["id"],
        name=row["name"],
        color=row["color"] or "",
        abbreviation=row["abbreviation"],
        captain_id=row["captainId"],
        logo=row["logo"],
        year=row["year"],
        created_at=row["createdAt"],
    )


def _row_to_event(row: RowMapping) -> Event:
    final_standings: Any = row["finalStandings"]
    if final_standings is not None and not isinstance(final_standings, list):
        raise InvalidStateError(
            f"event_id={row['id']} has non-list finalStandings of type {type(final_standings)!r}"
        )
    return Event(
        id=row["id"],
        name=row["name"],
        abbreviation=row["abbreviation"] or "",
        symbol=row["symbol"] or "",
        event_type=EventType(row["eventType"]),
        status=EventStatus(row["status"]),
        points=tuple(int(value) for value in (row["points"] or ())),
        final_standings=None if final_standings is None else tuple(str(team_id) for team_id in final_standings),
        year=row["year"],
        start_time=row["startTime"],
    )


class SqlRatingStore:
    """Read players, teams, events and rating rows through one session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _mappings(self, statement: Select) -> Sequence[RowMapping]:
        return self.session.execute(statement).mappings().all()

    def _player_statement(self) -> Select:
        return select(players).order_by(players.c.createdAt, players.c.id)

    def get_player(self, player_id: str) -> Player | None:
        row = self.session.execute(select(players).where(players.c.id == player_id)).mappings().first()
        return None if row is None else _row_to_player(row)

    def list_players(self) -> list[Player]:
        return [_row_to_player(row) for row in self._mappings(self._player_statement())]

    def list_active_players(self) -> list[Player]:
        statement = self._player_statement().where(players.c.isActive.is_(True))
        return [_row_to_player(row) for row in self._mappings(statement)]

    def get_event_ratings(
        self,
        player_id: str | None = None,
        event_id: str | None = None,
    ) -> list[EventRating]:
        statement = select(event_ratings).order_by(event_ratings.c.playerId, event_ratings.c.eventId)
        if player_id is not None:
            statement = statement.where(event_ratings.c.playerId == player_id)
        if event_id is not None:
            statement = statement.where(event_ratings.c.eventId == event_id)
        return [
            EventRating(
                player_id=row["playerId"],
                event_id=row["eventId"],
                rating=row["rating"],
                games_played=int(row["gamesPlayed"] or 0),
            )
            for row in self._mappings(statement)
        ]

    def get_elo_history(self, player_id: str, event_id: str | None = None) -> list[EloHistoryEntry]:
        statement = (
            select(elo_history)
            .where(elo_history.c.playerId == player_id)
            .order_by(elo_history.c.timestamp, elo_history.c.id)
        )
        if event_id is not None:
            statement = statement.where(elo_history.c.eventId == event_id)
        return [
            EloHistoryEntry(
                player_id=row["playerId"],
                event_id=row["eventId"],
                timestamp=row["timestamp"],
                old_rating=row["oldRating"],
                new_rating=row["newRating"],
            )
            for row in self._mappings(statement)
        ]

    def list_teams(self, year: int | None = None) -> list[Team]:
        statement = select(teams).order_by(teams.c.createdAt, teams.c.id)
        if year is not None:
            statement = statement.where(teams.c.year == year)
        return [_row_to_team(row) for row in self._mappings(statement)]

    def list_team_members(
        self,
        team_id: str | None = None,
        year: int | None = None,
    ) -> list[TeamMember]:
        statement = select(team_members).order_by(team_members.c.teamId, team_members.c.playerId)
        if team_id is not None:
            statement = statement.where(team_members.c.teamId == team_id)
        if year is not None:
            statement = statement.where(
                or_(team_members.c.year == year, team_members.c.year.is_(None))
            )
        return [
            TeamMember(team_id=row["teamId"], player_id=row["playerId"], year=row["year"])
            for row in self._mappings(statement)
        ]

    def get_captain(self, team_id: str) -> Player | None:
        statement = (
            select(players)
            .join(teams, teams.c.captainId == players.c.id)
            .where(teams.c.id == team_id)
        )
        row = self.session.execute(statement).mappings().first()
        return None if row is None else _row_to_player(row)

    def list_events(self, year: int | None = None) -> list[Event]:
        statement = select(
            events.c.id,
            events.c.name,
            events.c.abbreviation,
            events.c.symbol,
            cast(events.c.eventType, String).label("eventType"),
            cast(events.c.status, String).label("status"),
            events.c.points,
            events.c.finalStandings,
            events.c.year,
            events.c.startTime,
        ).order_by(events.c.startTime, events.c.id)
        if year is not None:
            statement = statement.where(events.c.year == year)
        rows = self._mappings(statement)
        logger.debug("loaded events year=%s count=%d", year, len(rows))
        return [_row_to_event(row) for row in rows]


__all__ = ["SqlRatingStore"]
