"""Immutable, indexed view of store data that all engine components compute over."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Collection
from dataclasses import dataclass
from functools import cached_property
from typing import Literal

from domain.common import EloHistoryEntry, Event, EventRating, Player, Team, TeamMember
from domain.errors import NotFoundError
from domain.protocol import RatingStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingSnapshot:
    """Everything one request reads from the store, fetched once up front."""

    players: tuple[Player, ...] = ()
    event_ratings: tuple[EventRating, ...] = ()
    teams: tuple[Team, ...] = ()
    team_members: tuple[TeamMember, ...] = ()
    events: tuple[Event, ...] = ()
    elo_history: tuple[EloHistoryEntry, ...] = ()

    @cached_property
    def players_by_id(self) -> dict[str, Player]:
        return {player.id: player for player in self.players}

    @cached_property
    def teams_by_id(self) -> dict[str, Team]:
        return {team.id: team for team in self.teams}

    @cached_property
    def events_by_id(self) -> dict[str, Event]:
        return {event.id: event for event in self.events}

    @cached_property
    def ratings_by_player(self) -> dict[str, tuple[EventRating, ...]]:
        grouped: dict[str, list[EventRating]] = defaultdict(list)
        for rating in self.event_ratings:
            grouped[rating.player_id].append(rating)
        return {player_id: tuple(ratings) for player_id, ratings in grouped.items()}

    @cached_property
    def ratings_by_event(self) -> dict[str, tuple[EventRating, ...]]:
        grouped: dict[str, list[EventRating]] = defaultdict(list)
        for rating in self.event_ratings:
            grouped[rating.event_id].append(rating)
        return {event_id: tuple(ratings) for event_id, ratings in grouped.items()}

    @cached_property
    def rating_lookup(self) -> dict[tuple[str, str], EventRating]:
        return {(rating.player_id, rating.event_id): rating for rating in self.event_ratings}

    @cached_property
    def members_by_team(self) -> dict[str, tuple[TeamMember, ...]]:
        grouped: dict[str, list[TeamMember]] = defaultdict(list)
        for member in self.team_members:
            grouped[member.team_id].append(member)
        return {team_id: tuple(members) for team_id, members in grouped.items()}

    @cached_property
    def history_by_player(self) -> dict[str, tuple[EloHistoryEntry, ...]]:
        grouped: dict[str, list[EloHistoryEntry]] = defaultdict(list)
        for entry in self.elo_history:
            grouped[entry.player_id].append(entry)
        return {
            player_id: tuple(sorted(entries, key=lambda entry: entry.timestamp))
            for player_id, entries in grouped.items()
        }

    def player(self, player_id: str) -> Player:
        try:
            return self.players_by_id[player_id]
        except KeyError as exc:
            raise NotFoundError("player", player_id) from exc

    def team(self, team_id: str) -> Team:
        try:
            return self.teams_by_id[team_id]
        except KeyError as exc:
            raise NotFoundError("team", team_id) from exc

    def event(self, event_id: str) -> Event:
        try:
            return self.events_by_id[event_id]
        except KeyError as exc:
            raise NotFoundError("event", event_id) from exc

    def history_for(self, player_id: str) -> tuple[EloHistoryEntry, ...]:
        return self.history_by_player.get(player_id, ())


def load_snapshot(
    store: RatingStore,
    *,
    year: int | None = None,
    history_for: Collection[str] | Literal["all"] = (),
) -> RatingSnapshot:
    """Read one consistent-enough snapshot from the store.

    Teams, rosters and events are scoped to ``year`` when given; players and
    event ratings are not, since overall ratings span every event. Elo history
    is only fetched for the requested players because it is by far the largest
    table.
    """
    players = tuple(store.list_players())
    if history_for == "all":
        history_player_ids: Collection[str] = [player.id for player in players]
    else:
        history_player_ids = history_for

    elo_history: list[EloHistoryEntry] = []
    for player_id in history_player_ids:
        elo_history.extend(store.get_elo_history(player_id))

    snapshot = RatingSnapshot(
        players=players,
        event_ratings=tuple(store.get_event_ratings()),
        teams=tuple(store.list_teams(year)),
        team_members=tuple(store.list_team_members(year=year)),
        events=tuple(store.list_events(year)),
        elo_history=tuple(elo_history),
    )
    logger.debug(
        "loaded snapshot year=%s players=%d event_ratings=%d teams=%d team_members=%d "
        "events=%d elo_history=%d",
        year,
        len(snapshot.players),
        len(snapshot.event_ratings),
        len(snapshot.teams),
        len(snapshot.team_members),
        len(snapshot.events),
        len(snapshot.elo_history),
    )
    return snapshot


__all__ = ["RatingSnapshot", "load_snapshot"]
