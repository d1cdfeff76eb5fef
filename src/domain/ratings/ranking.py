"""Deterministic player rankings, overall and per event."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from domain.common import (
    EventRating,
    Player,
    PlayerEventRanking,
    RankedPlayer,
    creation_order_key,
    round_half_up,
)
from domain.ratings.resolver import RatingResolver
from domain.ratings.trend import rating_trend


class RankingService:
    """Order players by resolved rating, descending.

    Ties fall back to creation order and then id, so the order never depends on
    how the store happened to return rows.
    """

    def __init__(self, resolver: RatingResolver) -> None:
        self.resolver = resolver
        self.snapshot = resolver.snapshot

    def _sort_key(self, player: Player) -> tuple[float, tuple[bool, datetime, str]]:
        return (-self.resolver.exact(player), creation_order_key(player.created_at, player.id))

    def rank(
        self,
        players: Iterable[Player] | None = None,
        *,
        as_of: datetime | None = None,
    ) -> tuple[RankedPlayer, ...]:
        population = self.snapshot.players if players is None else tuple(players)
        ordered = sorted(population, key=self._sort_key)
        window_hours = self.resolver.config.trend_window_hours

        ranked: list[RankedPlayer] = []
        for position, player in enumerate(ordered, start=1):
            trend = None
            if as_of is not None:
                trend = rating_trend(
                    self.snapshot.history_for(player.id),
                    as_of=as_of,
                    window_hours=window_hours,
                )
            ranked.append(
                RankedPlayer(
                    player_id=player.id,
                    name=player.name,
                    rating=self.resolver.resolve(player),
                    rank=position,
                    experience=player.experience,
                    trend=trend,
                )
            )
        return tuple(ranked)

    def global_rank(self, player_id: str) -> int:
        """1-based position of the player among every player in the snapshot."""
        player = self.snapshot.player(player_id)
        ordered = sorted(self.snapshot.players, key=self._sort_key)
        return ordered.index(player) + 1

    def rank_event(self, event_id: str) -> tuple[EventRating, ...]:
        """Holders of an event rating for one event, best first."""
        players_by_id = self.snapshot.players_by_id

        def sort_key(rating: EventRating) -> tuple[float, tuple[bool, datetime, str]]:
            player = players_by_id.get(rating.player_id)
            created_at = None if player is None else player.created_at
            return (-float(rating.rating), creation_order_key(created_at, rating.player_id))

        return tuple(sorted(self.snapshot.ratings_by_event.get(event_id, ()), key=sort_key))

    def player_event_rankings(
        self,
        player_id: str,
        *,
        as_of: datetime | None = None,
    ) -> tuple[PlayerEventRanking, ...]:
        """Where the player stands inside every event they hold a rating for."""
        player = self.snapshot.player(player_id)
        window_hours = self.resolver.config.trend_window_hours

        rankings: list[PlayerEventRanking] = []
        for event_rating in self.snapshot.ratings_by_player.get(player.id, ()):
            event = self.snapshot.events_by_id.get(event_rating.event_id)
            if event is None:
                continue
            ordered = self.rank_event(event.id)
            global_rank = next(
                position
                for position, rating in enumerate(ordered, start=1)
                if rating.player_id == player.id
            )
            trend = None
            if as_of is not None:
                trend = rating_trend(
                    self.snapshot.history_for(player.id),
                    as_of=as_of,
                    window_hours=window_hours,
                    event_id=event.id,
                )
            rankings.append(
                PlayerEventRanking(
                    event_id=event.id,
                    event_name=event.name,
                    event_abbreviation=event.abbreviation,
                    event_symbol=event.symbol,
                    rating=round_half_up(event_rating.rating),
                    global_rank=global_rank,
                    games_played=event_rating.games_played,
                    trend=trend,
                )
            )

        return tuple(sorted(rankings, key=lambda ranking: (ranking.global_rank, ranking.event_id)))


__all__ = ["RankingService"]
