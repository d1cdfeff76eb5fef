"""Resolve a player's current rating from event ratings with a base-rating fallback."""

from __future__ import annotations

from domain.common import Player, round_half_up
from domain.config import EngineConfig
from domain.snapshot import RatingSnapshot


class RatingResolver:
    """Single source of truth for "the player's rating right now".

    Nothing is cached as authoritative state: every call recomputes from the
    snapshot's event-rating rows.
    """

    def __init__(self, snapshot: RatingSnapshot, config: EngineConfig | None = None) -> None:
        self.snapshot = snapshot
        self.config = config or EngineConfig()

    def base_rating(self, player: Player) -> int:
        if player.base_rating is None:
            return self.config.default_rating
        return player.base_rating

    def exact(self, player: Player, event_id: str | None = None) -> float:
        """Unrounded rating, suitable as a ranking key."""
        if event_id is not None:
            event_rating = self.snapshot.rating_lookup.get((player.id, event_id))
            if event_rating is not None:
                return float(event_rating.rating)
            return float(self.resolve(player))

        ratings = self.snapshot.ratings_by_player.get(player.id, ())
        if not ratings:
            return float(self.base_rating(player))
        return sum(rating.rating for rating in ratings) / float(len(ratings))

    def resolve(self, player: Player, event_id: str | None = None) -> int:
        """Event-scoped rating if present, else the overall resolved rating."""
        return round_half_up(self.exact(player, event_id))

    def resolve_id(self, player_id: str, event_id: str | None = None) -> int:
        return self.resolve(self.snapshot.player(player_id), event_id)

    def has_event_rating(self, player: Player, event_id: str) -> bool:
        return (player.id, event_id) in self.snapshot.rating_lookup


__all__ = ["RatingResolver"]
