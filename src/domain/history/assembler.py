"""Assemble day-granular rating histories per event and overall."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from domain.common import (
    EloHistoryEntry,
    Event,
    EventHistory,
    HistoryPoint,
    Player,
    PlayerHistory,
    round_half_up,
)
from domain.config import HistoryConfig
from domain.snapshot import RatingSnapshot


def collapse_by_day(entries: Iterable[EloHistoryEntry]) -> list[tuple[date, float]]:
    """Truncate to calendar days, keeping the last rating recorded on each day."""
    by_day: dict[date, float] = {}
    for entry in sorted(entries, key=lambda entry: entry.timestamp):
        by_day[entry.timestamp.date()] = entry.new_rating
    return sorted(by_day.items())


def carry_forward_average(series: Sequence[Sequence[tuple[date, float]]]) -> list[HistoryPoint]:
    """Average each event's latest known rating on every day any event changed.

    An event only contributes from its first recorded day onward.
    """
    days = sorted({day for points in series for day, _ in points})
    cursors = [0] * len(series)
    latest: list[float | None] = [None] * len(series)

    overall: list[HistoryPoint] = []
    for day in days:
        for index, points in enumerate(series):
            while cursors[index] < len(points) and points[cursors[index]][0] <= day:
                latest[index] = points[cursors[index]][1]
                cursors[index] += 1
        known = [rating for rating in latest if rating is not None]
        overall.append(HistoryPoint(day=day, rating=round_half_up(sum(known) / float(len(known)))))
    return overall


class HistoryAssembler:
    def __init__(self, snapshot: RatingSnapshot, config: HistoryConfig | None = None) -> None:
        self.snapshot = snapshot
        self.config = config or HistoryConfig()

    def _rated_events(self, player: Player) -> list[Event]:
        rated_ids = {rating.event_id for rating in self.snapshot.ratings_by_player.get(player.id, ())}
        return [event for event in self.snapshot.events if event.id in rated_ids]

    def assemble(
        self,
        player: Player,
        entries: Iterable[EloHistoryEntry] | None = None,
    ) -> PlayerHistory:
        """Build the player's event and overall histories.

        ``entries`` defaults to the player's history held by the snapshot.
        Entries without an event scope do not feed either history.
        """
        player_entries = list(self.snapshot.history_for(player.id) if entries is None else entries)

        event_histories: list[EventHistory] = []
        collapsed_series: list[list[tuple[date, float]]] = []
        for event in self._rated_events(player):
            scoped = [
                entry
                for entry in player_entries
                if entry.player_id == player.id and entry.event_id == event.id
            ]
            collapsed = collapse_by_day(scoped)
            collapsed_series.append(collapsed)
            event_histories.append(
                EventHistory(
                    event_id=event.id,
                    event_name=event.name,
                    event_abbreviation=event.abbreviation,
                    event_symbol=event.symbol,
                    points=tuple(
                        HistoryPoint(day=day, rating=round_half_up(rating)) for day, rating in collapsed
                    ),
                    vote_count=len(scoped),
                )
            )

        overall = carry_forward_average(collapsed_series)
        if len(overall) == 1 and len(event_histories) > 1 and self.config.synthesize_sparse_history:
            overall = self._bracket(overall[0])

        return PlayerHistory(
            player_id=player.id,
            overall_history=tuple(overall),
            event_histories=tuple(event_histories),
            overall_vote_count=sum(history.vote_count for history in event_histories),
        )

    def _bracket(self, point: HistoryPoint) -> list[HistoryPoint]:
        # Display-only points so a trend line has something to draw.
        before = HistoryPoint(
            day=point.day - timedelta(days=1),
            rating=max(self.config.synthetic_floor, point.rating - self.config.synthetic_below_offset),
            synthetic=True,
        )
        after = HistoryPoint(
            day=point.day + timedelta(days=1),
            rating=min(self.config.synthetic_ceiling, point.rating + self.config.synthetic_above_offset),
            synthetic=True,
        )
        return [before, point, after]


__all__ = ["HistoryAssembler", "carry_forward_average", "collapse_by_day"]
