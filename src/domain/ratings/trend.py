"""Short-window rating movement derived from Elo history."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from domain.common import EloHistoryEntry, round_half_up


def rating_trend(
    entries: Iterable[EloHistoryEntry],
    *,
    as_of: datetime,
    window_hours: int = 24,
    event_id: str | None = None,
) -> int:
    """Net rating change over the trailing window ending at ``as_of``.

    With ``event_id`` only that event's entries count; otherwise every entry
    of the player does, whatever its scope.
    """
    cutoff = as_of - timedelta(hours=window_hours)
    window = sorted(
        (
            entry
            for entry in entries
            if cutoff <= entry.timestamp <= as_of
            and (event_id is None or entry.event_id == event_id)
        ),
        key=lambda entry: entry.timestamp,
    )
    if not window:
        return 0
    return round_half_up(window[-1].new_rating - window[0].old_rating)


__all__ = ["rating_trend"]
