"""Error taxonomy for engine operations."""

from __future__ import annotations


class StandingsEngineError(Exception):
    """Base class for engine failures surfaced to callers."""


class NotFoundError(StandingsEngineError, LookupError):
    """A referenced player, team or event does not exist in the snapshot."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found: id={entity_id!r}")
        self.kind = kind
        self.entity_id = entity_id


class InvalidStateError(StandingsEngineError, ValueError):
    """Input that cannot be skipped around and makes the whole request unusable."""


__all__ = ["InvalidStateError", "NotFoundError", "StandingsEngineError"]
