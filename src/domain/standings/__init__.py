"""Team standings modules."""

from domain.standings.projector import StandingsProjector, StandingsResult

__all__ = ["StandingsProjector", "StandingsResult"]
