"""Lightweight table declarations for the tournament store the engine reads from.

The schema is owned by the application that writes these tables; only the
columns the engine reads are declared here.
"""

from __future__ import annotations

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, MetaData, String, Table
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

metadata = MetaData()

_points_type = JSON().with_variant(ARRAY(Integer), "postgresql")
_standings_type = JSON().with_variant(JSONB(), "postgresql")

players = Table(
    "players",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("eloRating", Integer),
    Column("experience", Integer),
    Column("wins", Integer),
    Column("isActive", Boolean),
    Column("createdAt", DateTime(timezone=False)),
)

teams = Table(
    "teams",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("color", String),
    Column("abbreviation", String),
    Column("captainId", String),
    Column("logo", String),
    Column("year", Integer),
    Column("createdAt", DateTime(timezone=False)),
)

team_members = Table(
    "team_members",
    metadata,
    Column("teamId", String, primary_key=True),
    Column("playerId", String, primary_key=True),
    Column("year", Integer, primary_key=True),
)

events = Table(
    "events",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("abbreviation", String),
    Column("symbol", String),
    Column("eventType", String, nullable=False),
    Column("status", String, nullable=False),
    Column("points", _points_type),
    Column("finalStandings", _standings_type),
    Column("year", Integer),
    Column("startTime", DateTime(timezone=False)),
)

event_ratings = Table(
    "event_ratings",
    metadata,
    Column("id", String, primary_key=True),
    Column("playerId", String, nullable=False),
    Column("eventId", String, nullable=False),
    Column("rating", Float, nullable=False),
    Column("gamesPlayed", Integer),
)

elo_history = Table(
    "elo_history",
    metadata,
    Column("id", String, primary_key=True),
    Column("playerId", String, nullable=False),
    Column("eventId", String),
    Column("oldRating", Float, nullable=False),
    Column("newRating", Float, nullable=False),
    Column("timestamp", DateTime(timezone=False), nullable=False),
)

__all__ = [
    "elo_history",
    "event_ratings",
    "events",
    "metadata",
    "players",
    "team_members",
    "teams",
]
