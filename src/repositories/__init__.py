"""Read-side store implementations."""

from repositories.memory_store import InMemoryRatingStore
from repositories.sql_store import SqlRatingStore

__all__ = ["InMemoryRatingStore", "SqlRatingStore"]
