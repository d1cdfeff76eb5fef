"""Rating history modules."""

from domain.history.assembler import HistoryAssembler

__all__ = ["HistoryAssembler"]
