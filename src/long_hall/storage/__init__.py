"""Local persistence for run states."""

from long_hall.storage.saves import SaveRecord, SaveStore


__all__ = ["SaveRecord", "SaveStore"]
