"""Local save slots.

Each slot is one JSON envelope in the save directory::

    {"version": 1, "slot": "...", "savedAt": "...", "score": 123,
     "digest": "<sha256 of state>", "state": {...camelCase run state...}}

The digest covers the compact JSON of the state, so a hand-edited save
is rejected on load when integrity checks are on. Saving happens after a
transition completes; nothing read here ever feeds back into a run
except through :meth:`SaveStore.load`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from long_hall.core.config import get_settings
from long_hall.core.exceptions import PersistenceError, SaveIntegrityError
from long_hall.core.logging import get_logger
from long_hall.engine.hashing import sha256_digest
from long_hall.engine.scoring import calculate_score
from long_hall.models.state import RunState


logger = get_logger(__name__)

ENVELOPE_VERSION = 1
SAVE_SUFFIX = ".json"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class SaveRecord:
    """A save slot as stored on disk.

    Attributes:
        slot: Slot name (the file stem).
        saved_at: When the envelope was written.
        score: Score of the saved state at save time.
        digest: sha256 of the state's compact JSON.
        state: Wire-form run state.
    """

    slot: str
    saved_at: datetime
    score: int
    digest: str
    state: dict[str, Any]

    def to_envelope(self) -> dict[str, Any]:
        return {
            "version": ENVELOPE_VERSION,
            "slot": self.slot,
            "savedAt": self.saved_at.isoformat(),
            "score": self.score,
            "digest": self.digest,
            "state": self.state,
        }

    @classmethod
    def from_envelope(cls, envelope: dict[str, Any]) -> SaveRecord:
        """Parse an envelope written by :meth:`to_envelope`.

        Raises:
            KeyError: If a field is missing.
            ValueError: If the timestamp is malformed.
        """
        return cls(
            slot=envelope["slot"],
            saved_at=datetime.fromisoformat(envelope["savedAt"]),
            score=int(envelope.get("score", 0)),
            digest=envelope["digest"],
            state=envelope["state"],
        )

    @property
    def is_intact(self) -> bool:
        return sha256_digest(self.state) == self.digest


# =============================================================================
# Save Store
# =============================================================================


class SaveStore:
    """JSON save slots in one directory."""

    def __init__(
        self,
        directory: str | Path | None = None,
        *,
        default_slot: str | None = None,
        verify_integrity: bool | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            directory: Where slots live. Defaults to the configured directory.
            default_slot: Slot used when none is given. Defaults to the configured slot.
            verify_integrity: Check digests on load. Defaults to the configured flag.
        """
        storage = get_settings().storage
        self.directory = Path(directory) if directory is not None else storage.save_directory
        self.default_slot = default_slot or storage.default_slot
        self.verify_integrity = (
            storage.verify_integrity if verify_integrity is None else verify_integrity
        )
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Save store ready", directory=str(self.directory))

    def _path(self, slot: str | None) -> Path:
        return self.directory / f"{slot or self.default_slot}{SAVE_SUFFIX}"

    def save(self, state: RunState, slot: str | None = None) -> SaveRecord:
        """Write ``state`` to a slot, replacing what was there.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        name = slot or self.default_slot
        wire = state.to_wire()
        record = SaveRecord(
            slot=name,
            saved_at=datetime.now(),
            score=calculate_score(state),
            digest=sha256_digest(wire),
            state=wire,
        )
        path = self._path(name)
        try:
            path.write_text(
                json.dumps(record.to_envelope(), ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Could not write save: {exc}", slot=name) from exc
        logger.info("Run saved", slot=name, depth=state.depth, score=record.score)
        return record

    def read(self, slot: str | None = None) -> SaveRecord | None:
        """Read a slot's envelope without restoring the state.

        Raises:
            PersistenceError: If the file exists but is not a valid envelope.
        """
        name = slot or self.default_slot
        path = self._path(name)
        if not path.exists():
            return None
        try:
            return SaveRecord.from_envelope(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise PersistenceError(f"Unreadable save: {exc}", slot=name) from exc

    def load(self, slot: str | None = None) -> RunState | None:
        """Restore the run in a slot, or None if the slot is empty.

        Raises:
            SaveIntegrityError: If the digest does not match the state.
            PersistenceError: If the envelope or state cannot be parsed.
        """
        name = slot or self.default_slot
        record = self.read(name)
        if record is None:
            return None
        if self.verify_integrity and not record.is_intact:
            logger.warning("Save digest mismatch", slot=name)
            raise SaveIntegrityError("Save file has been modified", slot=name)
        try:
            state = RunState.model_validate(record.state)
        except ValidationError as exc:
            raise PersistenceError(f"Invalid run state: {exc}", slot=name) from exc
        logger.info("Run loaded", slot=name, depth=state.depth)
        return state

    def delete(self, slot: str | None = None) -> bool:
        """Remove a slot; returns whether anything was deleted."""
        path = self._path(slot)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Save deleted", slot=slot or self.default_slot)
        return True

    def list_slots(self) -> list[str]:
        """Slot names present in the directory, sorted."""
        return sorted(p.stem for p in self.directory.glob(f"*{SAVE_SUFFIX}"))


__all__ = ["ENVELOPE_VERSION", "SaveRecord", "SaveStore"]
