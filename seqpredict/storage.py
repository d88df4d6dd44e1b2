from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from seqpredict.errors import StateDecodeError
from seqpredict.schemas import SessionState

logger = logging.getLogger(__name__)


class JsonStateStore:
    """Session snapshot persisted as a single JSON document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def save(self, state: SessionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(state.model_dump_json(), encoding="utf-8")
        tmp.replace(self.path)

    def load(self) -> Optional[SessionState]:
        if not self.path.exists():
            return None
        try:
            return SessionState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (ValidationError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("cannot decode state file %s", self.path)
            raise StateDecodeError(f"corrupt state file {self.path}: {exc}") from exc

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
