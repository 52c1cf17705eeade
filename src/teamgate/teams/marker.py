"""Persisted marker recording which team was auto-joined on this load."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MARKER_FILE = "joined_on_load.json"


class JoinedOnLoadStore:
    """Single-value JSON store under the teamgate state directory."""

    def __init__(self, state_dir: str | Path) -> None:
        self._dir = Path(state_dir)
        self._path = self._dir / MARKER_FILE

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.debug("Ignoring unreadable joined-on-load marker at %s", self._path)
            return None
        if not isinstance(data, dict):
            logger.debug("Ignoring malformed joined-on-load marker at %s", self._path)
            return None
        return data.get("team_id")

    def set(self, team_id: str | None) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({"team_id": team_id}), encoding="utf-8")
        logger.debug("Joined-on-load marker set to %s", team_id)

    def clear(self) -> None:
        self.set(None)
