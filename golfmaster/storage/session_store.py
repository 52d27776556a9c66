"""Durable storage for the session snapshot.

The whole :class:`SessionState` is kept as one JSON document under a fixed
key. Loading is forgiving: anything that cannot be read back is treated as
"no prior state". Saving is best effort and never raises.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from golfmaster.config import get_settings
from golfmaster.metrics import SAVE_FAILURES
from golfmaster.session.models import SessionState

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(
        self, base_dir: Path | str | None = None, key: str | None = None
    ) -> None:
        settings = get_settings()
        base = Path(base_dir or settings.data_dir).expanduser()
        self._base_dir = base.resolve()
        self._key = key or settings.storage_key

    @property
    def path(self) -> Path:
        return self._base_dir / f"{self._key}.json"

    def load(self) -> SessionState | None:
        path = self.path
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return SessionState.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("discarding unreadable session snapshot %s: %s", path, exc)
            return None

    def save(self, state: SessionState) -> bool:
        """Write ``state``; returns False (after logging) when the write failed."""

        path = self.path
        tmp_name: str | None = None
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(state.to_snapshot(), indent=2, sort_keys=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._base_dir,
                prefix=f".{self._key}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
            return True
        except (OSError, TypeError, ValueError):
            SAVE_FAILURES.inc()
            logger.exception("failed to save session snapshot to %s", path)
            return False
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    return SessionStore()


__all__ = ["SessionStore", "get_session_store"]
