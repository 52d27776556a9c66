from __future__ import annotations

import logging
from functools import lru_cache
from threading import RLock

from golfmaster.metrics import COMMANDS
from golfmaster.storage.session_store import SessionStore, get_session_store

from . import engine
from .commands import (
    CloseRound,
    Command,
    DeleteArchivedRound,
    finish_hole_command,
)
from .models import FinishedRound, HoleRecord, SessionState

logger = logging.getLogger(__name__)


class ArchivedRoundNotFound(Exception):
    pass


class EmptyRoundError(Exception):
    pass


class SessionService:
    """Owner of the live :class:`SessionState`.

    Every change goes through :meth:`dispatch`, which applies the command with
    the transition engine, swaps in the resulting state and commits it to the
    store. Readers get the current immutable snapshot from :attr:`state`.
    """

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._lock = RLock()
        loaded = store.load()
        if loaded is None:
            logger.info("no stored session under %s; starting fresh", store.path)
            loaded = SessionState()
        self._state = loaded

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, command: Command) -> SessionState:
        with self._lock:
            previous = self._state
            self._state = engine.apply(previous, command)
            outcome = "ignored" if self._state is previous else "applied"
            COMMANDS.labels(command=type(command).__name__, outcome=outcome).inc()
            self.commit()
            return self._state

    def commit(self) -> None:
        """Persist the current state; failures are logged by the store only."""

        self._store.save(self._state)

    def finish_hole(self, record: HoleRecord) -> SessionState:
        """Commit the scratchpad as a new hole or as the hole being edited."""

        with self._lock:
            return self.dispatch(finish_hole_command(self._state, record))

    def close_round(
        self,
        *,
        course_name: str = "",
        player_name: str = "",
        date: str | None = None,
    ) -> FinishedRound:
        """Archive the round in progress and start over with the same bag."""

        with self._lock:
            holes = self._state.completed_holes
            if not holes:
                raise EmptyRoundError("no completed holes to archive")

            record = FinishedRound.close_out(
                holes, course_name=course_name, player_name=player_name, date=date
            )
            self.dispatch(CloseRound(record=record))
            return record

    def get_archived_round(self, round_id: str) -> FinishedRound:
        for record in self._state.archive:
            if record.id == round_id:
                return record
        raise ArchivedRoundNotFound(round_id)

    def delete_archived_round(self, round_id: str) -> SessionState:
        self.get_archived_round(round_id)
        return self.dispatch(DeleteArchivedRound(round_id=round_id))


@lru_cache(maxsize=1)
def get_session_service() -> SessionService:
    return SessionService(get_session_store())


__all__ = [
    "SessionService",
    "ArchivedRoundNotFound",
    "EmptyRoundError",
    "get_session_service",
]
