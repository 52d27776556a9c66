"""Transition engine for the round-flow state machine.

``apply`` is the only way a :class:`SessionState` changes. It is a pure
function: it returns a new state (or the same object when the command is
ignored) and never persists, renders or raises. Persisting the result is the
caller's commit step, see :mod:`golfmaster.session.service`.

Commands addressing a position that does not exist (stroke, completed hole or
archive entry) are ignored and logged rather than rejected with an error.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from .commands import (
    AddStroke,
    ArchiveRound,
    ClearArchive,
    CloseRound,
    DeleteArchived,
    DeleteArchivedRound,
    DeleteStroke,
    EditHole,
    FinishEditedHole,
    FinishNewHole,
    LoadState,
    ResetRound,
    ResumeRound,
    SetBag,
    SetMode,
    StartHole,
    UpdateStroke,
)
from .models import HOLES_PER_ROUND, SessionMode, SessionState

logger = logging.getLogger(__name__)


def _in_range(index: int, size: int) -> bool:
    return 0 <= index < size


def _ignore(state: SessionState, command: Any, reason: str) -> SessionState:
    logger.warning(
        "ignoring %s: %s", type(command).__name__, reason, extra={"command": command}
    )
    return state


def _load_state(state: SessionState, command: LoadState) -> SessionState:
    return command.snapshot


def _set_bag(state: SessionState, command: SetBag) -> SessionState:
    bag = tuple(dict.fromkeys(club for club in command.clubs if club))
    return state.model_copy(update={"bag": bag})


def _set_mode(state: SessionState, command: SetMode) -> SessionState:
    return state.model_copy(update={"mode": command.mode})


def _start_hole(state: SessionState, command: StartHole) -> SessionState:
    return state.model_copy(
        update={
            "active_hole_number": command.number,
            "active_par": command.par,
            "active_strokes": (),
            "mode": SessionMode.LIVE_HOLE,
            "is_editing": False,
        }
    )


def _add_stroke(state: SessionState, command: AddStroke) -> SessionState:
    return state.model_copy(
        update={"active_strokes": state.active_strokes + (command.stroke,)}
    )


def _update_stroke(state: SessionState, command: UpdateStroke) -> SessionState:
    strokes = state.active_strokes
    if not _in_range(command.index, len(strokes)):
        return _ignore(state, command, f"no stroke at index {command.index}")
    index = command.index
    updated = strokes[:index] + (command.stroke,) + strokes[index + 1 :]
    return state.model_copy(update={"active_strokes": updated})


def _delete_stroke(state: SessionState, command: DeleteStroke) -> SessionState:
    strokes = state.active_strokes
    if not _in_range(command.index, len(strokes)):
        return _ignore(state, command, f"no stroke at index {command.index}")
    remaining = strokes[: command.index] + strokes[command.index + 1 :]
    return state.model_copy(update={"active_strokes": remaining})


def _finish_new_hole(state: SessionState, command: FinishNewHole) -> SessionState:
    next_hole = state.active_hole_number + 1
    return state.model_copy(
        update={
            "completed_holes": state.completed_holes + (command.record,),
            "active_hole_number": next_hole,
            "furthest_hole_reached": next_hole,
            "active_strokes": (),
            "is_editing": False,
            "editing_index": None,
            "mode": (
                SessionMode.SUMMARY
                if next_hole > HOLES_PER_ROUND
                else SessionMode.HOLE_SETUP
            ),
        }
    )


def _finish_edited_hole(
    state: SessionState, command: FinishEditedHole
) -> SessionState:
    holes = state.completed_holes
    if not _in_range(command.index, len(holes)):
        return _ignore(state, command, f"no completed hole at index {command.index}")
    index = command.index
    replaced = holes[:index] + (command.record,) + holes[index + 1 :]
    return state.model_copy(
        update={
            "completed_holes": replaced,
            "is_editing": False,
            "editing_index": None,
            "mode": SessionMode.SUMMARY,
        }
    )


def _edit_hole(state: SessionState, command: EditHole) -> SessionState:
    if not _in_range(command.index, len(state.completed_holes)):
        return _ignore(state, command, f"no completed hole at index {command.index}")
    record = command.record or state.completed_holes[command.index]
    return state.model_copy(
        update={
            "is_editing": True,
            "editing_index": command.index,
            "active_hole_number": record.hole_number,
            "active_par": record.par,
            # Fresh tuple: the scratchpad never shares a sequence with the record.
            "active_strokes": tuple(record.strokes),
            "mode": SessionMode.LIVE_HOLE,
        }
    )


def _resume_round(state: SessionState, command: ResumeRound) -> SessionState:
    return state.model_copy(
        update={
            "is_editing": False,
            "editing_index": None,
            "active_hole_number": state.furthest_hole_reached,
            "active_strokes": (),
            "mode": SessionMode.HOLE_SETUP,
        }
    )


def _reset_round(state: SessionState, command: ResetRound) -> SessionState:
    return SessionState(bag=state.bag)


def _close_round(state: SessionState, command: CloseRound) -> SessionState:
    """Archive the finished round and start a fresh one with the same bag."""

    return SessionState(bag=state.bag, archive=state.archive + (command.record,))


def _archive_round(state: SessionState, command: ArchiveRound) -> SessionState:
    return state.model_copy(update={"archive": state.archive + (command.record,)})


def _clear_archive(state: SessionState, command: ClearArchive) -> SessionState:
    return state.model_copy(update={"archive": ()})


def _delete_archived(state: SessionState, command: DeleteArchived) -> SessionState:
    archive = state.archive
    if not _in_range(command.index, len(archive)):
        return _ignore(state, command, f"no archived round at index {command.index}")
    remaining = archive[: command.index] + archive[command.index + 1 :]
    return state.model_copy(update={"archive": remaining})


def _delete_archived_round(
    state: SessionState, command: DeleteArchivedRound
) -> SessionState:
    remaining = tuple(r for r in state.archive if r.id != command.round_id)
    if len(remaining) == len(state.archive):
        return _ignore(state, command, f"no archived round {command.round_id!r}")
    return state.model_copy(update={"archive": remaining})


_HANDLERS: Dict[type, Callable[[SessionState, Any], SessionState]] = {
    LoadState: _load_state,
    SetBag: _set_bag,
    SetMode: _set_mode,
    StartHole: _start_hole,
    AddStroke: _add_stroke,
    UpdateStroke: _update_stroke,
    DeleteStroke: _delete_stroke,
    FinishNewHole: _finish_new_hole,
    FinishEditedHole: _finish_edited_hole,
    EditHole: _edit_hole,
    ResumeRound: _resume_round,
    ResetRound: _reset_round,
    CloseRound: _close_round,
    ArchiveRound: _archive_round,
    ClearArchive: _clear_archive,
    DeleteArchived: _delete_archived,
    DeleteArchivedRound: _delete_archived_round,
}


def apply(state: SessionState, command: Any) -> SessionState:
    """Return the state that results from applying ``command`` to ``state``."""

    handler = _HANDLERS.get(type(command))
    if handler is None:
        return _ignore(state, command, "unrecognized command")
    return handler(state, command)


__all__ = ["apply"]
