"""Commands accepted by the transition engine.

Each command is a small frozen model tagged by a ``type`` literal, so a JSON
payload from a screen can be parsed straight into the right variant with
:func:`parse_command`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .models import FinishedRound, HoleRecord, SessionMode, SessionState, Stroke


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LoadState(_Command):
    type: Literal["LOAD_STATE"] = "LOAD_STATE"
    snapshot: SessionState


class SetBag(_Command):
    type: Literal["SET_BAG"] = "SET_BAG"
    clubs: Tuple[str, ...]


class SetMode(_Command):
    type: Literal["SET_MODE"] = "SET_MODE"
    mode: SessionMode


class StartHole(_Command):
    type: Literal["START_HOLE"] = "START_HOLE"
    number: int = Field(ge=1)
    par: int = Field(ge=1)


class AddStroke(_Command):
    type: Literal["ADD_STROKE"] = "ADD_STROKE"
    stroke: Stroke


class UpdateStroke(_Command):
    type: Literal["UPDATE_STROKE"] = "UPDATE_STROKE"
    index: int
    stroke: Stroke


class DeleteStroke(_Command):
    type: Literal["DELETE_STROKE"] = "DELETE_STROKE"
    index: int


class FinishNewHole(_Command):
    type: Literal["FINISH_NEW_HOLE"] = "FINISH_NEW_HOLE"
    record: HoleRecord


class FinishEditedHole(_Command):
    type: Literal["FINISH_EDITED_HOLE"] = "FINISH_EDITED_HOLE"
    index: int
    record: HoleRecord


class EditHole(_Command):
    type: Literal["EDIT_HOLE"] = "EDIT_HOLE"
    index: int
    # Defaults to the stored completed_holes[index].
    record: Optional[HoleRecord] = None


class ResumeRound(_Command):
    type: Literal["RESUME_ROUND"] = "RESUME_ROUND"


class ResetRound(_Command):
    type: Literal["RESET_ROUND"] = "RESET_ROUND"


class CloseRound(_Command):
    type: Literal["CLOSE_ROUND"] = "CLOSE_ROUND"
    record: FinishedRound


class ArchiveRound(_Command):
    type: Literal["ARCHIVE_ROUND"] = "ARCHIVE_ROUND"
    record: FinishedRound


class ClearArchive(_Command):
    type: Literal["CLEAR_ARCHIVE"] = "CLEAR_ARCHIVE"


class DeleteArchived(_Command):
    type: Literal["DELETE_ARCHIVED"] = "DELETE_ARCHIVED"
    index: int


class DeleteArchivedRound(_Command):
    type: Literal["DELETE_ARCHIVED_ROUND"] = "DELETE_ARCHIVED_ROUND"
    round_id: str = Field(alias="roundId")


Command = Annotated[
    Union[
        LoadState,
        SetBag,
        SetMode,
        StartHole,
        AddStroke,
        UpdateStroke,
        DeleteStroke,
        FinishNewHole,
        FinishEditedHole,
        EditHole,
        ResumeRound,
        ResetRound,
        CloseRound,
        ArchiveRound,
        ClearArchive,
        DeleteArchived,
        DeleteArchivedRound,
    ],
    Field(discriminator="type"),
]

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(payload: Any) -> Command:
    """Validate a raw mapping into a command; raises ``ValidationError``."""

    return _COMMAND_ADAPTER.validate_python(payload)


def finish_hole_command(
    state: SessionState, record: HoleRecord
) -> Union[FinishNewHole, FinishEditedHole]:
    """Pick the finish variant for the shared hole entry screen.

    The same screen is used to play the next hole and to correct a past one;
    the editing context in ``state`` decides which commit is meant.
    """

    index = state.editing_index
    if state.is_editing and index is not None and index < len(state.completed_holes):
        return FinishEditedHole(index=index, record=record)
    return FinishNewHole(record=record)


__all__ = [
    "Command",
    "LoadState",
    "SetBag",
    "SetMode",
    "StartHole",
    "AddStroke",
    "UpdateStroke",
    "DeleteStroke",
    "FinishNewHole",
    "FinishEditedHole",
    "EditHole",
    "ResumeRound",
    "ResetRound",
    "CloseRound",
    "ArchiveRound",
    "ClearArchive",
    "DeleteArchived",
    "DeleteArchivedRound",
    "parse_command",
    "finish_hole_command",
]
