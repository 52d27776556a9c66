from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .defaults import DEFAULT_BAG, DEFAULT_PAR

HOLES_PER_ROUND = 18


class SessionMode(str, Enum):
    EQUIPMENT_SETUP = "EQUIPMENT_SETUP"
    HOLE_SETUP = "HOLE_SETUP"
    LIVE_HOLE = "LIVE_HOLE"
    SUMMARY = "SUMMARY"


class Stroke(BaseModel):
    club: str = Field(min_length=1)
    distance: Optional[float] = Field(default=None, ge=0)
    result: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class HoleRecord(BaseModel):
    hole_number: int = Field(alias="holeNumber", ge=1, le=HOLES_PER_ROUND)
    par: int = Field(ge=1)
    score: int = Field(ge=0)
    putts: int = Field(default=0, ge=0)
    gir: bool = False
    strokes: Tuple[Stroke, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RoundTotals(BaseModel):
    score: int = 0
    par: int = 0
    putts: int = 0

    model_config = ConfigDict(frozen=True)


def compute_round_totals(holes: Iterable[HoleRecord]) -> RoundTotals:
    score = par = putts = 0
    for hole in holes:
        score += hole.score
        par += hole.par
        putts += hole.putts
    return RoundTotals(score=score, par=par, putts=putts)


def new_round_id() -> str:
    """Generate a new archived round identifier."""

    return uuid.uuid4().hex


class FinishedRound(BaseModel):
    """Archived snapshot of a closed-out round.

    The totals are denormalized for fast listing. They are computed once by
    :meth:`close_out` and never recomputed, so build archive entries through it.
    """

    id: str = Field(default_factory=new_round_id)
    course_name: str = Field(default="", alias="courseName")
    player_name: str = Field(default="", alias="playerName")
    date: str
    total_score: int = Field(alias="totalScore")
    total_par: int = Field(alias="totalPar")
    total_putts: int = Field(alias="totalPutts")
    holes: Tuple[HoleRecord, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def close_out(
        cls,
        holes: Iterable[HoleRecord],
        *,
        course_name: str = "",
        player_name: str = "",
        date: str | None = None,
    ) -> "FinishedRound":
        snapshot = tuple(holes)
        totals = compute_round_totals(snapshot)
        return cls(
            course_name=course_name,
            player_name=player_name,
            date=date or datetime.now(timezone.utc).date().isoformat(),
            total_score=totals.score,
            total_par=totals.par,
            total_putts=totals.putts,
            holes=snapshot,
        )

    @property
    def to_par(self) -> int:
        return self.total_score - self.total_par


class SessionState(BaseModel):
    mode: SessionMode = SessionMode.EQUIPMENT_SETUP
    bag: Tuple[str, ...] = DEFAULT_BAG
    active_hole_number: int = Field(default=1, alias="activeHoleNumber", ge=1)
    active_par: int = Field(default=DEFAULT_PAR, alias="activePar", ge=1)
    active_strokes: Tuple[Stroke, ...] = Field(default=(), alias="activeStrokes")
    completed_holes: Tuple[HoleRecord, ...] = Field(default=(), alias="completedHoles")
    is_editing: bool = Field(default=False, alias="isEditing")
    editing_index: Optional[int] = Field(default=None, alias="editingIndex", ge=0)
    furthest_hole_reached: int = Field(default=1, alias="furthestHoleReached", ge=1)
    archive: Tuple[FinishedRound, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_snapshot(self) -> dict:
        """Return the JSON-ready form used for persistence and the API."""

        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "HOLES_PER_ROUND",
    "SessionMode",
    "Stroke",
    "HoleRecord",
    "RoundTotals",
    "FinishedRound",
    "SessionState",
    "compute_round_totals",
    "new_round_id",
]
