from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import HoleRecord


class StrokeRow(BaseModel):
    hole_number: int = Field(alias="holeNumber")
    par: int
    score: int
    putts: int
    gir: bool
    stroke_number: int = Field(alias="strokeNumber")
    club: str
    distance: Optional[float] = None

    model_config = ConfigDict(populate_by_name=True)


def stroke_rows(holes: Iterable[HoleRecord]) -> List[StrokeRow]:
    """Flatten holes into one row per stroke, in hole then stroke order.

    Holes are ordered by hole number; an edited hole keeps its slot.
    """

    rows: List[StrokeRow] = []
    for hole in sorted(holes, key=lambda h: h.hole_number):
        for number, stroke in enumerate(hole.strokes, start=1):
            rows.append(
                StrokeRow(
                    hole_number=hole.hole_number,
                    par=hole.par,
                    score=hole.score,
                    putts=hole.putts,
                    gir=hole.gir,
                    stroke_number=number,
                    club=stroke.club,
                    distance=stroke.distance,
                )
            )
    return rows


__all__ = ["StrokeRow", "stroke_rows"]
