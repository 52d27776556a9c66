from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .models import HOLES_PER_ROUND, HoleRecord, compute_round_totals


class RoundSummary(BaseModel):
    total_score: int = Field(alias="totalScore")
    total_par: int = Field(alias="totalPar")
    total_putts: int = Field(alias="totalPutts")
    to_par: int = Field(alias="toPar")
    to_par_display: str = Field(alias="toParDisplay")

    front_score: int = Field(default=0, alias="frontScore")
    back_score: int = Field(default=0, alias="backScore")

    gir_count: int = Field(default=0, alias="girCount")
    gir_percentage: int = Field(default=0, alias="girPercentage")

    holes_played: int = Field(alias="holesPlayed")
    is_complete: bool = Field(alias="isComplete")
    can_resume: bool = Field(alias="canResume")

    model_config = ConfigDict(populate_by_name=True)


class ClubUsage(BaseModel):
    club: str
    count: int

    model_config = ConfigDict(populate_by_name=True)


class ClubUsageReport(BaseModel):
    total_strokes: int = Field(alias="totalStrokes")
    clubs: List[ClubUsage] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


def format_to_par(diff: int) -> str:
    if diff > 0:
        return f"+{diff}"
    if diff == 0:
        return "E"
    return str(diff)


def summarize_holes(holes: Iterable[HoleRecord]) -> RoundSummary:
    played = tuple(holes)
    totals = compute_round_totals(played)
    gir_count = sum(1 for hole in played if hole.gir)
    # Rounds half up.
    gir_pct = math.floor(gir_count * 100 / len(played) + 0.5) if played else 0
    front = sum(hole.score for hole in played if hole.hole_number <= 9)
    back = sum(hole.score for hole in played if hole.hole_number > 9)
    diff = totals.score - totals.par

    return RoundSummary(
        total_score=totals.score,
        total_par=totals.par,
        total_putts=totals.putts,
        to_par=diff,
        to_par_display=format_to_par(diff),
        front_score=front,
        back_score=back,
        gir_count=gir_count,
        gir_percentage=gir_pct,
        holes_played=len(played),
        is_complete=len(played) >= HOLES_PER_ROUND,
        can_resume=len(played) < HOLES_PER_ROUND,
    )


def club_usage(holes: Iterable[HoleRecord]) -> ClubUsageReport:
    """Count strokes per club, most used first (ties keep first-use order)."""

    counts: dict[str, int] = {}
    for hole in holes:
        for stroke in hole.strokes:
            counts[stroke.club] = counts.get(stroke.club, 0) + 1

    ranked: List[Tuple[str, int]] = sorted(
        counts.items(), key=lambda item: item[1], reverse=True
    )
    return ClubUsageReport(
        total_strokes=sum(counts.values()),
        clubs=[ClubUsage(club=club, count=count) for club, count in ranked],
    )


__all__ = [
    "RoundSummary",
    "ClubUsage",
    "ClubUsageReport",
    "format_to_par",
    "summarize_holes",
    "club_usage",
]
