from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from golfmaster.api.routers.session import SessionOut
from golfmaster.security import require_api_key
from golfmaster.session.commands import ClearArchive
from golfmaster.session.export import StrokeRow, stroke_rows
from golfmaster.session.models import FinishedRound
from golfmaster.session.screens import active_screen
from golfmaster.session.service import (
    ArchivedRoundNotFound,
    SessionService,
    get_session_service,
)
from golfmaster.session.stats import ClubUsageReport, club_usage, format_to_par

router = APIRouter(
    prefix="/api/archive", tags=["archive"], dependencies=[Depends(require_api_key)]
)


class ArchivedRoundInfo(BaseModel):
    id: str
    course_name: str = Field(alias="courseName")
    player_name: str = Field(alias="playerName")
    date: str
    total_score: int = Field(alias="totalScore")
    total_par: int = Field(alias="totalPar")
    total_putts: int = Field(alias="totalPutts")
    to_par_display: str = Field(alias="toParDisplay")
    holes_played: int = Field(alias="holesPlayed")

    model_config = ConfigDict(populate_by_name=True)


def _info(record: FinishedRound) -> ArchivedRoundInfo:
    return ArchivedRoundInfo(
        id=record.id,
        course_name=record.course_name or "Unknown Course",
        player_name=record.player_name,
        date=record.date,
        total_score=record.total_score,
        total_par=record.total_par,
        total_putts=record.total_putts,
        to_par_display=format_to_par(record.to_par),
        holes_played=len(record.holes),
    )


def _get_or_404(service: SessionService, round_id: str) -> FinishedRound:
    try:
        return service.get_archived_round(round_id)
    except ArchivedRoundNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="round not found"
        )


@router.get("", response_model=List[ArchivedRoundInfo])
def list_archived_rounds(
    service: SessionService = Depends(get_session_service),
) -> List[ArchivedRoundInfo]:
    return [_info(record) for record in service.state.archive]


@router.get("/{round_id}", response_model=FinishedRound)
def get_archived_round(
    round_id: str,
    service: SessionService = Depends(get_session_service),
) -> FinishedRound:
    return _get_or_404(service, round_id)


@router.get("/{round_id}/export", response_model=List[StrokeRow])
def export_archived_round(
    round_id: str,
    service: SessionService = Depends(get_session_service),
) -> List[StrokeRow]:
    return stroke_rows(_get_or_404(service, round_id).holes)


@router.get("/{round_id}/clubs", response_model=ClubUsageReport)
def get_archived_club_usage(
    round_id: str,
    service: SessionService = Depends(get_session_service),
) -> ClubUsageReport:
    return club_usage(_get_or_404(service, round_id).holes)


@router.delete("/{round_id}", response_model=SessionOut)
def delete_archived_round(
    round_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionOut:
    try:
        state = service.delete_archived_round(round_id)
    except ArchivedRoundNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="round not found"
        )
    return SessionOut(screen=active_screen(state), state=state)


@router.delete("", response_model=SessionOut)
def clear_archive(
    service: SessionService = Depends(get_session_service),
) -> SessionOut:
    state = service.dispatch(ClearArchive())
    return SessionOut(screen=active_screen(state), state=state)


__all__ = ["router", "ArchivedRoundInfo"]
