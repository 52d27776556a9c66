from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from golfmaster.security import require_api_key
from golfmaster.session.commands import parse_command
from golfmaster.session.defaults import CLUB_CATALOG
from golfmaster.session.export import StrokeRow, stroke_rows
from golfmaster.session.models import FinishedRound, HoleRecord, SessionState
from golfmaster.session.screens import Screen, active_screen
from golfmaster.session.service import (
    EmptyRoundError,
    SessionService,
    get_session_service,
)
from golfmaster.session.stats import (
    ClubUsageReport,
    RoundSummary,
    club_usage,
    summarize_holes,
)

router = APIRouter(
    prefix="/api/session", tags=["session"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


class SessionOut(BaseModel):
    screen: Screen
    state: SessionState


class EquipmentOut(BaseModel):
    catalog: Tuple[str, ...]
    bag: Tuple[str, ...]


class CloseRoundRequest(BaseModel):
    course_name: str = Field(
        default="",
        validation_alias=AliasChoices("course_name", "courseName"),
    )
    player_name: str = Field(
        default="",
        validation_alias=AliasChoices("player_name", "playerName"),
    )
    date: str | None = None

    model_config = ConfigDict(populate_by_name=True)


def _session_out(state: SessionState) -> SessionOut:
    return SessionOut(screen=active_screen(state), state=state)


@router.get("", response_model=SessionOut)
def get_session(
    service: SessionService = Depends(get_session_service),
) -> SessionOut:
    return _session_out(service.state)


@router.post("/commands", response_model=SessionOut)
def dispatch_command(
    payload: Dict[str, Any] = Body(...),
    service: SessionService = Depends(get_session_service),
) -> SessionOut:
    try:
        command = parse_command(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        )
    return _session_out(service.dispatch(command))


@router.post("/finish-hole", response_model=SessionOut)
def finish_hole(
    record: HoleRecord,
    service: SessionService = Depends(get_session_service),
) -> SessionOut:
    return _session_out(service.finish_hole(record))


@router.get("/equipment", response_model=EquipmentOut)
def get_equipment(
    service: SessionService = Depends(get_session_service),
) -> EquipmentOut:
    return EquipmentOut(catalog=CLUB_CATALOG, bag=service.state.bag)


@router.get("/summary", response_model=RoundSummary)
def get_summary(
    service: SessionService = Depends(get_session_service),
) -> RoundSummary:
    return summarize_holes(service.state.completed_holes)


@router.get("/clubs", response_model=ClubUsageReport)
def get_club_usage(
    service: SessionService = Depends(get_session_service),
) -> ClubUsageReport:
    return club_usage(service.state.completed_holes)


@router.get("/export", response_model=List[StrokeRow])
def export_strokes(
    service: SessionService = Depends(get_session_service),
) -> List[StrokeRow]:
    return stroke_rows(service.state.completed_holes)


@router.post("/close", response_model=FinishedRound)
def close_round(
    payload: CloseRoundRequest,
    service: SessionService = Depends(get_session_service),
) -> FinishedRound:
    try:
        record = service.close_round(
            course_name=payload.course_name,
            player_name=payload.player_name,
            date=payload.date,
        )
    except EmptyRoundError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    logger.info(
        "round archived",
        extra={"round_id": record.id, "holes": len(record.holes)},
    )
    return record


__all__ = ["router", "SessionOut"]
