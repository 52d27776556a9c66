"""Which screen is active for a given session mode."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .models import SessionMode, SessionState


class Screen(str, Enum):
    EQUIPMENT_SELECTION = "equipment_selection"
    HOLE_SETUP = "hole_setup"
    LIVE_PLAY = "live_play"
    SUMMARY = "summary"


_SCREENS = {
    SessionMode.EQUIPMENT_SETUP: Screen.EQUIPMENT_SELECTION,
    SessionMode.HOLE_SETUP: Screen.HOLE_SETUP,
    SessionMode.LIVE_HOLE: Screen.LIVE_PLAY,
    SessionMode.SUMMARY: Screen.SUMMARY,
}


def resolve_screen(mode: Any) -> Screen:
    """Return the screen for ``mode``; unknown modes fall back to equipment."""

    try:
        key = SessionMode(mode)
    except (TypeError, ValueError):
        return Screen.EQUIPMENT_SELECTION
    return _SCREENS.get(key, Screen.EQUIPMENT_SELECTION)


def active_screen(state: SessionState) -> Screen:
    return resolve_screen(state.mode)


__all__ = ["Screen", "resolve_screen", "active_screen"]
