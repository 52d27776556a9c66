from .engine import apply
from .models import FinishedRound, HoleRecord, SessionMode, SessionState, Stroke
from .screens import Screen, active_screen, resolve_screen

__all__ = [
    "apply",
    "FinishedRound",
    "HoleRecord",
    "SessionMode",
    "SessionState",
    "Stroke",
    "Screen",
    "active_screen",
    "resolve_screen",
]
