from __future__ import annotations

from typing import Tuple

DEFAULT_BAG: Tuple[str, ...] = (
    "Driver",
    "Hybrid",
    "7 Iron",
    "8 Iron",
    "9 Iron",
    "PW",
    "SW",
    "Putter",
)

# Clubs offered on the equipment screen; players may also add their own names.
CLUB_CATALOG: Tuple[str, ...] = (
    "Driver",
    "3 Wood",
    "5 Wood",
    "Hybrid",
    "4 Iron",
    "5 Iron",
    "6 Iron",
    "7 Iron",
    "8 Iron",
    "9 Iron",
    "PW",
    "GW",
    "SW",
    "LW",
    "Putter",
)

DEFAULT_PAR = 4


__all__ = ["DEFAULT_BAG", "CLUB_CATALOG", "DEFAULT_PAR"]
