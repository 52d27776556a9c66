import platform
import time
from typing import Any, Dict

from fastapi import Depends

from golfmaster.metrics import BUILD_VERSION, GIT_SHA
from golfmaster.session.service import SessionService, get_session_service


async def health(
    service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    state = service.state
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "git": GIT_SHA,
        "ts": time.time(),
        "session": {
            "mode": state.mode.value,
            "holesCompleted": len(state.completed_holes),
            "archivedRounds": len(state.archive),
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }
