"""Health check endpoints. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from guestmenu.infrastructure.firebase import get_firebase_clients
from guestmenu.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Firebase clients not initialized", "model": ReadinessResponse}},
)
def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 once Firebase clients exist; 503 otherwise."""
    if get_firebase_clients() is not None:
        return ReadinessResponse(firebase=True)
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="not_ready", firebase=False).model_dump(),
    )
