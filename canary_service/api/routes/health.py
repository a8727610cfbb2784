from fastapi import APIRouter

from ...schemas.health import HealthResponse

router = APIRouter()

_OK = HealthResponse(status="ok")


@router.get("/healthz", response_model=HealthResponse, summary="Liveness probe")
def healthz() -> HealthResponse:
    return _OK


@router.get("/readyz", response_model=HealthResponse, summary="Readiness probe")
def readyz() -> HealthResponse:
    return _OK
