import structlog
from fastapi import APIRouter, Depends

from ..dependencies import get_deployment_settings, get_service_info
from ..middleware import CountedRoute
from ...config import DeploymentSettings
from ...schemas.identity import IdentityResponse
from ...services.identity import ServiceInfo, build_identity

router = APIRouter(route_class=CountedRoute)
logger = structlog.get_logger()


@router.get(
    "/",
    response_model=IdentityResponse,
    summary="Instance identity",
    responses={
        200: {
            "description": "Identity of the running instance",
            "content": {
                "application/json": {
                    "example": {
                        "hostname": "canary-7d9f8b6c4-x2k9p",
                        "version": "1.1.1",
                        "revision": "abc123",
                        "color": "#34577c",
                        "message": "Testing metrics-based canary deployment v1.1.1 with traffic",
                        "runtime": "cpython3.12.1 linux/x86_64",
                        "uptime": "2m13.408s",
                        "env": {"ENVIRONMENT": "staging", "LOG_LEVEL": "info"},
                    }
                }
            },
        }
    },
)
def home(
    info: ServiceInfo = Depends(get_service_info),
    deployment: DeploymentSettings = Depends(get_deployment_settings),
) -> IdentityResponse:
    identity = build_identity(info, deployment)
    logger.debug("identity_served", revision=identity.revision, color=identity.color)
    return identity
