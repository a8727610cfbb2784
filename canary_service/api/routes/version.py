from fastapi import APIRouter, Depends

from ..dependencies import get_service_info
from ..middleware import CountedRoute
from ...schemas.version import VersionResponse
from ...services.identity import ServiceInfo

router = APIRouter(route_class=CountedRoute)


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Service version",
    responses={200: {"content": {"application/json": {"example": {"version": "1.1.1"}}}}},
)
def version(info: ServiceInfo = Depends(get_service_info)) -> VersionResponse:
    return VersionResponse(version=info.version)
