from fastapi import APIRouter, Depends, Response

from ..dependencies import get_metrics
from ...services.metrics import RequestMetrics

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
def metrics(request_metrics: RequestMetrics = Depends(get_metrics)) -> Response:
    return Response(request_metrics.render(), media_type=request_metrics.content_type)
