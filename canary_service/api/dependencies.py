from fastapi import Request

from ..config import DeploymentSettings
from ..services.identity import ServiceInfo
from ..services.metrics import RequestMetrics


def get_deployment_settings() -> DeploymentSettings:
    # Re-read per request so the snapshot follows the live environment;
    # the .env file is only consulted at startup
    return DeploymentSettings(_env_file=None)


def get_service_info(request: Request) -> ServiceInfo:
    return request.app.state.service_info


def get_metrics(request: Request) -> RequestMetrics:
    return request.app.state.metrics
