from __future__ import annotations

import platform
import socket
import sys
import time
from dataclasses import dataclass, field

import structlog

from .. import __version__
from ..config import DeploymentSettings
from ..schemas.identity import IdentityResponse

logger = structlog.get_logger()

MESSAGE = f"Testing metrics-based canary deployment v{__version__} with traffic"

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000


@dataclass(frozen=True)
class ServiceInfo:
    """Process-scoped identity fixed at startup."""

    version: str = __version__
    message: str = MESSAGE
    start_time: float = field(default_factory=time.monotonic)

    def uptime_s(self) -> float:
        return max(0.0, time.monotonic() - self.start_time)


def get_hostname() -> str:
    """Best-effort hostname lookup; empty string when the OS refuses."""
    try:
        return socket.gethostname()
    except OSError as e:
        logger.warning("hostname_lookup_failed", error=str(e))
        return ""


def runtime_descriptor() -> str:
    impl = platform.python_implementation().lower()
    machine = platform.machine() or "unknown"
    return f"{impl}{platform.python_version()} {sys.platform}/{machine}"


def _with_fraction(whole: int, frac: int, digits: int) -> str:
    if not frac:
        return str(whole)
    return f"{whole}." + f"{frac:0{digits}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """Render seconds as a compact duration such as ``1h2m3.5s`` or ``1.5ms``."""
    ns = max(0, int(round(seconds * _NS_PER_S)))
    if ns == 0:
        return "0s"
    if ns < _NS_PER_US:
        return f"{ns}ns"
    if ns < _NS_PER_MS:
        return _with_fraction(*divmod(ns, _NS_PER_US), 3) + "µs"
    if ns < _NS_PER_S:
        return _with_fraction(*divmod(ns, _NS_PER_MS), 6) + "ms"

    whole_s, frac = divmod(ns, _NS_PER_S)
    hours, rem = divmod(whole_s, 3600)
    minutes, secs = divmod(rem, 60)
    out = _with_fraction(secs, frac, 9) + "s"
    if hours:
        return f"{hours}h{minutes}m{out}"
    if minutes:
        return f"{minutes}m{out}"
    return out


def build_identity(info: ServiceInfo, deployment: DeploymentSettings) -> IdentityResponse:
    return IdentityResponse(
        hostname=get_hostname(),
        version=info.version,
        revision=deployment.revision,
        color=deployment.color,
        message=info.message,
        runtime=runtime_descriptor(),
        uptime=format_duration(info.uptime_s()),
        env={
            "ENVIRONMENT": deployment.environment,
            "LOG_LEVEL": deployment.log_level,
        },
    )
