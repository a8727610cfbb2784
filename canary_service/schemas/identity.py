from typing import Dict

from pydantic import BaseModel, Field


class IdentityResponse(BaseModel):
    hostname: str = Field(description="Host the instance runs on, empty if the lookup failed")
    version: str = Field()
    revision: str = Field(description="Deployment revision taken from REVISION")
    color: str = Field()
    message: str = Field()
    runtime: str = Field(description="Interpreter and platform descriptor")
    uptime: str = Field(description="Elapsed time since start, e.g. 1h2m3.5s")
    env: Dict[str, str] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "hostname": "canary-7d9f8b6c4-x2k9p",
                    "version": "1.1.1",
                    "revision": "abc123",
                    "color": "#34577c",
                    "message": "Testing metrics-based canary deployment v1.1.1 with traffic",
                    "runtime": "cpython3.12.1 linux/x86_64",
                    "uptime": "2m13.408s",
                    "env": {"ENVIRONMENT": "staging", "LOG_LEVEL": "info"},
                }
            ]
        }
    }
