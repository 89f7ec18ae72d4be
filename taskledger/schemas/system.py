"""
TaskLedger Backend — System Schemas
====================================

What:  Payloads of the unauthenticated endpoints (GET / and GET /health).
"""

from typing import Dict

from pydantic import BaseModel, Field


class ApiMetadata(BaseModel):
    """
    What:  Returned by GET / so clients can discover the resource endpoints.
    """

    name: str = Field(description="API display name")
    version: str = Field(description="Application version")
    endpoints: Dict[str, str] = Field(description="Resource name → collection path")


class HealthResponse(BaseModel):
    """
    What:  Health check payload for monitoring and load balancer probes.

    Status levels:
        - healthy:   database reachable (HTTP 200)
        - unhealthy: database unreachable (HTTP 503)
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    routes: int = Field(description="Number of registered routes")
    uptime_seconds: float = Field(description="Seconds since service started")
