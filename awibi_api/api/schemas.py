"""Response models for the public endpoints."""

from pydantic import BaseModel

GREETING = "Hello from AWIBI MEDTECH API"
HEALTH_OK = "OK"


class RootResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
