from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str


class HealthError(BaseModel):
    error: str = "Health check failed"


class ModelDescriptorOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    files: bool
    web_search: bool = Field(alias="webSearch")
