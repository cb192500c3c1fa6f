from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ServiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None


class ServiceListResponse(BaseModel):
    ok: bool = True
    data: list[ServiceOut]


class ServiceResponse(BaseModel):
    ok: bool = True
    data: ServiceOut


class CreateServicePayload(BaseModel):
    name: str | None = None
    description: str | None = None
    image_url: str | None = None
