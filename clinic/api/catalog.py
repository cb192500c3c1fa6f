from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clinic.schemas.auth import OkResponse
from clinic.schemas.catalog import CreateServicePayload, ServiceListResponse, ServiceOut, ServiceResponse
from clinic.services.catalog import CatalogService
from clinic.services.db import get_db

router = APIRouter(prefix="/api/services", tags=["services"])


@router.get("", response_model=ServiceListResponse)
def list_services(session: Session = Depends(get_db)) -> ServiceListResponse:
    return ServiceListResponse(data=[ServiceOut.model_validate(svc) for svc in CatalogService(session).list_services()])


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(payload: CreateServicePayload, session: Session = Depends(get_db)) -> ServiceResponse:
    return ServiceResponse(data=ServiceOut.model_validate(CatalogService(session).create_service(payload)))


@router.post("/sync-defaults", response_model=OkResponse)
def sync_default_services(session: Session = Depends(get_db)) -> OkResponse:
    CatalogService(session).sync_default_services()
    return OkResponse()


@router.delete("/{service_id}", response_model=OkResponse)
def delete_service(service_id: int, session: Session = Depends(get_db)) -> OkResponse:
    CatalogService(session).delete_service(service_id)
    return OkResponse()
