from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from clinic.core.errors import NotFoundError, RequiredFieldError
from clinic.models import Procedure, Service
from clinic.schemas.catalog import CreateServicePayload

DEFAULT_SERVICES: tuple[dict[str, str], ...] = (
    {
        "name": "Dental Braces",
        "description": (
            "Orthodontic treatment using brackets and wires (or aligners) to straighten teeth "
            "and correct bite issues."
        ),
        "image_url": "dentalBraces.svg",
    },
    {
        "name": "Cleaning",
        "description": "Professional removal of plaque, tartar, and stains to prevent cavities and gum disease.",
        "image_url": "cleaning.svg",
    },
    {
        "name": "Root Canal",
        "description": (
            "Removes infected or inflamed pulp from inside the tooth, cleans it, and seals it to save the tooth."
        ),
        "image_url": "rootCanal.svg",
    },
    {
        "name": "Tooth Extraction",
        "description": "Removal of a tooth that is decayed, damaged, or impacted (like wisdom teeth).",
        "image_url": "toothExtraction.svg",
    },
    {
        "name": "Dental Consultation",
        "description": (
            "Initial check-up where the dentist examines your teeth, gums, and mouth, often with x-rays if needed."
        ),
        "image_url": "dentalConsultation.svg",
    },
    {
        "name": "Tooth Filling",
        "description": "Restores a decayed or damaged tooth using materials like composite resin, amalgam, or porcelain.",
        "image_url": "toothFilling.svg",
    },
)


class CatalogService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_procedures(self) -> list[Procedure]:
        return list(self.session.scalars(select(Procedure).order_by(Procedure.name)))

    def list_services(self) -> list[Service]:
        return list(self.session.scalars(select(Service).order_by(Service.id)))

    def create_service(self, payload: CreateServicePayload) -> Service:
        name = (payload.name or "").strip()
        if not name:
            raise RequiredFieldError("NAME_REQUIRED")
        service = Service(name=name, description=payload.description or None, image_url=payload.image_url or None)
        self.session.add(service)
        self.session.flush()
        self.session.refresh(service)
        logger.info("Created service id={service_id} name={name}", service_id=service.id, name=name)
        return service

    def delete_service(self, service_id: int) -> None:
        service = self.session.get(Service, service_id)
        if service is None:
            raise NotFoundError(f"Service {service_id} not found")
        self.session.delete(service)
        logger.info("Deleted service id={service_id}", service_id=service_id)

    def sync_default_services(self) -> None:
        """Insert missing built-in services and refresh the text of existing ones."""
        for default in DEFAULT_SERVICES:
            existing = self.session.scalars(select(Service).where(Service.name == default["name"]).limit(1)).first()
            if existing is None:
                self.session.add(Service(**default))
                logger.debug("Added default service {name}", name=default["name"])
            else:
                existing.description = default["description"]
                existing.image_url = default["image_url"]
        self.session.flush()
