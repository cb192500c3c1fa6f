from __future__ import annotations

from fastapi import APIRouter

from clinic.api import admin, appointments, auth, catalog, doctors, reviews

router = APIRouter()

router.include_router(auth.router)
router.include_router(appointments.router)
router.include_router(doctors.router)
router.include_router(catalog.router)
router.include_router(reviews.router)
router.include_router(admin.router)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
