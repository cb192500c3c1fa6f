from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import field_validator

from .base import CamelModel


class CreateReviewPayload(CamelModel):
    appointment_id: int | None = None
    review_text: str | None = None

    @field_validator("appointment_id", mode="before")
    @classmethod
    def _blank_id(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ReviewOut(CamelModel):
    id: int
    appointment_id: int
    dentist_id: int
    user_email: str
    review_text: str
    created_at: datetime | None = None
    patient_name: str | None = None
    doctor_name: str | None = None


class ReviewListResponse(CamelModel):
    ok: bool = True
    reviews: list[ReviewOut]


class ReviewResponse(CamelModel):
    ok: bool = True
    review: ReviewOut | None = None


class CreateReviewResponse(CamelModel):
    ok: bool = True
    id: int
    appointment_id: int
    dentist_id: int
    user_email: str
    review_text: str
