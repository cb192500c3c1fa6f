from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clinic.core.errors import (
    AlreadyReviewedError,
    AppointmentNotCompletedError,
    AppointmentNotFoundError,
    MissingFieldsError,
)
from clinic.models import Appointment, AppointmentStatus, Dentist, Review
from clinic.schemas.review import CreateReviewPayload, CreateReviewResponse, ReviewOut


class ReviewService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_reviews(self, *, dentist_id: int | None = None) -> list[ReviewOut]:
        stmt = (
            select(Review, Appointment.full_name, Dentist.full_name)
            .outerjoin(Appointment, Appointment.id == Review.appointment_id)
            .outerjoin(Dentist, Dentist.id == Review.dentist_id)
        )
        if dentist_id is not None:
            stmt = stmt.where(Review.dentist_id == dentist_id)
        stmt = stmt.order_by(Review.created_at.desc(), Review.id.desc())

        return [
            ReviewOut(
                id=review.id,
                appointment_id=review.appointment_id,
                dentist_id=review.dentist_id,
                user_email=review.user_email,
                review_text=review.review_text,
                created_at=review.created_at,
                patient_name=patient_name or review.user_email,
                doctor_name=dentist_name or f"Dentist #{review.dentist_id}",
            )
            for review, patient_name, dentist_name in self.session.execute(stmt)
        ]

    def get_for_appointment(self, appointment_id: int) -> Review | None:
        stmt = select(Review).where(Review.appointment_id == appointment_id).limit(1)
        return self.session.scalars(stmt).first()

    def create(self, payload: CreateReviewPayload) -> CreateReviewResponse:
        review_text = (payload.review_text or "").strip()
        missing: list[str] = []
        if not payload.appointment_id:
            missing.append("appointmentId")
        if not review_text:
            missing.append("reviewText")
        if missing:
            raise MissingFieldsError(missing)

        appointment = self.session.get(Appointment, payload.appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError()
        if appointment.status != AppointmentStatus.COMPLETED.value:
            raise AppointmentNotCompletedError()
        if self.get_for_appointment(appointment.id) is not None:
            raise AlreadyReviewedError()

        review = Review(
            appointment_id=appointment.id,
            dentist_id=appointment.dentist_id,
            user_email=(appointment.email or "").lower(),
            review_text=review_text,
        )
        self.session.add(review)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            raise AlreadyReviewedError() from exc

        logger.info(
            "Created review id={review_id} for appointment={appointment_id}",
            review_id=review.id,
            appointment_id=appointment.id,
        )
        return CreateReviewResponse(
            id=review.id,
            appointment_id=review.appointment_id,
            dentist_id=review.dentist_id,
            user_email=review.user_email,
            review_text=review.review_text,
        )
