from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clinic.schemas.review import (
    CreateReviewPayload,
    CreateReviewResponse,
    ReviewListResponse,
    ReviewOut,
    ReviewResponse,
)
from clinic.services.db import get_db
from clinic.services.reviews import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("", response_model=ReviewListResponse)
def list_reviews(session: Session = Depends(get_db)) -> ReviewListResponse:
    return ReviewListResponse(reviews=ReviewService(session).list_reviews())


@router.get("/by-dentist/{dentist_id}", response_model=ReviewListResponse)
def reviews_for_dentist(dentist_id: int, session: Session = Depends(get_db)) -> ReviewListResponse:
    return ReviewListResponse(reviews=ReviewService(session).list_reviews(dentist_id=dentist_id))


@router.get("/by-appointment/{appointment_id}", response_model=ReviewResponse)
def review_for_appointment(appointment_id: int, session: Session = Depends(get_db)) -> ReviewResponse:
    review = ReviewService(session).get_for_appointment(appointment_id)
    return ReviewResponse(review=ReviewOut.model_validate(review) if review else None)


@router.post("", response_model=CreateReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(payload: CreateReviewPayload, session: Session = Depends(get_db)) -> CreateReviewResponse:
    return ReviewService(session).create(payload)
