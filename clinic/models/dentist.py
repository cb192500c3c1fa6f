from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

DEFAULT_WORK_TIME = "08:00 – 17:00"
DEFAULT_WORK_STATUS = "At Work"


class Dentist(Base):
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    work_time: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_WORK_TIME)
    status: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_WORK_STATUS)
    patients_today: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Bumped inside every booking transaction; the write lock serializes capacity checks.
    booking_version: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
