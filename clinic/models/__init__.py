from .appointment import ACTIVE_STATUSES, TERMINAL_STATUSES, Appointment, AppointmentStatus
from .base import Base
from .dentist import Dentist
from .procedure import Procedure
from .review import Review
from .service import Service
from .user import User, UserRole

__all__ = [
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    "Appointment",
    "AppointmentStatus",
    "Base",
    "Dentist",
    "Procedure",
    "Review",
    "Service",
    "User",
    "UserRole",
]
