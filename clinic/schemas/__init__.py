from .admin import AdminAppointment, AdminAppointmentsResponse, DashboardStats, StatsResponse
from .appointment import (
    AppointmentOut,
    CreateAppointmentPayload,
    CreateAppointmentResponse,
    SlotOut,
    SlotsResponse,
    StatusUpdatePayload,
    StatusUpdateResponse,
)
from .auth import ChangePasswordPayload, LoginPayload, OkResponse, ResetAdminPayload, TokenResponse, UserDisplay
from .catalog import CreateServicePayload, ServiceListResponse, ServiceOut, ServiceResponse
from .patient import PatientAppointment, PatientDetail, PatientListResponse, PatientSummary
from .review import CreateReviewPayload, CreateReviewResponse, ReviewOut

__all__ = [
    "AdminAppointment",
    "AdminAppointmentsResponse",
    "DashboardStats",
    "StatsResponse",
    "AppointmentOut",
    "CreateAppointmentPayload",
    "CreateAppointmentResponse",
    "SlotOut",
    "SlotsResponse",
    "StatusUpdatePayload",
    "StatusUpdateResponse",
    "ChangePasswordPayload",
    "LoginPayload",
    "OkResponse",
    "ResetAdminPayload",
    "TokenResponse",
    "UserDisplay",
    "CreateServicePayload",
    "ServiceListResponse",
    "ServiceOut",
    "ServiceResponse",
    "PatientAppointment",
    "PatientDetail",
    "PatientListResponse",
    "PatientSummary",
    "CreateReviewPayload",
    "CreateReviewResponse",
    "ReviewOut",
]
