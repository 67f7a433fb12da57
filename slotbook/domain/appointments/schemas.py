"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_category, validate_date, validate_time


class AppointmentCreate(BaseModel):
    """Schema for creating a single time slot"""

    specialistId: str
    specialistName: str
    specialization: str
    category: str
    date: str
    time: str
    venue: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("specialistId", "specialistName", "specialization")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v):
        return validate_category(v)

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return validate_date(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)


class RecurrenceRequest(BaseModel):
    """Monthly recurrence for bulk slot generation"""

    month: Union[str, int]
    year: int
    weekdays: list[str]
    startTime: str
    endTime: str
    interval: int = 30


RECURRENCE_FIELDS = ("month", "year", "weekdays", "startTime", "endTime", "interval")


class BulkAppointmentCreate(BaseModel):
    """
    Schema for bulk slot creation.

    Either a recurrence for one specialist, or an explicit list of slots.
    Recurrence fields may be sent flat at the top level or nested under
    ``recurrence``.
    """

    specialistId: Optional[str] = None
    recurrence: Optional[RecurrenceRequest] = None
    venue: Optional[str] = None
    phone: Optional[str] = None
    appointments: Optional[list[AppointmentCreate]] = None

    @model_validator(mode="before")
    @classmethod
    def lift_flat_recurrence(cls, data):
        if not isinstance(data, dict) or data.get("recurrence") is not None:
            return data
        flat = {key: data[key] for key in RECURRENCE_FIELDS if key in data}
        if not flat:
            return data
        lifted = {key: value for key, value in data.items() if key not in RECURRENCE_FIELDS}
        lifted["recurrence"] = flat
        return lifted

    @model_validator(mode="after")
    def check_single_form(self):
        if self.appointments is not None and self.recurrence is not None:
            raise ValueError("Provide either 'appointments' or 'recurrence', not both")
        if self.appointments is None and self.recurrence is None:
            raise ValueError("Provide 'appointments' or 'recurrence'")
        if self.recurrence is not None and not self.specialistId:
            raise ValueError("'specialistId' is required with 'recurrence'")
        if self.appointments is not None and not self.appointments:
            raise ValueError("'appointments' cannot be empty")
        return self


class AppointmentUpdate(BaseModel):
    """Schema for specialist edits to a slot"""

    venue: Optional[str] = None
    phone: Optional[str] = None
    time: Optional[str] = None

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        if v is not None:
            return validate_time(v)
        return v


class BookingRequest(BaseModel):
    memberName: str

    @field_validator("memberName")
    @classmethod
    def validate_member_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Member name is required")
        return v.strip()


class AppointmentResponse(BaseModel):
    """Schema for appointment response"""

    id: str
    specialistId: str
    specialistName: str
    specialization: str
    category: str
    date: str
    time: str
    venue: Optional[str] = None
    phone: Optional[str] = None
    memberName: Optional[str] = None
    isBooked: bool
    batchId: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class AppointmentEnvelope(BaseModel):
    appointment: AppointmentResponse


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse]


class BulkCreateResponse(BaseModel):
    appointments: list[AppointmentResponse]
    batchId: str
    count: int


class DeleteResponse(BaseModel):
    message: str
    appointment: AppointmentResponse


class BatchGroupResponse(BaseModel):
    batchId: str
    title: str
    appointments: list[AppointmentResponse]


class PageResponse(BaseModel):
    items: list[AppointmentResponse]
    page: int
    pageSize: int
    totalPages: int
    totalItems: int
    pageNumbers: list[int]


class AppointmentOverviewResponse(BaseModel):
    """Grouped and paginated view of one user's appointments"""

    userId: str
    userType: str
    batches: list[BatchGroupResponse]
    individual: PageResponse


def to_appointment_response(appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        specialistId=appointment.specialist_id,
        specialistName=appointment.specialist_name,
        specialization=appointment.specialization,
        category=appointment.category,
        date=appointment.date,
        time=appointment.time,
        venue=appointment.venue,
        phone=appointment.phone,
        memberName=appointment.member_name,
        isBooked=appointment.is_booked,
        batchId=appointment.batch_id,
        createdAt=appointment.created_at,
        updatedAt=appointment.updated_at,
    )
