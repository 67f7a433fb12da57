"""Appointment router - FastAPI endpoints for slots and bookings"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    AppointmentCreate,
    AppointmentEnvelope,
    AppointmentListResponse,
    AppointmentOverviewResponse,
    AppointmentUpdate,
    BatchGroupResponse,
    BookingRequest,
    BulkAppointmentCreate,
    BulkCreateResponse,
    DeleteResponse,
    PageResponse,
    to_appointment_response,
)
from .service import AppointmentService
from .views import format_batch_title, page_window

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


# ============================================================================
# QUERIES
# ============================================================================


@router.get("", response_model=AppointmentListResponse)
async def get_appointments(service: AppointmentService = Depends(get_appointment_service)):
    """Every appointment, booked or not"""
    appointments = service.get_appointments()
    return AppointmentListResponse(appointments=[to_appointment_response(a) for a in appointments])


@router.get("/specialist/{specialist_id}", response_model=AppointmentListResponse)
async def get_specialist_appointments(
    specialist_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Unbooked slots for a specialist"""
    appointments = service.get_specialist_availability(specialist_id)
    return AppointmentListResponse(appointments=[to_appointment_response(a) for a in appointments])


@router.get("/date/{date}", response_model=AppointmentListResponse)
async def get_appointments_by_date(
    date: str,
    category: Optional[str] = Query(None),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Unbooked slots on a date"""
    appointments = service.get_availability_on_date(date, category)
    return AppointmentListResponse(appointments=[to_appointment_response(a) for a in appointments])


@router.get("/overview/{user_id}", response_model=AppointmentOverviewResponse)
async def get_appointment_overview(
    user_id: str,
    page: int = Query(1),
    page_size: Optional[int] = Query(None, ge=1, le=200),
    service: AppointmentService = Depends(get_appointment_service),
):
    """A member's bookings or a specialist's schedule, grouped by batch"""
    user, groups, individual = service.get_overview(user_id, page, page_size)

    return AppointmentOverviewResponse(
        userId=user.id,
        userType=user.user_type,
        batches=[
            BatchGroupResponse(
                batchId=batch_id,
                title=format_batch_title(group),
                appointments=[to_appointment_response(a) for a in group],
            )
            for batch_id, group in groups.batches.items()
        ],
        individual=PageResponse(
            items=[to_appointment_response(a) for a in individual.items],
            page=individual.page,
            pageSize=individual.page_size,
            totalPages=individual.total_pages,
            totalItems=individual.total_items,
            pageNumbers=page_window(individual.page, individual.total_pages),
        ),
    )


# ============================================================================
# SLOT PUBLISHING
# ============================================================================


@router.post("", response_model=AppointmentEnvelope)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Create a single time slot"""
    appointment = service.create_appointment(data)
    return AppointmentEnvelope(appointment=to_appointment_response(appointment))


@router.post("/bulk", response_model=BulkCreateResponse)
async def create_bulk_appointments(
    data: BulkAppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Create many slots sharing one batch id"""
    appointments, batch_id = service.create_bulk(data)
    return BulkCreateResponse(
        appointments=[to_appointment_response(a) for a in appointments],
        batchId=batch_id,
        count=len(appointments),
    )


# ============================================================================
# BOOKING AND EDITS
# ============================================================================


@router.put("/{appointment_id}/book", response_model=AppointmentEnvelope)
async def book_appointment(
    appointment_id: str,
    data: BookingRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Reserve a slot for a member"""
    appointment = service.book_appointment(appointment_id, data.memberName)
    return AppointmentEnvelope(appointment=to_appointment_response(appointment))


@router.put("/{appointment_id}", response_model=AppointmentEnvelope)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Edit venue, phone or time"""
    appointment = service.update_appointment(appointment_id, data)
    return AppointmentEnvelope(appointment=to_appointment_response(appointment))


@router.delete("/{appointment_id}", response_model=DeleteResponse)
async def delete_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Delete a slot"""
    return service.delete_appointment(appointment_id)
