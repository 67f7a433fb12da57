"""Appointment service - Slot publishing, booking and appointment views"""

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import DEFAULT_PAGE_SIZE
from ...models import Appointment, User
from ...shared.errors import ConflictError, NotFoundError, StoreError, ValidationError
from ...shared.validators import validate_category, validate_date
from ..users.repository import UserRepository
from .repository import AppointmentRepository
from .schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    BulkAppointmentCreate,
    to_appointment_response,
)
from .slot_generator import generate_slots
from .views import AppointmentGroups, Page, group_appointments, paginate

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.users = UserRepository()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_appointments(self) -> list[Appointment]:
        appointments = self.repo.get_all(self.db)
        logger.info(f"Retrieved {len(appointments)} appointments")
        return appointments

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def get_specialist_availability(self, specialist_id: str) -> list[Appointment]:
        """Unbooked slots for one specialist, by date then time"""
        appointments = self.repo.get_available_for_specialist(self.db, specialist_id)
        logger.info(f"Retrieved {len(appointments)} appointments for specialist {specialist_id}")
        return appointments

    def get_availability_on_date(self, date: str, category: Optional[str] = None) -> list[Appointment]:
        """Unbooked slots on one date, optionally in one category, by time"""
        date = validate_date(date)
        category = validate_category(category) if category else None

        appointments = self.repo.get_available_on_date(self.db, date, category)
        category_note = f" in category {category}" if category else ""
        logger.info(f"Retrieved {len(appointments)} appointments for date {date}{category_note}")
        return appointments

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Publish a single slot"""
        try:
            appointment = self.repo.create(self.db, **self._row_from_payload(data))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating appointment: {e}")
            raise StoreError(f"Failed to create appointment: {e}") from e

        logger.info(
            f"Appointment created: {appointment.id} for {appointment.specialist_name} "
            f"on {appointment.date} at {appointment.time}"
        )
        return appointment

    def create_bulk(self, data: BulkAppointmentCreate) -> tuple[list[Appointment], str]:
        """
        Publish many slots tagged with one fresh batch id.

        Every row is built and validated before anything is written; the
        insert is a single transaction, so the batch lands whole or not at all.
        """
        batch_id = str(uuid.uuid4())

        if data.recurrence is not None:
            rows = self._rows_from_recurrence(data)
        else:
            rows = [self._row_from_payload(item) for item in data.appointments]

        if not rows:
            raise ValidationError("The selected recurrence does not produce any slots")

        for row in rows:
            row["batch_id"] = batch_id

        try:
            appointments = self.repo.create_many(self.db, rows)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating bulk appointments: {e}")
            raise StoreError(f"Failed to create bulk appointments: {e}") from e

        logger.info(f"Bulk created {len(appointments)} appointments with batchId: {batch_id}")
        return appointments, batch_id

    def _rows_from_recurrence(self, data: BulkAppointmentCreate) -> list[dict]:
        specialist = self.users.get_by_id(self.db, data.specialistId)
        if not specialist:
            raise NotFoundError("Specialist not found")
        if not specialist.is_specialist:
            raise ValidationError("Only specialists can publish appointments")

        recurrence = data.recurrence
        slots = generate_slots(
            recurrence.month,
            recurrence.year,
            recurrence.weekdays,
            recurrence.startTime,
            recurrence.endTime,
            recurrence.interval,
        )

        return [
            {
                "specialist_id": specialist.id,
                "specialist_name": specialist.name,
                "specialization": specialist.specialization,
                "category": specialist.category,
                "date": slot.date,
                "time": slot.time,
                "venue": data.venue,
                "phone": data.phone,
            }
            for slot in slots
        ]

    @staticmethod
    def _row_from_payload(data: AppointmentCreate) -> dict:
        return {
            "specialist_id": data.specialistId,
            "specialist_name": data.specialistName,
            "specialization": data.specialization,
            "category": data.category,
            "date": data.date,
            "time": data.time,
            "venue": data.venue,
            "phone": data.phone,
            "member_name": None,
            "is_booked": False,
        }

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def book_appointment(self, appointment_id: str, member_name: str) -> Appointment:
        """
        Reserve an available slot for a member.

        The availability check and the write are one conditional UPDATE, so
        two concurrent requests can never both succeed.
        """
        member_name = (member_name or "").strip()
        if not member_name:
            raise ValidationError("Member name is required")

        try:
            booked = self.repo.mark_booked(self.db, appointment_id, member_name)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error booking appointment {appointment_id}: {e}")
            raise StoreError(f"Failed to book appointment: {e}") from e

        if not booked:
            # Nothing matched the guarded update: either missing or taken
            self.get_appointment(appointment_id)
            logger.warning(f"⚠️ Booking rejected, appointment {appointment_id} already booked")
            raise ConflictError("Appointment already booked")

        logger.info(f"Appointment booked: {appointment_id} by {member_name}")
        return self.get_appointment(appointment_id)

    # ------------------------------------------------------------------
    # Specialist edits
    # ------------------------------------------------------------------

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        """Edit venue, phone or time; fields absent from the request are untouched"""
        appointment = self.get_appointment(appointment_id)

        updates = {}
        fields = data.model_fields_set
        if "venue" in fields:
            updates["venue"] = data.venue
        if "phone" in fields:
            updates["phone"] = data.phone
        if "time" in fields and data.time is not None:
            updates["time"] = data.time

        try:
            appointment = self.repo.update(self.db, appointment, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error updating appointment {appointment_id}: {e}")
            raise StoreError(f"Failed to update appointment: {e}") from e

        logger.info(f"Appointment updated: {appointment_id}")
        return appointment

    def delete_appointment(self, appointment_id: str) -> dict:
        """Hard delete, booked or not"""
        appointment = self.get_appointment(appointment_id)
        # Snapshot before the commit expires the instance
        deleted = to_appointment_response(appointment)
        if appointment.is_booked:
            # The member who booked it is not notified
            logger.warning(
                f"⚠️ Deleting booked appointment {appointment_id} (member: {appointment.member_name})"
            )

        try:
            self.repo.delete(self.db, appointment)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting appointment {appointment_id}: {e}")
            raise StoreError(f"Failed to delete appointment: {e}") from e

        logger.info(f"Appointment deleted: {appointment_id}")
        return {"message": "Appointment deleted successfully", "appointment": deleted}

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_overview(
        self, user_id: str, page: int = 1, page_size: Optional[int] = None
    ) -> tuple[User, AppointmentGroups, Page]:
        """A user's appointments grouped by batch, with the individual slots paginated"""
        user = self.users.get_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")

        groups = group_appointments(self.repo.get_all(self.db), user)
        individual_page = paginate(groups.individual, page, page_size or DEFAULT_PAGE_SIZE)
        return user, groups, individual_page
