"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from ...models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_all(db: Session) -> list[Appointment]:
        """Get every appointment, oldest first"""
        return db.query(Appointment).order_by(Appointment.created_at, Appointment.date, Appointment.time).all()

    @staticmethod
    def get_by_id(db: Session, appointment_id: str) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_available_for_specialist(db: Session, specialist_id: str) -> list[Appointment]:
        """Unbooked slots for a specialist, by date then time"""
        return (
            db.query(Appointment)
            .filter(Appointment.specialist_id == specialist_id, Appointment.is_booked.is_(False))
            .order_by(Appointment.date, Appointment.time)
            .all()
        )

    @staticmethod
    def get_available_on_date(
        db: Session, date: str, category: Optional[str] = None
    ) -> list[Appointment]:
        """Unbooked slots on a date, optionally within one category, by time"""
        query = db.query(Appointment).filter(
            Appointment.date == date, Appointment.is_booked.is_(False)
        )

        if category:
            query = query.filter(Appointment.category == category)

        return query.order_by(Appointment.time).all()

    @staticmethod
    def create(db: Session, **appointment_data) -> Appointment:
        """Create a single appointment"""
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def create_many(db: Session, rows: list[dict]) -> list[Appointment]:
        """Insert all rows in one transaction"""
        appointments = [Appointment(**row) for row in rows]
        db.add_all(appointments)
        db.commit()
        for appointment in appointments:
            db.refresh(appointment)
        return appointments

    @staticmethod
    def mark_booked(db: Session, appointment_id: str, member_name: str) -> bool:
        """
        Conditionally book a slot.

        Single UPDATE guarded on ``is_booked = false``; returns False when no
        row matched (missing or already booked).
        """
        result = db.execute(
            update(Appointment)
            .where(Appointment.id == appointment_id, Appointment.is_booked.is_(False))
            .values(is_booked=True, member_name=member_name)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return result.rowcount == 1

    @staticmethod
    def update(db: Session, appointment: Appointment, **updates) -> Appointment:
        """Update an appointment with provided fields"""
        for key, value in updates.items():
            if hasattr(appointment, key):
                setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
