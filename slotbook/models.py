import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate an opaque unique record ID"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    user_type = Column(String(20), nullable=False)  # member, specialist
    # Specialists only
    category = Column(String(50), nullable=True)
    specialization = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    profile_photo = Column(Text, nullable=True)  # Inline base64 / data URL
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def is_specialist(self) -> bool:
        return self.user_type == "specialist"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    # Weak reference to the creating specialist, no foreign key
    specialist_id = Column(String(36), index=True, nullable=False)
    specialist_name = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=False)
    category = Column(String(50), index=True, nullable=False)
    date = Column(String(10), index=True, nullable=False)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM
    venue = Column(String(500), nullable=True)
    phone = Column(String(50), nullable=True)
    member_name = Column(String(255), nullable=True)  # Set together with is_booked
    is_booked = Column(Boolean, default=False, nullable=False)
    batch_id = Column(String(36), index=True, nullable=True)  # Shared by one bulk request
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
