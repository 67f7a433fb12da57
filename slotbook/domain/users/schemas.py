"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_category, validate_email


class UserRegister(BaseModel):
    """Schema for registering a member or specialist"""

    name: str
    email: str
    password: str
    userType: Literal["member", "specialist"]
    category: Optional[str] = None
    specialization: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if not v:
            raise ValueError("Email is required")
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if not v:
            raise ValueError("Password is required")
        return v

    @model_validator(mode="after")
    def check_specialist_fields(self):
        if self.userType == "specialist":
            if not self.specialization or not self.specialization.strip():
                raise ValueError("Specialists must provide a specialization")
            self.category = validate_category(self.category or "")
            self.specialization = self.specialization.strip()
        else:
            # Members never carry specialist fields
            self.category = None
            self.specialization = None
        return self


class UserLogin(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Schema for profile edits; unset fields are left unchanged"""

    name: Optional[str] = None
    phone: Optional[str] = None
    profilePhoto: Optional[str] = None


class UserResponse(BaseModel):
    """Public user representation, never includes password material"""

    id: str
    name: str
    email: str
    userType: str
    category: Optional[str] = None
    specialization: Optional[str] = None
    phone: Optional[str] = None
    profilePhoto: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UserEnvelope(BaseModel):
    user: UserResponse


class SpecialistListResponse(BaseModel):
    specialists: list[UserResponse]
