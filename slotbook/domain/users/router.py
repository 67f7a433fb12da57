"""User router - FastAPI endpoints for accounts and the specialist directory"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import User
from .schemas import (
    ProfileUpdate,
    SpecialistListResponse,
    UserEnvelope,
    UserLogin,
    UserRegister,
    UserResponse,
)
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        userType=user.user_type,
        category=user.category,
        specialization=user.specialization,
        phone=user.phone,
        profilePhoto=user.profile_photo,
        createdAt=user.created_at,
        updatedAt=user.updated_at,
    )


@router.post("/register", response_model=UserEnvelope)
async def register(data: UserRegister, service: UserService = Depends(get_user_service)):
    """Create a member or specialist account"""
    user = service.register(data)
    return UserEnvelope(user=to_user_response(user))


@router.post("/login", response_model=UserEnvelope)
async def login(data: UserLogin, service: UserService = Depends(get_user_service)):
    """Check credentials"""
    user = service.login(data)
    return UserEnvelope(user=to_user_response(user))


@router.put("/profile/{user_id}", response_model=UserEnvelope)
async def update_profile(
    user_id: str,
    data: ProfileUpdate,
    service: UserService = Depends(get_user_service),
):
    user = service.update_profile(user_id, data)
    return UserEnvelope(user=to_user_response(user))


@router.get("/search/specialists", response_model=SpecialistListResponse)
async def search_specialists(
    q: Optional[str] = Query(None, description="Matches name or specialization"),
    category: Optional[str] = Query(None, description="Service category, case-insensitive"),
    service: UserService = Depends(get_user_service),
):
    """Specialist directory"""
    specialists = service.search_specialists(q, category)
    return SpecialistListResponse(specialists=[to_user_response(s) for s in specialists])
