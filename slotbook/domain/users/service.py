"""User service - Registration, login, profile and specialist directory"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import hash_password_bcrypt, verify_password_bcrypt
from ...shared.errors import AuthenticationError, ConflictError, NotFoundError, StoreError
from ...shared.validators import validate_category
from .repository import UserRepository
from .schemas import ProfileUpdate, UserLogin, UserRegister

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def register(self, data: UserRegister) -> User:
        """Create a member or specialist account"""
        if self.repo.get_by_email(self.db, data.email):
            logger.warning(f"⚠️ Registration rejected, email already in use: {data.email}")
            raise ConflictError("User already exists")

        try:
            user = self.repo.create(
                self.db,
                name=data.name,
                email=data.email,
                password_hash=hash_password_bcrypt(data.password),
                user_type=data.userType,
                category=data.category,
                specialization=data.specialization,
                phone=data.phone,
            )
        except IntegrityError as e:
            # Lost a race against a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Registration failed for {data.email}: {e}")
            raise StoreError(f"Registration failed: {e}") from e

        logger.info(f"✅ User registered: {user.email} ({user.user_type})")
        return user

    def login(self, data: UserLogin) -> User:
        """Verify credentials and return the user"""
        email = (data.email or "").strip().lower()
        user = self.repo.get_by_email(self.db, email)
        if not user or not verify_password_bcrypt(data.password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"User logged in: {user.email}")
        return user

    def update_profile(self, user_id: str, data: ProfileUpdate) -> User:
        """Update name, phone and photo; unset fields are left alone"""
        user = self.get_user(user_id)

        updates = {}
        if data.name:
            updates["name"] = data.name.strip()
        if data.phone:
            updates["phone"] = data.phone
        if data.profilePhoto:
            updates["profile_photo"] = data.profilePhoto

        try:
            user = self.repo.update(self.db, user, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Profile update failed for user {user_id}: {e}")
            raise StoreError(f"Profile update failed: {e}") from e

        logger.info(f"Profile updated for user: {user_id}")
        return user

    def search_specialists(self, q: Optional[str] = None, category: Optional[str] = None) -> list[User]:
        """Specialists matching free text (name or specialization) and category"""
        q = q.strip() if q else None
        category = validate_category(category) if category and category.strip() else None

        specialists = self.repo.search_specialists(self.db, search=q, category=category)
        category_note = f" in category {category}" if category else ""
        logger.info(f"Found {len(specialists)} specialists for query: \"{q or 'all'}\"{category_note}")
        return specialists
