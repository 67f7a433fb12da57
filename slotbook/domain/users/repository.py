"""User repository - Database operations for users"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def create(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update(db: Session, user: User, **updates) -> User:
        """Update a user with provided fields, skipping None values"""
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def search_specialists(
        db: Session,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[User]:
        """Search and filter specialists"""
        query = db.query(User).filter(User.user_type == "specialist")

        if search:
            # Escape LIKE wildcards so the text matches literally
            escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            search_term = f"%{escaped}%"
            query = query.filter(
                or_(
                    func.lower(User.name).like(search_term, escape="\\"),
                    func.lower(User.specialization).like(search_term, escape="\\"),
                )
            )

        if category:
            query = query.filter(User.category == category)

        return query.order_by(User.name).all()
