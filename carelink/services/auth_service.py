"""
Authentication and user account service
"""
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
import logging

from carelink.core.exceptions import ConflictError
from carelink.core.security import get_password_hash, verify_password
from carelink.models.user import User
from carelink.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    """User lookup, registration and credential checks"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create_user(self, user_data: UserCreate) -> User:
        """Register a new user; the email must not be taken"""
        if self.get_user_by_email(user_data.email):
            raise ConflictError("Email is already registered")

        db_user = User(
            email=user_data.email,
            name=user_data.name,
            hashed_password=get_password_hash(user_data.password),
            phone=user_data.phone
        )

        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)

        logger.info(f"User registered: {db_user.email} (ID: {db_user.id})")
        return db_user

    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        user = self.get_user_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def update_last_login(self, user: User):
        user.last_login = datetime.utcnow()
        self.db.commit()
