"""
Shared FastAPI dependencies
"""
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Optional

from carelink.core.database import get_db
from carelink.core.exceptions import AuthenticationError
from carelink.core.security import verify_token
from carelink.models.user import User
from carelink.services.auth_service import AuthService

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="api/auth/login",
    auto_error=False
)


async def get_current_user(
        token: Optional[str] = Depends(oauth2_scheme),
        db: Session = Depends(get_db)
) -> User:
    """
    Resolve the user identified by the bearer token
    """
    if not token:
        raise AuthenticationError("Not authenticated")

    payload = verify_token(token)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Could not validate credentials")

    user = AuthService(db).get_user_by_id(user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Could not validate credentials")

    return user


class PaginationParams:
    def __init__(self, skip: int = 0, limit: int = 100):
        self.skip = max(0, skip)
        self.limit = min(limit, 1000)  # at most 1000 rows per page


def get_pagination_params(skip: int = 0, limit: int = 100) -> PaginationParams:
    return PaginationParams(skip=skip, limit=limit)
