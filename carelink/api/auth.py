"""
Authentication endpoints
"""
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from carelink.core.database import get_db
from carelink.core.dependencies import get_current_user
from carelink.core.exceptions import AuthenticationError
from carelink.core.security import create_access_token
from carelink.models.user import User
from carelink.schemas.user import UserCreate, UserProfile, LoginResponse
from carelink.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new user
    """
    return AuthService(db).create_user(user_data)


@router.post("/login", response_model=LoginResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Exchange email and password for a bearer token
    """
    auth_service = AuthService(db)

    user = auth_service.authenticate_user(form_data.username, form_data.password)
    if not user or not user.is_active:
        raise AuthenticationError("Incorrect email or password")

    auth_service.update_last_login(user)

    access_token = create_access_token(
        data={"sub": str(user.id), "email": user.email}
    )

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user
    }


@router.get("/me", response_model=UserProfile)
async def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    return current_user
