"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import CurrentUser
from school_fees.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    RegisterRequest,
    UserResponse,
)
from school_fees.schemas.common import DataResponse, MessageResponse
from school_fees.services.auth import AuthService

router = APIRouter()


@router.post("/login", response_model=DataResponse[AuthResponse])
def login(
    request: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Authenticate user and return an access token.
    """
    service = AuthService(db)
    return {"data": service.login(request)}


@router.post(
    "/register",
    response_model=DataResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    request: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Self-register a teacher account."""
    service = AuthService(db)
    return {"data": service.register(request)}


@router.post("/logout", response_model=DataResponse[MessageResponse])
def logout():
    """Log out. Tokens are stateless; the client discards its copy."""
    return {"data": {"message": "Logged out successfully"}}


@router.get("/profile", response_model=DataResponse[UserResponse])
def get_profile(context: CurrentUser):
    """Get current user with teacher profile."""
    return {"data": context.user}


@router.post("/change-password", response_model=DataResponse[MessageResponse])
def change_password(
    request: PasswordChange,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Change current user's password."""
    service = AuthService(db)
    service.change_password(context.user, request)
    return {"data": {"message": "Password changed successfully"}}
