"""Authentication service."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from school_fees.core.exceptions import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
)
from school_fees.core.security import create_access_token, hash_password, verify_password
from school_fees.models.user import Teacher, User, UserRole
from school_fees.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service for login, registration and password changes."""

    def __init__(self, db: Session):
        self.db = db

    def login(self, request: LoginRequest) -> AuthResponse:
        """Authenticate user and issue an access token."""
        user = self._get_user_by_email(request.email)

        if not user or not verify_password(request.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        if not user.is_active:
            raise PermissionDeniedError("Account is inactive")

        logger.info("User %s logged in", user.id)
        return self._auth_response(user)

    def register(self, request: RegisterRequest) -> AuthResponse:
        """Create a teacher account with its profile and log it in."""
        if self._get_user_by_email(request.email):
            raise ConflictError("User with this email already exists")

        existing = self.db.execute(
            select(Teacher.id).where(Teacher.employee_id == request.employee_id)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError("Employee ID already exists")

        user = User(
            email=request.email,
            password_hash=hash_password(request.password),
            name=request.name,
            role=UserRole.TEACHER,
        )
        user.teacher = Teacher(
            employee_id=request.employee_id,
            phone_number=request.phone_number,
            address=request.address,
            qualification=request.qualification,
        )
        self.db.add(user)
        self.db.flush()
        self.db.refresh(user)

        logger.info("Registered teacher user %s", user.id)
        return self._auth_response(user)

    def change_password(self, user: User, request: PasswordChange) -> None:
        """Change the password after checking the current one."""
        if not verify_password(request.current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")

        user.password_hash = hash_password(request.new_password)
        self.db.flush()

    def _get_user_by_email(self, email: str) -> User | None:
        result = self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    def _auth_response(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.email, user.role.value)
        return AuthResponse(token=token, user=UserResponse.model_validate(user))
