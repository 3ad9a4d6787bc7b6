"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.exceptions import AuthenticationError, PermissionDeniedError
from school_fees.core.security import verify_access_token
from school_fees.models.user import User, UserRole


class CurrentUserContext:
    """The authenticated caller for the current request."""

    def __init__(self, user: User):
        self.user = user

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def role(self) -> UserRole:
        return self.user.role

    @property
    def teacher_id(self) -> int | None:
        return self.user.teacher_id

    def is_admin(self) -> bool:
        return self.user.role == UserRole.ADMIN

    def is_teacher(self) -> bool:
        return self.user.role == UserRole.TEACHER


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    authorization: str | None = Header(None, description="Bearer token"),
) -> User:
    """Extract and validate the current user from JWT token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("No token provided")

    token = authorization[7:]  # Remove "Bearer " prefix
    payload = verify_access_token(token)

    if not payload:
        raise AuthenticationError("Invalid or expired token")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise AuthenticationError("Invalid token payload")

    try:
        user_id = int(user_id_str)
    except ValueError:
        raise AuthenticationError("Invalid user ID in token")

    result = db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    return user


def get_user_context(
    user: Annotated[User, Depends(get_current_user)],
) -> CurrentUserContext:
    """Wrap the authenticated user in a request context."""
    return CurrentUserContext(user)


def require_role(*roles: UserRole):
    """Dependency factory that restricts a route to the given roles."""

    allowed = " or ".join(f"{role.value.lower()}s" for role in roles)

    def check_role(
        context: Annotated[CurrentUserContext, Depends(get_user_context)],
    ) -> CurrentUserContext:
        if context.role not in roles:
            raise PermissionDeniedError(f"Only {allowed} can perform this action")
        return context

    return check_role


# Type aliases for dependency injection
CurrentUser = Annotated[CurrentUserContext, Depends(get_user_context)]
AdminContext = Annotated[CurrentUserContext, Depends(require_role(UserRole.ADMIN))]
TeacherContext = Annotated[CurrentUserContext, Depends(require_role(UserRole.TEACHER))]
StaffContext = Annotated[
    CurrentUserContext,
    Depends(require_role(UserRole.ADMIN, UserRole.TEACHER)),
]
