"""User and teacher profile models."""

import enum
from datetime import date

from sqlalchemy import BigInteger, Boolean, Date, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_fees.core.database import Base
from school_fees.models.base import IDMixin, TimestampMixin


class UserRole(str, enum.Enum):
    """Account role."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"


class User(Base, IDMixin, TimestampMixin):
    """Login account. Admins have no teacher profile."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole),
        default=UserRole.TEACHER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    teacher: Mapped["Teacher | None"] = relationship(
        "Teacher",
        back_populates="user",
        uselist=False,
        lazy="selectin",
    )

    @property
    def teacher_id(self) -> int | None:
        return self.teacher.id if self.teacher else None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


class Teacher(Base, IDMixin, TimestampMixin):
    """Teacher profile attached 1:1 to a user."""

    __tablename__ = "teachers"

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    employee_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    qualification: Mapped[str | None] = mapped_column(String(255), nullable=True)
    joining_date: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="teacher",
        lazy="selectin",
    )
    class_teachers: Mapped[list["ClassTeacher"]] = relationship(
        "ClassTeacher",
        back_populates="teacher",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def name(self) -> str:
        return self.user.name

    @property
    def email(self) -> str:
        return self.user.email

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, employee_id={self.employee_id})>"
