"""Attendance record model."""

import datetime
import enum
from typing import Any

from sqlalchemy import BigInteger, Date, Enum, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_fees.core.database import Base
from school_fees.models.base import IDMixin, TimestampMixin


class AttendanceStatus(str, enum.Enum):
    """Attendance status enumeration."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"

    @classmethod
    def parse(cls, value: Any) -> "AttendanceStatus | None":
        """Return the matching status, or None when the value is not one."""
        try:
            return cls(value)
        except ValueError:
            return None


class Attendance(Base, IDMixin, TimestampMixin):
    """One student's attendance on one calendar day."""

    __tablename__ = "attendance"

    student_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[AttendanceStatus] = mapped_column(
        Enum(AttendanceStatus),
        nullable=False,
    )
    marked_by: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("teachers.id"),
        nullable=False,
        index=True,
    )
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="attendances",
        lazy="selectin",
    )
    teacher: Mapped["Teacher"] = relationship(
        "Teacher",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
    )

    @property
    def marked_by_name(self) -> str | None:
        return self.teacher.user.name if self.teacher else None

    def __repr__(self) -> str:
        return f"<Attendance(student_id={self.student_id}, date={self.date}, {self.status})>"
