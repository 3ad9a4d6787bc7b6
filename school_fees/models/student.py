"""Student model."""

from datetime import date

from sqlalchemy import BigInteger, Boolean, Date, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_fees.core.database import Base
from school_fees.models.base import FeeComponentsMixin, IDMixin, TimestampMixin


class Student(Base, IDMixin, TimestampMixin, FeeComponentsMixin):
    """Student model with the student's own monthly fee components."""

    __tablename__ = "students"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    father_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    class_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("classes.id"),
        nullable=False,
        index=True,
    )
    roll_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    admission_date: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    total_monthly_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    # Relationships
    school_class: Mapped["SchoolClass"] = relationship(
        "SchoolClass",
        back_populates="students",
        lazy="selectin",
    )
    fee_records: Mapped[list["FeeRecord"]] = relationship(
        "FeeRecord",
        back_populates="student",
        cascade="all, delete-orphan",
    )
    attendances: Mapped[list["Attendance"]] = relationship(
        "Attendance",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="Attendance.date.desc()",
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name}, roll={self.roll_number})>"
