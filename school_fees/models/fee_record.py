"""Monthly fee record model."""

import enum
from datetime import date, datetime

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_fees.core.database import Base
from school_fees.models.base import FeeComponentsMixin, IDMixin, TimestampMixin

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class FeeStatus(str, enum.Enum):
    """Fee record status."""

    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


class PaymentMode(str, enum.Enum):
    """How a payment was made."""

    CASH = "Cash"
    ONLINE = "Online"
    CHEQUE = "Cheque"


class FeeRecord(Base, IDMixin, TimestampMixin, FeeComponentsMixin):
    """One student's fee obligation for one (month, year) period."""

    __tablename__ = "fee_records"

    student_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month: Mapped[str] = mapped_column(String(20), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    total_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    amount_paid: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    balance: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    status: Mapped[FeeStatus] = mapped_column(
        Enum(FeeStatus),
        default=FeeStatus.PENDING,
        nullable=False,
        index=True,
    )
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    payment_mode: Mapped[PaymentMode | None] = mapped_column(Enum(PaymentMode), nullable=True)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="fee_records",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("student_id", "month", "year", name="uq_fee_record_student_period"),
    )

    def recalculate(self) -> None:
        """Recompute total and balance from the stored components."""
        self.total_fee = self.component_total()
        self.balance = self.total_fee - (self.amount_paid or 0)

    def __repr__(self) -> str:
        return f"<FeeRecord(student_id={self.student_id}, {self.month} {self.year}, {self.status})>"
