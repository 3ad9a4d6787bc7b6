"""Base model utilities and mixins."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Float, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

# SQLite only auto-increments INTEGER PRIMARY KEY columns
BigIntegerPK = BigInteger().with_variant(Integer, "sqlite")


class IDMixin:
    """Mixin providing BigInteger primary key with auto-increment."""

    id: Mapped[int] = mapped_column(
        BigIntegerPK,
        primary_key=True,
        autoincrement=True,
    )


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class FeeComponentsMixin:
    """The six monthly fee components shared by structures, students and records."""

    tuition_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    lab_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    library_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    sports_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    exam_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    other_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    def component_total(self) -> float:
        return (
            (self.tuition_fee or 0)
            + (self.lab_fee or 0)
            + (self.library_fee or 0)
            + (self.sports_fee or 0)
            + (self.exam_fee or 0)
            + (self.other_fee or 0)
        )
