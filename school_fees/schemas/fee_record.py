"""Fee record schemas."""

from datetime import date, datetime

from pydantic import Field, field_validator

from school_fees.models.fee_record import MONTHS, FeeStatus, PaymentMode
from school_fees.schemas.common import BaseSchema, FeeComponents
from school_fees.schemas.student import StudentResponse


def _check_month(value: str | None) -> str | None:
    if value is not None and value not in MONTHS:
        raise ValueError(f"Month must be one of {', '.join(MONTHS)}")
    return value


class FeeRecordResponse(FeeComponents):
    """Fee record response schema."""

    id: int
    student_id: int
    month: str
    year: int
    total_fee: float
    amount_paid: float
    balance: float
    status: FeeStatus
    due_date: date
    payment_date: datetime | None
    payment_mode: PaymentMode | None
    remarks: str | None
    student: StudentResponse | None = None
    created_at: datetime
    updated_at: datetime


class FeeRecordFilter(BaseSchema):
    """Fee record filtering options."""

    student_id: int | None = None
    month: str | None = None
    year: int | None = None
    status: FeeStatus | None = None
    class_id: int | None = None


# ==========================================
# Generation
# ==========================================

class FeeGenerateRequest(BaseSchema):
    """Generate monthly fee records for all active students or one class."""

    month: str
    year: int = Field(..., ge=1900, le=9999)
    class_id: int | None = None
    due_date: date | None = None
    additional_exam_fee: float = Field(0, ge=0)
    additional_other_fee: float = Field(0, ge=0)

    _validate_month = field_validator("month")(_check_month)


class SkippedFeeRecord(BaseSchema):
    """A student whose record was not generated."""

    student_id: int
    student_name: str
    reason: str


class FeeGenerateResult(BaseSchema):
    """Outcome of a generation run."""

    message: str
    created: int
    skipped: int
    records: list[FeeRecordResponse]
    skipped_records: list[SkippedFeeRecord]


# ==========================================
# Payments & adjustments
# ==========================================

class PaymentRequest(BaseSchema):
    """Record an (optionally partial) payment."""

    amount_paid: float = Field(..., gt=0)
    payment_mode: PaymentMode
    remarks: str | None = None


class AddFeesRequest(BaseSchema):
    """Add extra exam/other charges to an existing record."""

    exam_fee: float = Field(0, ge=0)
    other_fee: float = Field(0, ge=0)


class FeeStatusUpdate(BaseSchema):
    """Manually override a record's status."""

    status: FeeStatus


class OverdueSweepResult(BaseSchema):
    """Outcome of the overdue sweep."""

    message: str
    count: int
