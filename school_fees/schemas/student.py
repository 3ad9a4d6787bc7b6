"""Student schemas."""

from datetime import date, datetime

from pydantic import Field

from school_fees.models.attendance import AttendanceStatus
from school_fees.models.fee_record import FeeStatus
from school_fees.schemas.common import BaseSchema, FeeComponents, FeeComponentsUpdate
from school_fees.schemas.school_class import ClassBrief


class StudentCreate(FeeComponents):
    """Student creation schema."""

    name: str = Field(..., min_length=1, max_length=255)
    father_name: str = Field(..., min_length=1, max_length=255)
    date_of_birth: date | None = None
    class_id: int
    roll_number: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., min_length=1, max_length=50)
    address: str | None = None
    admission_date: date | None = None


class StudentUpdate(FeeComponentsUpdate):
    """Student update schema."""

    name: str | None = Field(None, min_length=1, max_length=255)
    father_name: str | None = Field(None, min_length=1, max_length=255)
    date_of_birth: date | None = None
    class_id: int | None = None
    roll_number: str | None = Field(None, min_length=1, max_length=50)
    phone_number: str | None = Field(None, min_length=1, max_length=50)
    address: str | None = None
    admission_date: date | None = None
    is_active: bool | None = None


class StudentResponse(FeeComponents):
    """Student response schema."""

    id: int
    name: str
    father_name: str
    date_of_birth: date | None
    class_id: int
    roll_number: str
    phone_number: str
    address: str | None
    admission_date: date
    is_active: bool
    total_monthly_fee: float
    school_class: ClassBrief | None = Field(None, alias="class")
    created_at: datetime
    updated_at: datetime


class StudentFeeRecord(BaseSchema):
    """Fee record row in a student detail."""

    id: int
    month: str
    year: int
    total_fee: float
    amount_paid: float
    balance: float
    status: FeeStatus
    due_date: date
    payment_date: datetime | None


class StudentAttendance(BaseSchema):
    """Attendance row in a student detail."""

    id: int
    date: date
    status: AttendanceStatus
    remarks: str | None


class StudentDetailResponse(StudentResponse):
    """Student with fee history and recent attendance."""

    fee_records: list[StudentFeeRecord] = []
    attendances: list[StudentAttendance] = []


class StudentFilter(BaseSchema):
    """Student filter options."""

    class_id: int | None = None
    is_active: bool | None = None
