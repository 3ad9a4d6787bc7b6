"""Class and fee structure schemas."""

from datetime import date, datetime

from pydantic import Field

from school_fees.schemas.common import (
    BaseSchema,
    FeeComponents,
    FeeComponentsUpdate,
    TimestampSchema,
)


class ClassCreate(BaseSchema):
    """Class creation schema."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class ClassUpdate(BaseSchema):
    """Class update schema."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None


class ClassBrief(TimestampSchema):
    """Class without nested collections."""

    id: int
    name: str
    description: str | None
    is_active: bool


class ClassResponse(ClassBrief):
    """Class with its enrolled-student count."""

    student_count: int = 0


class ClassFeeStructure(FeeComponents):
    """Fee structure as embedded in a class detail."""

    id: int
    total_monthly_fee: float


class ClassStudent(BaseSchema):
    """Student row as embedded in a class detail."""

    id: int
    name: str
    father_name: str
    roll_number: str
    phone_number: str
    admission_date: date
    is_active: bool
    total_monthly_fee: float


class ClassDetailResponse(ClassResponse):
    """Class with students and fee structure."""

    students: list[ClassStudent] = []
    fee_structure: ClassFeeStructure | None = None


# ==========================================
# Fee Structures
# ==========================================

class FeeStructureCreate(FeeComponents):
    """Fee structure creation schema. Tuition is required."""

    class_id: int
    tuition_fee: float = Field(..., ge=0)


class FeeStructureUpdate(FeeComponentsUpdate):
    """Fee structure update schema."""

    pass


class FeeStructureResponse(FeeComponents):
    """Fee structure response schema."""

    id: int
    class_id: int
    total_monthly_fee: float
    school_class: ClassBrief | None = Field(None, alias="class")
    created_at: datetime
    updated_at: datetime
