"""Teacher and class assignment schemas."""

from datetime import date, datetime

from pydantic import EmailStr, Field

from school_fees.models.user import UserRole
from school_fees.schemas.common import BaseSchema, TimestampSchema
from school_fees.schemas.school_class import ClassBrief, ClassResponse, ClassStudent


class TeacherCreate(BaseSchema):
    """Admin-created teacher account and profile."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=255)
    employee_id: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., min_length=1, max_length=50)
    address: str | None = None
    qualification: str | None = None
    joining_date: date | None = None


class TeacherUpdate(BaseSchema):
    """Teacher profile and account update schema."""

    employee_id: str | None = Field(None, min_length=1, max_length=50)
    phone_number: str | None = Field(None, min_length=1, max_length=50)
    address: str | None = None
    qualification: str | None = None
    joining_date: date | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    is_active: bool | None = None


class TeacherUser(BaseSchema):
    """Account fields exposed with a teacher."""

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime


class TeacherAssignment(BaseSchema):
    """Class assignment as embedded in a teacher."""

    id: int
    class_id: int
    subject: str | None
    is_primary: bool
    school_class: ClassBrief = Field(..., alias="class")


class TeacherResponse(TimestampSchema):
    """Teacher response schema."""

    id: int
    user_id: int
    employee_id: str
    phone_number: str
    address: str | None
    qualification: str | None
    joining_date: date
    user: TeacherUser
    class_teachers: list[TeacherAssignment] = []


# ==========================================
# Class assignments
# ==========================================

class ClassAssignRequest(BaseSchema):
    """Assign a class to a teacher."""

    class_id: int
    subject: str | None = None
    is_primary: bool = False


class AssignmentTeacher(BaseSchema):
    """Teacher identity on an assignment."""

    id: int
    employee_id: str
    name: str
    email: str


class ClassAssignmentResponse(TimestampSchema):
    """Class assignment with class details and student count."""

    id: int
    teacher_id: int
    class_id: int
    subject: str | None
    is_primary: bool
    school_class: ClassResponse = Field(..., alias="class")
    teacher: AssignmentTeacher | None = None


class MyClass(ClassResponse):
    """Class with its active students, for the teacher's own view."""

    active_students: list[ClassStudent] = Field(
        default=[],
        validation_alias="active_students",
        serialization_alias="students",
    )


class MyClassAssignment(TimestampSchema):
    """The logged-in teacher's assignment with active students."""

    id: int
    class_id: int
    subject: str | None
    is_primary: bool
    school_class: MyClass = Field(..., alias="class")
