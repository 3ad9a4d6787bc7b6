"""Attendance schemas."""

import datetime
from typing import Any

from pydantic import Field

from school_fees.models.attendance import AttendanceStatus
from school_fees.schemas.common import BaseSchema, TimestampSchema
from school_fees.schemas.school_class import ClassBrief
from school_fees.schemas.student import StudentResponse


class AttendanceMark(BaseSchema):
    """Mark one student's attendance for a day."""

    student_id: int
    date: datetime.date
    status: AttendanceStatus
    remarks: str | None = None


class AttendanceResponse(TimestampSchema):
    """Attendance record response schema."""

    id: int
    student_id: int
    date: datetime.date
    status: AttendanceStatus
    marked_by: int
    marked_by_name: str | None = None
    remarks: str | None
    student: StudentResponse | None = None


class AttendanceFilter(BaseSchema):
    """Attendance filtering options."""

    class_id: int | None = None
    student_id: int | None = None
    date_from: datetime.date | None = None
    date_to: datetime.date | None = None
    status: AttendanceStatus | None = None


# ==========================================
# Bulk Attendance Operations
# ==========================================

class BulkAttendanceEntry(BaseSchema):
    """Single entry of a bulk request.

    Values are taken as sent; the service skips entries it cannot use instead
    of failing the whole batch.
    """

    student_id: Any = None
    status: Any = None
    remarks: Any = None


class BulkAttendanceMark(BaseSchema):
    """Mark attendance for many students on one day."""

    class_id: int | None = None
    date: datetime.date
    attendance_records: list[BulkAttendanceEntry]


class BulkAttendanceResult(BaseSchema):
    """Response for bulk attendance marking."""

    message: str
    count: int
    records: list[AttendanceResponse]


# ==========================================
# Summaries & reports
# ==========================================

class ClassDayAttendance(BaseSchema):
    """A student of the class with that day's attendance, if marked."""

    student: StudentResponse
    attendance: AttendanceResponse | None


class AttendanceSummary(BaseSchema):
    """Day counts and percentage for one student."""

    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    attendance_percentage: float = 0.0


class StudentAttendanceSummary(BaseSchema):
    """Summary plus most recent records for one student."""

    student: StudentResponse
    summary: AttendanceSummary
    recent_records: list[AttendanceResponse]


class ReportStudent(BaseSchema):
    """Student identity in a class report."""

    id: int
    name: str
    roll_number: str


class ClassReportEntry(BaseSchema):
    """One line of a class attendance report."""

    student: ReportStudent
    summary: AttendanceSummary


class DateRange(BaseSchema):
    """Inclusive date range; either end may be open."""

    date_from: datetime.date | None = Field(None, alias="from")
    date_to: datetime.date | None = Field(None, alias="to")


class ClassAttendanceReport(BaseSchema):
    """Per-student attendance summary for a class."""

    school_class: ClassBrief = Field(..., alias="class")
    date_range: DateRange
    report: list[ClassReportEntry]
