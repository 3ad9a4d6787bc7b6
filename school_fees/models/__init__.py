"""Database models package."""

from school_fees.models.attendance import Attendance, AttendanceStatus
from school_fees.models.fee_record import MONTHS, FeeRecord, FeeStatus, PaymentMode
from school_fees.models.school_class import ClassTeacher, FeeStructure, SchoolClass
from school_fees.models.student import Student
from school_fees.models.user import Teacher, User, UserRole

__all__ = [
    # Users
    "User",
    "UserRole",
    "Teacher",
    # Classes
    "SchoolClass",
    "FeeStructure",
    "ClassTeacher",
    # Students
    "Student",
    # Fees
    "FeeRecord",
    "FeeStatus",
    "PaymentMode",
    "MONTHS",
    # Attendance
    "Attendance",
    "AttendanceStatus",
]
