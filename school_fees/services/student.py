"""Student management service."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from school_fees.core.config import settings
from school_fees.core.exceptions import ConflictError, NotFoundError
from school_fees.models.fee_record import MONTHS
from school_fees.models.school_class import SchoolClass
from school_fees.models.student import Student
from school_fees.schemas.student import (
    StudentCreate,
    StudentDetailResponse,
    StudentFilter,
    StudentUpdate,
)

logger = logging.getLogger(__name__)


class StudentService:
    """Student management service."""

    def __init__(self, db: Session):
        self.db = db

    def list_students(self, filters: StudentFilter | None = None) -> list[Student]:
        """List students ordered by class and roll number."""
        query = select(Student)

        if filters:
            if filters.class_id is not None:
                query = query.where(Student.class_id == filters.class_id)
            if filters.is_active is not None:
                query = query.where(Student.is_active == filters.is_active)

        query = query.order_by(Student.class_id, Student.roll_number)
        result = self.db.execute(query)
        return list(result.scalars().all())

    def get_student(self, student_id: int) -> Student:
        """Get student by ID."""
        student = self.db.get(Student, student_id)
        if not student:
            raise NotFoundError("Student")
        return student

    def get_student_detail(self, student_id: int) -> StudentDetailResponse:
        """Student with full fee history (newest period first) and recent attendance."""
        student = self.get_student(student_id)
        detail = StudentDetailResponse.model_validate(student)

        detail.fee_records.sort(
            key=lambda record: (record.year, MONTHS.index(record.month)),
            reverse=True,
        )
        detail.attendances = detail.attendances[: settings.RECENT_ATTENDANCE_LIMIT]
        return detail

    def create_student(self, request: StudentCreate) -> Student:
        """Create a new student; the monthly total is the sum of its components."""
        self._ensure_roll_number_free(request.roll_number)
        self._ensure_class_exists(request.class_id)

        data = request.model_dump(exclude_none=True)
        student = Student(**data)
        student.total_monthly_fee = student.component_total()

        self.db.add(student)
        self.db.flush()
        self.db.refresh(student)
        return student

    def update_student(self, student_id: int, request: StudentUpdate) -> Student:
        """Update a student; the monthly total is recomputed from merged components."""
        student = self.get_student(student_id)
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)

        roll_number = update_data.get("roll_number")
        if roll_number and roll_number != student.roll_number:
            self._ensure_roll_number_free(roll_number)

        class_id = update_data.get("class_id")
        if class_id and class_id != student.class_id:
            self._ensure_class_exists(class_id)

        for field, value in update_data.items():
            setattr(student, field, value)
        student.total_monthly_fee = student.component_total()

        self.db.flush()
        self.db.refresh(student)
        return student

    def deactivate_student(self, student_id: int) -> Student:
        """Soft delete: the student stays on record but is no longer active."""
        student = self.get_student(student_id)
        student.is_active = False
        self.db.flush()
        return student

    def delete_student(self, student_id: int) -> None:
        """Permanently delete a student with its fee records and attendance."""
        student = self.get_student(student_id)
        self.db.delete(student)
        self.db.flush()
        logger.info("Permanently deleted student %s (%s)", student_id, student.roll_number)

    def _ensure_roll_number_free(self, roll_number: str) -> None:
        existing = self.db.execute(
            select(Student.id).where(Student.roll_number == roll_number)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError("Roll number already exists")

    def _ensure_class_exists(self, class_id: int) -> None:
        if not self.db.get(SchoolClass, class_id):
            raise NotFoundError("Class")
