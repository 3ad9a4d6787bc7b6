"""Attendance service for marking, bulk marking and summaries."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from school_fees.core.config import settings
from school_fees.core.exceptions import ForbiddenError, NotFoundError
from school_fees.models.attendance import Attendance, AttendanceStatus
from school_fees.models.school_class import SchoolClass
from school_fees.models.student import Student
from school_fees.schemas.attendance import (
    AttendanceFilter,
    AttendanceMark,
    AttendanceResponse,
    AttendanceSummary,
    BulkAttendanceMark,
    BulkAttendanceResult,
    ClassAttendanceReport,
    ClassDayAttendance,
    ClassReportEntry,
    DateRange,
    ReportStudent,
    StudentAttendanceSummary,
)
from school_fees.schemas.school_class import ClassBrief
from school_fees.schemas.student import StudentResponse

logger = logging.getLogger(__name__)


def summarize(records: Sequence[Attendance]) -> AttendanceSummary:
    """Day counts and percentage present; 0% when there are no records."""
    total_days = len(records)
    present_days = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    absent_days = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
    percentage = round(present_days / total_days * 100, 2) if total_days else 0.0

    return AttendanceSummary(
        total_days=total_days,
        present_days=present_days,
        absent_days=absent_days,
        attendance_percentage=percentage,
    )


class AttendanceService:
    """Attendance management service."""

    def __init__(self, db: Session):
        self.db = db

    def list_records(self, filters: AttendanceFilter | None = None) -> list[Attendance]:
        """List attendance records, most recent first."""
        query = select(Attendance)

        if filters:
            if filters.class_id is not None:
                query = query.join(Student, Attendance.student_id == Student.id).where(
                    Student.class_id == filters.class_id
                )
            if filters.student_id is not None:
                query = query.where(Attendance.student_id == filters.student_id)
            if filters.date_from:
                query = query.where(Attendance.date >= filters.date_from)
            if filters.date_to:
                query = query.where(Attendance.date <= filters.date_to)
            if filters.status:
                query = query.where(Attendance.status == filters.status)

        query = query.order_by(Attendance.date.desc(), Attendance.id)
        result = self.db.execute(query)
        return list(result.scalars().all())

    def get_record(self, record_id: int) -> Attendance:
        """Get attendance record by ID."""
        record = self.db.get(Attendance, record_id)
        if not record:
            raise NotFoundError("Attendance record")
        return record

    def mark_attendance(self, teacher_id: int | None, request: AttendanceMark) -> Attendance:
        """Insert or overwrite the student's attendance for the day."""
        teacher_id = self.require_teacher(teacher_id)
        if not self.db.get(Student, request.student_id):
            raise NotFoundError("Student")

        return self._upsert(
            student_id=request.student_id,
            day=request.date,
            status=request.status,
            remarks=request.remarks,
            teacher_id=teacher_id,
        )

    def bulk_mark(self, teacher_id: int | None, request: BulkAttendanceMark) -> BulkAttendanceResult:
        """
        Upsert attendance for many students on one day.

        Entries without a student or a valid status, entries for unknown
        students, and entries whose write fails are skipped; the rest are kept.
        """
        teacher_id = self.require_teacher(teacher_id)
        marked: list[Attendance] = []

        for index, entry in enumerate(request.attendance_records):
            student_id = self._entry_student_id(entry.student_id)
            status = AttendanceStatus.parse(entry.status)
            if not student_id or status is None:
                logger.warning(
                    "Skipping bulk attendance entry %d: student=%r status=%r",
                    index,
                    entry.student_id,
                    entry.status,
                )
                continue

            if not self.db.get(Student, student_id):
                logger.warning(
                    "Skipping bulk attendance entry %d: student %s not found",
                    index,
                    student_id,
                )
                continue

            try:
                with self.db.begin_nested():
                    record = self._upsert(
                        student_id=student_id,
                        day=request.date,
                        status=status,
                        remarks=None if entry.remarks is None else str(entry.remarks),
                        teacher_id=teacher_id,
                    )
            except SQLAlchemyError:
                logger.exception(
                    "Failed to mark attendance for student %s on %s",
                    student_id,
                    request.date,
                )
                continue

            marked.append(record)

        logger.info(
            "Bulk attendance for %s: %d of %d entries marked",
            request.date,
            len(marked),
            len(request.attendance_records),
        )
        return BulkAttendanceResult(
            message=f"Successfully marked attendance for {len(marked)} students",
            count=len(marked),
            records=[AttendanceResponse.model_validate(record) for record in marked],
        )

    def delete_record(self, record_id: int, teacher_id: int | None = None) -> None:
        """
        Delete an attendance record.

        When ``teacher_id`` is given the record must have been marked by that
        teacher.
        """
        record = self.get_record(record_id)

        if teacher_id is not None and record.marked_by != teacher_id:
            raise ForbiddenError("You can only delete attendance records you marked")

        self.db.delete(record)
        self.db.flush()

    def get_class_day(self, class_id: int, day: date) -> list[ClassDayAttendance]:
        """Every active student of the class with that day's record, or None."""
        students = self._active_students(class_id)

        records = self.db.execute(
            select(Attendance)
            .join(Student, Attendance.student_id == Student.id)
            .where(Student.class_id == class_id, Attendance.date == day)
        ).scalars().all()
        by_student = {record.student_id: record for record in records}

        return [
            ClassDayAttendance(
                student=StudentResponse.model_validate(student),
                attendance=(
                    AttendanceResponse.model_validate(by_student[student.id])
                    if student.id in by_student
                    else None
                ),
            )
            for student in students
        ]

    def get_student_summary(self, student_id: int) -> StudentAttendanceSummary:
        """Attendance totals for one student plus the most recent records."""
        student = self.db.get(Student, student_id)
        if not student:
            raise NotFoundError("Student")

        records = self.db.execute(
            select(Attendance)
            .where(Attendance.student_id == student_id)
            .order_by(Attendance.date.desc())
        ).scalars().all()

        return StudentAttendanceSummary(
            student=StudentResponse.model_validate(student),
            summary=summarize(records),
            recent_records=[
                AttendanceResponse.model_validate(record)
                for record in records[: settings.RECENT_ATTENDANCE_LIMIT]
            ],
        )

    def get_class_report(
        self,
        class_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ClassAttendanceReport:
        """Attendance summary per active student of a class over an optional range."""
        school_class = self.db.get(SchoolClass, class_id)
        if not school_class:
            raise NotFoundError("Class")

        students = self._active_students(class_id)

        query = select(Attendance).where(
            Attendance.student_id.in_([student.id for student in students])
        )
        if date_from:
            query = query.where(Attendance.date >= date_from)
        if date_to:
            query = query.where(Attendance.date <= date_to)

        by_student: dict[int, list[Attendance]] = defaultdict(list)
        for record in self.db.execute(query).scalars().all():
            by_student[record.student_id].append(record)

        report = [
            ClassReportEntry(
                student=ReportStudent.model_validate(student),
                summary=summarize(by_student[student.id]),
            )
            for student in students
        ]

        return ClassAttendanceReport(
            school_class=ClassBrief.model_validate(school_class),
            date_range=DateRange(date_from=date_from, date_to=date_to),
            report=report,
        )

    def _active_students(self, class_id: int) -> Sequence[Student]:
        result = self.db.execute(
            select(Student)
            .where(Student.class_id == class_id, Student.is_active.is_(True))
            .order_by(Student.roll_number)
        )
        return result.scalars().all()

    def _find_record(self, student_id: int, day: date) -> Attendance | None:
        result = self.db.execute(
            select(Attendance).where(
                Attendance.student_id == student_id,
                Attendance.date == day,
            )
        )
        return result.scalar_one_or_none()

    def _upsert(
        self,
        student_id: int,
        day: date,
        status: AttendanceStatus,
        remarks: str | None,
        teacher_id: int,
    ) -> Attendance:
        """One row per (student, day); the latest mark wins."""
        record = self._find_record(student_id, day)

        if record is None:
            record = Attendance(
                student_id=student_id,
                date=day,
                status=status,
                remarks=remarks,
                marked_by=teacher_id,
            )
            try:
                with self.db.begin_nested():
                    self.db.add(record)
            except IntegrityError:
                # Inserted concurrently; fall through and overwrite it
                record = self._find_record(student_id, day)
                if record is None:
                    raise
            else:
                self.db.refresh(record)
                return record

        record.status = status
        record.remarks = remarks
        record.marked_by = teacher_id
        self.db.flush()
        self.db.refresh(record)
        return record

    @staticmethod
    def require_teacher(teacher_id: int | None) -> int:
        if teacher_id is None:
            raise NotFoundError("Teacher profile")
        return teacher_id

    @staticmethod
    def _entry_student_id(value: Any) -> int | None:
        # Integers and digit strings only; bool is an int subclass
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return None
