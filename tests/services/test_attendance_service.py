from datetime import date

import pytest

from school_fees.core.exceptions import ForbiddenError, NotFoundError
from school_fees.models import Attendance, AttendanceStatus
from school_fees.schemas.attendance import (
    AttendanceFilter,
    AttendanceMark,
    BulkAttendanceEntry,
    BulkAttendanceMark,
)
from school_fees.services.attendance import AttendanceService, summarize

DAY = date(2025, 3, 3)


@pytest.fixture()
def grade_one(make_class):
    return make_class("Grade 1")


@pytest.fixture()
def student(grade_one, make_student):
    return make_student(grade_one, "G1-001", name="Alice")


def mark(db, teacher_id, student_id, status, day=DAY, remarks=None):
    record = AttendanceService(db).mark_attendance(
        teacher_id,
        AttendanceMark(student_id=student_id, date=day, status=status, remarks=remarks),
    )
    db.commit()
    return record


class TestMarkAttendance:
    def test_creates_record(self, db, teacher, student):
        record = mark(db, teacher.id, student.id, AttendanceStatus.PRESENT)

        assert record.id is not None
        assert record.status == AttendanceStatus.PRESENT
        assert record.marked_by == teacher.id
        assert record.marked_by_name == "Teacher T001"

    def test_second_mark_overwrites_same_day(self, db, teacher, make_teacher, student):
        other = make_teacher("teacher2@school.com", "T002")
        first = mark(db, teacher.id, student.id, AttendanceStatus.PRESENT)
        second = mark(db, other.id, student.id, AttendanceStatus.ABSENT, remarks="Sick")

        assert second.id == first.id
        assert db.query(Attendance).count() == 1
        assert second.status == AttendanceStatus.ABSENT
        assert second.remarks == "Sick"
        assert second.marked_by == other.id

    def test_different_days_are_separate_records(self, db, teacher, student):
        mark(db, teacher.id, student.id, AttendanceStatus.PRESENT, day=date(2025, 3, 3))
        mark(db, teacher.id, student.id, AttendanceStatus.PRESENT, day=date(2025, 3, 4))

        assert db.query(Attendance).count() == 2

    def test_caller_without_teacher_profile(self, db, student):
        with pytest.raises(NotFoundError) as exc_info:
            mark(db, None, student.id, AttendanceStatus.PRESENT)

        assert exc_info.value.message == "Teacher profile not found"

    def test_unknown_student(self, db, teacher):
        with pytest.raises(NotFoundError) as exc_info:
            mark(db, teacher.id, 999, AttendanceStatus.PRESENT)

        assert exc_info.value.message == "Student not found"


class TestBulkMark:
    def test_skips_invalid_and_unknown_entries(self, db, teacher, grade_one, make_student):
        first = make_student(grade_one, "G1-001")
        second = make_student(grade_one, "G1-002")

        result = AttendanceService(db).bulk_mark(
            teacher.id,
            BulkAttendanceMark(
                class_id=grade_one.id,
                date=DAY,
                attendance_records=[
                    BulkAttendanceEntry(student_id=first.id, status="PRESENT"),
                    BulkAttendanceEntry(student_id=second.id, status="LATE"),
                    BulkAttendanceEntry(student_id=None, status="ABSENT"),
                    BulkAttendanceEntry(student_id=999, status="ABSENT"),
                    BulkAttendanceEntry(student_id=second.id, status="ABSENT", remarks="Away"),
                ],
            ),
        )
        db.commit()

        assert result.count == 2
        assert result.message == "Successfully marked attendance for 2 students"
        statuses = {r.student_id: r.status for r in db.query(Attendance).all()}
        assert statuses == {
            first.id: AttendanceStatus.PRESENT,
            second.id: AttendanceStatus.ABSENT,
        }

    def test_loose_entry_values(self, db, teacher, grade_one, make_student):
        first = make_student(grade_one, "G1-001")
        second = make_student(grade_one, "G1-002")

        result = AttendanceService(db).bulk_mark(
            teacher.id,
            BulkAttendanceMark(
                date=DAY,
                attendance_records=[
                    BulkAttendanceEntry(student_id=str(first.id), status="PRESENT", remarks=7),
                    BulkAttendanceEntry(student_id=second.id, status=1),
                    BulkAttendanceEntry(student_id=True, status="ABSENT"),
                    BulkAttendanceEntry(student_id="x", status="ABSENT"),
                ],
            ),
        )
        db.commit()

        assert result.count == 1
        record = db.query(Attendance).one()
        assert record.student_id == first.id
        assert record.remarks == "7"

    def test_bulk_overwrites_existing_marks(self, db, teacher, student):
        mark(db, teacher.id, student.id, AttendanceStatus.ABSENT)

        AttendanceService(db).bulk_mark(
            teacher.id,
            BulkAttendanceMark(
                date=DAY,
                attendance_records=[BulkAttendanceEntry(student_id=student.id, status="PRESENT")],
            ),
        )
        db.commit()

        records = db.query(Attendance).all()
        assert len(records) == 1
        assert records[0].status == AttendanceStatus.PRESENT


class TestDelete:
    def test_teacher_cannot_delete_others_record(self, db, teacher, make_teacher, student):
        other = make_teacher("teacher2@school.com", "T002")
        record = mark(db, teacher.id, student.id, AttendanceStatus.PRESENT)

        with pytest.raises(ForbiddenError):
            AttendanceService(db).delete_record(record.id, teacher_id=other.id)

    def test_marking_teacher_and_admin_can_delete(self, db, teacher, student):
        service = AttendanceService(db)
        record = mark(db, teacher.id, student.id, AttendanceStatus.PRESENT)
        service.delete_record(record.id, teacher_id=teacher.id)

        record = mark(db, teacher.id, student.id, AttendanceStatus.PRESENT)
        service.delete_record(record.id)
        db.commit()

        assert db.query(Attendance).count() == 0

    def test_unknown_record(self, db):
        with pytest.raises(NotFoundError):
            AttendanceService(db).delete_record(999)


class TestSummaries:
    def test_summarize_without_records_is_zero(self):
        summary = summarize([])

        assert summary.total_days == 0
        assert summary.attendance_percentage == 0.0

    def test_student_summary_percentage(self, db, teacher, student):
        mark(db, teacher.id, student.id, AttendanceStatus.PRESENT, day=date(2025, 3, 3))
        mark(db, teacher.id, student.id, AttendanceStatus.ABSENT, day=date(2025, 3, 4))
        mark(db, teacher.id, student.id, AttendanceStatus.PRESENT, day=date(2025, 3, 5))

        result = AttendanceService(db).get_student_summary(student.id)

        assert result.summary.total_days == 3
        assert result.summary.present_days == 2
        assert result.summary.absent_days == 1
        assert result.summary.attendance_percentage == 66.67
        assert [r.date for r in result.recent_records] == [
            date(2025, 3, 5),
            date(2025, 3, 4),
            date(2025, 3, 3),
        ]

    def test_class_day_lists_unmarked_students(self, db, teacher, grade_one, make_student):
        marked = make_student(grade_one, "G1-001")
        unmarked = make_student(grade_one, "G1-002")
        make_student(grade_one, "G1-003", is_active=False)
        mark(db, teacher.id, marked.id, AttendanceStatus.PRESENT)

        rows = AttendanceService(db).get_class_day(grade_one.id, DAY)

        assert [row.student.id for row in rows] == [marked.id, unmarked.id]
        assert rows[0].attendance.status == AttendanceStatus.PRESENT
        assert rows[1].attendance is None

    def test_class_report_respects_date_range(self, db, teacher, grade_one, student):
        for day, status in (
            (date(2025, 2, 28), AttendanceStatus.ABSENT),
            (date(2025, 3, 3), AttendanceStatus.PRESENT),
            (date(2025, 3, 4), AttendanceStatus.ABSENT),
        ):
            mark(db, teacher.id, student.id, status, day=day)

        report = AttendanceService(db).get_class_report(
            grade_one.id, date_from=date(2025, 3, 1), date_to=date(2025, 3, 31)
        )

        assert report.school_class.id == grade_one.id
        assert report.date_range.date_from == date(2025, 3, 1)
        entry = report.report[0]
        assert entry.student.roll_number == "G1-001"
        assert entry.summary.total_days == 2
        assert entry.summary.attendance_percentage == 50.0

    def test_class_report_unknown_class(self, db):
        with pytest.raises(NotFoundError):
            AttendanceService(db).get_class_report(999)


def test_list_filters_by_class_and_status(db, teacher, grade_one, make_class, make_student):
    other_class = make_class("Grade 2")
    mine = make_student(grade_one, "G1-001")
    theirs = make_student(other_class, "G2-001")
    mark(db, teacher.id, mine.id, AttendanceStatus.ABSENT)
    mark(db, teacher.id, theirs.id, AttendanceStatus.ABSENT)

    records = AttendanceService(db).list_records(
        AttendanceFilter(class_id=grade_one.id, status=AttendanceStatus.ABSENT)
    )

    assert [r.student_id for r in records] == [mine.id]
