"""Attendance endpoints."""

import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import CurrentUser, StaffContext, TeacherContext
from school_fees.models.attendance import AttendanceStatus
from school_fees.schemas.attendance import (
    AttendanceFilter,
    AttendanceMark,
    AttendanceResponse,
    BulkAttendanceMark,
    BulkAttendanceResult,
    ClassAttendanceReport,
    ClassDayAttendance,
    StudentAttendanceSummary,
)
from school_fees.schemas.common import DataResponse, MessageResponse
from school_fees.services.attendance import AttendanceService

router = APIRouter()


@router.get("", response_model=DataResponse[list[AttendanceResponse]])
def list_attendance(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    class_id: int | None = Query(None, alias="classId"),
    student_id: int | None = Query(None, alias="studentId"),
    date_from: datetime.date | None = Query(None, alias="dateFrom"),
    date_to: datetime.date | None = Query(None, alias="dateTo"),
    attendance_status: AttendanceStatus | None = Query(None, alias="status"),
):
    """List attendance records with filtering."""
    service = AttendanceService(db)
    filters = AttendanceFilter(
        class_id=class_id,
        student_id=student_id,
        date_from=date_from,
        date_to=date_to,
        status=attendance_status,
    )
    return {"data": service.list_records(filters)}


@router.post(
    "",
    response_model=DataResponse[AttendanceResponse],
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/mark",
    response_model=DataResponse[AttendanceResponse],
    status_code=status.HTTP_201_CREATED,
)
def mark_attendance(
    request: AttendanceMark,
    context: TeacherContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Mark (or re-mark) one student's attendance for a day."""
    service = AttendanceService(db)
    return {"data": service.mark_attendance(context.teacher_id, request)}


@router.post("/bulk-mark", response_model=DataResponse[BulkAttendanceResult])
def bulk_mark_attendance(
    request: BulkAttendanceMark,
    context: TeacherContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Mark attendance for many students on one day."""
    service = AttendanceService(db)
    return {"data": service.bulk_mark(context.teacher_id, request)}


@router.get(
    "/class/{class_id}/date/{date}",
    response_model=DataResponse[list[ClassDayAttendance]],
)
def get_class_attendance_for_day(
    class_id: int,
    date: datetime.date,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Active students of a class with their attendance for the day."""
    service = AttendanceService(db)
    return {"data": service.get_class_day(class_id, date)}


@router.get(
    "/class/{class_id}/report",
    response_model=DataResponse[ClassAttendanceReport],
)
def get_class_report(
    class_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    date_from: datetime.date | None = Query(None, alias="dateFrom"),
    date_to: datetime.date | None = Query(None, alias="dateTo"),
):
    """Attendance summary for each active student of a class."""
    service = AttendanceService(db)
    return {"data": service.get_class_report(class_id, date_from, date_to)}


@router.get(
    "/student/{student_id}/summary",
    response_model=DataResponse[StudentAttendanceSummary],
)
def get_student_summary(
    student_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Attendance summary and recent records of a student."""
    service = AttendanceService(db)
    return {"data": service.get_student_summary(student_id)}


@router.delete("/{record_id}", response_model=DataResponse[MessageResponse])
def delete_attendance(
    record_id: int,
    context: StaffContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an attendance record. Teachers may only delete their own marks."""
    service = AttendanceService(db)
    owner = service.require_teacher(context.teacher_id) if context.is_teacher() else None
    service.delete_record(record_id, owner)
    return {"data": {"message": "Attendance record deleted successfully"}}
