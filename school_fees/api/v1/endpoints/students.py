"""Student management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import AdminContext, CurrentUser
from school_fees.schemas.common import DataResponse, MessageResponse
from school_fees.schemas.student import (
    StudentCreate,
    StudentDetailResponse,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)
from school_fees.services.student import StudentService

router = APIRouter()


@router.get("", response_model=DataResponse[list[StudentResponse]])
def list_students(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    class_id: int | None = Query(None, alias="classId"),
    is_active: bool | None = Query(None, alias="isActive"),
):
    """List students, optionally by class and active flag."""
    service = StudentService(db)
    filters = StudentFilter(class_id=class_id, is_active=is_active)
    return {"data": service.list_students(filters)}


@router.post(
    "",
    response_model=DataResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_student(
    request: StudentCreate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new student."""
    service = StudentService(db)
    return {"data": service.create_student(request)}


@router.get("/{student_id}", response_model=DataResponse[StudentDetailResponse])
def get_student(
    student_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get student with fee history and recent attendance."""
    service = StudentService(db)
    return {"data": service.get_student_detail(student_id)}


@router.put("/{student_id}", response_model=DataResponse[StudentResponse])
def update_student(
    student_id: int,
    request: StudentUpdate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a student."""
    service = StudentService(db)
    return {"data": service.update_student(student_id, request)}


@router.delete("/{student_id}", response_model=DataResponse[MessageResponse])
def deactivate_student(
    student_id: int,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Deactivate a student; records are kept."""
    service = StudentService(db)
    service.deactivate_student(student_id)
    return {"data": {"message": "Student deleted successfully"}}


@router.delete("/{student_id}/permanent", response_model=DataResponse[MessageResponse])
def delete_student_permanently(
    student_id: int,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a student together with fee records and attendance."""
    service = StudentService(db)
    service.delete_student(student_id)
    return {"data": {"message": "Student permanently deleted successfully"}}
