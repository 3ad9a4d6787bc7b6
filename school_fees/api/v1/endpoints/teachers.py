"""Teacher management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import AdminContext, CurrentUser, TeacherContext
from school_fees.schemas.common import DataResponse, MessageResponse
from school_fees.schemas.teacher import (
    ClassAssignmentResponse,
    ClassAssignRequest,
    MyClassAssignment,
    TeacherCreate,
    TeacherResponse,
    TeacherUpdate,
)
from school_fees.services.teacher import TeacherService

router = APIRouter()


@router.get("", response_model=DataResponse[list[TeacherResponse]])
def list_teachers(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """List teachers with their class assignments."""
    service = TeacherService(db)
    return {"data": service.list_teachers()}


@router.post(
    "",
    response_model=DataResponse[TeacherResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_teacher(
    request: TeacherCreate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a teacher account and profile."""
    service = TeacherService(db)
    return {"data": service.create_teacher(request)}


@router.get("/my-classes", response_model=DataResponse[list[MyClassAssignment]])
def get_my_classes(
    context: TeacherContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Classes assigned to the signed-in teacher, with active students."""
    service = TeacherService(db)
    return {"data": service.list_my_assignments(context.teacher_id)}


@router.get("/{teacher_id}", response_model=DataResponse[TeacherResponse])
def get_teacher(
    teacher_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get teacher by ID."""
    service = TeacherService(db)
    return {"data": service.get_teacher(teacher_id)}


@router.put("/{teacher_id}", response_model=DataResponse[TeacherResponse])
def update_teacher(
    teacher_id: int,
    request: TeacherUpdate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Update teacher profile and account."""
    service = TeacherService(db)
    return {"data": service.update_teacher(teacher_id, request)}


@router.delete("/{teacher_id}", response_model=DataResponse[MessageResponse])
def deactivate_teacher(
    teacher_id: int,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Deactivate a teacher's account."""
    service = TeacherService(db)
    service.deactivate_teacher(teacher_id)
    return {"data": {"message": "Teacher deactivated successfully"}}


@router.get("/{teacher_id}/classes", response_model=DataResponse[list[ClassAssignmentResponse]])
def get_teacher_classes(
    teacher_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Classes assigned to a teacher."""
    service = TeacherService(db)
    return {"data": service.list_assignments(teacher_id)}


@router.post(
    "/{teacher_id}/assign-class",
    response_model=DataResponse[ClassAssignmentResponse],
    status_code=status.HTTP_201_CREATED,
)
def assign_class(
    teacher_id: int,
    request: ClassAssignRequest,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Assign a class to a teacher."""
    service = TeacherService(db)
    return {"data": service.assign_class(teacher_id, request)}


@router.delete(
    "/{teacher_id}/remove-class/{class_id}",
    response_model=DataResponse[MessageResponse],
)
def remove_class(
    teacher_id: int,
    class_id: int,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a class assignment from a teacher."""
    service = TeacherService(db)
    service.remove_class(teacher_id, class_id)
    return {"data": {"message": "Class assignment removed successfully"}}
