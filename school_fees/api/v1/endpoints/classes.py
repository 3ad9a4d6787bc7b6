"""Class management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import AdminContext, CurrentUser
from school_fees.schemas.common import DataResponse, MessageResponse
from school_fees.schemas.school_class import (
    ClassCreate,
    ClassDetailResponse,
    ClassResponse,
    ClassUpdate,
)
from school_fees.services.school_class import ClassService

router = APIRouter()


@router.get("", response_model=DataResponse[list[ClassResponse]])
def list_classes(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """List all classes with student counts."""
    service = ClassService(db)
    return {"data": service.list_classes()}


@router.post(
    "",
    response_model=DataResponse[ClassResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_class(
    request: ClassCreate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new class."""
    service = ClassService(db)
    return {"data": service.create_class(request)}


@router.get("/{class_id}", response_model=DataResponse[ClassDetailResponse])
def get_class(
    class_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get class with its students and fee structure."""
    service = ClassService(db)
    return {"data": service.get_class(class_id)}


@router.put("/{class_id}", response_model=DataResponse[ClassResponse])
def update_class(
    class_id: int,
    request: ClassUpdate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a class."""
    service = ClassService(db)
    return {"data": service.update_class(class_id, request)}


@router.delete("/{class_id}", response_model=DataResponse[MessageResponse])
def delete_class(
    class_id: int,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a class that has no students."""
    service = ClassService(db)
    service.delete_class(class_id)
    return {"data": {"message": "Class deleted successfully"}}
