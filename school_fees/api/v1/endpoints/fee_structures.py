"""Fee structure endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import AdminContext, CurrentUser
from school_fees.schemas.common import DataResponse, MessageResponse
from school_fees.schemas.school_class import (
    FeeStructureCreate,
    FeeStructureResponse,
    FeeStructureUpdate,
)
from school_fees.services.fee_structure import FeeStructureService

router = APIRouter()


@router.get("", response_model=DataResponse[list[FeeStructureResponse]])
def list_fee_structures(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """List fee structures of all classes."""
    service = FeeStructureService(db)
    return {"data": service.list_fee_structures()}


@router.post(
    "",
    response_model=DataResponse[FeeStructureResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_fee_structure(
    request: FeeStructureCreate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Create the fee structure for a class."""
    service = FeeStructureService(db)
    return {"data": service.create_fee_structure(request)}


@router.get("/class/{class_id}", response_model=DataResponse[FeeStructureResponse])
def get_class_fee_structure(
    class_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get the fee structure of a class."""
    service = FeeStructureService(db)
    return {"data": service.get_by_class(class_id)}


@router.get("/{structure_id}", response_model=DataResponse[FeeStructureResponse])
def get_fee_structure(
    structure_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get fee structure by ID."""
    service = FeeStructureService(db)
    return {"data": service.get_fee_structure(structure_id)}


@router.put("/{structure_id}", response_model=DataResponse[FeeStructureResponse])
def update_fee_structure(
    structure_id: int,
    request: FeeStructureUpdate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Update fee components of a structure."""
    service = FeeStructureService(db)
    return {"data": service.update_fee_structure(structure_id, request)}


@router.delete("/{structure_id}", response_model=DataResponse[MessageResponse])
def delete_fee_structure(
    structure_id: int,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a fee structure."""
    service = FeeStructureService(db)
    service.delete_fee_structure(structure_id)
    return {"data": {"message": "Fee structure deleted successfully"}}
