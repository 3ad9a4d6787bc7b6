"""Fee record endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import AdminContext, CurrentUser
from school_fees.models.fee_record import FeeStatus
from school_fees.schemas.common import DataResponse
from school_fees.schemas.fee_record import (
    AddFeesRequest,
    FeeGenerateRequest,
    FeeGenerateResult,
    FeeRecordFilter,
    FeeRecordResponse,
    FeeStatusUpdate,
    OverdueSweepResult,
    PaymentRequest,
)
from school_fees.services.fee_record import FeeRecordService

router = APIRouter()


@router.get("", response_model=DataResponse[list[FeeRecordResponse]])
def list_fee_records(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    student_id: int | None = Query(None, alias="studentId"),
    month: str | None = None,
    year: int | None = None,
    fee_status: FeeStatus | None = Query(None, alias="status"),
    class_id: int | None = Query(None, alias="classId"),
):
    """List fee records with filtering."""
    service = FeeRecordService(db)
    filters = FeeRecordFilter(
        student_id=student_id,
        month=month,
        year=year,
        status=fee_status,
        class_id=class_id,
    )
    return {"data": service.list_records(filters)}


@router.get("/overdue", response_model=DataResponse[list[FeeRecordResponse]])
def list_overdue_records(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Overdue records, earliest due first."""
    service = FeeRecordService(db)
    return {"data": service.list_by_status(FeeStatus.OVERDUE)}


@router.get("/pending", response_model=DataResponse[list[FeeRecordResponse]])
def list_pending_records(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Pending records, earliest due first."""
    service = FeeRecordService(db)
    return {"data": service.list_by_status(FeeStatus.PENDING)}


@router.post(
    "/generate",
    response_model=DataResponse[FeeGenerateResult],
    status_code=status.HTTP_201_CREATED,
)
def generate_fee_records(
    request: FeeGenerateRequest,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Generate monthly fee records for active students."""
    service = FeeRecordService(db)
    return {"data": service.generate_records(request)}


@router.post("/update-overdue", response_model=DataResponse[OverdueSweepResult])
def update_overdue(
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Mark past-due Pending records as Overdue."""
    service = FeeRecordService(db)
    return {"data": service.mark_overdue()}


@router.get("/{record_id}", response_model=DataResponse[FeeRecordResponse])
def get_fee_record(
    record_id: int,
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get fee record by ID."""
    service = FeeRecordService(db)
    return {"data": service.get_record(record_id)}


@router.post("/{record_id}/payment", response_model=DataResponse[FeeRecordResponse])
def record_payment(
    record_id: int,
    request: PaymentRequest,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Record a full or partial payment."""
    service = FeeRecordService(db)
    return {"data": service.record_payment(record_id, request)}


@router.post("/{record_id}/add-fees", response_model=DataResponse[FeeRecordResponse])
def add_fees(
    record_id: int,
    request: AddFeesRequest,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Add exam/other charges to a record."""
    service = FeeRecordService(db)
    return {"data": service.add_fees(record_id, request)}


@router.put("/{record_id}/status", response_model=DataResponse[FeeRecordResponse])
def update_fee_status(
    record_id: int,
    request: FeeStatusUpdate,
    context: AdminContext,
    db: Annotated[Session, Depends(get_db)],
):
    """Manually set a record's status."""
    service = FeeRecordService(db)
    return {"data": service.update_status(record_id, request.status)}
