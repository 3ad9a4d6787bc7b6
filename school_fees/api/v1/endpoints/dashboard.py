"""Dashboard endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from school_fees.core.database import get_db
from school_fees.core.dependencies import CurrentUser
from school_fees.schemas.common import DataResponse
from school_fees.schemas.dashboard import (
    ClassWiseEntry,
    DashboardStats,
    MonthlyTrend,
    PaymentModeReport,
)
from school_fees.services.dashboard import DashboardService

router = APIRouter()


@router.get("/stats", response_model=DataResponse[DashboardStats])
def get_stats(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Headline fee statistics."""
    service = DashboardService(db)
    return {"data": service.get_stats()}


@router.get("/monthly-trend", response_model=DataResponse[MonthlyTrend])
def get_monthly_trend(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    year: int | None = None,
):
    """Monthly fee totals for a year."""
    service = DashboardService(db)
    return {"data": service.get_monthly_trend(year)}


@router.get("/class-wise", response_model=DataResponse[list[ClassWiseEntry]])
def get_class_wise(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    month: str | None = None,
    year: int | None = None,
):
    """Fee totals per active class."""
    service = DashboardService(db)
    return {"data": service.get_class_wise(month, year)}


@router.get("/payment-modes", response_model=DataResponse[PaymentModeReport])
def get_payment_modes(
    context: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    month: str | None = None,
    year: int | None = None,
):
    """Paid records grouped by payment mode."""
    service = DashboardService(db)
    return {"data": service.get_payment_modes(month, year)}
