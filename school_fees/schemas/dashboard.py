"""Dashboard schemas for fee reporting views."""

from pydantic import Field

from school_fees.models.fee_record import PaymentMode
from school_fees.schemas.common import BaseSchema
from school_fees.schemas.fee_record import FeeRecordResponse


# ==========================================
# Overall Stats
# ==========================================

class StatusBreakdown(BaseSchema):
    """Count of fee records by status."""

    paid: int = 0
    pending: int = 0
    overdue: int = 0


class DashboardStats(BaseSchema):
    """Headline fee figures."""

    total_students: int = 0
    total_collected: float = 0.0
    total_expected: float = 0.0
    pending_fees: float = 0.0
    overdue_fees: float = 0.0
    payment_status_breakdown: StatusBreakdown
    collection_rate: float = Field(
        default=0.0,
        description="Collected as a percentage of expected (0-100)",
    )
    recent_overdue: list[FeeRecordResponse] = []


# ==========================================
# Monthly Trend
# ==========================================

class MonthlyTrendEntry(BaseSchema):
    """Fee totals for one month."""

    month: str
    expected: float = 0.0
    collected: float = 0.0
    pending: float = 0.0
    overdue: float = 0.0
    collection_rate: float = 0.0


class MonthlyTrend(BaseSchema):
    """Twelve months of fee totals for a year."""

    year: int
    monthly_data: list[MonthlyTrendEntry]


# ==========================================
# Class-wise
# ==========================================

class ClassWiseEntry(BaseSchema):
    """Fee totals for one class."""

    class_name: str
    total_students: int = 0
    total_collected: float = 0.0
    total_expected: float = 0.0
    total_pending: float = 0.0
    monthly_fee: float = 0.0


# ==========================================
# Payment Modes
# ==========================================

class PaymentModeEntry(BaseSchema):
    """Settled records for one payment mode."""

    mode: PaymentMode
    count: int = 0
    total_amount: float = 0.0


class PaymentModeSummary(BaseSchema):
    """Totals over all payment modes."""

    total_transactions: int = 0
    total_amount: float = 0.0


class PaymentModeReport(BaseSchema):
    """Payment mode breakdown, optionally for one month/year."""

    month: str | None = None
    year: int | None = None
    payment_mode_data: list[PaymentModeEntry]
    summary: PaymentModeSummary
