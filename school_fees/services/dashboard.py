"""Dashboard service for fee aggregation views."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from school_fees.core.config import settings
from school_fees.models.fee_record import MONTHS, FeeRecord, FeeStatus, PaymentMode
from school_fees.models.school_class import SchoolClass
from school_fees.models.student import Student
from school_fees.schemas.dashboard import (
    ClassWiseEntry,
    DashboardStats,
    MonthlyTrend,
    MonthlyTrendEntry,
    PaymentModeEntry,
    PaymentModeReport,
    PaymentModeSummary,
    StatusBreakdown,
)
from school_fees.schemas.fee_record import FeeRecordResponse


def collection_rate(collected: float, expected: float) -> float:
    """Collected as a percentage of expected, 2 decimals; 0 when nothing is expected."""
    if expected <= 0:
        return 0.0
    return round(collected / expected * 100, 2)


class DashboardService:
    """Dashboard data aggregation service."""

    def __init__(self, db: Session):
        self.db = db

    def get_stats(self) -> DashboardStats:
        """Headline figures over all fee records."""
        total_students = self.db.execute(
            select(func.count(Student.id)).where(Student.is_active.is_(True))
        ).scalar() or 0

        rows = self.db.execute(
            select(
                FeeRecord.status,
                func.count(FeeRecord.id),
                func.coalesce(func.sum(FeeRecord.total_fee), 0),
                func.coalesce(func.sum(FeeRecord.amount_paid), 0),
                func.coalesce(func.sum(FeeRecord.balance), 0),
            ).group_by(FeeRecord.status)
        ).all()

        counts = {status: 0 for status in FeeStatus}
        balances = {status: 0.0 for status in FeeStatus}
        total_expected = 0.0
        total_collected = 0.0
        for status, count, expected, collected, balance in rows:
            counts[status] = count
            balances[status] = float(balance)
            total_expected += float(expected)
            total_collected += float(collected)

        recent_overdue = self.db.execute(
            select(FeeRecord)
            .where(FeeRecord.status == FeeStatus.OVERDUE)
            .order_by(FeeRecord.due_date, FeeRecord.id)
            .limit(settings.RECENT_OVERDUE_LIMIT)
        ).scalars().all()

        return DashboardStats(
            total_students=total_students,
            total_collected=total_collected,
            total_expected=total_expected,
            pending_fees=balances[FeeStatus.PENDING],
            overdue_fees=balances[FeeStatus.OVERDUE],
            payment_status_breakdown=StatusBreakdown(
                paid=counts[FeeStatus.PAID],
                pending=counts[FeeStatus.PENDING],
                overdue=counts[FeeStatus.OVERDUE],
            ),
            collection_rate=collection_rate(total_collected, total_expected),
            recent_overdue=[FeeRecordResponse.model_validate(r) for r in recent_overdue],
        )

    def get_monthly_trend(self, year: int | None = None) -> MonthlyTrend:
        """Twelve months of totals for a year (defaults to the current year)."""
        year = year or date.today().year

        rows = self.db.execute(
            select(
                FeeRecord.month,
                FeeRecord.status,
                func.coalesce(func.sum(FeeRecord.total_fee), 0),
                func.coalesce(func.sum(FeeRecord.amount_paid), 0),
                func.coalesce(func.sum(FeeRecord.balance), 0),
            )
            .where(FeeRecord.year == year)
            .group_by(FeeRecord.month, FeeRecord.status)
        ).all()

        entries = {month: MonthlyTrendEntry(month=month) for month in MONTHS}
        for month, status, expected, collected, balance in rows:
            entry = entries.get(month)
            if entry is None:
                continue
            entry.expected += float(expected)
            entry.collected += float(collected)
            if status == FeeStatus.PENDING:
                entry.pending += float(balance)
            elif status == FeeStatus.OVERDUE:
                entry.overdue += float(balance)

        for entry in entries.values():
            entry.collection_rate = collection_rate(entry.collected, entry.expected)

        return MonthlyTrend(year=year, monthly_data=list(entries.values()))

    def get_class_wise(
        self,
        month: str | None = None,
        year: int | None = None,
    ) -> list[ClassWiseEntry]:
        """
        Totals per active class over its active students' records.

        Records are limited to one period only when both month and year are
        given.
        """
        classes = self.db.execute(
            select(SchoolClass)
            .where(SchoolClass.is_active.is_(True))
            .order_by(SchoolClass.name)
        ).scalars().all()

        student_counts = dict(
            self.db.execute(
                select(Student.class_id, func.count(Student.id))
                .where(Student.is_active.is_(True))
                .group_by(Student.class_id)
            ).all()
        )

        totals_query = (
            select(
                Student.class_id,
                func.coalesce(func.sum(FeeRecord.total_fee), 0),
                func.coalesce(func.sum(FeeRecord.amount_paid), 0),
            )
            .join(Student, FeeRecord.student_id == Student.id)
            .where(Student.is_active.is_(True))
            .group_by(Student.class_id)
        )
        if month and year:
            totals_query = totals_query.where(
                FeeRecord.month == month,
                FeeRecord.year == year,
            )
        totals = {
            class_id: (float(expected), float(collected))
            for class_id, expected, collected in self.db.execute(totals_query).all()
        }

        entries = []
        for school_class in classes:
            expected, collected = totals.get(school_class.id, (0.0, 0.0))
            entries.append(
                ClassWiseEntry(
                    class_name=school_class.name,
                    total_students=student_counts.get(school_class.id, 0),
                    total_collected=collected,
                    total_expected=expected,
                    total_pending=expected - collected,
                    monthly_fee=(
                        school_class.fee_structure.total_monthly_fee
                        if school_class.fee_structure
                        else 0.0
                    ),
                )
            )
        return entries

    def get_payment_modes(
        self,
        month: str | None = None,
        year: int | None = None,
    ) -> PaymentModeReport:
        """Paid records grouped by payment mode."""
        query = (
            select(
                FeeRecord.payment_mode,
                func.count(FeeRecord.id),
                func.coalesce(func.sum(FeeRecord.amount_paid), 0),
            )
            .where(
                FeeRecord.status == FeeStatus.PAID,
                FeeRecord.payment_mode.is_not(None),
            )
            .group_by(FeeRecord.payment_mode)
        )
        if month:
            query = query.where(FeeRecord.month == month)
        if year:
            query = query.where(FeeRecord.year == year)

        by_mode = {
            mode: (count, float(amount))
            for mode, count, amount in self.db.execute(query).all()
        }

        mode_data = []
        for mode in PaymentMode:
            count, amount = by_mode.get(mode, (0, 0.0))
            mode_data.append(PaymentModeEntry(mode=mode, count=count, total_amount=amount))

        return PaymentModeReport(
            month=month,
            year=year,
            payment_mode_data=mode_data,
            summary=PaymentModeSummary(
                total_transactions=sum(entry.count for entry in mode_data),
                total_amount=sum(entry.total_amount for entry in mode_data),
            ),
        )
