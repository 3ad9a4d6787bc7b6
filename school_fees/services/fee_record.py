"""Fee record service: generation, payments and status lifecycle."""

import logging
from datetime import date, datetime, timezone

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from school_fees.core.config import settings
from school_fees.core.exceptions import NotFoundError
from school_fees.models.fee_record import MONTHS, FeeRecord, FeeStatus
from school_fees.models.student import Student
from school_fees.schemas.fee_record import (
    AddFeesRequest,
    FeeGenerateRequest,
    FeeGenerateResult,
    FeeRecordFilter,
    FeeRecordResponse,
    OverdueSweepResult,
    PaymentRequest,
    SkippedFeeRecord,
)

logger = logging.getLogger(__name__)

# Calendar position of a month name, for ordering in SQL
month_number = case(
    {name: index for index, name in enumerate(MONTHS, start=1)},
    value=FeeRecord.month,
    else_=0,
)


def default_due_date(month: str, year: int) -> date:
    """Fees fall due on a fixed day of the billed month."""
    return date(year, MONTHS.index(month) + 1, settings.FEE_DUE_DAY)


class FeeRecordService:
    """Monthly fee record management."""

    def __init__(self, db: Session):
        self.db = db

    def list_records(self, filters: FeeRecordFilter | None = None) -> list[FeeRecord]:
        """List fee records, newest period first."""
        query = select(FeeRecord)

        if filters:
            if filters.student_id is not None:
                query = query.where(FeeRecord.student_id == filters.student_id)
            if filters.month:
                query = query.where(FeeRecord.month == filters.month)
            if filters.year is not None:
                query = query.where(FeeRecord.year == filters.year)
            if filters.status:
                query = query.where(FeeRecord.status == filters.status)
            if filters.class_id is not None:
                query = query.join(Student, FeeRecord.student_id == Student.id).where(
                    Student.class_id == filters.class_id
                )

        query = query.order_by(
            FeeRecord.year.desc(),
            month_number.desc(),
            FeeRecord.student_id,
        )
        result = self.db.execute(query)
        return list(result.scalars().all())

    def list_by_status(self, status: FeeStatus) -> list[FeeRecord]:
        """Records in one status, earliest due first."""
        result = self.db.execute(
            select(FeeRecord)
            .where(FeeRecord.status == status)
            .order_by(FeeRecord.due_date, FeeRecord.id)
        )
        return list(result.scalars().all())

    def get_record(self, record_id: int) -> FeeRecord:
        """Get fee record by ID."""
        record = self.db.get(FeeRecord, record_id)
        if not record:
            raise NotFoundError("Fee record")
        return record

    def generate_records(self, request: FeeGenerateRequest) -> FeeGenerateResult:
        """
        Create one Pending record per active student for (month, year).

        Students that already have a record for the period are reported as
        skipped; nothing is duplicated or overwritten.
        """
        query = select(Student).where(Student.is_active.is_(True))
        if request.class_id:
            query = query.where(Student.class_id == request.class_id)
        students = self.db.execute(query.order_by(Student.id)).scalars().all()

        if not students:
            raise NotFoundError(message="No active students found")

        due_date = request.due_date or default_due_date(request.month, request.year)
        created: list[FeeRecord] = []
        skipped: list[SkippedFeeRecord] = []

        for student in students:
            if self._find_record(student.id, request.month, request.year):
                skipped.append(self._skipped(student))
                continue

            record = FeeRecord(
                student_id=student.id,
                month=request.month,
                year=request.year,
                tuition_fee=student.tuition_fee,
                lab_fee=student.lab_fee,
                library_fee=student.library_fee,
                sports_fee=student.sports_fee,
                exam_fee=student.exam_fee + request.additional_exam_fee,
                other_fee=student.other_fee + request.additional_other_fee,
                amount_paid=0,
                status=FeeStatus.PENDING,
                due_date=due_date,
            )
            record.recalculate()

            # A concurrent run may have inserted the same period meanwhile
            try:
                with self.db.begin_nested():
                    self.db.add(record)
            except IntegrityError:
                skipped.append(self._skipped(student))
                continue

            created.append(record)

        for record in created:
            self.db.refresh(record)

        logger.info(
            "Generated fee records for %s %s: created=%d skipped=%d",
            request.month,
            request.year,
            len(created),
            len(skipped),
        )
        return FeeGenerateResult(
            message=f"Generated {len(created)} fee records successfully",
            created=len(created),
            skipped=len(skipped),
            records=[FeeRecordResponse.model_validate(record) for record in created],
            skipped_records=skipped,
        )

    def record_payment(self, record_id: int, request: PaymentRequest) -> FeeRecord:
        """
        Add a payment to the record.

        The record becomes Paid once the balance reaches zero or below; a
        partial payment leaves the status as it was (Pending or Overdue).
        """
        record = self.get_record(record_id)

        record.amount_paid = (record.amount_paid or 0) + request.amount_paid
        record.balance = record.total_fee - record.amount_paid
        record.payment_mode = request.payment_mode
        if request.remarks is not None:
            record.remarks = request.remarks

        if record.balance <= 0 and record.status != FeeStatus.PAID:
            record.status = FeeStatus.PAID
            record.payment_date = datetime.now(timezone.utc)

        self.db.flush()
        self.db.refresh(record)

        logger.info(
            "Payment of %.2f recorded on fee record %s (balance %.2f, %s)",
            request.amount_paid,
            record.id,
            record.balance,
            record.status.value,
        )
        return record

    def add_fees(self, record_id: int, request: AddFeesRequest) -> FeeRecord:
        """Add exam/other charges; total and balance follow, status does not."""
        record = self.get_record(record_id)

        record.exam_fee = (record.exam_fee or 0) + request.exam_fee
        record.other_fee = (record.other_fee or 0) + request.other_fee
        record.recalculate()

        self.db.flush()
        self.db.refresh(record)
        return record

    def update_status(self, record_id: int, status: FeeStatus) -> FeeRecord:
        """Manually override the status. Only a Paid record keeps a payment date."""
        record = self.get_record(record_id)

        record.status = status
        record.payment_date = datetime.now(timezone.utc) if status == FeeStatus.PAID else None

        self.db.flush()
        self.db.refresh(record)
        return record

    def mark_overdue(self, today: date | None = None) -> OverdueSweepResult:
        """Move Pending records due today or earlier to Overdue."""
        today = today or date.today()

        result = self.db.execute(
            update(FeeRecord)
            .where(
                FeeRecord.status == FeeStatus.PENDING,
                FeeRecord.due_date <= today,
            )
            .values(status=FeeStatus.OVERDUE)
            .execution_options(synchronize_session="evaluate")
        )
        count = result.rowcount or 0

        logger.info("Overdue sweep updated %d fee records", count)
        return OverdueSweepResult(
            message=f"Updated {count} records to overdue status",
            count=count,
        )

    def _find_record(self, student_id: int, month: str, year: int) -> FeeRecord | None:
        result = self.db.execute(
            select(FeeRecord).where(
                FeeRecord.student_id == student_id,
                FeeRecord.month == month,
                FeeRecord.year == year,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _skipped(student: Student) -> SkippedFeeRecord:
        return SkippedFeeRecord(
            student_id=student.id,
            student_name=student.name,
            reason="Record already exists",
        )
