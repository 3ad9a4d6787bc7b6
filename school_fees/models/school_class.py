"""Class, fee structure and teacher assignment models."""

from sqlalchemy import BigInteger, Boolean, Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_fees.core.database import Base
from school_fees.models.base import FeeComponentsMixin, IDMixin, TimestampMixin


class SchoolClass(Base, IDMixin, TimestampMixin):
    """A class (grade) students are enrolled in."""

    __tablename__ = "classes"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    students: Mapped[list["Student"]] = relationship(
        "Student",
        back_populates="school_class",
        lazy="selectin",
    )
    fee_structure: Mapped["FeeStructure | None"] = relationship(
        "FeeStructure",
        back_populates="school_class",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    class_teachers: Mapped[list["ClassTeacher"]] = relationship(
        "ClassTeacher",
        back_populates="school_class",
        cascade="all, delete-orphan",
    )

    @property
    def student_count(self) -> int:
        return len(self.students)

    @property
    def active_students(self) -> list["Student"]:
        active = [student for student in self.students if student.is_active]
        return sorted(active, key=lambda student: student.roll_number)

    def __repr__(self) -> str:
        return f"<SchoolClass(id={self.id}, name={self.name})>"


class FeeStructure(Base, IDMixin, TimestampMixin, FeeComponentsMixin):
    """Default monthly fee components for a class."""

    __tablename__ = "fee_structures"

    class_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("classes.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    total_monthly_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    # Relationships
    school_class: Mapped["SchoolClass"] = relationship(
        "SchoolClass",
        back_populates="fee_structure",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<FeeStructure(class_id={self.class_id}, total={self.total_monthly_fee})>"


class ClassTeacher(Base, IDMixin, TimestampMixin):
    """Assignment of a teacher to a class."""

    __tablename__ = "class_teachers"

    teacher_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    class_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    teacher: Mapped["Teacher"] = relationship(
        "Teacher",
        back_populates="class_teachers",
        lazy="selectin",
    )
    school_class: Mapped["SchoolClass"] = relationship(
        "SchoolClass",
        back_populates="class_teachers",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("teacher_id", "class_id", name="uq_class_teacher"),
    )

    def __repr__(self) -> str:
        return f"<ClassTeacher(teacher_id={self.teacher_id}, class_id={self.class_id})>"
