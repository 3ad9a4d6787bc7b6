"""Teacher management and class assignment service."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from school_fees.core.exceptions import ConflictError, NotFoundError
from school_fees.core.security import hash_password
from school_fees.models.school_class import ClassTeacher, SchoolClass
from school_fees.models.user import Teacher, User, UserRole
from school_fees.schemas.teacher import ClassAssignRequest, TeacherCreate, TeacherUpdate

logger = logging.getLogger(__name__)

# Fields of TeacherUpdate that live on the user account
USER_FIELDS = ("name", "email", "is_active")


class TeacherService:
    """Teacher management service."""

    def __init__(self, db: Session):
        self.db = db

    def list_teachers(self) -> list[Teacher]:
        """List teachers, newest first."""
        result = self.db.execute(
            select(Teacher).order_by(Teacher.created_at.desc(), Teacher.id.desc())
        )
        return list(result.scalars().all())

    def get_teacher(self, teacher_id: int) -> Teacher:
        """Get teacher by ID."""
        teacher = self.db.get(Teacher, teacher_id)
        if not teacher:
            raise NotFoundError("Teacher")
        return teacher

    def create_teacher(self, request: TeacherCreate) -> Teacher:
        """Create a teacher account with its profile."""
        self._ensure_email_free(request.email)
        self._ensure_employee_id_free(request.employee_id)

        teacher = Teacher(
            employee_id=request.employee_id,
            phone_number=request.phone_number,
            address=request.address,
            qualification=request.qualification,
            user=User(
                email=request.email,
                password_hash=hash_password(request.password),
                name=request.name,
                role=UserRole.TEACHER,
            ),
        )
        if request.joining_date:
            teacher.joining_date = request.joining_date

        self.db.add(teacher)
        self.db.flush()
        self.db.refresh(teacher)

        logger.info("Created teacher %s (%s)", teacher.id, teacher.employee_id)
        return teacher

    def update_teacher(self, teacher_id: int, request: TeacherUpdate) -> Teacher:
        """Update profile and account fields."""
        teacher = self.get_teacher(teacher_id)
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)

        employee_id = update_data.get("employee_id")
        if employee_id and employee_id != teacher.employee_id:
            self._ensure_employee_id_free(employee_id)

        email = update_data.get("email")
        if email and email != teacher.user.email:
            self._ensure_email_free(email)

        for field, value in update_data.items():
            target = teacher.user if field in USER_FIELDS else teacher
            setattr(target, field, value)

        self.db.flush()
        self.db.refresh(teacher)
        return teacher

    def deactivate_teacher(self, teacher_id: int) -> None:
        """Soft delete: the teacher's account can no longer sign in."""
        teacher = self.get_teacher(teacher_id)
        teacher.user.is_active = False
        self.db.flush()
        logger.info("Deactivated teacher %s", teacher_id)

    # ==========================================
    # Class assignments
    # ==========================================

    def assign_class(self, teacher_id: int, request: ClassAssignRequest) -> ClassTeacher:
        """Assign a class to a teacher."""
        self.get_teacher(teacher_id)
        if not self.db.get(SchoolClass, request.class_id):
            raise NotFoundError("Class")

        if self._find_assignment(teacher_id, request.class_id):
            raise ConflictError("Teacher is already assigned to this class")

        assignment = ClassTeacher(
            teacher_id=teacher_id,
            class_id=request.class_id,
            subject=request.subject,
            is_primary=request.is_primary,
        )
        self.db.add(assignment)
        self.db.flush()
        self.db.refresh(assignment)
        return assignment

    def remove_class(self, teacher_id: int, class_id: int) -> None:
        """Remove a class assignment."""
        assignment = self._find_assignment(teacher_id, class_id)
        if not assignment:
            raise NotFoundError("Class assignment")

        self.db.delete(assignment)
        self.db.flush()

    def list_assignments(self, teacher_id: int) -> list[ClassTeacher]:
        """Class assignments of a teacher."""
        self.get_teacher(teacher_id)
        result = self.db.execute(
            select(ClassTeacher)
            .where(ClassTeacher.teacher_id == teacher_id)
            .order_by(ClassTeacher.id)
        )
        return list(result.scalars().all())

    def list_my_assignments(self, teacher_id: int | None) -> list[ClassTeacher]:
        """Class assignments of the signed-in teacher."""
        if teacher_id is None:
            raise NotFoundError("Teacher profile")
        return self.list_assignments(teacher_id)

    def _find_assignment(self, teacher_id: int, class_id: int) -> ClassTeacher | None:
        result = self.db.execute(
            select(ClassTeacher).where(
                ClassTeacher.teacher_id == teacher_id,
                ClassTeacher.class_id == class_id,
            )
        )
        return result.scalar_one_or_none()

    def _ensure_email_free(self, email: str) -> None:
        existing = self.db.execute(
            select(User.id).where(User.email == email)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError("Email already exists")

    def _ensure_employee_id_free(self, employee_id: str) -> None:
        existing = self.db.execute(
            select(Teacher.id).where(Teacher.employee_id == employee_id)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError("Employee ID already exists")
