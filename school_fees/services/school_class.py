"""Class management service."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from school_fees.core.exceptions import ConflictError, NotFoundError, ValidationError
from school_fees.models.school_class import SchoolClass
from school_fees.models.student import Student
from school_fees.schemas.school_class import ClassCreate, ClassUpdate

logger = logging.getLogger(__name__)


class ClassService:
    """Class management service."""

    def __init__(self, db: Session):
        self.db = db

    def list_classes(self) -> list[SchoolClass]:
        """List all classes by name."""
        result = self.db.execute(select(SchoolClass).order_by(SchoolClass.name))
        return list(result.scalars().all())

    def get_class(self, class_id: int) -> SchoolClass:
        """Get class by ID."""
        school_class = self.db.get(SchoolClass, class_id)
        if not school_class:
            raise NotFoundError("Class")
        return school_class

    def create_class(self, request: ClassCreate) -> SchoolClass:
        """Create a new class."""
        self._ensure_name_free(request.name)

        school_class = SchoolClass(name=request.name, description=request.description)
        self.db.add(school_class)
        self.db.flush()
        self.db.refresh(school_class)
        return school_class

    def update_class(self, class_id: int, request: ClassUpdate) -> SchoolClass:
        """Update a class."""
        school_class = self.get_class(class_id)
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in update_data and update_data["name"] != school_class.name:
            self._ensure_name_free(update_data["name"])

        for field, value in update_data.items():
            setattr(school_class, field, value)

        self.db.flush()
        self.db.refresh(school_class)
        return school_class

    def delete_class(self, class_id: int) -> None:
        """Delete a class. Classes that still have students cannot be deleted."""
        school_class = self.get_class(class_id)
        student_count = self.db.execute(
            select(func.count(Student.id)).where(Student.class_id == class_id)
        ).scalar()
        if student_count:
            raise ValidationError(
                "Cannot delete class with students. Please transfer students first."
            )

        self.db.delete(school_class)
        self.db.flush()
        logger.info("Deleted class %s (%s)", class_id, school_class.name)

    def _ensure_name_free(self, name: str) -> None:
        existing = self.db.execute(
            select(SchoolClass.id).where(SchoolClass.name == name)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError("Class with this name already exists")
