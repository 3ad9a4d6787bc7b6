"""Fee structure service."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from school_fees.core.exceptions import ConflictError, NotFoundError
from school_fees.models.school_class import FeeStructure, SchoolClass
from school_fees.schemas.school_class import FeeStructureCreate, FeeStructureUpdate


class FeeStructureService:
    """Per-class default fee components."""

    def __init__(self, db: Session):
        self.db = db

    def list_fee_structures(self) -> list[FeeStructure]:
        """List fee structures ordered by class name."""
        result = self.db.execute(
            select(FeeStructure)
            .join(SchoolClass, FeeStructure.class_id == SchoolClass.id)
            .order_by(SchoolClass.name)
        )
        return list(result.scalars().all())

    def get_fee_structure(self, structure_id: int) -> FeeStructure:
        """Get fee structure by ID."""
        structure = self.db.get(FeeStructure, structure_id)
        if not structure:
            raise NotFoundError("Fee structure")
        return structure

    def get_by_class(self, class_id: int) -> FeeStructure:
        """Get the fee structure of a class."""
        structure = self.db.execute(
            select(FeeStructure).where(FeeStructure.class_id == class_id)
        ).scalar_one_or_none()
        if not structure:
            raise NotFoundError("Fee structure")
        return structure

    def create_fee_structure(self, request: FeeStructureCreate) -> FeeStructure:
        """Create the fee structure for a class; a class has at most one."""
        if not self.db.get(SchoolClass, request.class_id):
            raise NotFoundError("Class")

        existing = self.db.execute(
            select(FeeStructure.id).where(FeeStructure.class_id == request.class_id)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError("Fee structure already exists for this class")

        structure = FeeStructure(**request.model_dump())
        structure.total_monthly_fee = structure.component_total()
        self.db.add(structure)
        self.db.flush()
        self.db.refresh(structure)
        return structure

    def update_fee_structure(
        self,
        structure_id: int,
        request: FeeStructureUpdate,
    ) -> FeeStructure:
        """Update components; the total is recomputed from the merged values."""
        structure = self.get_fee_structure(structure_id)

        for field, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(structure, field, value)
        structure.total_monthly_fee = structure.component_total()

        self.db.flush()
        self.db.refresh(structure)
        return structure

    def delete_fee_structure(self, structure_id: int) -> None:
        """Delete a fee structure."""
        structure = self.get_fee_structure(structure_id)
        self.db.delete(structure)
        self.db.flush()
