"""Initial data for an empty database."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from school_fees.core.security import hash_password
from school_fees.models.school_class import ClassTeacher, FeeStructure, SchoolClass
from school_fees.models.user import Teacher, User, UserRole

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"
ADMIN_EMAIL = "admin@school.com"
TEACHER_EMAIL = "teacher1@school.com"


def seed_database(db: Session) -> bool:
    """
    Create an admin, one class with a fee structure, and one teacher
    assigned to it.

    Does nothing and returns False when any user already exists.
    """
    if db.execute(select(func.count(User.id))).scalar():
        logger.info("Users already present; skipping seed")
        return False

    password_hash = hash_password(DEFAULT_PASSWORD)

    db.add(
        User(
            email=ADMIN_EMAIL,
            password_hash=password_hash,
            name="Admin User",
            role=UserRole.ADMIN,
        )
    )

    school_class = SchoolClass(name="Class 1", description="First Grade")
    fee_structure = FeeStructure(
        tuition_fee=5000,
        lab_fee=500,
        library_fee=300,
        sports_fee=200,
        exam_fee=1000,
        other_fee=0,
    )
    fee_structure.total_monthly_fee = fee_structure.component_total()
    school_class.fee_structure = fee_structure

    teacher = Teacher(
        employee_id="T001",
        phone_number="1234567890",
        address="123 School Street",
        qualification="B.Ed",
        user=User(
            email=TEACHER_EMAIL,
            password_hash=password_hash,
            name="Teacher One",
            role=UserRole.TEACHER,
        ),
    )

    db.add_all([school_class, teacher])
    db.add(ClassTeacher(teacher=teacher, school_class=school_class, is_primary=True))
    db.flush()

    logger.info("Seeded admin %s and teacher %s", ADMIN_EMAIL, TEACHER_EMAIL)
    return True
