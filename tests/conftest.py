"""Shared fixtures: in-memory database, API client and sample data."""

import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["SCHEDULER_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import school_fees.models  # noqa: E402,F401
from school_fees.core.database import Base, get_db  # noqa: E402
from school_fees.core.security import create_access_token, hash_password  # noqa: E402
from school_fees.main import app  # noqa: E402
from school_fees.models import (  # noqa: E402
    FeeStructure,
    SchoolClass,
    Student,
    Teacher,
    User,
    UserRole,
)

PASSWORD = "password123"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(engine) -> Session:
    """Session for arranging data and calling services directly."""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture()
def client(engine):
    """API client whose requests each get their own session, as in production."""
    request_sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        session = request_sessions()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ==========================================
# Users
# ==========================================

def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.email, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for():
    return auth_headers


@pytest.fixture()
def admin_user(db) -> User:
    user = User(
        email="admin@school.com",
        password_hash=hash_password(PASSWORD),
        name="Admin User",
        role=UserRole.ADMIN,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture()
def make_teacher(db):
    def _make_teacher(email: str = "teacher1@school.com", employee_id: str = "T001") -> Teacher:
        teacher = Teacher(
            employee_id=employee_id,
            phone_number="1234567890",
            qualification="B.Ed",
            user=User(
                email=email,
                password_hash=hash_password(PASSWORD),
                name=f"Teacher {employee_id}",
                role=UserRole.TEACHER,
            ),
        )
        db.add(teacher)
        db.commit()
        return teacher

    return _make_teacher


@pytest.fixture()
def teacher(make_teacher) -> Teacher:
    return make_teacher()


@pytest.fixture()
def admin_headers(admin_user) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture()
def teacher_headers(teacher) -> dict[str, str]:
    return auth_headers(teacher.user)


# ==========================================
# Classes & students
# ==========================================

@pytest.fixture()
def make_class(db):
    def _make_class(name: str = "Grade 1", **fees: float) -> SchoolClass:
        school_class = SchoolClass(name=name)
        if fees:
            structure = FeeStructure(**fees)
            structure.total_monthly_fee = structure.component_total()
            school_class.fee_structure = structure
        db.add(school_class)
        db.commit()
        return school_class

    return _make_class


@pytest.fixture()
def make_student(db):
    def _make_student(
        school_class: SchoolClass,
        roll_number: str,
        name: str | None = None,
        is_active: bool = True,
        **fees: float,
    ) -> Student:
        student = Student(
            name=name or f"Student {roll_number}",
            father_name="Parent",
            class_id=school_class.id,
            roll_number=roll_number,
            phone_number="5550100",
            is_active=is_active,
            **fees,
        )
        student.total_monthly_fee = student.component_total()
        db.add(student)
        db.commit()
        return student

    return _make_student
