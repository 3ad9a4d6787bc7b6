"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from school_fees.api.v1.endpoints import (
    attendance,
    auth,
    classes,
    dashboard,
    fee_records,
    fee_structures,
    students,
    teachers,
)

api_router = APIRouter()

# Authentication (login/register/logout are public)
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

# Classes
api_router.include_router(
    classes.router,
    prefix="/classes",
    tags=["Classes"],
)

# Students
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Fee structures
api_router.include_router(
    fee_structures.router,
    prefix="/fee-structures",
    tags=["Fee Structures"],
)

# Fee records
api_router.include_router(
    fee_records.router,
    prefix="/fee-records",
    tags=["Fee Records"],
)

# Attendance
api_router.include_router(
    attendance.router,
    prefix="/attendance",
    tags=["Attendance"],
)

# Teachers
api_router.include_router(
    teachers.router,
    prefix="/teachers",
    tags=["Teachers"],
)

# Dashboard
api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)
