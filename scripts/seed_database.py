"""Seed an empty database with an admin, a class and a teacher."""
from school_fees.core.database import SessionLocal
from school_fees.services.seed import ADMIN_EMAIL, DEFAULT_PASSWORD, TEACHER_EMAIL, seed_database

with SessionLocal() as session:
    if seed_database(session):
        session.commit()
        print("Database seeded successfully!")
        print(f"  admin:   {ADMIN_EMAIL} / {DEFAULT_PASSWORD}")
        print(f"  teacher: {TEACHER_EMAIL} / {DEFAULT_PASSWORD}")
    else:
        print("Database already seeded - nothing to do.")
