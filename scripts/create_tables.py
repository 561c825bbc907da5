#!/usr/bin/env python3
"""
Create the CareLink database tables and optionally seed reference data
"""
import argparse
import sys
import os

# Make the project root importable when run as a script
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import inspect

from carelink.core.database import Base, create_tables, engine, get_db_info, session_scope, test_connection
from carelink.core.config import get_settings
from carelink.models.appointment import Doctor
from carelink.models.exercise import Exercise, ExerciseCategory, ExerciseStep
from carelink.models.facility import Facility
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_FACILITIES = [
    {"name": "Ang Mo Kio Active Ageing Centre", "address": "Ang Mo Kio Ave 3", "facility_type": "community_centre"},
    {"name": "Toa Payoh Polyclinic", "address": "Lorong 7 Toa Payoh", "facility_type": "clinic"},
    {"name": "Bishan Community Club", "address": "Bishan St 13", "facility_type": "community_centre"},
]

SAMPLE_DOCTORS = [
    {"name": "Dr Lim Wei Ming", "specialty": "Geriatrics", "clinic": "Toa Payoh Polyclinic", "location": "Toa Payoh"},
    {"name": "Dr Sarah Tan", "specialty": "Cardiology", "clinic": "Novena Heart Centre", "location": "Novena"},
    {"name": "Dr Raj Kumar", "specialty": "Endocrinology", "clinic": "Bishan Medical Clinic", "location": "Bishan"},
]

# category -> [(title, minutes, steps)]
SAMPLE_EXERCISES = {
    "Strength": [
        ("Chair squats", 10, ["Sit at the edge of a sturdy chair", "Stand up slowly using your legs", "Sit back down with control"]),
    ],
    "Balance": [
        ("Heel-to-toe walk", 5, ["Stand next to a wall", "Place one heel directly in front of the other toe", "Walk ten steps"]),
    ],
    "Flexibility": [
        ("Seated stretch", 5, ["Sit upright", "Reach both arms overhead", "Hold for ten seconds"]),
    ],
}


def main(seed: bool = False) -> bool:
    settings = get_settings()

    logger.info("🚀 Creating CareLink tables")
    logger.info(f"📊 Environment: {settings.ENVIRONMENT}")

    if not test_connection():
        logger.error("❌ Could not connect to the database")
        return False

    db_info = get_db_info()
    if db_info:
        logger.info(f"✅ Connected to {db_info['dialect']} {db_info['server_version']} ({db_info['database_name']})")

    try:
        create_tables()
    except Exception as e:
        logger.error(f"❌ Error creating tables: {e}")
        return False

    verify_tables()

    if seed:
        seed_facilities()
        seed_doctors()
        seed_exercises()

    return True


def verify_tables():
    """Check every mapped table exists"""
    existing = set(inspect(engine).get_table_names())

    logger.info("📋 Checking tables:")
    for table in sorted(Base.metadata.tables):
        if table in existing:
            logger.info(f"   ✅ {table}")
        else:
            logger.warning(f"   ⚠️ {table} - missing")


def seed_facilities():
    with session_scope() as db:
        if db.query(Facility).count():
            logger.info("Facilities already present, skipping seed")
            return
        db.add_all(Facility(**row) for row in SAMPLE_FACILITIES)
    logger.info(f"🌱 Seeded {len(SAMPLE_FACILITIES)} facilities")


def seed_doctors():
    with session_scope() as db:
        if db.query(Doctor).count():
            logger.info("Doctors already present, skipping seed")
            return
        db.add_all(Doctor(**row) for row in SAMPLE_DOCTORS)
    logger.info(f"🌱 Seeded {len(SAMPLE_DOCTORS)} doctors")


def seed_exercises():
    with session_scope() as db:
        if db.query(ExerciseCategory).count():
            logger.info("Exercises already present, skipping seed")
            return
        for category_name, exercises in SAMPLE_EXERCISES.items():
            category = ExerciseCategory(name=category_name)
            for title, minutes, steps in exercises:
                exercise = Exercise(title=title, duration_minutes=minutes, category=category)
                exercise.steps = [ExerciseStep(step_number=n, instruction=text) for n, text in enumerate(steps, 1)]
            db.add(category)
    logger.info(f"🌱 Seeded {len(SAMPLE_EXERCISES)} exercise categories")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", action="store_true", help="insert sample facilities, doctors and exercises")
    args = parser.parse_args()
    sys.exit(0 if main(seed=args.seed) else 1)
