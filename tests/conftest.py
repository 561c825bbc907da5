import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from carelink.core.database import Base, SessionLocal, engine
from carelink.core.security import create_access_token
from carelink.main import app
from carelink.models import Facility, Group, GroupMember, Medication, MedicationLog, User


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(tables):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(email="ann@example.com", name="Ann Tan"):
        user = User(email=email, name=name, hashed_password="not-a-real-hash")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token({"sub": str(user.id), "email": user.email})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_medication(db):
    def _make(user, name="Metformin", taken=0, total=0, hours_apart=1):
        """Medication with ``total`` past doses, the first ``taken`` of them taken"""
        medication = Medication(
            user_id=user.id,
            name=name,
            dosage="500mg",
            frequency="twice_daily",
            prescribed_by="Dr Lim",
            active=True,
        )
        db.add(medication)
        db.flush()
        now = datetime.utcnow()
        for i in range(total):
            scheduled = now - timedelta(hours=(i + 1) * hours_apart)
            db.add(MedicationLog(
                medication_id=medication.id,
                scheduled_time=scheduled,
                taken=i < taken,
                taken_at=scheduled if i < taken else None,
            ))
        db.commit()
        db.refresh(medication)
        return medication
    return _make


@pytest.fixture
def make_group(db):
    def _make(owner, name="Walking Club", members=()):
        group = Group(name=name, description="Morning walks", created_by=owner.id)
        group.members.append(GroupMember(user_id=owner.id))
        for member in members:
            group.members.append(GroupMember(user_id=member.id))
        db.add(group)
        db.commit()
        db.refresh(group)
        return group
    return _make


@pytest.fixture
def facility(db):
    facility = Facility(name="Bishan Community Club", address="Bishan St 13", facility_type="community_centre")
    db.add(facility)
    db.commit()
    db.refresh(facility)
    return facility
