import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("PASSWORD_BCRYPT_ROUNDS", "4")

import uuid
from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from core.database import get_session
from main import app
from models import audit_log, complaints, job, reference, tenant, user  # noqa: F401
from models.complaints import ComplaintCategory
from models.reference import Material, Staff
from models.tenant import BuildingName, Tenant
from models.user import UserRole
from repositories.memory import InMemoryRepository
from repositories.sql import SQLRepository
from schemas.auth import Principal
from schemas.complaints import ComplaintCreate
from schemas.jobs import JobCreate, MaterialLine
from services.tenants import create_user
from utils.security import hash_password

MATERIALS = [
    Material(code="P001", name="PVC Pipe 1/2 inch"),
    Material(code="E001", name="LED Bulb 10W"),
    Material(code="A002", name="AC Gas R22"),
]


def seed_reference_data(repo):
    with repo.transaction():
        for material in MATERIALS:
            repo.save_material(Material(code=material.code, name=material.name))
        repo.add_staff(Staff(name="Staff B", designation="Plumber"))
        repo.add_staff(Staff(name="Staff A", designation="Electrician"))
        repo.add_staff(Staff(name="Retired Rick", active=False))


@pytest.fixture
def memory_repo():
    repo = InMemoryRepository()
    seed_reference_data(repo)
    return repo


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def sql_repo(engine):
    with Session(engine) as session:
        repo = SQLRepository(session)
        seed_reference_data(repo)
        yield repo


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    """Runs a test once per repository implementation."""
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture
def admin():
    return Principal(role=UserRole.admin, subject_id=uuid.uuid4())


@pytest.fixture
def supervisor():
    return Principal(role=UserRole.supervisor, subject_id=uuid.uuid4())


@pytest.fixture
def make_tenant():
    def _make(repo, mobile_no="555-0101", building=BuildingName.tower_a, room_no="101"):
        tenant = Tenant(
            mobile_no=mobile_no,
            building_name=building,
            room_no=room_no,
            password_hash=hash_password("secret123"),
        )
        with repo.transaction():
            repo.add_tenant(tenant)
        principal = Principal(role=UserRole.tenant, subject_id=tenant.id, tenant_id=tenant.id)
        return tenant.id, principal

    return _make


@pytest.fixture
def complaint_data():
    def _make(**overrides):
        fields = dict(
            bldg_name="Tower A",
            flat_no="101",
            mobile_no="555-0101",
            preferred_time="10:00 - 11:00",
            category=ComplaintCategory.plumbing,
            description="leak",
        )
        fields.update(overrides)
        return ComplaintCreate(**fields)

    return _make


@pytest.fixture
def job_data():
    def _make(complaint_id, **overrides):
        fields = dict(
            complaint_id=complaint_id,
            date_attended=date(2024, 7, 22),
            time_attended=time(14, 30),
            staff_attended=["Staff A", "Staff B"],
            job_card_no="JC001",
            materials_used=[MaterialLine(code="P001", qty=1)],
        )
        fields.update(overrides)
        return JobCreate(**fields)

    return _make


# API fixtures

@pytest.fixture
def client(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    with Session(engine) as session:
        repo = SQLRepository(session)
        seed_reference_data(repo)
        create_user(repo, "admin", "admin123", UserRole.admin)
        create_user(repo, "supervisor", "supervisor123", UserRole.supervisor)

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    def _login(username, password):
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def admin_headers(login):
    return login("admin", "admin123")


@pytest.fixture
def supervisor_headers(login):
    return login("supervisor", "supervisor123")
