import os
from sqlmodel import Session
from core.database import create_db_and_tables, engine
from models.reference import Staff
from models.user import UserRole
from repositories.sql import SQLRepository
from services.reference import DEFAULT_MATERIALS, import_materials
from services.tenants import create_user

ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
SUPERVISOR_USERNAME = os.getenv("SEED_SUPERVISOR_USERNAME", "supervisor")
SUPERVISOR_PASSWORD = os.getenv("SEED_SUPERVISOR_PASSWORD", "supervisor123")

DEFAULT_STAFF = ["Staff A", "Staff B", "Staff C"]


def seed_user(repo: SQLRepository, username: str, password: str, role: UserRole):
    if repo.get_user_by_username(username):
        print(f"{role.value} '{username}' already exists")
        return
    create_user(repo, username, password, role)
    print(f"{role.value} '{username}' seeded")


def seed_staff(repo: SQLRepository):
    existing = {s.name for s in repo.list_active_staff()}
    with repo.transaction():
        for name in DEFAULT_STAFF:
            if name not in existing:
                repo.add_staff(Staff(name=name, designation="Technician"))


def seed():
    create_db_and_tables()
    with Session(engine) as session:
        repo = SQLRepository(session)
        seed_user(repo, ADMIN_USERNAME, ADMIN_PASSWORD, UserRole.admin)
        seed_user(repo, SUPERVISOR_USERNAME, SUPERVISOR_PASSWORD, UserRole.supervisor)
        seed_staff(repo)
        count = import_materials(repo, DEFAULT_MATERIALS)
        print(f"{count} materials imported")

if __name__ == "__main__":
    seed()
