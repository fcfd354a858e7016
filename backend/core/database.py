import logging
from fastapi import Depends
from sqlmodel import SQLModel, Session, create_engine
from core.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI may hand the session to a different worker thread
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, connect_args=connect_args)


def create_db_and_tables():
    # Table models must be imported before create_all sees them
    from models import audit_log, complaints, job, reference, tenant, user  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")


def get_session():
    with Session(engine) as session:
        yield session


def get_repository(session: Session = Depends(get_session)):
    from repositories.sql import SQLRepository

    return SQLRepository(session)
