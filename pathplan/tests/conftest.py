from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from pathplan.core.connection import create_db_engine, init_storage
from pathplan.models import Base
from pathplan.store import GoalStore


@pytest.fixture(name="engine", scope="function")
def engine_fixture():
    """In-memory SQLite engine with every table created, dropped afterwards"""
    db_engine = create_db_engine("sqlite://")
    init_storage(db_engine)
    try:
        yield db_engine
    finally:
        Base.metadata.drop_all(bind=db_engine)
        db_engine.dispose()


@pytest.fixture(name="db", scope="function")
def session_fixture(engine):
    """A fresh session per test"""
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db):
    return GoalStore(db)


@pytest.fixture
def goal_dates():
    return date(2024, 10, 1), date(2024, 12, 31)
