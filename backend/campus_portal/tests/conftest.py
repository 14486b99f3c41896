import os
import tempfile
from pathlib import Path
from uuid import uuid4

import pytest

TEST_DB_FILE = Path(tempfile.gettempdir()) / f"test_campus_portal_{uuid4().hex}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_FILE.as_posix()}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
os.environ.setdefault("DB_BOOTSTRAP_MODE", "off")

from campus_portal import models  # noqa: E402,F401
from campus_portal.core.security import get_password_hash  # noqa: E402
from campus_portal.database.base import Base  # noqa: E402
from campus_portal.database.session import SessionLocal, engine  # noqa: E402
from campus_portal.models.user import User  # noqa: E402


@pytest.fixture
def reset_database():
    engine.dispose()
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(reset_database):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    if TEST_DB_FILE.exists():
        TEST_DB_FILE.unlink()


@pytest.fixture
def make_user(db_session):
    def factory(role: str = "student", username: str | None = None, password: str = "Secret@123", **extra) -> User:
        suffix = uuid4().hex[:8]
        username = username or f"{role}.{suffix}"
        user = User(
            username=username,
            email=extra.pop("email", f"{username}@campus.test"),
            password=get_password_hash(password),
            role=role,
            full_name=extra.pop("full_name", f"{role.title()} {suffix}"),
            **extra,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return factory


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin", full_name="Admin User")


@pytest.fixture
def student(make_user) -> User:
    return make_user("student", full_name="Ana Student")
