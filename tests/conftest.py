"""Shared fixtures: in-memory database, repositories, HTTP client."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-entropy-0123456789")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MAIL_API_URL"] = ""
os.environ["PUBLIC_BASE_URL"] = "https://tours.example.com"

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings

from app.infrastructure.database import Base, SessionLocal, engine
from app.domain.models.tour import Tour
from app.domain.models.user import User, UserRole
from app.domain.schemas.notification import EmailMessage
from app.infrastructure.mailer import MailDeliveryError
from app.infrastructure.repositories.tour_repository import SQLAlchemyTourRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.application.services.auth_service import create_user, issue_token
from app.interfaces.deps import get_mailer
from app.main import app


class FakeMailer:
    """Records messages instead of sending them."""

    def __init__(self, fail: bool = False, error: Exception | None = None):
        self.fail = fail
        self.error = error
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        if self.error is not None:
            raise self.error
        if self.fail:
            raise MailDeliveryError("simulated outage")
        self.sent.append(message)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repo(db):
    return SQLAlchemyUserRepository(db, User)


@pytest.fixture
def tour_repo(db):
    return SQLAlchemyTourRepository(db, Tour)


@pytest.fixture
def make_user(user_repo):
    def _make(email="jonas@example.com", password="password123", role=UserRole.USER, **kwargs):
        return create_user(user_repo, email=email, password=password, role=role, **kwargs)
    return _make


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(mailer):
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    def _header(user):
        return {"Authorization": f"Bearer {issue_token(user)}"}
    return _header


@pytest.fixture
def failing_mailer():
    return FakeMailer(fail=True)


@pytest.fixture
def crashing_mailer():
    return FakeMailer(error=RuntimeError("transport crashed"))


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setattr(get_settings(), "ENVIRONMENT", "production")
