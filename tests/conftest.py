import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from skillhub.database import Base, get_db
from skillhub.main import app
from fastapi.testclient import TestClient

import skillhub.models  # noqa: F401

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

ADMIN_PASSWORD = "AdminPassword123!"

@pytest.fixture(scope="function")
def db_session():
    """Fresh in-memory database per test; tables are created and dropped around it."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def admin_user(db_session):
    """Create a default admin user for tests."""
    from skillhub.models.user import User, UserRole
    from skillhub.services import auth as auth_service

    user = User(
        username="admin",
        email="admin@skillhub.io",
        hashed_password=auth_service.get_password_hash(ADMIN_PASSWORD),
        role=UserRole.ADMIN,
    )
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens for a user."""
    from skillhub.services.auth import issue_token

    def _get_token(user):
        return issue_token(user)
    return _get_token

@pytest.fixture(scope="function")
def auth_headers(admin_user, get_token):
    return {"Authorization": f"Bearer {get_token(admin_user)}"}

@pytest.fixture(scope="function")
def seeded(db_session):
    """Load the demo organisation (4 employees, 5 skills, 13 evaluations)."""
    from skillhub.core.init_system import seed_demo_data
    return seed_demo_data(db_session)

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
