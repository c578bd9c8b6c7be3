import os
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Use SQLite in-memory database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from tinylink.db.database import Base, get_db
from tinylink.models.models import Link
from tinylink.core.errors import register_exception_handlers
from tinylink.api import health, links, redirect, stats


@pytest.fixture(scope="function")
def test_engine():
    """A fresh in-memory database per test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine):
    """Create a database session for each test."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def test_app(db_session):
    """Create a test FastAPI app."""
    app = FastAPI()
    register_exception_handlers(app)

    # Same order as the real app: redirect catch-all last
    app.include_router(health.router)
    app.include_router(links.router)
    app.include_router(stats.router)
    app.include_router(redirect.router)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    return app


@pytest.fixture(scope="function")
def client(test_app):
    """Create a test client."""
    return TestClient(test_app)


@pytest.fixture
def make_link(db_session):
    """Factory that inserts links directly, bypassing the service layer."""
    def _make_link(code, target_url="https://example.com", click_count=0, deleted=False):
        link = Link(code=code, target_url=target_url, click_count=click_count, deleted=deleted)
        db_session.add(link)
        db_session.commit()
        db_session.refresh(link)
        return link

    return _make_link


@pytest.fixture
def test_link(make_link):
    """Create a test link."""
    return make_link("test123", "https://example.com/landing")
