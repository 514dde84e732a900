import os

# moto needs some credentials to sign with
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storagehub.core.config import Settings, get_settings
from storagehub.main import app
from storagehub.models.database import Base, get_db
from storagehub.services.object_store import ObjectStore, get_object_store
from storagehub.services.orchestrator import UploadOrchestrator

TEST_BUCKET = "storagehub-test"


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def s3_client():
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=TEST_BUCKET)
        yield client


@pytest.fixture
def object_store(s3_client):
    return ObjectStore(s3_client, TEST_BUCKET)


@pytest.fixture
def settings():
    return Settings(_env_file=None, aws_s3_bucket_name=TEST_BUCKET)


@pytest.fixture
def orchestrator(db_session, object_store, settings):
    return UploadOrchestrator(db_session, object_store, settings)


@pytest.fixture
def client(db_session, object_store, settings):
    """TestClient logged in as owner ``u1``."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_settings] = lambda: settings

    test_client = TestClient(app)
    test_client.cookies.set("user_id", "u1")
    yield test_client

    app.dependency_overrides.clear()
