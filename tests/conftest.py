"""Shared test configuration and fixtures for form designer tests"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from form_designer.main import app
from form_designer.routers.designer import get_designer
from form_designer.services.commit_scheduler import CommitScheduler
from form_designer.services.designer import FormDesigner
from form_designer.services.form_document import FormDocument
from form_designer.services.persistence import PersistenceGateway
from tests.fakes import QUIET_PERIOD, RecordingStore, RecordingViewSink

logging.basicConfig(level=logging.INFO)


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def gateway(store):
    return PersistenceGateway(store, key="formBuilderData")


@pytest.fixture
def document():
    return FormDocument()


@pytest.fixture
def scheduler():
    return CommitScheduler(quiet_period=QUIET_PERIOD)


@pytest.fixture
def view_sink():
    return RecordingViewSink()


@pytest.fixture
def exports():
    return []


@pytest.fixture
def submissions():
    return []


@pytest.fixture
def designer(gateway, scheduler, view_sink, exports, submissions):
    """Designer session over an empty in-memory document"""
    return FormDesigner(
        gateway,
        scheduler=scheduler,
        view_sink=view_sink,
        offer_file=exports.append,
        on_submit=submissions.append,
    )


@pytest.fixture
def fake_redis():
    """MagicMock Redis client backed by a dict"""
    data = {}
    client = MagicMock()
    client.get.side_effect = data.get
    client.set.side_effect = lambda key, value: data.__setitem__(key, value)
    client.data = data
    return client


@pytest.fixture
def sqlite_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def api_designer(gateway):
    """Designer for API tests; long quiet period so only flushes commit text"""
    return FormDesigner(gateway, scheduler=CommitScheduler(quiet_period=30))


@pytest.fixture
def api_client(api_designer):
    app.dependency_overrides[get_designer] = lambda: api_designer
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
