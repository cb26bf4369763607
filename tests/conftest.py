"""Shared test setup: environment, lifecycle logging and an in-memory database."""
import asyncio
import logging
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent.parent
load_dotenv(ROOT_DIR / ".env")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "community_overflow_test")

from fastapi.testclient import TestClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from app.config import database  # noqa: E402
from app.services import (  # noqa: E402
    message_service,
    notification_service,
    question_service,
    user_service,
)
from app.ui.session import session_store  # noqa: E402
from app.utils import websocket_utils  # noqa: E402

log = logging.getLogger("tests")


@pytest.fixture(autouse=True)
def log_test_lifecycle(request):
    log.info("Starting test: %s", request.node.name)
    yield
    log.info("Finished test: %s", request.node.name)


@pytest.fixture(autouse=True)
def reset_shared_state():
    yield
    session_store._sessions.clear()
    websocket_utils.active_connections.clear()
    websocket_utils.typing_users.clear()


@pytest.fixture
def mongo(monkeypatch):
    db = AsyncMongoMockClient()["community_overflow_test"]
    collections = {
        "user_collection": db["User"],
        "message_collection": db["Message"],
        "question_collection": db["Question"],
        "notification_collection": db["Notification"],
    }
    for module in (database, user_service, message_service, question_service, notification_service):
        for name, collection in collections.items():
            if hasattr(module, name):
                monkeypatch.setattr(module, name, collection)
    asyncio.run(database.ensure_indexes(db["User"]))
    return db


@pytest.fixture
def client(mongo):
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
