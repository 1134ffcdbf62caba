# tests/conftest.py
from __future__ import annotations

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from echobody.core.config import Settings
from echobody.main import create_app

MEAL_WEEK = (
    '{"Day 1": {"Breakfast": "Oats", "Lunch": "Rice bowl", "Dinner": "Salmon"},'
    ' "Day 2": {"Breakfast": "Eggs", "Lunch": "Wrap", "Dinner": "Tofu stir fry"}}'
)


class StubGateway:
    """Stands in for the completion service; records prompts, replays `reply`."""

    def __init__(self, reply: Optional[str] = MEAL_WEEK):
        self.reply = reply
        self.error: Optional[Exception] = None
        self.prompts: List[str] = []

    async def complete(self, prompt: str, model: Optional[str] = None) -> Optional[str]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        LOG_DIR="",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        OPENAI_API_KEY=None,
    )


@pytest.fixture
def db():
    return AsyncMongoMockClient()["echobody_test"]


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def app(settings, db, gateway):
    return create_app(settings, db=db, gateway=gateway)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
