"""Fixtures for end-to-end API tests.

Requests go through the real FastAPI app backed by in-memory persistence.
The store is APP-scoped, so it outlives individual requests and can be
seeded directly.
"""

import asyncio
from typing import Callable
from uuid import uuid4

import pytest
from dishka import AsyncContainer
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from agora.config import AuthSettings
from agora.domain.model import User
from agora.domain.value import UserId, Username
from agora.interface.api.app import create_app
from agora.persistence.repository.inmemory import InMemoryStore
from agora.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def container() -> AsyncContainer:
    """Test container that can serve FastAPI requests."""
    return build_test_container(extra_providers=[FastapiProvider()])


@pytest.fixture
def store(container) -> InMemoryStore:
    """The store shared by every request served from ``container``."""
    return asyncio.run(container.get(InMemoryStore))


@pytest.fixture
def client(container):
    """Create test client; leaving the block closes the container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def login(container, store) -> Callable[[str], tuple[User, dict[str, str]]]:
    """Register a user and return it with an ``auth_token`` cookie."""
    auth_settings = asyncio.run(container.get(AuthSettings))

    def _login(username: str = "alice") -> tuple[User, dict[str, str]]:
        user = User(id=UserId(uuid4()), username=Username(root=username))
        store.users[user.id] = user
        token = create_token(str(user.id), username, auth_settings)
        return user, {"auth_token": token}

    return _login
