"""Shared fixtures for SDK tests."""

import pytest

from altogic_sdk import AltogicClient, ClientOptions, MemoryStorage

BASE_URL = "https://app.example.com/e:6286"
CLIENT_KEY = "client-key-123"


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def client(storage: MemoryStorage) -> AltogicClient:
    return AltogicClient(BASE_URL, CLIENT_KEY, ClientOptions(local_storage=storage))
