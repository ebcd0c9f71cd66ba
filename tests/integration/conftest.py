"""Integration test fixtures — A real MongoDB with a throwaway database.

Expects a MongoDB server reachable at ``SCOUTMONGO_TEST_MONGODB_URI``, e.g.::

    docker run -d -p 27017:27017 mongo:7
    SCOUTMONGO_TEST_MONGODB_URI=mongodb://localhost:27017 pytest -m integration

Tests are skipped when the variable is unset or the server is unreachable.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator

import pytest
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

MOCK_DOCUMENTS: list[dict] = [
    {"id": 1, "title": "Advances in Solar Nowcasting Using Deep Learning", "lang": "en", "year": 2024},
    {"id": 2, "title": "Transformer Models for Natural Language Understanding", "lang": "en", "year": 2023},
    {"id": 3, "title": "Solar Irradiance Forecasting with Satellite Imagery", "lang": "en", "year": 2022},
    {"id": 4, "title": "Prévision solaire par apprentissage profond", "lang": "fr", "year": 2024},
    {"id": 5, "title": "Graph Neural Networks for Drug Discovery", "lang": "en", "year": 2021},
]


@pytest.fixture
def mock_documents() -> list[dict]:
    return [dict(doc) for doc in MOCK_DOCUMENTS]


@pytest.fixture(scope="session")
def mongo_client() -> Iterator[MongoClient]:
    uri = os.environ.get("SCOUTMONGO_TEST_MONGODB_URI")
    if not uri:
        pytest.skip("SCOUTMONGO_TEST_MONGODB_URI is not set")

    client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=2_000, tz_aware=True)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        pytest.skip(f"MongoDB not reachable at {uri}: {e}")

    yield client
    client.close()


@pytest.fixture
def mongo_database(mongo_client: MongoClient) -> Iterator[Database]:
    name = f"scoutmongo_test_{uuid.uuid4().hex[:8]}"
    yield mongo_client[name]
    mongo_client.drop_database(name)
