"""Pytest configuration and fixtures."""

import copy
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from parkit.screens import Navigator
from parkit.services.business import AuthService, BookingService
from parkit.services.external import RemoteStoreClient
from parkit.services.notifications import Toaster
from parkit.services.session import KeyValueStore, SessionContext, SessionStore

BASE_URL = "http://remote-store.test"

# Wednesday 2030-01-15 10:00 UTC
NOW = datetime(2030, 1, 15, 10, 0, tzinfo=timezone.utc)

USERS = [
    {
        "id": 1,
        "email": "jane@example.com",
        "password": "secret123",
        "firstName": "Jane",
        "lastName": "Doe",
        "avatarUrl": "https://img.test/jane.png",
        "location": "Downtown",
    },
    {
        "id": 2,
        "email": "sam@example.com",
        "password": "hunter22",
        "firstName": "Sam",
        "lastName": "Lee",
        "avatarUrl": "",
    },
]

PARKING = [
    {
        "id": "1",
        "name": "Central City Parking",
        "address": "123 Main St, Downtown",
        "distance": "0.5 km",
        "price": "$2.50/hr",
        "availableSpaces": 12,
        "image": "https://img.test/central.png",
        "rating": 4.5,
        "features": ["Covered", "Security"],
        "open24Hours": True,
        "keywords": ["central", "city centre"],
    },
    {
        "id": 2,
        "name": "Westside Mall Parking",
        "address": "456 Market Ave, Westside",
        "distance": "1.2 km",
        "Price": 3,
        "available": 40,
        "parkingImage": "https://img.test/westside.png",
    },
    {
        "id": "3",
        "name": "Harbor View Parking",
        "address": "9 Dock Rd",
        "distance": "2 km",
        "price": "$4.00/hr",
        "available": 0,
    },
]

BOOKINGS = [
    {
        "id": "1",
        "parkingName": "Central City Parking",
        "address": "123 Main St, Downtown",
        "date": "2030-01-15",
        "startTime": "2030-01-15T09:30:00.000Z",
        "endTime": None,
        "price": "$2.50/hr",
        "status": "active",
        "duration": "2h 15m",
    },
    {
        "id": "2",
        "parkingName": "Westside Mall Parking",
        "address": "456 Market Ave, Westside",
        "date": "2030-01-16",
        "startTime": "2030-01-16T10:00:00.000Z",
        "endTime": "2030-01-16T12:00:00.000Z",
        "price": "$6.00",
        "status": "upcoming",
    },
    {
        "id": "3",
        "parkingName": "Harbor View Parking",
        "address": "9 Dock Rd",
        "date": "2030-01-10",
        "startTime": "2030-01-10T08:00:00.000Z",
        "endTime": "2030-01-10T09:00:00.000Z",
        "price": "$12.50",
        "status": "completed",
    },
]


class FakeRemoteStore:
    """
    In-memory stand-in for the JSON-backed REST service, served through
    httpx.MockTransport. Records every request.
    """

    def __init__(self, collections: Dict[str, List[Dict[str, Any]]]):
        self.collections = copy.deepcopy(collections)
        self.requests: List[Tuple[str, str]] = []
        self.bodies: List[Optional[Dict[str, Any]]] = []
        self.failures: Dict[Tuple[str, str], Optional[int]] = {}
        self.next_id = 100

    def fail(self, method: str, collection: str, status: Optional[int] = 500):
        """Make requests fail; status None simulates a network error"""
        self.failures[(method, collection)] = status

    def count(self, method: str, path: str) -> int:
        return self.requests.count((method, path))

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        parts = path.strip("/").split("/")
        collection = parts[0]
        record_id = parts[1] if len(parts) > 1 else None
        body = json.loads(request.content) if request.content else None

        self.requests.append((request.method, path))
        self.bodies.append(body)

        if (request.method, collection) in self.failures:
            status = self.failures[(request.method, collection)]
            if status is None:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(status, json={"error": "failure"})

        if collection not in self.collections:
            return httpx.Response(404, json={})
        records = self.collections[collection]

        if request.method == "GET" and record_id is None:
            return httpx.Response(200, json=records)

        if request.method == "POST" and record_id is None:
            record = dict(body or {})
            record["id"] = str(self.next_id)
            self.next_id += 1
            records.append(record)
            return httpx.Response(201, json=record)

        index = next((i for i, r in enumerate(records) if str(r.get("id")) == record_id), None)
        if index is None:
            return httpx.Response(404, json={})

        if request.method == "PUT":
            record = dict(body or {})
            record["id"] = record_id
            records[index] = record
            return httpx.Response(200, json=record)

        if request.method == "DELETE":
            del records[index]
            return httpx.Response(200, json={})

        return httpx.Response(405, json={})


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def remote_store() -> FakeRemoteStore:
    return FakeRemoteStore({"users": USERS, "parking": PARKING, "bookings": BOOKINGS})


@pytest_asyncio.fixture
async def client(remote_store: FakeRemoteStore):
    client = RemoteStoreClient(base_url=BASE_URL, transport=httpx.MockTransport(remote_store.handler))
    yield client
    await client.close()


@pytest.fixture
def session(tmp_path) -> SessionContext:
    return SessionContext(SessionStore(KeyValueStore(tmp_path / "storage.json")))


@pytest.fixture
def toaster() -> Toaster:
    return Toaster()


@pytest.fixture
def navigator() -> Navigator:
    return Navigator()


@pytest.fixture
def booking_service(client: RemoteStoreClient) -> BookingService:
    return BookingService(client, clock=fixed_clock, tz=timezone.utc)


@pytest.fixture
def auth_service(client: RemoteStoreClient, session: SessionContext) -> AuthService:
    return AuthService(client, session)


class FakeRedis:
    """Subset of redis.asyncio.Redis used by the collection cache"""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, *keys):
        deleted = 0
        for key in keys:
            if key in self.store:
                del self.store[key]
                deleted += 1
        return deleted

    async def ping(self):
        return True

    async def aclose(self):
        pass


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
