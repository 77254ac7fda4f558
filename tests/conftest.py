import os

os.environ.setdefault("CONTRACT_ADDRESS", "0x5fbdb2315678afecb367f032d93f642f64180aa3")

import httpx
import pytest
from eth_abi import encode as abi_encode
from fastapi.testclient import TestClient

from confession_game.core.config import settings
from confession_game.core.dependencies import get_http_client, get_redis_client, get_web3
from confession_game.core.security import payment_rate_limiter
from confession_game.main import app
from confession_game.services.chain_services import PROMPT_CREATED_TOPIC

AUTHOR_ADDRESS = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"


class FakeRedis:
    """In-memory stand-in for the handful of redis.asyncio commands the app uses."""

    def __init__(self):
        self.sets = {}
        self.hashes = {}
        self.zsets = {}
        self.calls = []
        self.fail_on = set()
        self.expirations = []

    def lapse(self, key):
        """Drops a key as if its TTL had run out."""
        self.hashes.pop(key, None)
        self.sets.pop(key, None)

    def _record(self, command, key):
        self.calls.append((command, key))
        if command in self.fail_on:
            raise ConnectionError(f"redis unavailable during {command}")

    @property
    def writes(self):
        return [call for call in self.calls if call[0] in {"sadd", "srem", "hset", "hsetnx", "zadd", "expire"}]

    async def sismember(self, key, value):
        self._record("sismember", key)
        return int(str(value) in self.sets.get(key, set()))

    async def scard(self, key):
        self._record("scard", key)
        return len(self.sets.get(key, set()))

    async def sadd(self, key, *values):
        self._record("sadd", key)
        members = self.sets.setdefault(key, set())
        added = 0
        for value in values:
            if str(value) not in members:
                members.add(str(value))
                added += 1
        return added

    async def hset(self, key, mapping=None):
        self._record("hset", key)
        fields = self.hashes.setdefault(key, {})
        added = len([field for field in mapping if field not in fields])
        fields.update({field: str(value) for field, value in mapping.items()})
        return added

    async def hsetnx(self, key, field, value):
        self._record("hsetnx", key)
        fields = self.hashes.setdefault(key, {})
        if field in fields:
            return 0
        fields[field] = str(value)
        return 1

    async def hgetall(self, key):
        self._record("hgetall", key)
        return dict(self.hashes.get(key, {}))

    async def zadd(self, key, mapping):
        self._record("zadd", key)
        self.zsets.setdefault(key, {}).update(mapping)
        return len(mapping)

    async def srem(self, key, *values):
        self._record("srem", key)
        members = self.sets.get(key, set())
        removed = len([value for value in values if str(value) in members])
        members.difference_update(str(value) for value in values)
        return removed

    async def expire(self, key, seconds):
        self._record("expire", key)
        self.expirations.append((key, seconds))
        return 1

    async def close(self):
        pass


class StubEth:
    def __init__(self):
        self.receipts = {}
        self.requested = []

    async def get_transaction_receipt(self, tx_hash):
        self.requested.append(tx_hash)
        if tx_hash not in self.receipts:
            raise RuntimeError(f"Transaction with hash {tx_hash} not found")
        return self.receipts[tx_hash]


class StubWeb3:
    def __init__(self):
        self.eth = StubEth()


class FakeApi:
    """Routes outbound httpx calls to canned responses keyed by (method, path)."""

    def __init__(self):
        self.responses = {}
        self.requests = []

    def add(self, method, path, status_code=200, json=None):
        self.responses[(method, path)] = httpx.Response(status_code, json=json)

    def paths(self, method=None):
        return [request.url.path for request in self.requests if method is None or request.method == method]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"error": "Not found"})
        return response


def make_prompt_created_log(prompt_id, content="eaten cereal for dinner", expires_at=1_700_086_400, address=None):
    return {
        "address": address or settings.CONTRACT_ADDRESS,
        "topics": [
            PROMPT_CREATED_TOPIC,
            "0x" + prompt_id.to_bytes(32, "big").hex(),
            "0x" + "00" * 12 + AUTHOR_ADDRESS[2:],
        ],
        "data": "0x" + abi_encode(["string", "uint256"], [content, expires_at]).hex(),
    }


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def stub_web3():
    return StubWeb3()


@pytest.fixture
def client(fake_redis, fake_api, stub_web3):
    async def override_redis():
        yield fake_redis

    async def override_http():
        async with httpx.AsyncClient(base_url=settings.APP_BASE_URL, transport=httpx.MockTransport(fake_api)) as http_client:
            yield http_client

    async def no_rate_limit():
        return None

    app.dependency_overrides[get_redis_client] = override_redis
    app.dependency_overrides[get_http_client] = override_http
    app.dependency_overrides[get_web3] = lambda: stub_web3
    app.dependency_overrides[payment_rate_limiter] = no_rate_limit

    yield TestClient(app)

    app.dependency_overrides.clear()
