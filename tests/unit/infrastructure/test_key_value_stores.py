"""Tests for the TTL key-value stores and the prefixed artefact stores."""

import uuid
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.core.exceptions import PersistenceError
from src.infrastructure.stores import (
    InMemoryKeyValueStore,
    KeyValueOtpSessionStore,
    KeyValueOtpStore,
    KeyValuePendingPhoneChangeStore,
    RedisKeyValueStore,
)
from src.infrastructure.stores.key_value import TAKE_IF_MATCH_SCRIPT, TAKE_SCRIPT


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_set_get_and_expire(self):
        clock = FakeClock()
        store = InMemoryKeyValueStore(clock=clock)

        await store.set("k", "v", ttl_seconds=10)
        assert await store.get("k") == "v"

        clock.now = 10
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_take_reads_and_deletes(self):
        store = InMemoryKeyValueStore()
        await store.set("k", "v", ttl_seconds=10)

        assert await store.take("k") == "v"
        assert await store.take("k") is None

    @pytest.mark.asyncio
    async def test_take_if_match(self):
        store = InMemoryKeyValueStore()
        await store.set("k", "v", ttl_seconds=10)

        assert await store.take_if_match("k", "other") is False
        assert await store.get("k") == "v"
        assert await store.take_if_match("k", "v") is True
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_set_overwrites_value_and_ttl(self):
        clock = FakeClock()
        store = InMemoryKeyValueStore(clock=clock)
        await store.set("k", "old", ttl_seconds=5)

        clock.now = 4
        await store.set("k", "new", ttl_seconds=5)
        clock.now = 8

        assert await store.get("k") == "new"


class TestRedisKeyValueStore:
    @pytest.fixture
    def redis(self):
        return AsyncMock()

    @pytest.mark.asyncio
    async def test_set_uses_expiry(self, redis):
        await RedisKeyValueStore(redis).set("otp:user:1", "123456", 300)

        redis.set.assert_awaited_once_with("otp:user:1", "123456", ex=300)

    @pytest.mark.asyncio
    async def test_take_runs_atomic_script(self, redis):
        redis.eval.return_value = "value"

        assert await RedisKeyValueStore(redis).take("k") == "value"
        redis.eval.assert_awaited_once_with(TAKE_SCRIPT, 1, "k")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("script_result, expected", [(1, True), (0, False), (None, False)])
    async def test_take_if_match_interprets_script_result(self, redis, script_result, expected):
        redis.eval.return_value = script_result

        assert await RedisKeyValueStore(redis).take_if_match("k", "123456") is expected
        redis.eval.assert_awaited_once_with(TAKE_IF_MATCH_SCRIPT, 1, "k", "123456")

    @pytest.mark.asyncio
    async def test_redis_errors_become_persistence_errors(self, redis):
        redis.get.side_effect = RedisConnectionError("down")

        with pytest.raises(PersistenceError):
            await RedisKeyValueStore(redis).get("k")


class TestArtefactStores:
    @pytest.mark.asyncio
    async def test_keys_are_prefixed(self):
        # Arrange
        backend = AsyncMock()
        user_id = uuid.uuid4()

        # Act
        await KeyValueOtpStore(backend).put(user_id, "123456", 300)
        await KeyValueOtpSessionStore(backend).put("session", user_id, 600)
        await KeyValuePendingPhoneChangeStore(backend).put(user_id, "+15557654321", 300)

        # Assert
        keys = [call.args[0] for call in backend.set.await_args_list]
        assert keys == [f"otp:user:{user_id}", "otp-session:session", f"pending-phone-change:{user_id}"]

    @pytest.mark.asyncio
    async def test_session_store_round_trips_user_id(self):
        store = KeyValueOtpSessionStore(InMemoryKeyValueStore())
        user_id = uuid.uuid4()
        await store.put("session", user_id, 600)

        assert await store.get_user_id("session") == user_id
        assert await store.take_user_id("session") == user_id
        assert await store.get_user_id("session") is None
