"""Session store: versioned optimistic writes of the cart blob."""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.domain.errors import CartConflict, StorageUnavailable
from app.domain.schemas import CartLine, CartState
from app.repos.cart_repo import CartRepo


class DownRedis:
    def get(self, key):
        raise RedisConnectionError("connection refused")

    def pipeline(self):
        raise RedisConnectionError("connection refused")


@pytest.fixture()
def repo(redis_client):
    return CartRepo(redis_client, ttl=600)


def test_missing_cart_is_empty(repo):
    state = repo.get("nobody")
    assert state.version == 0
    assert state.lines == []


def test_mutate_bumps_version_and_persists(repo, redis_client):
    def add(state):
        state.lines.append(CartLine(product_id="A", quantity=2))
        return "done"

    result, state = repo.mutate("u1", add)

    assert result == "done"
    assert state.version == 1
    stored = CartState.model_validate_json(redis_client.get("cart:u1"))
    assert stored.version == 1
    assert stored.lines[0].product_id == "A"
    assert stored.lines[0].quantity == 2


def test_mutate_refreshes_ttl(repo, redis_client):
    repo.mutate("u1", lambda s: None)
    assert 0 < redis_client.ttl("cart:u1") <= 600


def test_concurrent_write_is_reapplied_not_lost(repo, redis_client):
    calls = []

    def add_b(state):
        calls.append(state.version)
        if len(calls) == 1:
            # another tab writes between our read and our write
            other = CartState(version=7, lines=[CartLine(product_id="A", quantity=1)])
            redis_client.set("cart:u1", other.model_dump_json())
        state.lines.append(CartLine(product_id="B", quantity=1))

    _, state = repo.mutate("u1", add_b)

    assert calls == [0, 7]
    assert state.version == 8
    assert [line.product_id for line in state.lines] == ["A", "B"]


def test_conflict_after_retries_are_exhausted(repo, redis_client):
    def always_raced(state):
        redis_client.set("cart:u1", CartState(version=state.version + 1).model_dump_json())

    with pytest.raises(CartConflict):
        repo.mutate("u1", always_raced)


def test_connection_failure_is_storage_unavailable():
    repo = CartRepo(DownRedis())

    with pytest.raises(StorageUnavailable):
        repo.get("u1")

    with pytest.raises(StorageUnavailable):
        repo.mutate("u1", lambda s: None)
