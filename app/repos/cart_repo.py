# app/repos/cart_repo.py
from typing import Callable, Tuple, TypeVar

import redis
from redis.exceptions import WatchError, ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError

from app.domain.errors import CartConflict, StorageUnavailable
from app.domain.schemas import CartState
from app.utils.retry import cart_write_retry
from app.utils.settings import CART_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CartRepo:
    """
    Session store for carts: one JSON blob per user in redis.

    Every mutation is a full read-modify-write of the blob guarded by WATCH,
    so a concurrent write from another tab makes EXEC fail instead of being
    silently overwritten. The mutation is then re-read and re-applied.
    """

    def __init__(self, client: redis.Redis, ttl: int = CART_TTL_SECONDS):
        self.redis = client
        self.ttl = ttl

    @staticmethod
    def key(user_id: str) -> str:
        return f"cart:{user_id}"

    def get(self, user_id: str) -> CartState:
        try:
            raw = self.redis.get(self.key(user_id))
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.error(f"Cart store unavailable while reading cart of {user_id}: {e}")
            raise StorageUnavailable("Cart store is unavailable") from e
        return self._decode(raw)

    def mutate(self, user_id: str, fn: Callable[[CartState], T]) -> Tuple[T, CartState]:
        """
        Applies fn to the current cart and writes it back with version + 1.
        Returns fn's result and the stored state.
        """
        try:
            return self._mutate(user_id, fn)
        except WatchError as e:
            logger.warning(f"Cart of {user_id} kept changing, giving up")
            raise CartConflict("Cart was modified concurrently, try again") from e
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.error(f"Cart store unavailable while writing cart of {user_id}: {e}")
            raise StorageUnavailable("Cart store is unavailable") from e

    @cart_write_retry()
    def _mutate(self, user_id: str, fn: Callable[[CartState], T]) -> Tuple[T, CartState]:
        key = self.key(user_id)
        with self.redis.pipeline() as pipe:
            #WATCH + GET, pipeline is in immediate mode until multi()
            pipe.watch(key)
            state = self._decode(pipe.get(key))
            result = fn(state)
            state.version += 1

            pipe.multi()
            pipe.set(key, state.model_dump_json(), ex=self.ttl)
            pipe.execute()

        return result, state

    @staticmethod
    def _decode(raw) -> CartState:
        if not raw:
            return CartState()
        return CartState.model_validate_json(raw)
