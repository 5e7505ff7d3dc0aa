# app/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from redis.exceptions import WatchError

from app.utils.settings import CART_WRITE_ATTEMPTS


def cart_write_retry():
    #only cart version conflicts, connection errors are never retried
    return retry(
        reraise=True,
        stop=stop_after_attempt(CART_WRITE_ATTEMPTS),
        wait=wait_exponential(multiplier=0.01, min=0.01, max=0.2),
        retry=retry_if_exception_type(WatchError),
    )
