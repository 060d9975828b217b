"""
Wait for a document store to come up before a test session starts.
"""
from tenacity import RetryError, Retrying, retry_if_result, stop_after_attempt, wait_exponential

from ..core.context import ExecutionContext
from ..core.exceptions import StoreUnavailableError
from ..utils.logging import get_logger
from .base import DocumentStore

logger = get_logger(__name__)


def wait_for_store(
    store: DocumentStore,
    *,
    attempts: int = 10,
    max_wait: float = 5.0,
    context: ExecutionContext | None = None
) -> None:
    """
    Ping the store until it answers.

    Args:
        store: Store to probe
        attempts: Pings before giving up
        max_wait: Upper bound of the exponential backoff between pings, in seconds
        context: Execution context; cancellation aborts the wait

    Raises:
        StoreUnavailableError: If the store never answered
        StoreCancelledError: If the context was cancelled while waiting
    """
    context = context or ExecutionContext.background()
    url = getattr(store, "base_url", store.__class__.__name__)

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.2, max=max_wait),
        retry=retry_if_result(lambda ready: not ready),
        before_sleep=lambda state: logger.info(
            "store_not_ready", url=url, attempt=state.attempt_number
        ),
    )

    try:
        retrying(store.ping, context)
    except RetryError as e:
        logger.error("store_unavailable", url=url, attempts=attempts)
        raise StoreUnavailableError(url, attempts) from e

    logger.info("store_ready", url=url)
