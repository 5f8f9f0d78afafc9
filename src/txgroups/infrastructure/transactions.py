"""
Transaction retry engine.

Stores start one session per run_in_transaction call and hand
run_with_retries a coroutine that performs one attempt: open a transaction,
run the unit of work, commit. This module decides what happens after each
attempt:

- the attempt returns -> success, stop
- the attempt raises a TRANSIENT_TRANSACTION domain error -> try again,
  at most max_retries times after the first attempt
- the attempt raises anything else -> permanent, re-raise without retrying

When every attempt fails transiently, RetriesExhaustedError is raised so
callers can tell "still racing" apart from "something else broke".

Cancellation (asyncio.CancelledError, or the TimeoutError of a caller's
asyncio.timeout block) is not a domain error: it propagates right away and
no further attempt starts.

The session of the running transaction is published through a ContextVar,
so repository calls made by the unit of work join the transaction without
the session being passed around.
"""

import contextvars
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger

from txgroups.domain.errors import DomainError, ErrorKind, RetriesExhaustedError

Attempt = Callable[[int], Awaitable[None]]

transaction_session_context: contextvars.ContextVar[Any | None] = (
    contextvars.ContextVar("transaction_session", default=None)
)


def current_session() -> Any | None:
    """Session of the transaction running in this task, if any."""
    return transaction_session_context.get()


@contextmanager
def bind_session(session: Any) -> Iterator[None]:
    """Publish session as the current transaction session within the block."""
    token = transaction_session_context.set(session)
    try:
        yield
    finally:
        transaction_session_context.reset(token)


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, DomainError) and exc.kind is ErrorKind.TRANSIENT_TRANSACTION


async def run_with_retries(attempt: Attempt, max_retries: int) -> None:
    """
    Run attempt until it succeeds, fails permanently or retries run out.

    Args:
        attempt: Coroutine function running one transaction attempt; it
            receives the attempt number, starting at 0
        max_retries: Retries allowed after the first attempt

    Raises:
        ValueError: If max_retries is negative
        RetriesExhaustedError: If all max_retries + 1 attempts failed
            transiently
        Exception: The first non-transient error raised by an attempt
    """
    if max_retries < 0:
        raise ValueError(f"max_retries cannot be negative, got {max_retries}")

    last_error: DomainError | None = None

    for attempt_number in range(max_retries + 1):
        if attempt_number > 0:
            logger.info(f"Retrying transaction, retry {attempt_number}/{max_retries}")

        try:
            await attempt(attempt_number)
        except DomainError as e:
            if not is_transient(e):
                logger.info(
                    f"Transaction failed with permanent error, attempt {attempt_number}: {e}"
                )
                raise

            logger.warning(
                f"Transaction failed with transient error, attempt {attempt_number}: {e}"
            )
            last_error = e
            continue

        logger.debug(f"Transaction committed, attempt {attempt_number}")
        return

    raise RetriesExhaustedError(
        f"transaction failed after {max_retries + 1} attempts"
    ) from last_error
