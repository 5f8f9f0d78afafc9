"""
Translation of storage errors into domain errors.

Stores wrap every storage call with ``translate_errors`` so that nothing
above the storage port ever handles a driver exception:

    with self.errors.translate_errors("loading group"):
        doc = await self._collection.find_one(...)

Mapping:
- any error in the exception chain carrying the TransientTransactionError
  label -> TransientTransactionError
- configured "not found" types -> NotFoundError
- configured "duplicate" types -> AlreadyExistsError
- anything else -> StorageError (details are logged, not exposed)
"""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger

from txgroups.domain.errors import (
    AlreadyExistsError,
    DomainError,
    NotFoundError,
    StorageError,
    TransientTransactionError,
)

# Label attached by MongoDB (and by the in-memory store) to errors after
# which the whole transaction can be retried.
TRANSIENT_TRANSACTION_LABEL = "TransientTransactionError"


def iter_error_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield exc and every error it was raised from, outermost first."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def has_error_label(exc: BaseException, label: str) -> bool:
    """
    Check whether any error in the chain carries a label.

    Labelled errors expose ``has_error_label(label)``, as
    pymongo.errors.PyMongoError does.
    """
    for current in iter_error_chain(exc):
        check = getattr(current, "has_error_label", None)
        if callable(check) and check(label):
            return True
    return False


class ErrorTranslator:
    """
    Maps the errors of one storage backend onto domain errors.

    Args:
        not_found: Exception types meaning "no matching document"
        already_exists: Exception types meaning "duplicate key"
    """

    def __init__(
        self,
        not_found: tuple[type[Exception], ...] = (),
        already_exists: tuple[type[Exception], ...] = (),
    ):
        self.not_found = not_found
        self.already_exists = already_exists

    def translate(self, exc: Exception, operation: str) -> DomainError:
        """
        Translate a storage error.

        Args:
            exc: Error raised by the storage backend
            operation: What was being done, used in the message

        Returns:
            Matching domain error
        """
        if isinstance(exc, DomainError):
            return exc

        if has_error_label(exc, TRANSIENT_TRANSACTION_LABEL):
            return TransientTransactionError(f"{operation}: transient transaction failure")

        if self.not_found and isinstance(exc, self.not_found):
            return NotFoundError(f"{operation}: not found")

        if self.already_exists and isinstance(exc, self.already_exists):
            return AlreadyExistsError(f"{operation}: already exists")

        logger.opt(exception=exc).debug(f"Storage failure while {operation}")
        return StorageError(f"{operation}: storage failure")

    @contextmanager
    def translate_errors(self, operation: str) -> Iterator[None]:
        """Re-raise any storage error in the block as a domain error."""
        try:
            yield
        except DomainError:
            raise
        except Exception as e:
            raise self.translate(e, operation) from None
