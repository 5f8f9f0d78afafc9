"""
Unit tests for storage error translation.

Tests label detection through exception chains and the mapping of driver
errors onto domain errors.
"""

import pytest
from pymongo.errors import DuplicateKeyError, OperationFailure

from txgroups.domain import (
    AlreadyExistsError,
    ErrorKind,
    GroupFullError,
    NotFoundError,
    StorageError,
    TransientTransactionError,
)
from txgroups.infrastructure.errors import (
    TRANSIENT_TRANSACTION_LABEL,
    ErrorTranslator,
    has_error_label,
    iter_error_chain,
)


class LookupFailed(Exception):
    pass


def write_conflict() -> OperationFailure:
    return OperationFailure(
        "WriteConflict",
        code=112,
        details={"errorLabels": [TRANSIENT_TRANSACTION_LABEL], "code": 112},
    )


@pytest.fixture
def translator():
    return ErrorTranslator(not_found=(LookupFailed,), already_exists=(DuplicateKeyError,))


def test_has_error_label_on_driver_error():
    """Test a labelled pymongo error is detected."""
    assert has_error_label(write_conflict(), TRANSIENT_TRANSACTION_LABEL)
    assert not has_error_label(OperationFailure("boom"), TRANSIENT_TRANSACTION_LABEL)


def test_has_error_label_through_cause():
    """Test the label is found on a wrapped error."""
    try:
        try:
            raise write_conflict()
        except OperationFailure as e:
            raise RuntimeError("wrapper") from e
    except RuntimeError as wrapper:
        assert has_error_label(wrapper, TRANSIENT_TRANSACTION_LABEL)


def test_translate_label_deep_in_chain(translator):
    """Test a labelled error several causes down is still transient."""
    error: BaseException = write_conflict()
    for depth in range(5):
        wrapper = RuntimeError(f"layer {depth}")
        wrapper.__cause__ = error
        error = wrapper

    assert isinstance(translator.translate(error, "committing"), TransientTransactionError)


def test_has_error_label_on_plain_exception():
    """Test errors without labels never match."""
    assert not has_error_label(ValueError("nope"), TRANSIENT_TRANSACTION_LABEL)


def test_iter_error_chain_stops_on_cycles():
    """Test a cyclic chain is walked once."""
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first

    assert list(iter_error_chain(first)) == [first, second]


def test_translate_transient(translator):
    """Test labelled errors become transient transaction errors."""
    error = translator.translate(write_conflict(), "updating group")

    assert isinstance(error, TransientTransactionError)
    assert error.kind is ErrorKind.TRANSIENT_TRANSACTION
    assert "updating group" in str(error)


def test_translate_not_found(translator):
    """Test configured not-found types become NotFoundError."""
    error = translator.translate(LookupFailed("missing"), "loading group")

    assert isinstance(error, NotFoundError)


def test_translate_duplicate(translator):
    """Test duplicate key errors become AlreadyExistsError."""
    error = translator.translate(
        DuplicateKeyError("E11000 duplicate key error", code=11000), "creating group"
    )

    assert isinstance(error, AlreadyExistsError)


def test_translate_unknown_error_hides_details(translator):
    """Test unexpected errors become StorageError without driver details."""
    error = translator.translate(OSError("socket closed at 10.0.0.7"), "loading group")

    assert isinstance(error, StorageError)
    assert "10.0.0.7" not in str(error)


def test_translate_keeps_domain_errors(translator):
    """Test domain errors are returned unchanged."""
    original = GroupFullError()

    assert translator.translate(original, "updating group") is original


def test_translate_errors_context_manager(translator):
    """Test the context manager re-raises translated errors."""
    with pytest.raises(NotFoundError):
        with translator.translate_errors("loading group"):
            raise LookupFailed("missing")


def test_translate_errors_passes_domain_errors_through(translator):
    """Test domain errors raised in the block are not wrapped."""
    original = GroupFullError()

    with pytest.raises(GroupFullError) as exc_info:
        with translator.translate_errors("updating group"):
            raise original

    assert exc_info.value is original


def test_translate_errors_without_error(translator):
    """Test the block runs normally when nothing fails."""
    with translator.translate_errors("loading group"):
        result = 42

    assert result == 42
