"""
Retry combinators over fallible results.

Retries are bounded synchronous loops with no delay between attempts;
callers wanting a backoff sleep inside the operation they supply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from witcher.error import Error, type_name
from witcher.telemetry.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

logger = get_logger("witcher.resilience")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a fallible operation.

    Attributes:
        value: The result value (if success)
        error: The failure (if failed)

    Example:
        >>> result = Result.capture(int, "x")
        >>> result.retry(2, lambda attempt: int("4")).unwrap()
        4
    """

    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> Result[T]:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: BaseException) -> Result[T]:
        """Create a failed result."""
        return cls(error=error)

    @classmethod
    def capture(cls, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
        """Call fn, capturing any raised exception as a failure."""
        try:
            return cls.ok(fn(*args, **kwargs))
        except Exception as e:
            return cls.fail(e)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising the failure if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def wrap(self, message: object) -> Result[T]:
        """Wrap a failure in an Error carrying message; successes pass through."""
        if self.error is None:
            return self
        return Result.fail(Error.wrap(self.error, message))

    def err_is(self, target: type[BaseException]) -> bool:
        return err_is(self, target)

    def retry(self, max_retries: int, operation: Callable[[int], Any]) -> Result[Any]:
        return retry(self, max_retries, operation)

    def retry_on(
        self,
        max_retries: int,
        target: type[BaseException],
        operation: Callable[[int], Any],
    ) -> Result[Any]:
        return retry_on(self, max_retries, target, operation)


def err_is(result: Result[Any], target: type[BaseException]) -> bool:
    """Check whether result failed with an error of exactly type target.

    Only the immediate error is checked; chains are not walked.
    """
    return result.error is not None and type(result.error) is target


def _invoke(operation: Callable[[int], Any], attempt: int) -> Result[Any]:
    try:
        outcome = operation(attempt)
    except Exception as e:
        return Result.fail(e)
    return outcome if isinstance(outcome, Result) else Result.ok(outcome)


def _check_budget(max_retries: int) -> None:
    if max_retries < 0:
        raise ValueError(f"max_retries must be non-negative, got {max_retries}")


def retry(
    result: Result[Any],
    max_retries: int,
    operation: Callable[[int], Any],
) -> Result[Any]:
    """Re-run an operation while the result is a failure.

    Args:
        result: Outcome of the first attempt
        max_retries: Maximum number of retries (0 = never call operation)
        operation: Called with the retry number, starting at 1. It may return
            a value, return a Result, or raise.

    Returns:
        The first success, or the last failure unchanged
    """
    _check_budget(max_retries)
    attempt = 0
    while result.is_err and attempt < max_retries:
        attempt += 1
        logger.debug(
            "Retrying operation",
            attempt=attempt,
            max_retries=max_retries,
            error_type=type_name(result.error),
        )
        result = _invoke(operation, attempt)
    return result


def retry_on(
    result: Result[Any],
    max_retries: int,
    target: type[BaseException],
    operation: Callable[[int], Any],
) -> Result[Any]:
    """Re-run an operation while the result fails with exactly type target.

    A failure of any other type ends the loop and is returned as-is.

    Args:
        result: Outcome of the first attempt
        max_retries: Maximum number of retries
        target: Error type eligible for retry
        operation: Called with the retry number, starting at 1

    Returns:
        The first success, the first ineligible failure, or the last failure
    """
    _check_budget(max_retries)
    attempt = 0
    while err_is(result, target) and attempt < max_retries:
        attempt += 1
        logger.debug(
            "Retrying operation on matching error",
            attempt=attempt,
            max_retries=max_retries,
            error_type=type_name(target),
        )
        result = _invoke(operation, attempt)
    return result
