"""Tests for retry combinators."""

import logging

import pytest

from witcher.error import Error
from witcher.resilience import Result, err_is, retry, retry_on


class IoLike(Exception):
    pass


class ParseLike(Exception):
    pass


class Counter:
    """Operation that fails a fixed number of times before succeeding."""

    def __init__(self, failures: int, error: type[Exception] = IoLike) -> None:
        self.failures = failures
        self.error = error
        self.attempts: list[int] = []

    def __call__(self, attempt: int) -> str:
        self.attempts.append(attempt)
        if len(self.attempts) <= self.failures:
            raise self.error(f"attempt {attempt} failed")
        return "done"


class TestResult:
    """Tests for Result."""

    def test_ok(self) -> None:
        """Test successful result."""
        result = Result.ok(5)
        assert result.is_ok
        assert not result.is_err
        assert result.unwrap() == 5

    def test_fail(self) -> None:
        """Test failed result raises on unwrap."""
        result = Result.fail(IoLike("Oh no, we missed!"))
        assert result.is_err
        with pytest.raises(IoLike):
            result.unwrap()

    def test_capture(self) -> None:
        """Test capture converts exceptions into failures."""
        assert Result.capture(int, "4").value == 4
        failed = Result.capture(int, "x")
        assert isinstance(failed.error, ValueError)

    def test_wrap(self) -> None:
        """Test wrap adds a chain node to failures only."""
        cause = IoLike("Oh no, we missed!")
        wrapped = Result.fail(cause).wrap("Failed while attacking beast")
        assert isinstance(wrapped.error, Error)
        assert wrapped.error.cause is cause
        assert str(wrapped.error) == "Failed while attacking beast"

        ok = Result.ok("value")
        assert ok.wrap("unused") is ok


class TestErrIs:
    """Tests for err_is."""

    def test_exact_type(self) -> None:
        """Test exact failure types match."""
        assert err_is(Result.fail(IoLike()), IoLike)
        assert Result.fail(IoLike()).err_is(IoLike)

    def test_success_never_matches(self) -> None:
        """Test a success is never a matching failure."""
        assert not err_is(Result.ok(), IoLike)

    def test_no_subclass_or_chain_match(self) -> None:
        """Test neither supertypes nor wrapped causes match."""
        assert not err_is(Result.fail(IoLike()), Exception)
        assert not err_is(Result.fail(IoLike()).wrap("ctx"), IoLike)


class TestRetry:
    """Tests for retry."""

    def test_zero_retries(self) -> None:
        """Test a zero budget never invokes the operation."""
        op = Counter(failures=0)
        first = Result.fail(IoLike("first"))
        assert retry(first, 0, op) is first
        assert op.attempts == []

    def test_success_skips_retry(self) -> None:
        """Test a successful result is returned untouched."""
        op = Counter(failures=0)
        first = Result.ok("value")
        assert retry(first, 3, op) is first
        assert op.attempts == []

    def test_stops_on_success(self) -> None:
        """Test retries stop as soon as an attempt succeeds."""
        op = Counter(failures=1)
        result = retry(Result.fail(IoLike()), 5, op)
        assert result.unwrap() == "done"
        assert op.attempts == [1, 2]

    def test_exhausted(self) -> None:
        """Test exhaustion returns the last failure."""
        op = Counter(failures=10)
        result = Result.fail(IoLike("first")).retry(3, op)
        assert op.attempts == [1, 2, 3]
        assert str(result.error) == "attempt 3 failed"

    def test_any_error_retried(self) -> None:
        """Test retry does not look at the failure type."""
        op = Counter(failures=1, error=ParseLike)
        result = retry(Result.fail(IoLike()), 3, op)
        assert result.is_ok
        assert op.attempts == [1, 2]

    def test_operation_returning_result(self) -> None:
        """Test a returned Result is used as the next outcome."""
        result = retry(Result.fail(IoLike()), 2, lambda attempt: Result.ok(attempt * 10))
        assert result.value == 10

    def test_negative_budget(self) -> None:
        """Test a negative budget is rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            retry(Result.fail(IoLike()), -1, Counter(failures=0))

    def test_logs_attempts(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test each retry is logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="witcher.resilience")
        retry(Result.fail(IoLike()), 2, Counter(failures=10))
        records = [r for r in caplog.records if r.name == "witcher.resilience"]
        assert [r.extra_fields["attempt"] for r in records] == [1, 2]  # type: ignore[attr-defined]


class TestRetryOn:
    """Tests for retry_on."""

    def test_always_failing(self) -> None:
        """Test an always-failing matching operation runs max times."""
        op = Counter(failures=10)
        result = retry_on(Result.fail(IoLike()), 3, IoLike, op)
        assert op.attempts == [1, 2, 3]
        assert isinstance(result.error, IoLike)

    def test_other_type_not_retried(self) -> None:
        """Test a non-matching failure is returned without retrying."""
        op = Counter(failures=0)
        first = Result.fail(ParseLike("bad"))
        assert retry_on(first, 3, IoLike, op) is first
        assert op.attempts == []

    def test_stops_when_type_changes(self) -> None:
        """Test the loop ends on the first failure of another type."""
        calls: list[int] = []

        def op(attempt: int) -> None:
            calls.append(attempt)
            raise ParseLike("parse failed")

        result = Result.fail(IoLike()).retry_on(5, IoLike, op)
        assert calls == [1]
        assert isinstance(result.error, ParseLike)

    def test_subclass_not_retried(self) -> None:
        """Test failures of a subtype are not eligible."""

        class SubIo(IoLike):
            pass

        op = Counter(failures=0)
        retry_on(Result.fail(SubIo()), 3, IoLike, op)
        assert op.attempts == []

    def test_success(self) -> None:
        """Test a matching failure is retried until success."""
        op = Counter(failures=2)
        result = retry_on(Result.fail(IoLike()), 5, IoLike, op)
        assert result.unwrap() == "done"
        assert op.attempts == [1, 2, 3]

    def test_wrap_after_retry(self, plain) -> None:
        """Test exhaustion composes with wrap."""
        op = Counter(failures=10)
        result = retry_on(Result.fail(IoLike()), 3, IoLike, op).wrap("Failed while attacking beast")
        assert isinstance(result.error, Error)
        assert result.error.detailed(plain).splitlines() == [
            " error: Failed while attacking beast",
            f" cause: {IoLike.__module__}.IoLike: attempt 3 failed",
        ]
