#!/usr/bin/env python3
"""
Retry example.

Retries a failing operation, first on any error and then only while the
error is of one concrete type, and wraps the final failure with context.

Usage:
    python examples/retry.py
"""

from witcher import Result, retry, retry_on
from witcher.telemetry import LogLevel, WitcherLogger


def do_external_thing(attempt: int = 0) -> None:
    raise OSError("Oh no, we missed!")


def retry_any() -> Result[None]:
    def op(attempt: int) -> None:
        print(f"retrying! #{attempt}")
        do_external_thing(attempt)

    return retry(Result.capture(do_external_thing), 3, op).wrap("Failed while attacking beast")


def retry_on_type() -> Result[None]:
    def op(attempt: int) -> None:
        print(f"OSError: retrying! #{attempt}")
        do_external_thing(attempt)

    return retry_on(Result.capture(do_external_thing), 3, OSError, op).wrap(
        "Failed while attacking beast"
    )


def retry_with_err_is() -> Result[None]:
    retries = 0
    result = Result.capture(do_external_thing)
    while retries < 3 and result.err_is(OSError):
        retries += 1
        print(f"retrying using err_is #{retries}")
        result = Result.capture(do_external_thing)
    return result.wrap("Failed while attacking beast")


def main() -> None:
    WitcherLogger.configure(level=LogLevel.DEBUG, format="text")

    print(retry_any().error.full())  # type: ignore[union-attr]
    print()
    print(retry_on_type().error.detailed())  # type: ignore[union-attr]
    print()
    print(retry_with_err_is().error)


if __name__ == "__main__":
    main()
