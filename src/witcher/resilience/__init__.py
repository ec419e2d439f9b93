"""
Resilience layer - Retry combinators over fallible results.

- Result: Success or failure of a fallible operation
- retry: Bounded retry of any failure
- retry_on: Bounded retry of failures of one exact type
- err_is: Exact-type check of a result's failure
"""

from witcher.resilience.retry import Result, err_is, retry, retry_on

__all__ = [
    "Result",
    "err_is",
    "retry",
    "retry_on",
]
