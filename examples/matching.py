#!/usr/bin/env python3
"""
Type matching example.

Walks an error chain and handles each link by its exact type.

Usage:
    python examples/matching.py
"""

from witcher import ChainPosition, Error, match_err


class SuperError(Exception):
    def __init__(self) -> None:
        super().__init__("SuperError is here!")
        self.__cause__ = SuperErrorSideKick("SuperErrorSideKick is here!")


class SuperErrorSideKick(Exception):
    pass


def do_something() -> None:
    try:
        do_external_thing()
    except SuperError as exc:
        raise Error.wrap(exc, "Failed doing super hero work") from exc


def do_external_thing() -> None:
    raise SuperError()


def main() -> None:
    try:
        do_something()
    except Error as err:
        # Root cause only
        root = err.downcast(SuperErrorSideKick, ChainPosition.LAST)
        if root is not None:
            print(f"Root cause is SuperErrorSideKick: {root}")

        # Every link in the chain
        for link in [err, *err.sources()]:
            match_err(
                link,
                [
                    (Error, lambda e: print(f"Found witcher.Error: {e}")),
                    (SuperError, lambda e: print(f"Found SuperError: {e}")),
                    (SuperErrorSideKick, lambda e: print(f"Found SuperErrorSideKick: {e}")),
                ],
                default=lambda e: print("unknown"),
            )


if __name__ == "__main__":
    main()
