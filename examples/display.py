#!/usr/bin/env python3
"""
Display modes example.

Shows the three renderings of the same error chain:
- terse: the outermost message, safe for single-line logs
- detailed: every message plus the foreign cause
- full: every message with the frames each wrap site added

Usage:
    python examples/display.py [terse|detailed|full]
    WITCHER_FULLSTACK=1 python examples/display.py full
    WITCHER_COLOR=0 python examples/display.py full
"""

import sys

from witcher import Error, wrap


@wrap("Failed to slay beast")
def do_something() -> None:
    do_another_thing()


@wrap("Failed during sword swing")
def do_another_thing() -> None:
    do_final_thing()


def do_final_thing() -> None:
    raise OSError("Oh no, we missed!")


def main() -> None:
    mode = sys.argv[1] if len(sys.argv) > 1 else "full"
    try:
        do_something()
    except Error as err:
        if mode == "terse":
            print(err)
        elif mode == "detailed":
            print(err.detailed())
        else:
            print(err.full())


if __name__ == "__main__":
    main()
