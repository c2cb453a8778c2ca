# SPDX-License-Identifier: MIT
"""Letter-case checks shared by the *-case rules."""

from __future__ import annotations

from collections.abc import Callable

CASES: dict[str, Callable[[str], bool]] = {
    "lower-case": lambda text: text == text.lower(),
    "upper-case": lambda text: text == text.upper(),
}


def is_case(text: str, case: str) -> bool:
    """Return True if *text* is already in *case*."""
    return CASES[case](text)
