"""
The sixteen two-input boolean functions used to combine values inside a neuron.

A combinator code is an integer in [0, 16). Read as four bits, the code is the
truth table of its function: bit 0 holds the result for (True, True), bit 1 for
(True, False), bit 2 for (False, True) and bit 3 for (False, False).
"""

import enum
import numbers

import numpy as np

from bnl.errors import InvalidCombinator

NUM_COMBINATORS = 16


class Combinator(enum.IntEnum):
    """
    Names for every combinator code.
    """

    FALSE = 0
    AND = 1
    LEFT_AND_NOT_RIGHT = 2
    LEFT = 3
    NOT_LEFT_AND_RIGHT = 4
    RIGHT = 5
    XOR = 6
    OR = 7
    NOR = 8
    XNOR = 9
    NOT_RIGHT = 10
    LEFT_OR_NOT_RIGHT = 11
    NOT_LEFT = 12
    NOT_LEFT_OR_RIGHT = 13
    NAND = 14
    TRUE = 15


def _build_truth_table() -> np.ndarray:
    table = np.zeros((NUM_COMBINATORS, 2, 2), dtype=bool)
    for code in range(NUM_COMBINATORS):
        for left in (False, True):
            for right in (False, True):
                bit = 2 * (not left) + (not right)
                table[code, int(left), int(right)] = (code >> bit) & 1
    table.setflags(write=False)
    return table


# Indexed as TRUTH_TABLE[code, left, right]
TRUTH_TABLE = _build_truth_table()


def is_valid_combinator(code: int) -> bool:
    return isinstance(code, numbers.Integral) and 0 <= code < NUM_COMBINATORS


def compute_boolean(left: bool, right: bool, code: int) -> bool:
    """
    Compute the result of a combinator on two boolean values.

    Parameters
    ----------
    left : bool
        The left operand.
    right : bool
        The right operand.
    code : int
        The combinator to apply. Codes above 15 behave like `Combinator.TRUE`.

    Returns
    -------
    bool
        The combinator's output.

    Raises
    ------
    InvalidCombinator
        If `code` is negative or not an integer.
    """
    if not isinstance(code, numbers.Integral):
        raise InvalidCombinator(f"combinator codes must be integers, got {code!r}")
    if code < 0:
        raise InvalidCombinator(f"combinator codes cannot be negative, got {code}")
    if code >= NUM_COMBINATORS:
        return True
    return bool(TRUTH_TABLE[code, int(bool(left)), int(bool(right))])


def describe(code: int) -> str:
    """Get a short human-readable name for a combinator code."""
    if not is_valid_combinator(code):
        return f"INVALID({code})"
    return Combinator(code).name
