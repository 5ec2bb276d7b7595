import itertools as it

import numpy as np
import pytest

from bnl.combinators import (
    NUM_COMBINATORS,
    TRUTH_TABLE,
    Combinator,
    compute_boolean,
    describe,
    is_valid_combinator,
)
from bnl.errors import InvalidCombinator

EXPECTED = {
    0: lambda l, r: False,
    1: lambda l, r: l and r,
    2: lambda l, r: l and not r,
    3: lambda l, r: l,
    4: lambda l, r: not l and r,
    5: lambda l, r: r,
    6: lambda l, r: l != r,
    7: lambda l, r: l or r,
    8: lambda l, r: not (l or r),
    9: lambda l, r: l == r,
    10: lambda l, r: not r,
    11: lambda l, r: l or not r,
    12: lambda l, r: not l,
    13: lambda l, r: not l or r,
    14: lambda l, r: not (l and r),
    15: lambda l, r: True,
}

OPERANDS = list(it.product([False, True], repeat=2))


@pytest.mark.parametrize("code", range(NUM_COMBINATORS))
@pytest.mark.parametrize("left,right", OPERANDS)
def test_truth_table_matches_every_code(code, left, right):
    assert compute_boolean(left, right, code) is EXPECTED[code](left, right)


@pytest.mark.parametrize("left,right", OPERANDS)
def test_xor_and_xnor(left, right):
    assert compute_boolean(left, right, Combinator.XOR) == (left != right)
    assert compute_boolean(left, right, Combinator.XNOR) == (left == right)


@pytest.mark.parametrize("code", [16, 17, 200, 255])
@pytest.mark.parametrize("left,right", OPERANDS)
def test_out_of_range_codes_are_constant_true(code, left, right):
    assert compute_boolean(left, right, code) is True


def test_negative_code_is_rejected():
    with pytest.raises(InvalidCombinator):
        compute_boolean(True, False, -1)


def test_accepts_numpy_operands():
    assert compute_boolean(np.bool_(True), np.bool_(True), np.uint8(1)) is True


def test_truth_table_layout():
    assert TRUTH_TABLE.shape == (16, 2, 2)
    assert TRUTH_TABLE.dtype == bool
    assert not TRUTH_TABLE.flags.writeable
    assert not TRUTH_TABLE[Combinator.FALSE].any()
    assert TRUTH_TABLE[Combinator.TRUE].all()
    assert TRUTH_TABLE[Combinator.AND, 1, 1]
    assert not TRUTH_TABLE[Combinator.AND, 1, 0]


def test_named_codes():
    assert Combinator.AND == 1
    assert Combinator.OR == 7
    assert Combinator.NAND == 14
    assert [c.value for c in Combinator] == list(range(NUM_COMBINATORS))


def test_describe():
    assert describe(6) == "XOR"
    assert describe(0) == "FALSE"
    assert describe(16) == "INVALID(16)"


def test_is_valid_combinator():
    assert is_valid_combinator(0)
    assert is_valid_combinator(15)
    assert not is_valid_combinator(16)
    assert not is_valid_combinator(-1)


@pytest.mark.parametrize("code", [1.5, 3.0, "1", None])
def test_non_integer_code_is_rejected(code):
    with pytest.raises(InvalidCombinator):
        compute_boolean(True, True, code)
    assert not is_valid_combinator(code)
    assert describe(code).startswith("INVALID(")
