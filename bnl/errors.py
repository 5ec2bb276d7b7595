"""
Errors raised while building or evaluating a `bnl` network.
"""


class BnlError(Exception):
    """Base class for every error raised by this package."""


class DimensionMismatch(BnlError, ValueError):
    """
    An input vector does not have the length a layer or network expects.

    Parameters
    ----------
    expected : int
        The declared input length.
    actual : int
        The length of the vector that was supplied.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected an input of length {expected}, got {actual}")


class InvalidInputLength(BnlError, RuntimeError):
    """
    A neuron was asked to fold fewer than two inputs.

    Neurons built through `Network.new` can never see such an input, so this
    signals a construction bug rather than bad user data.
    """


class InvalidCombinator(BnlError, ValueError):
    """A neuron was given a combinator code or combinator vector it cannot use."""
