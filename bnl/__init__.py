"""
Layered networks of boolean-logic neurons.
"""

from bnl.combinators import NUM_COMBINATORS, Combinator, compute_boolean
from bnl.errors import BnlError, DimensionMismatch, InvalidCombinator, InvalidInputLength
from bnl.network import Layer, Network, Neuron, zip_combinator
from bnl.random_source import NumpyRandomSource, RandomSource, default_source

__version__ = "0.1.0"

__all__ = [
    "NUM_COMBINATORS",
    "BnlError",
    "Combinator",
    "DimensionMismatch",
    "InvalidCombinator",
    "InvalidInputLength",
    "Layer",
    "Network",
    "Neuron",
    "NumpyRandomSource",
    "RandomSource",
    "compute_boolean",
    "default_source",
    "zip_combinator",
]
