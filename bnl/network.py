"""
Components of a `bnl` network: neurons, layers, and whole networks.

A neuron folds its input vector into a single bit with a chain of combinators,
then mixes that bit with its bias through one more combinator. A layer runs
every neuron on the same input, and a network threads an input through its
layers in order.

`apply` is the source of truth for how a network behaves. The batched `forward`
methods vectorize the same computation with numpy and must agree with `apply`
on every row.
"""

import itertools as it
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from bnl import combinators
from bnl.combinators import NUM_COMBINATORS, TRUTH_TABLE, compute_boolean
from bnl.errors import DimensionMismatch, InvalidCombinator, InvalidInputLength
from bnl.random_source import RandomSource, default_source

logger = logging.getLogger(__name__)

# Biases, input combinators, result combinators
LayerParams = Tuple[np.ndarray, np.ndarray, np.ndarray]
NetworkParams = List[LayerParams]


# From: https://docs.python.org/3/library/itertools.html
def pairwise(iterable):
    "s -> (s0,s1), (s1,s2), (s2, s3), ..."
    a, b = it.tee(iterable)
    next(b, None)
    return zip(a, b)


def zip_combinator(inputs: Sequence[bool], input_combinators: Sequence[int]) -> bool:
    """
    Fold an input vector into one value with a chain of combinators.

    The fold is right-associative: combinator `i` joins `inputs[i]` with the
    already-folded result of everything to its right. For three inputs this is
        c0(x0, c1(x1, x2)).

    Parameters
    ----------
    inputs : Sequence[bool]
        The values to fold. Must hold at least two elements.
    input_combinators : Sequence[int]
        One combinator code per adjacent pair, so at least `len(inputs) - 1` of
        them. Any extra codes are unused.

    Returns
    -------
    bool
        The folded value.

    Raises
    ------
    InvalidInputLength
        If `inputs` has fewer than two elements.
    InvalidCombinator
        If there are too few combinators for the inputs.
    """
    n = len(inputs)
    if n < 2:
        raise InvalidInputLength(f"cannot fold an input of length {n}")
    if len(input_combinators) < n - 1:
        raise InvalidCombinator(
            f"folding {n} inputs needs {n - 1} combinators, got {len(input_combinators)}"
        )

    result = bool(inputs[n - 1])
    for i in range(n - 2, -1, -1):
        result = compute_boolean(inputs[i], result, input_combinators[i])
    return result


def _check_code(code: int) -> int:
    if not combinators.is_valid_combinator(code):
        raise InvalidCombinator(
            f"combinator codes must be in [0, {NUM_COMBINATORS}), got {code!r}"
        )
    return int(code)


class Neuron:
    """
    A single neuron within a `bnl` network.

    Neurons are immutable and compare by value.

    Parameters
    ----------
    bias : bool
        The neuron's bias.
    input_combinators : Sequence[int]
        The combinator codes used to fold the input vector, one per adjacent pair
        of inputs. A neuron with `k` input combinators takes `k + 1` inputs.
    result_combinator : int
        The combinator joining the folded input with the bias.

    Raises
    ------
    InvalidCombinator
        If any code is not an integer in [0, 16).
    InvalidInputLength
        If there are no input combinators, which would make a neuron of fewer
        than two inputs.
    """

    _bias: bool
    _input_combinators: Tuple[int, ...]
    _result_combinator: int

    __slots__ = ("_bias", "_input_combinators", "_result_combinator")

    def __init__(
        self, bias: bool, input_combinators: Sequence[int], result_combinator: int
    ):
        if len(input_combinators) == 0:
            raise InvalidInputLength("a neuron needs at least two inputs")
        self._bias = bool(bias)
        self._input_combinators = tuple(_check_code(c) for c in input_combinators)
        self._result_combinator = _check_code(result_combinator)

    @classmethod
    def new(cls, input_len: int, rng: Optional[RandomSource] = None) -> "Neuron":
        """
        Create a new randomized neuron with the given input vector length.

        Draws the bias first, then `input_len - 1` input combinators, then the
        result combinator.

        Parameters
        ----------
        input_len : int
            The number of inputs the neuron takes. Must be at least 2.
        rng : Optional[RandomSource] (default: None)
            Where to draw random values from. If None, a fresh unseeded source.
        """
        if input_len < 2:
            raise InvalidInputLength(
                f"a neuron needs at least two inputs, got {input_len}"
            )
        rng = rng if rng is not None else default_source()

        bias = rng.next_bool()
        input_combinators = [
            rng.next_in_range(0, NUM_COMBINATORS) for _ in range(input_len - 1)
        ]
        result_combinator = rng.next_in_range(0, NUM_COMBINATORS)
        return cls(bias, input_combinators, result_combinator)

    @property
    def bias(self) -> bool:
        return self._bias

    @property
    def input_combinators(self) -> Tuple[int, ...]:
        return self._input_combinators

    @property
    def result_combinator(self) -> int:
        return self._result_combinator

    @property
    def input_len(self) -> int:
        return len(self._input_combinators) + 1

    def apply(self, inputs: Sequence[bool]) -> bool:
        """
        "Apply" this neuron to an input vector of boolean values.

        Raises
        ------
        InvalidInputLength
            If `inputs` has fewer than two elements.
        DimensionMismatch
            If `inputs` does not have exactly `input_len` elements.
        """
        return self.apply_result(self.apply_input(inputs))

    def apply_input(self, inputs: Sequence[bool]) -> bool:
        """
        "Apply" only the input combinators of this neuron to an input vector.
        """
        if len(inputs) < 2:
            raise InvalidInputLength(f"cannot fold an input of length {len(inputs)}")
        if len(inputs) != self.input_len:
            raise DimensionMismatch(self.input_len, len(inputs))
        return zip_combinator(inputs, self._input_combinators)

    def apply_result(self, value: bool) -> bool:
        """
        "Apply" the result combinator to a folded value and this neuron's bias.
        """
        return compute_boolean(value, self._bias, self._result_combinator)

    def _key(self):
        return (self._bias, self._input_combinators, self._result_combinator)

    def __eq__(self, other):
        if not isinstance(other, Neuron):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return (
            f"Neuron(bias={self._bias}, "
            f"input_combinators={list(self._input_combinators)}, "
            f"result_combinator={self._result_combinator})"
        )


class Layer:
    """
    A single layer of neurons in a `bnl` network.

    Every neuron sees the same input vector and contributes one output bit,
    in order.

    Parameters
    ----------
    neurons : Sequence[Neuron]
        The neurons in this layer. All must share one input length.
    input_len : Optional[int] (default: None)
        The input length of this layer. Required if `neurons` is empty,
        otherwise it must match the neurons' input length.
    """

    _neurons: Tuple[Neuron, ...]
    _input_len: int

    __slots__ = ("_neurons", "_input_len")

    def __init__(self, neurons: Sequence[Neuron], input_len: Optional[int] = None):
        neurons = tuple(neurons)
        if input_len is None:
            if not neurons:
                raise ValueError("an empty layer needs an explicit input_len")
            input_len = neurons[0].input_len

        for neuron in neurons:
            if neuron.input_len != input_len:
                raise DimensionMismatch(input_len, neuron.input_len)

        self._neurons = neurons
        self._input_len = input_len

    @classmethod
    def new(
        cls, input_len: int, num_neurons: int, rng: Optional[RandomSource] = None
    ) -> "Layer":
        """
        Create a new randomized layer of the given input length and width.

        Neurons are drawn one after another from `rng`.
        """
        if num_neurons < 0:
            raise ValueError(f"a layer cannot have {num_neurons} neurons")
        rng = rng if rng is not None else default_source()
        neurons = [Neuron.new(input_len, rng) for _ in range(num_neurons)]
        logger.debug("Built layer of %d neurons with %d inputs", num_neurons, input_len)
        return cls(neurons, input_len)

    @property
    def neurons(self) -> Tuple[Neuron, ...]:
        return self._neurons

    @property
    def input_len(self) -> int:
        return self._input_len

    @property
    def num_neurons(self) -> int:
        return len(self._neurons)

    def apply(self, inputs: Sequence[bool]) -> List[bool]:
        """
        "Apply" this layer to an input vector of boolean values.

        Parameters
        ----------
        inputs : Sequence[bool]
            A vector of exactly `input_len` values.

        Returns
        -------
        List[bool]
            One output per neuron, in order.

        Raises
        ------
        DimensionMismatch
            If `inputs` has the wrong length.
        """
        if len(inputs) != self._input_len:
            raise DimensionMismatch(self._input_len, len(inputs))
        return [neuron.apply(inputs) for neuron in self._neurons]

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """
        Compute a forward pass through this layer for a batch of inputs.

        Parameters
        ----------
        inputs : np.ndarray
            A (batch, input_len) array of bools.

        Returns
        -------
        np.ndarray
            A (batch, num_neurons) array of bools.
        """
        inputs = np.asarray(inputs, dtype=bool)
        if inputs.ndim != 2:
            raise ValueError(f"expected a 2-D batch of inputs, got {inputs.ndim}-D")
        if inputs.shape[1] != self._input_len:
            raise DimensionMismatch(self._input_len, inputs.shape[1])

        batch_size = inputs.shape[0]
        if not self._neurons:
            return np.zeros((batch_size, 0), dtype=bool)

        biases, input_combinators, result_combinators = self.get_params()
        inputs = inputs.astype(np.intp)

        # Shape: [batch_size, num_neurons]
        folded = np.repeat(inputs[:, -1:], self.num_neurons, axis=1)
        for i in range(self._input_len - 2, -1, -1):
            folded = TRUTH_TABLE[
                input_combinators[:, i], inputs[:, i : i + 1], folded
            ].astype(np.intp)

        return TRUTH_TABLE[result_combinators, folded, biases.astype(np.intp)]

    def get_params(self) -> LayerParams:
        """
        Get the parameters of this layer as numpy arrays.

        Returns
        -------
        biases : np.ndarray[num_neurons, bool]
            The bias of each neuron.
        input_combinators : np.ndarray[(num_neurons, input_len - 1), uint8]
            The input combinators of each neuron, one row per neuron.
        result_combinators : np.ndarray[num_neurons, uint8]
            The result combinator of each neuron.
        """
        biases = np.array([n.bias for n in self._neurons], dtype=bool)
        input_combinators = np.array(
            [n.input_combinators for n in self._neurons], dtype=np.uint8
        ).reshape(self.num_neurons, max(self._input_len - 1, 0))
        result_combinators = np.array(
            [n.result_combinator for n in self._neurons], dtype=np.uint8
        )
        return (biases, input_combinators, result_combinators)

    def __len__(self):
        return len(self._neurons)

    def __eq__(self, other):
        if not isinstance(other, Layer):
            return NotImplemented
        return (self._input_len, self._neurons) == (other._input_len, other._neurons)

    def __hash__(self):
        return hash((self._input_len, self._neurons))

    def __repr__(self):
        return f"Layer(input_len={self._input_len}, neurons={list(self._neurons)})"


class Network:
    """
    A `bnl` network: a chain of layers, each feeding the next.

    Parameters
    ----------
    layers : Sequence[Layer]
        The layers of the network, in evaluation order. The width of each layer
        must equal the input length of the layer after it.
    input_len : Optional[int] (default: None)
        The network's input length. Required if `layers` is empty, otherwise it
        must match the first layer's input length.
    """

    _layers: Tuple[Layer, ...]
    _input_len: int

    __slots__ = ("_layers", "_input_len")

    def __init__(self, layers: Sequence[Layer], input_len: Optional[int] = None):
        layers = tuple(layers)
        if input_len is None:
            if not layers:
                raise ValueError("an empty network needs an explicit input_len")
            input_len = layers[0].input_len

        expected = input_len
        for layer in layers:
            if layer.input_len != expected:
                raise DimensionMismatch(expected, layer.input_len)
            expected = layer.num_neurons

        self._layers = layers
        self._input_len = input_len

    @classmethod
    def new(
        cls,
        input_len: int,
        layer_lengths: Iterable[int],
        rng: Optional[RandomSource] = None,
    ) -> "Network":
        """
        Create a new randomized network.

        Parameters
        ----------
        input_len : int
            The length of the network's input vector.
        layer_lengths : Iterable[int]
            The number of neurons in each layer, in order.
        rng : Optional[RandomSource] (default: None)
            Where to draw random values from. Layers are drawn in order from the
            same source. If None, a fresh unseeded source.
        """
        rng = rng if rng is not None else default_source()
        layer_dims = [input_len] + list(layer_lengths)
        layers = [
            Layer.new(layer_input_len, num_neurons, rng)
            for layer_input_len, num_neurons in pairwise(layer_dims)
        ]
        logger.debug("Built network with layer dims %s", layer_dims)
        return cls(layers, input_len)

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return self._layers

    @property
    def input_len(self) -> int:
        return self._input_len

    @property
    def output_len(self) -> int:
        return self._layers[-1].num_neurons if self._layers else self._input_len

    @property
    def layer_dims(self) -> List[int]:
        """The input length followed by the width of every layer."""
        return [self._input_len] + [layer.num_neurons for layer in self._layers]

    def apply(self, inputs: Sequence[bool]) -> List[bool]:
        """
        "Apply" this network to an input vector of boolean values.

        Parameters
        ----------
        inputs : Sequence[bool]
            A vector of exactly `input_len` values.

        Returns
        -------
        List[bool]
            The output of the last layer, or the input itself if the network has
            no layers.

        Raises
        ------
        DimensionMismatch
            If `inputs` has the wrong length.
        """
        if len(inputs) != self._input_len:
            raise DimensionMismatch(self._input_len, len(inputs))

        result = [bool(x) for x in inputs]
        for layer in self._layers:
            result = layer.apply(result)
        return result

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """
        Compute a forward pass through the entire network for a batch of inputs.

        Parameters
        ----------
        inputs : np.ndarray
            A (batch, input_len) array of bools.

        Returns
        -------
        np.ndarray
            A (batch, output_len) array of bools.
        """
        activations = np.array(inputs, dtype=bool)
        if activations.ndim != 2:
            raise ValueError(
                f"expected a 2-D batch of inputs, got {activations.ndim}-D"
            )
        if activations.shape[1] != self._input_len:
            raise DimensionMismatch(self._input_len, activations.shape[1])

        for layer in self._layers:
            activations = layer.forward(activations)
        return activations

    def truth_table(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Evaluate this network on every possible input.

        Returns
        -------
        inputs : np.ndarray[(2 ** input_len, input_len), bool]
            Every input vector, in the order of
            `itertools.product([False, True], repeat=input_len)`.
        outputs : np.ndarray[(2 ** input_len, output_len), bool]
            The network's output for each row of `inputs`.
        """
        inputs = np.array(
            list(it.product([False, True], repeat=self._input_len)), dtype=bool
        ).reshape(2 ** self._input_len, self._input_len)
        return inputs, self.forward(inputs)

    def get_params(self) -> NetworkParams:
        return [layer.get_params() for layer in self._layers]

    def describe(self) -> str:
        """
        Summarize this network as human-readable text, one line per neuron.
        """
        lines = [f"Network {' -> '.join(str(d) for d in self.layer_dims)}"]
        for i, layer in enumerate(self._layers):
            lines.append(f"  layer {i} ({layer.input_len} inputs):")
            for j, neuron in enumerate(layer.neurons):
                chain = " ".join(
                    combinators.describe(c) for c in neuron.input_combinators
                )
                lines.append(
                    f"    neuron {j}: [{chain}] "
                    f"{combinators.describe(neuron.result_combinator)} "
                    f"bias={int(neuron.bias)}"
                )
        return "\n".join(lines)

    def __len__(self):
        return len(self._layers)

    def __eq__(self, other):
        if not isinstance(other, Network):
            return NotImplemented
        return (self._input_len, self._layers) == (other._input_len, other._layers)

    def __hash__(self):
        return hash((self._input_len, self._layers))

    def __repr__(self):
        return f"Network(input_len={self._input_len}, layers={list(self._layers)})"
