import logging
from typing import List, Optional

import click

from bnl import network, random_source
from bnl.errors import DimensionMismatch


def parse_bits(bits: str) -> List[bool]:
    """Parse a string like "101101" into a list of bools."""
    if any(c not in "01" for c in bits):
        raise ValueError(f"input must be a string of 0s and 1s, got {bits!r}")
    return [c == "1" for c in bits]


def format_bits(bits) -> str:
    return "".join("1" if b else "0" for b in bits)


@click.command()
@click.option("--input-len", "-n", type=click.IntRange(min=2), default=6)
@click.option(
    "--layer", "-l", type=click.IntRange(min=1), multiple=True, default=[6, 7, 6]
)
@click.option("--seed", "-s", type=int, default=None)
@click.option("--input", "-i", "input_bits", type=str, default="101101")
@click.option("--truth-table", is_flag=True, default=False)
@click.option("--verbose", "-v", is_flag=True, default=False)
def demo(
    input_len: int,
    layer: List[int],
    seed: Optional[int],
    input_bits: str,
    truth_table: bool,
    verbose: bool,
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        inputs = parse_bits(input_bits)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--input")

    # Every layer but the last feeds neurons, which need at least two inputs
    for width in layer[:-1]:
        if width < 2:
            raise click.BadParameter(
                f"layers feeding another layer need at least 2 neurons, got {width}",
                param_hint="--layer",
            )

    rng = random_source.NumpyRandomSource(seed)
    net = network.Network.new(input_len, list(layer), rng)

    click.echo(f"n = {net!r}\n")
    click.echo(net.describe() + "\n")

    try:
        result = net.apply(inputs)
    except DimensionMismatch as e:
        raise click.BadParameter(str(e), param_hint="--input")
    click.echo(f"Result = {format_bits(result)}")

    if truth_table:
        table_inputs, table_outputs = net.truth_table()
        for row_in, row_out in zip(table_inputs, table_outputs):
            click.echo(f"{format_bits(row_in)} -> {format_bits(row_out)}")


if __name__ == "__main__":
    demo()
