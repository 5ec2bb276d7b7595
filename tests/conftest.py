import logging
from typing import List, Sequence

import pytest


class ScriptedSource:
    """
    A random source that replays fixed sequences of draws.

    Integer draws must fall inside the requested range.
    """

    def __init__(self, bools: Sequence[bool] = (), ints: Sequence[int] = ()):
        self.bools: List[bool] = list(bools)
        self.ints: List[int] = list(ints)
        self.calls: List[str] = []

    def next_bool(self) -> bool:
        self.calls.append("bool")
        return self.bools.pop(0)

    def next_in_range(self, lo: int, hi_exclusive: int) -> int:
        self.calls.append("int")
        value = self.ints.pop(0)
        assert lo <= value < hi_exclusive
        return value


class CountingSource:
    """
    A random source whose draws follow a simple counter, so every run matches.
    """

    def __init__(self):
        self.count = 0

    def next_bool(self) -> bool:
        self.count += 1
        return self.count % 3 == 0

    def next_in_range(self, lo: int, hi_exclusive: int) -> int:
        self.count += 1
        return lo + (self.count * 7) % (hi_exclusive - lo)


@pytest.fixture(autouse=True)
def setup_logging():
    """Set up logging for tests."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    yield
    logging.getLogger("bnl").setLevel(logging.NOTSET)


@pytest.fixture
def counting_source() -> CountingSource:
    return CountingSource()
