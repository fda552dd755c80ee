"""Shared test helpers for the msr test suite."""

from msr.errors import BackendError
from msr.io import IoState


class RecordingLeaf:
    """A condition leaf that returns a fixed result and counts its calls."""

    def __init__(self, result: bool):
        self.result = result
        self.calls = 0

    def eval(self, io) -> bool:
        self.calls += 1
        return self.result


class FaultyIo:
    """An I/O backend whose reads always fail, like a dead bus."""

    def __init__(self):
        self.reads: list[str] = []

    def read(self, id):
        self.reads.append(id)
        raise BackendError(f"bus timeout reading {id!r}")

    def read_output(self, id):
        return None

    def write(self, id, value):
        raise BackendError(f"bus timeout writing {id!r}")


class CountingIo(IoState):
    """IoState that records every input read, in order."""

    reads: list[str] = []

    def read(self, id):
        self.reads.append(id)
        return super().read(id)


def make_io(**inputs) -> IoState:
    """Build an IoState with the given inputs (Python literals allowed)."""
    return IoState(inputs=inputs)
