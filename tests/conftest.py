import sys
import os

import pytest

# Ensure the project root is in sys.path so `import signconvert` works
# without installing the package
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from signconvert.camera import SimulatedDevices  # noqa: E402
from signconvert.clipboard import MemoryClipboard  # noqa: E402
from signconvert.config import ConverterConfig  # noqa: E402


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def cfg():
    return ConverterConfig()


@pytest.fixture
def devices():
    return SimulatedDevices()


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def clock():
    return FakeClock()
