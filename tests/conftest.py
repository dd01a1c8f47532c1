import pytest

from nobsign.timestamp import EPOCH

SECRET = "my-key"


class FakeClock:
    """Stand-in for time.time that only moves when told to."""

    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(EPOCH + 500_000_000)
