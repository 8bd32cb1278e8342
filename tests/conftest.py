"""Shared fixtures.

Tests use a small registry so results do not depend on the bundled module list.
"""

import pytest

from modules import ModuleDescriptor, ModuleRegistry


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def registry() -> ModuleRegistry:
    return ModuleRegistry(
        [
            ModuleDescriptor("foo", "foo --run"),
            ModuleDescriptor("bar", "bar build"),
            ModuleDescriptor("baz", "baz deploy"),
        ]
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
