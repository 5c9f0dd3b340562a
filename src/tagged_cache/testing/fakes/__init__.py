"""Testing fakes – deterministic doubles for kernel ports."""
from tagged_cache.kernel.time import FrozenClock
from tagged_cache.testing.fakes.clock import FakeClock

__all__ = ["FakeClock", "FrozenClock"]
