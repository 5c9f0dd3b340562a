"""Testing support – fakes and chaos helpers for code built on TaggedCache.

Typical use in a test::

    from tagged_cache.testing import FailureInjector, FaultyTagIndex

    index = FaultyTagIndex(StoreTagIndex(store), FailureInjector(fail_on={"set_tags_for_key"}))
"""

from tagged_cache.testing.chaos import (
    FailureInjector,
    FaultyKeyValueStore,
    FaultyTagIndex,
    LatencyInjector,
    SlowKeyValueStore,
)
from tagged_cache.testing.fakes import FakeClock

__all__ = [
    "FailureInjector",
    "FakeClock",
    "FaultyKeyValueStore",
    "FaultyTagIndex",
    "LatencyInjector",
    "SlowKeyValueStore",
]
