"""Testing chaos – failure and latency injection for stores and indexes."""
from tagged_cache.testing.chaos.failure import FailureInjector, FaultyKeyValueStore, FaultyTagIndex
from tagged_cache.testing.chaos.latency import LatencyInjector, SlowKeyValueStore

__all__ = [
    "FailureInjector",
    "FaultyKeyValueStore",
    "FaultyTagIndex",
    "LatencyInjector",
    "SlowKeyValueStore",
]
