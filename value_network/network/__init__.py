"""Network module - Valued nodes, links and random wiring."""

from .graph import Network, NodeIndexError
from .random_source import NumpyRandomSource, RandomSource

__all__ = [
    "Network",
    "NodeIndexError",
    "NumpyRandomSource",
    "RandomSource",
]
