"""
Randomly connected network of valued nodes.

Nodes are dense integer indices in ``[0, size())``. Each node carries a
float value drawn from a standard normal distribution when the network
is resized. Links are undirected and stored in both directions, so the
relation is symmetric by construction.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .random_source import NumpyRandomSource, RandomSource

logger = logging.getLogger(__name__)


class NodeIndexError(IndexError):
    """Raised when a node index does not exist in the network."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(
            f"the node {index} you try to access does not exist "
            f"(network has {size} nodes)"
        )


class Network:
    """
    An undirected graph of valued nodes with randomized wiring.

    Supports:
    - Resizing (fresh normally distributed values, no links)
    - Adding single links, guarded against self-loops and duplicates
    - Neighbor and candidate-neighbor queries
    - Rebuilding all links around a Poisson mean degree
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ):
        if random_source is not None and seed is not None:
            raise ValueError("Pass either a random source or a seed, not both")

        self._rng: RandomSource = random_source or NumpyRandomSource(seed)
        self._values: List[float] = []
        # Per-node neighbor lists; both directions of every edge are stored.
        self._links: Dict[int, List[int]] = {}

    # Node/value store

    def resize(self, n: int) -> None:
        """Discard values and links, then allocate ``n`` freshly valued nodes."""
        if n < 0:
            raise ValueError(f"Network size must be non-negative, got {n}")

        self._values = [self._rng.normal(0.0, 1.0) for _ in range(n)]
        self.clear_links()
        logger.info("Resized network to %d nodes", n)

    def size(self) -> int:
        """Number of nodes."""
        return len(self._values)

    def value(self, i: int) -> float:
        self._check_node(i)
        return self._values[i]

    @property
    def values(self) -> List[float]:
        """A copy of all node values, indexed by node."""
        return list(self._values)

    def set_values(self, new_values: Sequence[float]) -> int:
        """
        Overwrite node values from the start of ``new_values``.

        Copies as many entries as there are both values and nodes. Extra
        entries are ignored and nodes past the end of ``new_values`` keep
        their current value.

        Returns the number of values copied.
        """
        count = min(len(new_values), self.size())
        for node in range(count):
            self._values[node] = float(new_values[node])
        return count

    def sorted_values(self) -> List[float]:
        """Node values in decreasing order."""
        return sorted(self._values, reverse=True)

    # Link store

    def clear_links(self) -> None:
        """Remove every link, keeping nodes and values."""
        self._links = {node: [] for node in range(self.size())}

    def degree(self, i: int) -> int:
        self._check_node(i)
        return len(self._links[i])

    def add_link(self, a: int, b: int) -> bool:
        """
        Link nodes ``a`` and ``b``.

        Returns False, without raising, if either node does not exist,
        if ``a == b``, or if the link already exists.
        """
        if not (self._is_node(a) and self._is_node(b)):
            logger.debug("Rejected link %s-%s: node out of range", a, b)
            return False

        if a == b:
            logger.debug("Rejected self-loop on node %d", a)
            return False

        # Only one direction is checked: links are only ever added here.
        if b in self._links[a]:
            logger.debug("Rejected duplicate link %d-%d", a, b)
            return False

        self._links[a].append(b)
        self._links[b].append(a)
        return True

    def has_link(self, a: int, b: int) -> bool:
        if not (self._is_node(a) and self._is_node(b)):
            return False
        return b in self._links[a]

    def neighbors(self, n: int) -> List[int]:
        """Nodes linked to ``n``, in the order the links were added."""
        self._check_node(n)
        return list(self._links[n])

    def possible_neighbors(self, n: int) -> List[int]:
        """Nodes other than ``n`` not yet linked to it, in ascending order."""
        self._check_node(n)
        remaining = list(self._links[n])

        candidates = []
        for node in range(self.size()):
            if node == n:
                continue
            if node in remaining:
                # Each neighbor matches once; drop it to shorten later scans.
                remaining.remove(node)
            else:
                candidates.append(node)

        return candidates

    @property
    def link_count(self) -> int:
        """Number of undirected links."""
        return sum(len(neighbors) for neighbors in self._links.values()) // 2

    def links(self) -> Iterator[Tuple[int, int]]:
        """Iterate over undirected links as ``(a, b)`` with ``a < b``."""
        for a in range(self.size()):
            for b in self._links[a]:
                if a < b:
                    yield a, b

    # Randomized connection

    def random_connect(self, mean_degree: float) -> int:
        """
        Rebuild all links so each node requests about ``mean_degree`` links.

        Nodes are visited in index order. Each draws a Poisson number of
        new links, capped by how many nodes it is not yet linked to, and
        picks that many partners uniformly without replacement. Links made
        by later nodes also raise the degree of earlier ones, so low-index
        nodes end up slightly above the Poisson target.

        Returns the total number of links requested across all nodes.
        """
        if mean_degree < 0:
            raise ValueError(f"Mean degree must be non-negative, got {mean_degree}")

        self.clear_links()
        n = self.size()
        total_links = 0

        for node in range(n):
            available = n - 1 - self.degree(node)
            number_of_links = min(self._rng.poisson(mean_degree), available)

            if number_of_links <= 0:
                continue

            pool = self.possible_neighbors(node)
            pool_size = len(pool)

            for created in range(number_of_links):
                last = pool_size - 1 - created
                index = self._rng.uniform_int(0, last)
                self.add_link(node, pool[index])
                # Swap the chosen candidate out of the live part of the pool.
                pool[index], pool[last] = pool[last], pool[index]

            total_links += number_of_links

        logger.info(
            "Connected %d nodes with mean degree %.3f: %d links requested, %d created",
            n, mean_degree, total_links, self.link_count,
        )
        return total_links

    @classmethod
    def create_random(
        cls,
        size: int,
        mean_degree: float,
        seed: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
    ) -> "Network":
        """Create, resize and randomly connect a network in one call."""
        network = cls(random_source=random_source, seed=seed)
        network.resize(size)
        network.random_connect(mean_degree)
        return network

    def _is_node(self, i: int) -> bool:
        return 0 <= i < self.size()

    def _check_node(self, i: int) -> None:
        if not self._is_node(i):
            raise NodeIndexError(i, self.size())

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"Network(nodes={self.size()}, links={self.link_count})"
