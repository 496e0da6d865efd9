"""
Metrics collection for generated networks.

Summarizes degree structure and node values of a network so that
successive connection passes can be compared and exported.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from collections import Counter
import json
import logging

import networkx as nx
import numpy as np

from ..network.graph import Network

logger = logging.getLogger(__name__)


@dataclass
class NetworkMetrics:
    """Aggregated statistics for one connected network."""
    # Basic stats
    node_count: int
    link_count: int
    target_mean_degree: float
    links_added: int

    # Degree stats
    avg_degree: float
    min_degree: int
    max_degree: int
    degree_std: float
    density: float
    isolated_nodes: int

    # Structure
    connected_components: int
    avg_clustering: float

    # Node values
    value_mean: float
    value_std: float
    value_min: float
    value_max: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_count": self.node_count,
            "link_count": self.link_count,
            "target_mean_degree": self.target_mean_degree,
            "links_added": self.links_added,
            "avg_degree": self.avg_degree,
            "min_degree": self.min_degree,
            "max_degree": self.max_degree,
            "degree_std": self.degree_std,
            "density": self.density,
            "isolated_nodes": self.isolated_nodes,
            "connected_components": self.connected_components,
            "avg_clustering": self.avg_clustering,
            "value_mean": self.value_mean,
            "value_std": self.value_std,
            "value_min": self.value_min,
            "value_max": self.value_max,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def to_networkx(network: Network) -> nx.Graph:
    """Export a network as an undirected networkx graph with node values."""
    graph = nx.Graph()
    for node, value in enumerate(network.values):
        graph.add_node(node, value=value)
    graph.add_edges_from(network.links())
    return graph


def expected_degree(mean_degree: float) -> float:
    """
    Expected average degree after connecting with ``mean_degree``.

    Every node requests about ``mean_degree`` links and receives about as
    many from other nodes, so realized degrees centre on twice the rate.
    """
    return 2 * mean_degree


def degree_distribution(network: Network) -> Dict[int, int]:
    """Map each degree to the number of nodes having it."""
    counts = Counter(network.degree(node) for node in range(network.size()))
    return dict(sorted(counts.items()))


def compute_metrics(
    network: Network,
    target_mean_degree: float = 0.0,
    links_added: int = 0,
) -> NetworkMetrics:
    """
    Compute summary statistics for a network.

    Args:
        network: Network to summarize
        target_mean_degree: Mean degree passed to the last connection pass
        links_added: Value returned by the last connection pass

    Returns:
        NetworkMetrics for the current state of the network
    """
    n = network.size()
    degrees = np.array([network.degree(node) for node in range(n)], dtype=float)
    values = np.array(network.values, dtype=float)
    link_count = network.link_count

    max_links = n * (n - 1) / 2
    graph = to_networkx(network)

    if n == 0:
        return NetworkMetrics(
            node_count=0,
            link_count=0,
            target_mean_degree=target_mean_degree,
            links_added=links_added,
            avg_degree=0.0,
            min_degree=0,
            max_degree=0,
            degree_std=0.0,
            density=0.0,
            isolated_nodes=0,
            connected_components=0,
            avg_clustering=0.0,
            value_mean=0.0,
            value_std=0.0,
            value_min=0.0,
            value_max=0.0,
        )

    return NetworkMetrics(
        node_count=n,
        link_count=link_count,
        target_mean_degree=target_mean_degree,
        links_added=links_added,
        avg_degree=float(np.mean(degrees)),
        min_degree=int(np.min(degrees)),
        max_degree=int(np.max(degrees)),
        degree_std=float(np.std(degrees)),
        density=link_count / max_links if max_links > 0 else 0.0,
        isolated_nodes=int(np.sum(degrees == 0)),
        connected_components=nx.number_connected_components(graph),
        avg_clustering=float(nx.average_clustering(graph)),
        value_mean=float(np.mean(values)),
        value_std=float(np.std(values)),
        value_min=float(np.min(values)),
        value_max=float(np.max(values)),
    )


class MetricsCollector:
    """
    Collects metrics across successive connection passes.

    Tracks:
    - Per-pass network metrics
    - Aggregate statistics over all passes
    """

    def __init__(self, run_id: Optional[str] = None):
        import uuid
        self.run_id = run_id or str(uuid.uuid4())[:8]
        self._history: List[NetworkMetrics] = []

    def record(
        self,
        network: Network,
        mean_degree: float,
        links_added: int,
    ) -> NetworkMetrics:
        """Record metrics for the network's current links."""
        metrics = compute_metrics(network, mean_degree, links_added)
        self._history.append(metrics)
        logger.debug(
            "Recorded pass %d for run %s: %d links, avg degree %.3f",
            len(self._history), self.run_id, metrics.link_count, metrics.avg_degree,
        )
        return metrics

    @property
    def pass_count(self) -> int:
        return len(self._history)

    @property
    def latest(self) -> Optional[NetworkMetrics]:
        return self._history[-1] if self._history else None

    def get_history(self) -> List[NetworkMetrics]:
        return self._history.copy()

    def degree_bias(self) -> List[float]:
        """Realized average degree minus the expected one, per recorded pass."""
        return [m.avg_degree - expected_degree(m.target_mean_degree) for m in self._history]

    def compare_with(self, other: "MetricsCollector") -> Dict[str, Any]:
        """Compare the latest pass of this collector with another's."""
        mine, theirs = self.latest, other.latest
        if mine is None or theirs is None:
            return {"error": "Both collectors need at least one recorded pass"}

        return {
            "link_ratio": mine.link_count / max(1, theirs.link_count),
            "avg_degree_diff": mine.avg_degree - theirs.avg_degree,
            "clustering_diff": mine.avg_clustering - theirs.avg_clustering,
            "component_diff": mine.connected_components - theirs.connected_components,
        }

    def export_to_csv(self, filepath: str) -> None:
        """Export the pass history to CSV."""
        import csv

        if not self._history:
            return

        rows = [m.to_dict() for m in self._history]
        with open(filepath, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)

    def __repr__(self) -> str:
        return f"MetricsCollector(id={self.run_id}, passes={self.pass_count})"


def export_nodes_to_csv(network: Network, filepath: str) -> None:
    """Write one row per node: index, value, degree and neighbor list."""
    import csv

    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["node", "value", "degree", "neighbors"])
        for node in range(network.size()):
            neighbors = network.neighbors(node)
            writer.writerow([
                node,
                network.value(node),
                len(neighbors),
                " ".join(str(m) for m in neighbors),
            ])
