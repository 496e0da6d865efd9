"""Analysis module - Degree statistics, metrics and export."""

from .metrics import (
    MetricsCollector,
    NetworkMetrics,
    compute_metrics,
    degree_distribution,
    expected_degree,
    export_nodes_to_csv,
    to_networkx,
)

__all__ = [
    "MetricsCollector",
    "NetworkMetrics",
    "compute_metrics",
    "degree_distribution",
    "expected_degree",
    "export_nodes_to_csv",
    "to_networkx",
]
