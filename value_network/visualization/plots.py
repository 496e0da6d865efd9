"""
Plotting utilities for network visualization.

Generates visualizations for:
- Degree distribution against the Poisson target
- Sorted node values
- Network topology
"""

from typing import Any, Dict, List, Optional
import json
import math
import os

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..network.graph import Network
from ..analysis.metrics import degree_distribution, expected_degree


def poisson_pmf(ks: np.ndarray, rate: float) -> np.ndarray:
    """Poisson probabilities for each count in ``ks``, computed in log space."""
    if rate == 0:
        return (ks == 0).astype(float)
    log_factorials = np.array([math.lgamma(k + 1) for k in ks], dtype=float)
    return np.exp(ks * math.log(rate) - rate - log_factorials)


class NetworkPlotter:
    """
    Creates visualizations and reports for generated networks.

    Each plot method returns the matplotlib figure. Passing a bare file
    name as ``save_path`` saves it under ``output_dir``.
    """

    def __init__(self, output_dir: str = "."):
        """Initialize the network plotter.

        Args:
            output_dir: Directory path for saving output files. Defaults to
                current directory.
        """
        self.output_dir = output_dir

    def _resolve(self, save_path: Optional[str]) -> Optional[str]:
        if save_path and not os.path.dirname(save_path):
            return os.path.join(self.output_dir, save_path)
        return save_path

    def _finish(self, fig: Any, save_path: Optional[str]) -> Any:
        fig.tight_layout()

        path = self._resolve(save_path)
        if path:
            fig.savefig(path, dpi=150, bbox_inches='tight')

        return fig

    def plot_degree_distribution(
        self,
        network: Network,
        mean_degree: Optional[float] = None,
        save_path: Optional[str] = None,
    ) -> Any:
        """Plot the degree histogram of a network.

        Args:
            network: Network to plot.
            mean_degree: Optional Poisson rate used to connect the network.
                When given, the expected frequencies are overlaid, using a
                Poisson law at the expected realized degree.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        distribution = degree_distribution(network)
        degrees = list(distribution.keys())
        counts = [distribution[d] for d in degrees]

        fig, ax = plt.subplots(figsize=(10, 6))
        ax.bar(degrees, counts, color='steelblue', label='Observed')

        if mean_degree is not None and degrees:
            rate = expected_degree(mean_degree)
            xs = np.arange(max(degrees) + 1)
            expected = network.size() * poisson_pmf(xs, rate)
            ax.plot(xs, expected, 'r--o', linewidth=2, label=f'Poisson({rate:g})')

        ax.set_xlabel('Degree')
        ax.set_ylabel('Number of Nodes')
        ax.set_title(f'Degree Distribution ({network.size()} nodes)')
        ax.legend()
        ax.grid(True, alpha=0.3)

        return self._finish(fig, save_path)

    def plot_sorted_values(
        self,
        network: Network,
        save_path: Optional[str] = None,
    ) -> Any:
        """Plot node values in decreasing order.

        Args:
            network: Network whose values are plotted.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        values = network.sorted_values()

        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(range(len(values)), values, 'g-', linewidth=2)
        ax.axhline(y=0, color='gray', linestyle='-', alpha=0.5)
        ax.set_xlabel('Rank')
        ax.set_ylabel('Node Value')
        ax.set_title('Node Values (sorted)')
        ax.grid(True, alpha=0.3)

        return self._finish(fig, save_path)

    def plot_network_topology(
        self,
        network: Network,
        save_path: Optional[str] = None,
    ) -> Any:
        """Plot the network on a circle, colouring nodes by value.

        Args:
            network: Network to draw.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        n = network.size()
        positions = [
            (math.cos(2 * math.pi * i / n), math.sin(2 * math.pi * i / n))
            for i in range(n)
        ]

        fig, ax = plt.subplots(figsize=(10, 10))

        for a, b in network.links():
            x1, y1 = positions[a]
            x2, y2 = positions[b]
            ax.plot([x1, x2], [y1, y2], color='gray', alpha=0.4, linewidth=1)

        if n:
            xs = [x for x, _ in positions]
            ys = [y for _, y in positions]
            points = ax.scatter(xs, ys, c=network.values, cmap='coolwarm', s=120, zorder=5)
            cbar = fig.colorbar(points, ax=ax)
            cbar.set_label('Node Value')

        ax.set_title(f'Network Topology ({n} nodes, {network.link_count} links)')
        ax.axis('equal')
        ax.axis('off')

        return self._finish(fig, save_path)

    def export_plot_data(
        self,
        network: Network,
        filepath: str,
    ) -> Dict[str, Any]:
        """Export the data behind the plots to JSON for external tools.

        Args:
            network: Network to export.
            filepath: Path to the output JSON file.

        Returns:
            The exported data.
        """
        data = {
            "values": network.values,
            "sorted_values": network.sorted_values(),
            "degree_distribution": [
                [degree, count] for degree, count in degree_distribution(network).items()
            ],
            "links": [list(link) for link in network.links()],
        }

        with open(self._resolve(filepath), 'w') as f:
            json.dump(data, f, indent=2, default=str)

        return data

    def create_summary_report(
        self,
        metrics: Dict[str, Any],
        top_values: Optional[List[float]] = None,
        save_path: Optional[str] = None,
    ) -> str:
        """Create a text summary report of a generated network.

        Args:
            metrics: Dictionary of network metrics, as produced by
                ``NetworkMetrics.to_dict``.
            top_values: Optional highest node values to list.
            save_path: Optional file path to save the text report.

        Returns:
            The formatted report as a string.
        """
        lines = [
            "=" * 60,
            "VALUE NETWORK REPORT",
            "=" * 60,
            "",
            "NETWORK OVERVIEW",
            "-" * 40,
            f"Nodes: {metrics.get('node_count', 0)}",
            f"Links: {metrics.get('link_count', 0)}",
            f"Target Mean Degree: {metrics.get('target_mean_degree', 0):.4f}",
            f"Links Requested: {metrics.get('links_added', 0)}",
            "",
            "DEGREE STATISTICS",
            "-" * 40,
            f"Avg Degree: {metrics.get('avg_degree', 0):.4f}",
            f"Expected Avg Degree: {expected_degree(metrics.get('target_mean_degree', 0)):.4f}",
            f"Min / Max Degree: {metrics.get('min_degree', 0)} / {metrics.get('max_degree', 0)}",
            f"Degree Std: {metrics.get('degree_std', 0):.4f}",
            f"Density: {metrics.get('density', 0):.4f}",
            f"Isolated Nodes: {metrics.get('isolated_nodes', 0)}",
            f"Connected Components: {metrics.get('connected_components', 0)}",
            f"Avg Clustering: {metrics.get('avg_clustering', 0):.4f}",
            "",
            "NODE VALUES",
            "-" * 40,
            f"Mean: {metrics.get('value_mean', 0):.4f}",
            f"Std: {metrics.get('value_std', 0):.4f}",
            f"Range: [{metrics.get('value_min', 0):.4f}, {metrics.get('value_max', 0):.4f}]",
        ]

        if top_values:
            lines.append("Highest Values:")
            for rank, value in enumerate(top_values[:5], start=1):
                lines.append(f"  {rank}. {value:.4f}")

        lines.extend([
            "",
            "=" * 60,
            "END OF REPORT",
            "=" * 60,
        ])

        report = "\n".join(lines)

        if save_path:
            with open(self._resolve(save_path), 'w') as f:
                f.write(report)

        return report

    def __repr__(self) -> str:
        return f"NetworkPlotter(output_dir={self.output_dir!r})"
