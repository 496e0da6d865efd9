"""
Command-line interface for ValueNetwork.

Provides commands for generating randomly connected networks,
summarizing them, and exporting the results.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from .config import NetworkConfig
from .network.graph import Network
from .analysis.metrics import MetricsCollector, export_nodes_to_csv
from .visualization.plots import NetworkPlotter

logger = logging.getLogger(__name__)


def _resolve_logging_level(level_str: Optional[str]) -> int:
    if not level_str:
        return logging.WARNING
    mapping = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }
    return mapping.get(level_str.upper(), logging.WARNING)


def configure_logging(level_str: Optional[str] = None) -> None:
    """Configure root logging for command-line runs."""
    logging.basicConfig(
        level=_resolve_logging_level(level_str),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    logging.getLogger('matplotlib').setLevel(logging.ERROR)


def build_config(args) -> NetworkConfig:
    """Merge an optional config file with explicit command-line flags."""
    config = NetworkConfig.from_json_file(args.config) if args.config else NetworkConfig()

    if args.nodes is not None:
        config.size = args.nodes
    if args.mean_degree is not None:
        config.mean_degree = args.mean_degree
    if args.seed is not None:
        config.seed = args.seed
    if args.output_dir is not None:
        config.output_dir = args.output_dir
    if args.log_level is not None:
        config.log_level = args.log_level

    config.validate()
    return config


def run_generate(args) -> int:
    """Generate, connect and summarize a network."""
    try:
        config = build_config(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.log_level)

    print("=" * 60)
    print("ValueNetwork - Network Generation")
    print("=" * 60)
    print()

    print(f"Creating network with {config.size} nodes...")
    network = Network(seed=config.seed)
    network.resize(config.size)

    print(f"Connecting with mean degree {config.mean_degree}...")
    links_added = network.random_connect(config.mean_degree)

    print(f"  - Links requested: {links_added}")
    print(f"  - Links created: {network.link_count}")

    collector = MetricsCollector()
    metrics = collector.record(network, config.mean_degree, links_added)

    plotter = NetworkPlotter(config.output_dir or ".")
    report = plotter.create_summary_report(
        metrics.to_dict(),
        top_values=network.sorted_values()[:5],
    )

    print("\n" + report)

    if config.output_dir:
        os.makedirs(config.output_dir, exist_ok=True)

        report_path = os.path.join(config.output_dir, "network_report.txt")
        with open(report_path, 'w') as f:
            f.write(report)
        print(f"\nReport saved to: {report_path}")

        metrics_path = os.path.join(config.output_dir, "metrics.json")
        with open(metrics_path, 'w') as f:
            f.write(metrics.to_json())
        print(f"Metrics saved to: {metrics_path}")

        nodes_path = os.path.join(config.output_dir, "nodes.csv")
        export_nodes_to_csv(network, nodes_path)
        print(f"Nodes saved to: {nodes_path}")

        if args.plots:
            plotter.plot_degree_distribution(
                network, config.mean_degree, save_path="degree_distribution.png"
            )
            plotter.plot_sorted_values(network, save_path="sorted_values.png")
            plotter.plot_network_topology(network, save_path="topology.png")
            print(f"Plots saved to: {config.output_dir}")
    elif args.plots:
        logger.warning("--plots requires --output-dir; no plots written")

    return 0


def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="value_network",
        description="""
ValueNetwork - Randomly connected networks of valued nodes

Builds a network whose nodes carry standard normal values and wires
each node to a Poisson-distributed number of random partners.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate and summarize a random network",
    )
    generate_parser.add_argument(
        "-n", "--nodes",
        type=int,
        default=None,
        help="Number of nodes (default: 100)",
    )
    generate_parser.add_argument(
        "-k", "--mean-degree",
        type=float,
        default=None,
        help="Poisson mean of links added per node (default: 4.0)",
    )
    generate_parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    generate_parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="JSON configuration file; flags override its values",
    )
    generate_parser.add_argument(
        "-o", "--output-dir",
        type=str,
        default=None,
        help="Directory for output files",
    )
    generate_parser.add_argument(
        "--plots",
        action="store_true",
        help="Also save degree, value and topology plots",
    )
    generate_parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # Version command
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show version information",
    )

    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"ValueNetwork v{__version__}")
        return 0

    if args.command == "generate":
        return run_generate(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
