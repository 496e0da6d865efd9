"""
Configuration for network generation runs.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import json


@dataclass
class NetworkConfig:
    """Configuration for building and connecting a network."""
    # Network shape
    size: int = 100
    mean_degree: float = 4.0

    # Random seed for reproducibility
    seed: Optional[int] = None

    # Output
    output_dir: Optional[str] = None
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")
        if self.mean_degree < 0:
            raise ValueError(f"mean_degree must be non-negative, got {self.mean_degree}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkConfig":
        """
        Build a config from a mapping.

        Settings may sit at the top level or under a ``"network"`` key;
        the nested form wins. Unknown keys are ignored.
        """
        merged = {k: v for k, v in data.items() if not isinstance(v, dict)}
        merged.update(data.get("network", {}))

        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in merged.items() if k in known})

        try:
            config.size = int(config.size)
            config.mean_degree = float(config.mean_degree)
            if config.seed is not None:
                config.seed = int(config.seed)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid network configuration: {e}") from e
        return config

    @classmethod
    def from_json_file(cls, path: str) -> "NetworkConfig":
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
