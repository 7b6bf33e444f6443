"""
Configuration objects for the DAG ledger analysis.

Exposes the policies applied around the analysis passes and the output
precision, enabling different runs without editing core logic. A config can
be loaded from a YAML file:

    reject_cycles: true
    unreachable_policy: exclude   # include | exclude | reject
    precision: 2
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

import yaml

from .enums import UnreachablePolicy


@dataclass
class AnalysisConfig:
    """
    Configuration for `Analyzer` behavior and statistic reporting.
    """

    # Fail the run when the declared parent links contain a cycle
    reject_cycles: bool = True

    # How vertices never reached from the root enter depth statistics
    unreachable_policy: UnreachablePolicy = UnreachablePolicy.EXCLUDE

    # Decimal places in the text report
    precision: int = 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """
        Build a config from a parsed mapping.

        Raises:
            ValueError: On an unknown key or an invalid value
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")

        cfg = cls()
        if "reject_cycles" in data:
            cfg.reject_cycles = bool(data["reject_cycles"])
        if "unreachable_policy" in data:
            cfg.unreachable_policy = UnreachablePolicy(str(data["unreachable_policy"]).lower())
        if "precision" in data:
            precision = int(data["precision"])
            if precision < 0:
                raise ValueError("precision must be non-negative")
            cfg.precision = precision
        return cfg


def load_config_from_yaml(yaml_text: str) -> AnalysisConfig:
    """Parse YAML text into an `AnalysisConfig`."""
    data = yaml.safe_load(yaml_text) or {}
    if not isinstance(data, dict):
        raise ValueError("config must be a mapping")
    return AnalysisConfig.from_dict(data)


def load_config(path: str) -> AnalysisConfig:
    """Load an `AnalysisConfig` from a YAML file path."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return load_config_from_yaml(txt)
