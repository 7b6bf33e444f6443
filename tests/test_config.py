"""
Unit tests for AnalysisConfig and YAML config loading.
"""

import pytest

from ledger_core.config import AnalysisConfig, load_config, load_config_from_yaml
from ledger_core.enums import UnreachablePolicy


class TestAnalysisConfig:
    def test_defaults(self):
        cfg = AnalysisConfig()
        assert cfg.reject_cycles is True
        assert cfg.unreachable_policy == UnreachablePolicy.EXCLUDE
        assert cfg.precision == 2

    def test_from_dict(self):
        cfg = AnalysisConfig.from_dict(
            {"reject_cycles": False, "unreachable_policy": "INCLUDE", "precision": 4}
        )
        assert cfg.reject_cycles is False
        assert cfg.unreachable_policy == UnreachablePolicy.INCLUDE
        assert cfg.precision == 4

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="unknown config keys: colour"):
            AnalysisConfig.from_dict({"colour": "blue"})

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            AnalysisConfig.from_dict({"unreachable_policy": "ignore"})

    def test_negative_precision(self):
        with pytest.raises(ValueError):
            AnalysisConfig.from_dict({"precision": -1})


class TestYamlLoading:
    def test_from_yaml_text(self):
        cfg = load_config_from_yaml("unreachable_policy: reject\nprecision: 3\n")
        assert cfg.unreachable_policy == UnreachablePolicy.REJECT
        assert cfg.precision == 3
        assert cfg.reject_cycles is True

    def test_empty_yaml(self):
        assert load_config_from_yaml("") == AnalysisConfig()

    def test_non_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            load_config_from_yaml("- a\n- b\n")

    def test_from_file(self, tmp_path):
        path = tmp_path / "ledger.yaml"
        path.write_text("reject_cycles: false\n", encoding="utf-8")
        assert load_config(str(path)).reject_cycles is False
