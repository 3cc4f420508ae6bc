"""Tests for YAML configuration loading."""
import pytest
import yaml

from jax_fluid.config.loader import load_config, merge_overrides, save_config


class TestLoadConfig:

    def test_roundtrip(self, sim_config, tmp_path):
        path = tmp_path / "nested" / "sim.yaml"
        save_config(sim_config, path)
        assert path.exists()
        assert load_config(path) == sim_config

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_missing_grid_section(self, tmp_path):
        path = tmp_path / "sim.yaml"
        path.write_text(yaml.safe_dump({"time": {"dt": 0.1}}))
        with pytest.raises(ValueError, match="grid"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "sim.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_example_configs_load(self):
        from pathlib import Path
        examples = Path(__file__).parent.parent / "examples"
        for path in examples.glob("*.yaml"):
            config = load_config(path)
            assert "time" in config


class TestMergeOverrides:

    def test_dotted_keys(self, sim_config):
        merged = merge_overrides(sim_config, {"time.dt_max": 0.2, "run.frames": 5})
        assert merged["time"]["dt_max"] == 0.2
        assert merged["run"]["frames"] == 5
        assert sim_config["time"]["dt_max"] == 0.4

    def test_creates_missing_sections(self):
        merged = merge_overrides({}, {"solver.type": "upwind"})
        assert merged == {"solver": {"type": "upwind"}}
