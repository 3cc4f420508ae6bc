"""Configuration loading utilities."""
from jax_fluid.config.loader import load_config, save_config, merge_overrides

__all__ = ["load_config", "save_config", "merge_overrides"]
