"""Configuration module for benchmark runs."""

from .benchmark_config import BenchmarkConfig
from .config_loader import ConfigLoader

__all__ = ["BenchmarkConfig", "ConfigLoader"]
