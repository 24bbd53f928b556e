"""Configuration management for vodsplit."""

from .settings import Settings
from .types import PathConfig, ProcessConfig, SplitConfig

__all__ = ["Settings", "PathConfig", "ProcessConfig", "SplitConfig"]
