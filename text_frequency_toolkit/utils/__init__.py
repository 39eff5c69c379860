"""Utilities for the Text Frequency Toolkit."""

from .config import PipelineConfig

__all__ = ['PipelineConfig']
