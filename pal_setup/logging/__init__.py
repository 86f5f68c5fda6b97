"""
Logging configuration and utilities for the PalSetup pipeline.
"""
from .config import configure_logging, get_logger, get_pipeline_logger

__all__ = ["configure_logging", "get_logger", "get_pipeline_logger"]
