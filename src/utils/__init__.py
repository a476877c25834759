"""Utility functions and classes for ISS Flyover."""

from .config import get_config, reload_config, reset_config
from .exceptions import (
    ConfigurationError,
    FlyoverError,
    ParseError,
    ResolutionError,
    ServiceLogicError,
    ServiceStatusError,
    TransportError,
)
from .logging_setup import setup_logging
from .progress_callback import PipelineStage, ProgressCallback, ProgressUpdate

__all__ = [
    "ConfigurationError",
    "FlyoverError",
    "ParseError",
    "PipelineStage",
    "ProgressCallback",
    "ProgressUpdate",
    "ResolutionError",
    "ServiceLogicError",
    "ServiceStatusError",
    "TransportError",
    "get_config",
    "reload_config",
    "reset_config",
    "setup_logging",
]
