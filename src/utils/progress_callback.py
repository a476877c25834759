"""Progress callback infrastructure for the lookup pipeline.

This module provides:
- PipelineStage enum for the pipeline state machine
- ProgressUpdate dataclass for structured stage transitions
- ProgressCallback type alias for progress handler functions

Usage:
    from utils.progress_callback import ProgressCallback, ProgressUpdate

    def my_progress_handler(update: ProgressUpdate) -> None:
        print(f"{update.stage.value}: {update.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class PipelineStage(Enum):
    """States of one pipeline invocation.

    Transitions only move forward on success; any error moves straight to
    FAILURE. SUCCESS and FAILURE are terminal.
    """

    PENDING_IP = "pending_ip"
    PENDING_COORDS = "pending_coords"
    PENDING_PASSES = "pending_passes"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStage.SUCCESS, PipelineStage.FAILURE)


@dataclass
class ProgressUpdate:
    """Structured progress information for a pipeline transition.

    Attributes:
        stage: Stage the pipeline just entered.
        message: Human-readable status message.
        detail: Optional additional detail string.
        error: The error that caused a FAILURE transition, if any.
    """

    stage: PipelineStage
    message: str
    detail: str | None = None
    error: Exception | None = None


# Type alias for progress callback functions
ProgressCallback = Callable[[ProgressUpdate], None]
