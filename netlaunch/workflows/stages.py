"""Stage bookkeeping shared by the workflows."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class StageRecorder:
    """
    Records the stages a workflow run passes through.

    Each transition emits one log record named `event` with the stage
    and whatever identifiers are known at that point.
    """

    def __init__(self, event: str, **context: Any):
        self.event = event
        self.context: dict[str, Any] = dict(context)
        self.stages: list[Enum] = []

    def enter(self, stage: Enum) -> None:
        self.stages.append(stage)
        logger.info(self.event, extra={**self.context, "stage": stage.value})
