from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from ummah_speaks.labels import Label
from ummah_speaks.passages.models import Passage
from ummah_speaks.pipeline.states import (
    ClassifyingState,
    CompleteState,
    FailedState,
    IdleState,
    NextState,
    RevealingState,
    RunState,
    Stage,
    StageStatus,
)


def _new_run_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class PipelineRun:
    """Ephemeral view of one submission; replaced wholesale by the next one.

    Outputs are read off the current state, so they only appear once the
    stage that produces them has succeeded.
    """

    feeling: str = ""
    name: str = ""
    state: RunState = field(default_factory=IdleState)
    revealed: str = ""
    id: str = field(default_factory=_new_run_id)

    # -- Stage statuses -------------------------------------------------------

    @property
    def classification_status(self) -> StageStatus:
        return self.state.stage_status(Stage.CLASSIFICATION)

    @property
    def retrieval_status(self) -> StageStatus:
        return self.state.stage_status(Stage.RETRIEVAL)

    @property
    def composition_status(self) -> StageStatus:
        return self.state.stage_status(Stage.COMPOSITION)

    @property
    def status(self) -> StageStatus:
        """Overall status, which tracks the first stage."""
        return self.classification_status

    # -- Outputs --------------------------------------------------------------

    @property
    def label(self) -> Label | None:
        return getattr(self.state, "label", None)

    @property
    def passage(self) -> Passage | None:
        return getattr(self.state, "passage", None)

    @property
    def message(self) -> str | None:
        return getattr(self.state, "message", None)

    @property
    def error_message(self) -> str | None:
        if isinstance(self.state, FailedState):
            return self.state.error_message
        return None

    # -- Lifecycle ------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return isinstance(self.state, NextState)

    @property
    def is_revealing(self) -> bool:
        return isinstance(self.state, RevealingState)

    @property
    def is_complete(self) -> bool:
        return isinstance(self.state, CompleteState)

    @classmethod
    def start(cls, feeling: str, name: str) -> PipelineRun:
        return cls(feeling=feeling, name=name, state=ClassifyingState())
