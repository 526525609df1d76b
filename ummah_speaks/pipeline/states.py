"""Tagged states for a single feeling-to-guidance run.

Each state fixes the status of all three stages, so combinations such as
"composition done while retrieval idle" cannot be represented.

Hierarchy:
    State
    ├── IdleState       → nothing submitted
    ├── NextState       → the orchestrator performs the next step immediately
    └── StopState       → terminal for this run

    IDLE → CLASSIFYING → RETRIEVING → COMPOSING → REVEALING → COMPLETE
               ↓             ↓            ↓
      CLASSIFICATION_   RETRIEVAL_   COMPOSITION_
          FAILED          FAILED        FAILED
"""
# pyright: reportIncompatibleVariableOverride=false

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict

from ummah_speaks.labels import Label
from ummah_speaks.passages.models import Passage


class Stage(StrEnum):
    CLASSIFICATION = "classification"
    RETRIEVAL = "retrieval"
    COMPOSITION = "composition"


class StageStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    DONE = "done"
    ERROR = "error"


StageTriple = tuple[StageStatus, StageStatus, StageStatus]

_I, _L, _D, _E = (
    StageStatus.IDLE,
    StageStatus.LOADING,
    StageStatus.DONE,
    StageStatus.ERROR,
)


# ---------------------------------------------------------------------------
# Abstract bases
# ---------------------------------------------------------------------------


class State(BaseModel):
    """Base for every run state."""

    model_config = ConfigDict(frozen=True)

    stages: ClassVar[StageTriple] = (_I, _I, _I)

    def stage_status(self, stage: Stage) -> StageStatus:
        return self.stages[list(Stage).index(stage)]


class NextState(State):
    """In-flight state; the orchestrator advances it right away."""


class StopState(State):
    """Terminal state; nothing further happens for this run."""


class FailedState(StopState):
    error_message: str


# ---------------------------------------------------------------------------
# Concrete states
# ---------------------------------------------------------------------------


class IdleState(State):
    status: Literal["IDLE"] = "IDLE"


class ClassifyingState(NextState):
    status: Literal["CLASSIFYING"] = "CLASSIFYING"
    stages: ClassVar[StageTriple] = (_L, _I, _I)


class RetrievingState(NextState):
    status: Literal["RETRIEVING"] = "RETRIEVING"
    stages: ClassVar[StageTriple] = (_D, _L, _I)
    label: Label


class ComposingState(NextState):
    status: Literal["COMPOSING"] = "COMPOSING"
    stages: ClassVar[StageTriple] = (_D, _D, _L)
    label: Label
    passage: Passage


class RevealingState(NextState):
    status: Literal["REVEALING"] = "REVEALING"
    stages: ClassVar[StageTriple] = (_D, _D, _D)
    label: Label
    passage: Passage
    message: str


class CompleteState(StopState):
    status: Literal["COMPLETE"] = "COMPLETE"
    stages: ClassVar[StageTriple] = (_D, _D, _D)
    label: Label
    passage: Passage
    message: str
    entry_id: str | None = None


class ClassificationFailedState(FailedState):
    status: Literal["CLASSIFICATION_FAILED"] = "CLASSIFICATION_FAILED"
    stages: ClassVar[StageTriple] = (_E, _I, _I)


class RetrievalFailedState(FailedState):
    status: Literal["RETRIEVAL_FAILED"] = "RETRIEVAL_FAILED"
    stages: ClassVar[StageTriple] = (_D, _E, _I)
    label: Label
    not_found: bool = False


class CompositionFailedState(FailedState):
    status: Literal["COMPOSITION_FAILED"] = "COMPOSITION_FAILED"
    stages: ClassVar[StageTriple] = (_D, _D, _E)
    label: Label
    passage: Passage


RunState = (
    IdleState
    | ClassifyingState
    | RetrievingState
    | ComposingState
    | RevealingState
    | CompleteState
    | ClassificationFailedState
    | RetrievalFailedState
    | CompositionFailedState
)

ALLOWED_TRANSITIONS: dict[type[State], tuple[type[State], ...]] = {
    IdleState: (ClassifyingState,),
    ClassifyingState: (RetrievingState, ClassificationFailedState),
    RetrievingState: (ComposingState, RetrievalFailedState),
    ComposingState: (RevealingState, CompositionFailedState),
    RevealingState: (CompleteState,),
}


def check_transition(current: State, new: State) -> None:
    """Raise ``ValueError`` unless *current* → *new* is a legal step."""
    allowed = ALLOWED_TRANSITIONS.get(type(current), ())
    if type(new) not in allowed:
        raise ValueError(
            f"Illegal transition {type(current).__name__} → {type(new).__name__}"
        )
