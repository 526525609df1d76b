from ummah_speaks.pipeline.orchestrator import GuidancePipeline
from ummah_speaks.pipeline.run import PipelineRun
from ummah_speaks.pipeline.states import (
    ClassificationFailedState,
    ClassifyingState,
    CompleteState,
    ComposingState,
    CompositionFailedState,
    IdleState,
    RetrievalFailedState,
    RetrievingState,
    RevealingState,
    RunState,
    Stage,
    StageStatus,
)

__all__ = [
    "ClassificationFailedState",
    "ClassifyingState",
    "CompleteState",
    "ComposingState",
    "CompositionFailedState",
    "GuidancePipeline",
    "IdleState",
    "PipelineRun",
    "RetrievalFailedState",
    "RetrievingState",
    "RevealingState",
    "RunState",
    "Stage",
    "StageStatus",
]
