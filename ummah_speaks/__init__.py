from ummah_speaks.exceptions import EmptyFeelingError, PipelineBusyError
from ummah_speaks.facade import UmmahSpeaks
from ummah_speaks.journal import JournalEntry, JournalStore, format_relative
from ummah_speaks.labels import DEFAULT_LABEL, Label
from ummah_speaks.passages import Passage
from ummah_speaks.pipeline import GuidancePipeline, PipelineRun, StageStatus

__all__ = [
    "DEFAULT_LABEL",
    "EmptyFeelingError",
    "GuidancePipeline",
    "JournalEntry",
    "JournalStore",
    "Label",
    "Passage",
    "PipelineBusyError",
    "PipelineRun",
    "StageStatus",
    "UmmahSpeaks",
    "format_relative",
]
