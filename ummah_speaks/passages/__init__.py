from ummah_speaks.passages.models import Passage, RawPassage
from ummah_speaks.passages.retriever import PassageRetriever, select_passage
from ummah_speaks.passages.source import HadithApiSource, PassageSource

__all__ = [
    "HadithApiSource",
    "Passage",
    "PassageRetriever",
    "PassageSource",
    "RawPassage",
    "select_passage",
]
