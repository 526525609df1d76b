"""Feeling-to-guidance orchestrator.

Drives one run through classification, retrieval and composition, strictly
in that order. Every collaborator failure is caught here and turned into a
failed state with a short user-facing message; only input errors reach the
caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from ummah_speaks.classifier.gateway import ClassifierGateway
from ummah_speaks.exceptions import (
    ConfigurationError,
    EmptyFeelingError,
    PassageNotFoundError,
    PipelineBusyError,
)
from ummah_speaks.journal.format import islamic_date_label
from ummah_speaks.journal.models import JournalDraft, JournalPassage
from ummah_speaks.journal.store import JournalStore
from ummah_speaks.passages.retriever import PassageRetriever
from ummah_speaks.pipeline.run import PipelineRun
from ummah_speaks.pipeline.states import (
    ClassificationFailedState,
    ClassifyingState,
    CompleteState,
    ComposingState,
    CompositionFailedState,
    RetrievalFailedState,
    RetrievingState,
    RevealingState,
    RunState,
    StopState,
    check_transition,
)
from ummah_speaks.reflection.composer import ReflectionComposer
from ummah_speaks.reflection.prompt import DEFAULT_NAME
from ummah_speaks.reveal import RevealScheduler

logger = logging.getLogger(__name__)

CLASSIFY_ERROR = "Something went wrong. Please try again."
NOT_FOUND_ERROR = "No hadith found for this keyword."
RETRIEVE_ERROR = "Failed to fetch hadith. Please try again."
COMPOSE_ERROR = "Could not generate a reflection."

RunListener = Callable[[PipelineRun], None]


def _today_label() -> str:
    return islamic_date_label(date.today())


class GuidancePipeline:
    """Runs the three dependent stages and records finished runs.

    State machine:
        CLASSIFYING → RETRIEVING → COMPOSING → REVEALING → COMPLETE

    A failure at any stage stops the run with that stage's failed state;
    earlier outputs stay visible. The journal append happens once, after
    the reveal has shown the whole message.

    Usage::

        pipeline = GuidancePipeline(classifier, retriever, composer, journal)
        pipeline.on_update(render)
        run = await pipeline.submit("I feel so alone", name="Amina")
    """

    def __init__(
        self,
        classifier: ClassifierGateway,
        retriever: PassageRetriever,
        composer: ReflectionComposer,
        journal: JournalStore | None = None,
        *,
        reveal: RevealScheduler | None = None,
        date_label: Callable[[], str] = _today_label,
    ) -> None:
        self._classifier = classifier
        self._retriever = retriever
        self._composer = composer
        self._journal = journal
        self._reveal = reveal or RevealScheduler()
        self._date_label = date_label
        self._run = PipelineRun()
        self._listeners: list[RunListener] = []

    # -- Observation ----------------------------------------------------------

    @property
    def current(self) -> PipelineRun:
        return self._run

    @property
    def busy(self) -> bool:
        return self._run.is_active

    def on_update(self, listener: RunListener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, run: PipelineRun) -> None:
        for listener in list(self._listeners):
            try:
                listener(run)
            except Exception:
                logger.error("[%s] Run listener failed", run.id, exc_info=True)

    # -- Public API -----------------------------------------------------------

    async def submit(self, feeling: str, name: str | None = None) -> PipelineRun:
        """Run the whole pipeline for *feeling* and return the finished run.

        Raises :class:`EmptyFeelingError` for blank input and
        :class:`PipelineBusyError` while another run is in progress.
        """
        text = feeling.strip()
        if not text:
            raise EmptyFeelingError()
        if self.busy:
            raise PipelineBusyError("A reflection is already in progress.")

        self._reveal.cancel()
        run = PipelineRun.start(text, (name or "").strip() or DEFAULT_NAME)
        self._run = run
        logger.info("[%s] Run started", run.id)
        self._notify(run)

        state: RunState = run.state
        try:
            while not isinstance(state, StopState):
                new_state = await self._transition(run, state)
                if run is not self._run:
                    logger.info("[%s] Run superseded; discarding result", run.id)
                    return run
                check_transition(state, new_state)
                run.state = new_state
                logger.info("[%s] %s → %s", run.id, state.status, new_state.status)
                self._notify(run)
                state = new_state
        except asyncio.CancelledError:
            # The caller gave up; release the pipeline so it is not left busy.
            if run is self._run:
                logger.info("[%s] Run cancelled during %s", run.id, state.status)
                self._reveal.cancel()
                self._run = PipelineRun()
                self._notify(self._run)
            raise

        return run

    def reset(self) -> PipelineRun:
        """Drop the current run and any pending reveal; allow a new submit.

        Network calls already in flight are left to finish, but their results
        are ignored.
        """
        self._reveal.cancel()
        if self._run.is_active:
            logger.info("[%s] Run reset while in progress", self._run.id)
        self._run = PipelineRun()
        self._notify(self._run)
        return self._run

    # -- Transitions ----------------------------------------------------------

    async def _transition(self, run: PipelineRun, current: RunState) -> RunState:
        match current:
            case ClassifyingState():
                return await self._classify(run)

            case RetrievingState() as state:
                return await self._retrieve(run, state)

            case ComposingState() as state:
                return await self._compose(run, state)

            case RevealingState() as state:
                return await self._reveal_and_record(run, state)

            case _:
                raise ValueError(f"Invalid state for pipeline run: {current}")

    async def _classify(self, run: PipelineRun) -> RunState:
        try:
            label = await self._classifier.classify(run.feeling)
        except ConfigurationError as exc:
            logger.error("[%s] Classifier not configured: %s", run.id, exc.message)
            return ClassificationFailedState(error_message=exc.message)
        except Exception:
            logger.error("[%s] Classification failed", run.id, exc_info=True)
            return ClassificationFailedState(error_message=CLASSIFY_ERROR)
        return RetrievingState(label=label)

    async def _retrieve(self, run: PipelineRun, state: RetrievingState) -> RunState:
        try:
            passage = await self._retriever.retrieve(state.label)
        except PassageNotFoundError as exc:
            logger.warning("[%s] %s", run.id, exc.message)
            return RetrievalFailedState(
                label=state.label, error_message=NOT_FOUND_ERROR, not_found=True
            )
        except Exception:
            logger.error("[%s] Passage retrieval failed", run.id, exc_info=True)
            return RetrievalFailedState(label=state.label, error_message=RETRIEVE_ERROR)
        return ComposingState(label=state.label, passage=passage)

    async def _compose(self, run: PipelineRun, state: ComposingState) -> RunState:
        try:
            message = await self._composer.compose(
                run.feeling, state.passage.text, run.name
            )
        except ConfigurationError as exc:
            logger.error("[%s] Composer not configured: %s", run.id, exc.message)
            return CompositionFailedState(
                label=state.label, passage=state.passage, error_message=exc.message
            )
        except Exception:
            logger.error("[%s] Composition failed", run.id, exc_info=True)
            return CompositionFailedState(
                label=state.label, passage=state.passage, error_message=COMPOSE_ERROR
            )
        return RevealingState(label=state.label, passage=state.passage, message=message)

    async def _reveal_and_record(
        self, run: PipelineRun, state: RevealingState
    ) -> RunState:
        def on_prefix(prefix: str) -> None:
            if run is self._run:
                run.revealed = prefix
                self._notify(run)

        task = self._reveal.start(state.message, on_prefix)
        await asyncio.wait({task})
        if task.cancelled() or run is not self._run:
            # Reset during the reveal; the caller discards this run.
            return state

        entry_id = self._record(run, state)
        return CompleteState(
            label=state.label,
            passage=state.passage,
            message=state.message,
            entry_id=entry_id,
        )

    def _record(self, run: PipelineRun, state: RevealingState) -> str | None:
        if self._journal is None:
            return None
        try:
            date_label = self._date_label()
        except Exception:
            logger.warning("[%s] Could not build date label", run.id, exc_info=True)
            date_label = ""
        entry = self._journal.append(
            JournalDraft(
                date_label=date_label,
                name=run.name,
                feeling=run.feeling,
                label=state.label.value,
                passage=JournalPassage.from_passage(state.passage),
                reflection=state.message,
            )
        )
        return entry.id
