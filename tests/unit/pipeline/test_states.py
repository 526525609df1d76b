from __future__ import annotations

import pytest
from pydantic import ValidationError

from ummah_speaks.labels import Label
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
    Stage,
    StageStatus,
    check_transition,
)

I, L, D, E = StageStatus.IDLE, StageStatus.LOADING, StageStatus.DONE, StageStatus.ERROR


def _statuses(state) -> tuple[StageStatus, ...]:
    return tuple(state.stage_status(stage) for stage in Stage)


def test_stage_statuses_per_state(make_passage) -> None:
    p = make_passage()
    assert _statuses(IdleState()) == (I, I, I)
    assert _statuses(ClassifyingState()) == (L, I, I)
    assert _statuses(RetrievingState(label=Label.HOPE)) == (D, L, I)
    assert _statuses(ComposingState(label=Label.HOPE, passage=p)) == (D, D, L)
    assert _statuses(
        RevealingState(label=Label.HOPE, passage=p, message="m")
    ) == (D, D, D)
    assert _statuses(CompleteState(label=Label.HOPE, passage=p, message="m")) == (
        D,
        D,
        D,
    )
    assert _statuses(ClassificationFailedState(error_message="x")) == (E, I, I)
    assert _statuses(RetrievalFailedState(label=Label.HOPE, error_message="x")) == (
        D,
        E,
        I,
    )
    assert _statuses(
        CompositionFailedState(label=Label.HOPE, passage=p, error_message="x")
    ) == (D, D, E)


def test_states_are_immutable() -> None:
    state = RetrievingState(label=Label.HOPE)
    with pytest.raises(ValidationError):
        state.label = Label.FEAR  # type: ignore[misc]


def test_legal_transitions_pass(make_passage) -> None:
    p = make_passage()
    check_transition(IdleState(), ClassifyingState())
    check_transition(ClassifyingState(), RetrievingState(label=Label.FEAR))
    check_transition(
        RetrievingState(label=Label.FEAR),
        RetrievalFailedState(label=Label.FEAR, error_message="x"),
    )
    check_transition(
        RevealingState(label=Label.FEAR, passage=p, message="m"),
        CompleteState(label=Label.FEAR, passage=p, message="m"),
    )


@pytest.mark.parametrize(
    "current, new",
    [
        (IdleState(), RetrievingState(label=Label.FEAR)),
        (ClassifyingState(), ClassifyingState()),
        (ClassificationFailedState(error_message="x"), ClassifyingState()),
        (RetrievingState(label=Label.FEAR), ClassificationFailedState(error_message="x")),
    ],
)
def test_illegal_transitions_raise(current, new) -> None:
    with pytest.raises(ValueError, match="Illegal transition"):
        check_transition(current, new)


def test_run_exposes_outputs_of_completed_stages(make_passage) -> None:
    passage = make_passage()
    run = PipelineRun.start("sad", "Amina")
    assert run.is_active
    assert run.label is None and run.passage is None and run.message is None

    run.state = RetrievalFailedState(label=Label.GRIEF, error_message="none")
    assert run.status is StageStatus.DONE
    assert run.label is Label.GRIEF
    assert run.passage is None
    assert run.error_message == "none"
    assert not run.is_active

    run.state = CompleteState(label=Label.GRIEF, passage=passage, message="m")
    assert run.is_complete
    assert run.passage == passage
    assert run.message == "m"
    assert run.error_message is None


def test_new_run_is_idle() -> None:
    run = PipelineRun()
    assert isinstance(run.state, IdleState)
    assert run.status is StageStatus.IDLE
    assert not run.is_active
