import pytest

from rvhyp.state import MeasureRequirement, PageState


def test_cleaning_transitions():
    assert PageState.CONVERTED_DIRTY.cleaned_state() is PageState.CONVERTED_CLEAN
    assert PageState.INTERNAL_DIRTY.cleaned_state() is PageState.INTERNAL_CLEAN


@pytest.mark.parametrize(
    "state",
    [
        PageState.INVALIDATED,
        PageState.CONVERTED_CLEAN,
        PageState.MAPPABLE_CLEAN,
        PageState.INTERNAL_CLEAN,
    ],
)
def test_not_cleanable(state):
    assert state.cleaned_state() is None


def test_cleaning_preserves_family():
    assert PageState.CONVERTED_DIRTY.cleaned_state().is_converted()
    assert PageState.INTERNAL_DIRTY.cleaned_state().is_internal()
    for state in PageState:
        cleaned = state.cleaned_state()
        if cleaned is not None:
            assert cleaned.is_converted() == state.is_converted()
            assert cleaned.is_internal() == state.is_internal()


def test_converted_and_internal_are_disjoint():
    assert PageState.CONVERTED_CLEAN.is_converted()
    assert not PageState.CONVERTED_CLEAN.is_internal()
    assert PageState.INTERNAL_DIRTY.is_internal()
    assert not PageState.INTERNAL_DIRTY.is_converted()
    for state in PageState:
        assert not (state.is_converted() and state.is_internal())


def test_assignable_states_are_converted():
    assert PageState.INTERNAL_CLEAN.assignable_measure() is None
    assert PageState.CONVERTED_DIRTY.assignable_measure() is None
    for state in PageState:
        if state.assignable_measure() is not None:
            assert state.is_converted()


def test_assigned_mappable_state_matches_measure():
    assert PageState.CONVERTED_CLEAN.mappable_state() is PageState.MAPPABLE_CLEAN
    assert (
        PageState.CONVERTED_INITIALIZED.mappable_state()
        is PageState.MAPPABLE_INITIALIZED
    )
    for state in PageState:
        mappable = state.mappable_state()
        assert (mappable is None) == (state.assignable_measure() is None)
        if mappable is not None:
            assert mappable.mappable_measure() is state.assignable_measure()


def test_initialized_requires_measurement():
    assert PageState.CONVERTED_INITIALIZED.assignable_measure() is MeasureRequirement.REQUIRED
    assert PageState.MAPPABLE_INITIALIZED.mappable_measure() is MeasureRequirement.REQUIRED


def test_clean_measurement_optional():
    assert PageState.CONVERTED_CLEAN.assignable_measure() is MeasureRequirement.OPTIONAL
    assert PageState.MAPPABLE_CLEAN.mappable_measure() is MeasureRequirement.OPTIONAL


def test_initializable_states():
    assert PageState.CONVERTED_DIRTY.is_initializable()
    assert not PageState.CONVERTED_INITIALIZED.is_initializable()
    initializable = {s for s in PageState if s.is_initializable()}
    assert initializable == {PageState.CONVERTED_DIRTY, PageState.CONVERTED_CLEAN}


def test_invalidated_is_nothing_else():
    s = PageState.INVALIDATED
    assert not s.is_converted()
    assert not s.is_internal()
    assert s.mappable_measure() is None
    assert s.mappable_state() is None