"""Runtime states of a physical page and the transitions between them."""

from __future__ import annotations

from enum import Enum


class MeasureRequirement(Enum):
    """Whether a page must be measured before it is mapped."""

    REQUIRED = "required"
    OPTIONAL = "optional"


class PageState(Enum):
    """The state of a page while it moves between owners."""

    INVALIDATED = "invalidated"
    CONVERTED_DIRTY = "converted_dirty"
    CONVERTED_CLEAN = "converted_clean"
    CONVERTED_INITIALIZED = "converted_initialized"
    MAPPABLE_CLEAN = "mappable_clean"
    MAPPABLE_INITIALIZED = "mappable_initialized"
    INTERNAL_CLEAN = "internal_clean"
    INTERNAL_DIRTY = "internal_dirty"

    def is_converted(self) -> bool:
        """True for converted but unassigned states."""
        return self in _CONVERTED

    def is_internal(self) -> bool:
        """True for states that back (or backed) internal data."""
        return self in _INTERNAL

    def is_initializable(self) -> bool:
        """True if a page in this state may be initialized."""
        return self in _INITIALIZABLE

    def mappable_measure(self) -> MeasureRequirement | None:
        """The measurement requirement if the page can be mapped, else None."""
        return _MAPPABLE_MEASURE.get(self)

    def cleaned_state(self) -> PageState | None:
        """The state reached by cleaning, or None if the state is not cleanable."""
        return _CLEANED.get(self)

    def assignable_measure(self) -> MeasureRequirement | None:
        """The measurement requirement if the page can be assigned, else None."""
        return _ASSIGNABLE_MEASURE.get(self)

    def mappable_state(self) -> PageState | None:
        """The mappable state an assignable page becomes, or None."""
        return _ASSIGNED_MAPPABLE.get(self)


_CONVERTED = frozenset(
    {
        PageState.CONVERTED_DIRTY,
        PageState.CONVERTED_CLEAN,
        PageState.CONVERTED_INITIALIZED,
    }
)
_INTERNAL = frozenset({PageState.INTERNAL_CLEAN, PageState.INTERNAL_DIRTY})
_INITIALIZABLE = frozenset({PageState.CONVERTED_DIRTY, PageState.CONVERTED_CLEAN})
_MAPPABLE_MEASURE = {
    PageState.MAPPABLE_CLEAN: MeasureRequirement.OPTIONAL,
    PageState.MAPPABLE_INITIALIZED: MeasureRequirement.REQUIRED,
}
_CLEANED = {
    PageState.CONVERTED_DIRTY: PageState.CONVERTED_CLEAN,
    PageState.INTERNAL_DIRTY: PageState.INTERNAL_CLEAN,
}
_ASSIGNABLE_MEASURE = {
    PageState.CONVERTED_CLEAN: MeasureRequirement.OPTIONAL,
    PageState.CONVERTED_INITIALIZED: MeasureRequirement.REQUIRED,
}
_ASSIGNED_MAPPABLE = {
    PageState.CONVERTED_CLEAN: PageState.MAPPABLE_CLEAN,
    PageState.CONVERTED_INITIALIZED: PageState.MAPPABLE_INITIALIZED,
}