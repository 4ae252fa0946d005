"""Runs of physically contiguous pages of one size and state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import islice

from .address import PageAddr, PageSize
from .page import Page, PhysMemory
from .state import PageState


class SequentialPagesError(Exception):
    """Pages could not be gathered into a `SequentialPages`.

    `pages` holds every page that was handed in, so none of them is lost.
    """

    def __init__(self, message: str, pages: Iterable[Page] = ()) -> None:
        super().__init__(message)
        self.pages: list[Page] = list(pages)


class EmptyPagesError(SequentialPagesError):
    """No pages were given."""

    def __init__(self) -> None:
        super().__init__("no pages were given")


class NonContiguousPagesError(SequentialPagesError):
    """The pages are not one after another in memory."""

    def __init__(self, pages: Iterable[Page]) -> None:
        super().__init__("pages are not contiguous", pages)


class NonUniformSizeError(SequentialPagesError):
    """The pages are not all of the same size."""

    def __init__(self, pages: Iterable[Page]) -> None:
        super().__init__("pages are of different sizes", pages)


class AddressOverflowError(SequentialPagesError):
    """The run of pages would pass the end of the address space."""

    def __init__(self, pages: Iterable[Page]) -> None:
        super().__init__("pages overflow the address space", pages)


class UnalignedPagesError(SequentialPagesError):
    """A range boundary is not aligned to the requested page size."""

    def __init__(self) -> None:
        super().__init__("range is not aligned to the page size")


@dataclass(frozen=True)
class SequentialPages:
    """`count` pages of `page_size`, each directly after the previous one."""

    addr: PageAddr
    page_size: PageSize
    count: int
    state: PageState
    memory: PhysMemory = field(compare=False, repr=False)

    @property
    def base(self) -> PageAddr:
        """The address of the first page."""
        return self.addr

    @classmethod
    def from_pages(cls, pages: Iterable[Page]) -> SequentialPages:
        """Gathers `pages` into one run.

        Raises a SequentialPagesError subclass carrying all the pages if they
        are empty, of mixed sizes, not contiguous, or run past the address space.
        """
        remaining = iter(pages)
        first = next(remaining, None)
        if first is None:
            raise EmptyPagesError()
        taken = [first]
        last_addr = first.addr
        for page in remaining:
            taken.append(page)
            if page.size != first.size:
                raise NonUniformSizeError([*taken, *remaining])
            if page.state != first.state:
                raise ValueError(
                    f"pages are in different states: {first.state.name} and {page.state.name}"
                )
            next_addr = last_addr.checked_add_pages(1, first.size)
            if next_addr is None:
                raise AddressOverflowError([*taken, *remaining])
            if page.addr != next_addr:
                raise NonContiguousPagesError([*taken, *remaining])
            last_addr = page.addr
        return cls(first.addr, first.size, len(taken), first.state, first.memory)

    @classmethod
    def from_page(cls, page: Page) -> SequentialPages:
        """A run holding the single `page`."""
        return cls(page.addr, page.size, 1, page.state, page.memory)

    @classmethod
    def from_mem_range(
        cls,
        addr: PageAddr,
        page_size: PageSize,
        count: int,
        state: PageState,
        memory: PhysMemory,
    ) -> SequentialPages:
        """Takes `count` pages starting at `addr`; `addr` must be aligned to `page_size`."""
        if count < 0:
            raise ValueError("page count must not be negative")
        if not addr.is_aligned(page_size):
            raise UnalignedPagesError()
        return cls(addr, page_size, count, state, memory)

    @classmethod
    def from_page_range(
        cls,
        start: PageAddr,
        end: PageAddr,
        page_size: PageSize,
        state: PageState,
        memory: PhysMemory,
    ) -> SequentialPages:
        """Takes the pages in [start, end); both ends must be aligned to `page_size`."""
        if not start.is_aligned(page_size) or not end.is_aligned(page_size):
            raise UnalignedPagesError()
        if end.bits < start.bits:
            raise ValueError(f"range end {end.bits:#x} is before its start {start.bits:#x}")
        return cls(start, page_size, (end.bits - start.bits) // page_size, state, memory)

    def __len__(self) -> int:
        return self.count

    def is_empty(self) -> bool:
        return self.count == 0

    def length_bytes(self) -> int:
        """The size in bytes of the memory covered by the run."""
        return self.page_size * self.count

    def __iter__(self) -> Iterator[Page]:
        for addr in islice(self.addr.iter_from(self.page_size), self.count):
            yield Page(addr, self.state, self.memory, self.page_size)

    def clean(self) -> SequentialPages:
        """Zeroes every page and returns the run in its cleaned state."""
        if self.state.cleaned_state() is None:
            raise ValueError(f"pages in state {self.state.name} cannot be cleaned")
        if self.is_empty():
            return SequentialPages(
                self.addr, self.page_size, 0, self.state.cleaned_state(), self.memory
            )
        return SequentialPages.from_pages(page.clean() for page in self)