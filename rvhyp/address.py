"""Page sizes, raw addresses, page frame numbers and page-aligned addresses."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from .page_owner import AddressSpace, GuestPhys, PageOwnerId, SupervisorPhys, SupervisorVirt

U64_MAX = (1 << 64) - 1

PFN_SHIFT = 12
PFN_BITS = 44
PFN_MASK = (1 << PFN_BITS) - 1


class PageSize(IntEnum):
    """The page sizes supported by RISC-V."""

    SIZE_4K = 4 * 1024
    SIZE_2M = 2 * 1024 * 1024
    SIZE_1G = 1024 * 1024 * 1024
    SIZE_512G = 512 * 1024 * 1024 * 1024

    @staticmethod
    def num_4k_pages(val: int) -> int:
        """Returns `val` divided by 4kB, rounded up."""
        return (val + PageSize.SIZE_4K - 1) // PageSize.SIZE_4K

    def is_aligned(self, val: int) -> bool:
        """True if `val` is a multiple of this page size."""
        return val & (self.value - 1) == 0

    def round_up(self, val: int) -> int:
        """Rounds `val` up to a multiple of this page size (wrapping at 64 bits)."""
        return (val + self.value - 1) & ~(self.value - 1) & U64_MAX

    def round_down(self, val: int) -> int:
        """Rounds `val` down to a multiple of this page size."""
        return val & ~(self.value - 1)

    def is_huge(self) -> bool:
        """True for any size larger than 4kB."""
        return self is not PageSize.SIZE_4K


@dataclass(frozen=True)
class RawAddr:
    """A 64-bit address in an address space; ordered by its bits alone."""

    bits: int
    address_space: AddressSpace

    def __post_init__(self) -> None:
        if not 0 <= self.bits <= U64_MAX:
            raise ValueError(f"address {self.bits:#x} is not a 64-bit value")

    @classmethod
    def supervisor(cls, addr: int) -> RawAddr:
        return cls(addr, SupervisorPhys())

    @classmethod
    def supervisor_virt(cls, addr: int) -> RawAddr:
        return cls(addr, SupervisorVirt())

    @classmethod
    def guest(cls, addr: int, owner: PageOwnerId) -> RawAddr:
        return cls(addr, GuestPhys(owner))

    def checked_increment(self, increment: int) -> RawAddr | None:
        """The address `increment` bytes on, or None if that overflows 64 bits."""
        addr = self.bits + increment
        if addr > U64_MAX:
            return None
        return RawAddr(addr, self.address_space)

    def __lt__(self, other: RawAddr) -> bool:
        return self.bits < other.bits

    def __le__(self, other: RawAddr) -> bool:
        return self.bits <= other.bits

    def __gt__(self, other: RawAddr) -> bool:
        return self.bits > other.bits

    def __ge__(self, other: RawAddr) -> bool:
        return self.bits >= other.bits


@dataclass(frozen=True)
class Pfn:
    """The frame number of a page in an address space."""

    bits: int
    address_space: AddressSpace

    @classmethod
    def supervisor(cls, bits: int) -> Pfn:
        return cls(bits, SupervisorPhys())


@dataclass(frozen=True)
class PageAddr:
    """An address aligned to at least a 4kB page boundary."""

    addr: RawAddr

    def __post_init__(self) -> None:
        if not PageSize.SIZE_4K.is_aligned(self.addr.bits):
            raise ValueError(f"address {self.addr.bits:#x} is not page aligned")

    @classmethod
    def new(cls, addr: RawAddr) -> PageAddr | None:
        """A 4kB-aligned page address, or None if `addr` isn't aligned."""
        return cls.with_alignment(addr, PageSize.SIZE_4K)

    @classmethod
    def with_alignment(cls, addr: RawAddr, alignment: PageSize) -> PageAddr | None:
        """A page address, or None if `addr` isn't aligned to `alignment`."""
        if alignment.is_aligned(addr.bits):
            return cls(addr)
        return None

    @classmethod
    def from_pfn(cls, pfn: Pfn, alignment: PageSize) -> PageAddr | None:
        """The address of the page numbered `pfn`, if aligned to `alignment`."""
        raw = RawAddr((pfn.bits << PFN_SHIFT) & U64_MAX, pfn.address_space)
        return cls.with_alignment(raw, alignment)

    @classmethod
    def with_round_up(cls, addr: RawAddr, alignment: PageSize) -> PageAddr:
        return cls(RawAddr(alignment.round_up(addr.bits), addr.address_space))

    @classmethod
    def with_round_down(cls, addr: RawAddr, alignment: PageSize) -> PageAddr:
        return cls(RawAddr(alignment.round_down(addr.bits), addr.address_space))

    @property
    def bits(self) -> int:
        return self.addr.bits

    @property
    def address_space(self) -> AddressSpace:
        return self.addr.address_space

    def is_aligned(self, alignment: PageSize) -> bool:
        return alignment.is_aligned(self.addr.bits)

    def iter_from(self, page_size: PageSize = PageSize.SIZE_4K) -> Iterator[PageAddr]:
        """Iterates from this address in `page_size` steps to the end of the address space."""
        if not self.is_aligned(page_size):
            raise ValueError(f"address {self.bits:#x} is not aligned to {page_size.name}")
        return self._iter_from(page_size)

    def _iter_from(self, page_size: PageSize) -> Iterator[PageAddr]:
        current: PageAddr | None = self
        while current is not None:
            yield current
            current = current.checked_add_pages(1, page_size)

    def pfn(self) -> Pfn:
        return Pfn((self.addr.bits >> PFN_SHIFT) & PFN_MASK, self.addr.address_space)

    def checked_add_pages(
        self, n: int, page_size: PageSize = PageSize.SIZE_4K
    ) -> PageAddr | None:
        """The address `n` pages on, or None on overflow or misalignment."""
        increment = n * page_size
        if increment > U64_MAX:
            return None
        addr = self.addr.checked_increment(increment)
        if addr is None:
            return None
        return PageAddr.with_alignment(addr, page_size)

    def index(self) -> int:
        """The linear page count from address 0."""
        return self.pfn().bits

    def __lt__(self, other: PageAddr) -> bool:
        return self.addr < other.addr

    def __le__(self, other: PageAddr) -> bool:
        return self.addr <= other.addr

    def __gt__(self, other: PageAddr) -> bool:
        return self.addr > other.addr

    def __ge__(self, other: PageAddr) -> bool:
        return self.addr >= other.addr