"""The fields of a RISC-V page table entry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .address import Pfn

# Both Sv39 and Sv48 use 44 bits for the page frame number.
PFN_BITS = 44
PFN_MASK = (1 << PFN_BITS) - 1
# The PFN starts after the 8 flag bits and the two RSW bits.
PFN_SHIFT = 10

_U64_MAX = (1 << 64) - 1


class PteFieldBit(IntEnum):
    """Single-bit fields of a PTE, valued by their bit position."""

    VALID = 0
    READ = 1
    WRITE = 2
    EXECUTE = 3
    USER = 4
    GLOBAL = 5
    ACCESSED = 6
    DIRTY = 7
    LOCKED = 8

    def shift(self) -> int:
        return int(self.value)

    def mask(self) -> int:
        return 1 << self.shift()

    def is_set(self, val: int) -> bool:
        return val & self.mask() != 0


class PteLeafPerms(IntEnum):
    """Access permissions of a leaf entry."""

    R = PteFieldBit.READ.mask()
    RW = PteFieldBit.READ.mask() | PteFieldBit.WRITE.mask()
    X = PteFieldBit.EXECUTE.mask()
    RX = PteFieldBit.READ.mask() | PteFieldBit.EXECUTE.mask()
    RWX = PteFieldBit.READ.mask() | PteFieldBit.WRITE.mask() | PteFieldBit.EXECUTE.mask()


MASK_RWX = PteLeafPerms.RWX.value


@dataclass
class PteFieldBits:
    """The status bits that define a PTE's state."""

    bits: int = 0

    def set_bit(self, bit: PteFieldBit) -> None:
        self.bits |= bit.mask()

    def clear_bit(self, bit: PteFieldBit) -> None:
        self.bits &= ~bit.mask()

    @classmethod
    def leaf_with_perms(cls, perms: PteLeafPerms) -> PteFieldBits:
        """Status for a leaf entry with the given permissions."""
        return cls(int(perms))

    @classmethod
    def non_leaf(cls) -> PteFieldBits:
        """Status for an entry pointing to a next-level table."""
        return cls()


@dataclass
class Pte:
    """A 64-bit page table entry."""

    bits: int = 0

    def set(self, pfn: Pfn, status: PteFieldBits) -> None:
        """Maps the page `pfn` with the `status` bits and marks the entry valid."""
        self.bits = ((pfn.bits << PFN_SHIFT) | status.bits | PteFieldBit.VALID.mask()) & _U64_MAX

    def valid(self) -> bool:
        return PteFieldBit.VALID.is_set(self.bits)

    def invalidate(self) -> None:
        self.bits &= ~PteFieldBit.VALID.mask()

    def mark_valid(self) -> None:
        self.bits |= PteFieldBit.VALID.mask()

    def locked(self) -> bool:
        return PteFieldBit.LOCKED.is_set(self.bits)

    def lock(self) -> None:
        self.bits |= PteFieldBit.LOCKED.mask()

    def unlock(self) -> None:
        self.bits &= ~PteFieldBit.LOCKED.mask()

    def clear(self) -> None:
        """Clears everything, including the valid bit."""
        self.bits = 0

    def leaf(self) -> bool:
        """True if any of the read, write or execute bits is set."""
        return self.bits & MASK_RWX != 0

    def pfn(self) -> Pfn:
        return Pfn.supervisor((self.bits >> PFN_SHIFT) & PFN_MASK)