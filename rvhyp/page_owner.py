"""Page owners and the address spaces that addresses live in."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

_U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class PageOwnerId:
    """Identifies the entity that owns a page.

    0 is the host (the primary VM in VS mode), 1 is the hypervisor and every
    other value identifies a guest.
    """

    raw: int

    HOST = 0
    HYPERVISOR = 1

    def __post_init__(self) -> None:
        if not 0 <= self.raw <= _U64_MAX:
            raise ValueError(f"owner id {self.raw} is not a 64-bit value")

    @classmethod
    def guest(cls, id: int) -> PageOwnerId:
        """Returns the id of a guest; the host and hypervisor values are refused."""
        if id in (cls.HOST, cls.HYPERVISOR):
            raise ValueError(f"{id} is reserved and cannot identify a guest")
        return cls(id)

    @classmethod
    def host(cls) -> PageOwnerId:
        """Returns the id of the host."""
        return cls(cls.HOST)

    @classmethod
    def hypervisor(cls) -> PageOwnerId:
        """Returns the id of the hypervisor."""
        return cls(cls.HYPERVISOR)

    def is_host(self) -> bool:
        """True if this id is the host's."""
        return self.raw == self.HOST


class AddressSpace(ABC):
    """An address space that a raw address belongs to."""

    @abstractmethod
    def owner_id(self) -> PageOwnerId:
        """Returns the owner of the address space."""


@dataclass(frozen=True)
class SupervisorPhys(AddressSpace):
    """The supervisor (actual) physical address space."""

    def owner_id(self) -> PageOwnerId:
        return PageOwnerId.hypervisor()


@dataclass(frozen=True)
class SupervisorVirt(AddressSpace):
    """The supervisor's virtual address space."""

    def owner_id(self) -> PageOwnerId:
        return PageOwnerId.hypervisor()


@dataclass(frozen=True)
class GuestPhys(AddressSpace):
    """The guest physical address space of one VM."""

    owner: PageOwnerId

    def __post_init__(self) -> None:
        if self.owner == PageOwnerId.hypervisor():
            raise ValueError("the hypervisor never owns guest-physical memory")

    def owner_id(self) -> PageOwnerId:
        return self.owner