"""The kinds of memory a page may represent."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeviceMemType(Enum):
    """The class of device a page of MMIO belongs to."""

    IMSIC = "IMSIC"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MemType:
    """Ordinary RAM, or memory-mapped IO of a given device type."""

    device: DeviceMemType | None = None

    @classmethod
    def ram(cls) -> MemType:
        """Ordinary, idempotent system RAM."""
        return cls(None)

    @classmethod
    def mmio(cls, device: DeviceMemType) -> MemType:
        """Memory-mapped IO whose reads and writes may have side effects."""
        return cls(device)

    @property
    def is_mmio(self) -> bool:
        return self.device is not None

    def __str__(self) -> str:
        if self.device is None:
            return "RAM"
        return f"MMIO ({self.device})"