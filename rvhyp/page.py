"""Pages of physical memory and the simulated memory that backs them."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from .address import U64_MAX, PageAddr, PageSize, Pfn
from .memory_type import MemType
from .state import PageState

_FRAME_SIZE = 4096
_U64_BYTES = 8


class PhysMemory:
    """Sparse, zero-filled, byte-addressable physical memory.

    Storage is allocated per 4kB frame on first write, so very large address
    ranges cost nothing until they are touched.
    """

    def __init__(self) -> None:
        self._frames: dict[int, bytearray] = {}

    @staticmethod
    def _chunks(addr: int, length: int) -> Iterator[tuple[int, int, int]]:
        if addr < 0 or length < 0 or addr + length > U64_MAX + 1:
            raise ValueError(f"range {addr:#x}+{length:#x} is outside the address space")
        end = addr + length
        while addr < end:
            frame, offset = divmod(addr, _FRAME_SIZE)
            count = min(_FRAME_SIZE - offset, end - addr)
            yield frame, offset, count
            addr += count

    def read(self, addr: int, length: int) -> bytes:
        """Returns `length` bytes starting at `addr`."""
        out = bytearray()
        for frame, offset, count in self._chunks(addr, length):
            data = self._frames.get(frame)
            if data is None:
                out += bytes(count)
            else:
                out += data[offset : offset + count]
        return bytes(out)

    def write(self, addr: int, data: bytes) -> None:
        """Stores `data` starting at `addr`."""
        view = memoryview(bytes(data))
        pos = 0
        for frame, offset, count in self._chunks(addr, len(view)):
            buf = self._frames.setdefault(frame, bytearray(_FRAME_SIZE))
            buf[offset : offset + count] = view[pos : pos + count]
            pos += count

    def fill(self, addr: int, length: int, value: int) -> None:
        """Sets `length` bytes starting at `addr` to the byte `value`."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"fill value {value} is not a byte")
        for frame, offset, count in self._chunks(addr, length):
            if value == 0 and count == _FRAME_SIZE:
                self._frames.pop(frame, None)
                continue
            if value == 0 and frame not in self._frames:
                continue
            buf = self._frames.setdefault(frame, bytearray(_FRAME_SIZE))
            buf[offset : offset + count] = bytes([value]) * count


class InitializationError(Exception):
    """Initializing a page failed; the page is handed back in a dirty state."""

    def __init__(self, page: Page, cause: BaseException) -> None:
        super().__init__(f"page initialization failed: {cause}")
        self.page = page
        self.cause = cause


@dataclass(frozen=True)
class Page:
    """A page of RAM in a given state, backed by `memory`."""

    addr: PageAddr
    state: PageState
    memory: PhysMemory = field(compare=False, repr=False)
    size: PageSize = PageSize.SIZE_4K

    def __post_init__(self) -> None:
        if not self.addr.is_aligned(self.size):
            raise ValueError(f"address {self.addr.bits:#x} is not aligned to {self.size.name}")

    @staticmethod
    def mem_type() -> MemType:
        """Pages always represent ordinary RAM."""
        return MemType.ram()

    def pfn(self) -> Pfn:
        return self.addr.pfn()

    def _with_state(self, state: PageState) -> Page:
        return Page(self.addr, state, self.memory, self.size)

    def get_u64(self, index: int) -> int | None:
        """The little-endian 64-bit word at `index`, or None past the end of the page."""
        if index < 0:
            raise ValueError("index must not be negative")
        offset = index * _U64_BYTES
        if offset >= self.size:
            return None
        return int.from_bytes(self.memory.read(self.addr.bits + offset, _U64_BYTES), "little")

    def u64_iter(self) -> Iterator[int]:
        """Iterates over every 64-bit word in the page."""
        for index in range(self.size // _U64_BYTES):
            yield self.get_u64(index)

    def as_bytes(self) -> bytes:
        """The contents of the page."""
        return self.memory.read(self.addr.bits, self.size)

    def clean(self) -> Page:
        """Zeroes the page and returns it in its cleaned state."""
        cleaned = self.state.cleaned_state()
        if cleaned is None:
            raise ValueError(f"a page in state {self.state.name} cannot be cleaned")
        self.memory.fill(self.addr.bits, self.size, 0)
        return self._with_state(cleaned)

    def _require_initializable(self) -> None:
        if not self.state.is_initializable():
            raise ValueError(f"a page in state {self.state.name} cannot be initialized")

    def try_initialize(self, func: Callable[[bytearray], None]) -> Page:
        """Lets `func` fill the page's bytes and returns the initialized page.

        If `func` raises, the bytes it wrote are kept and InitializationError is
        raised carrying the page in the converted-dirty state.
        """
        self._require_initializable()
        buffer = bytearray(self.as_bytes())
        try:
            func(buffer)
        except Exception as exc:
            self.memory.write(self.addr.bits, bytes(buffer[: self.size]))
            raise InitializationError(
                self._with_state(PageState.CONVERTED_DIRTY), exc
            ) from exc
        if len(buffer) != self.size:
            raise ValueError("initializer changed the length of the page")
        self.memory.write(self.addr.bits, bytes(buffer))
        return self._with_state(PageState.CONVERTED_INITIALIZED)

    def to_initialized_page(self) -> Page:
        """Marks the page initialized; the caller vouches for its contents."""
        self._require_initializable()
        return self._with_state(PageState.CONVERTED_INITIALIZED)