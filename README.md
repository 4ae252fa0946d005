# rvhyp

A pure-Python model of how a RISC-V hypervisor manages memory. It covers page sizes, addresses, page owners, page states, pages backed by simulated physical memory, and page table entries.

## Modules

- **`rvhyp.address`** provides these types:
  - `PageSize`, with the values `SIZE_4K`, `SIZE_2M`, `SIZE_1G` and `SIZE_512G`. It has methods for alignment and rounding.
  - `RawAddr`, a 64-bit address in an address space.
  - `Pfn`, a page frame number.
  - `PageAddr`, a page-aligned address.

  `PageAddr.new` and `PageAddr.with_alignment` return `None` for an address that is not aligned. `PageAddr.iter_from` walks pages in steps of a given size and stops at the end of the 64-bit address space. `PageAddr.checked_add_pages` returns `None` if the result would overflow.
- **`rvhyp.page_owner`** provides these types:
  - `PageOwnerId`. Its values are `host()`, `hypervisor()` and `guest(id)`.
  - The address spaces `SupervisorPhys`, `SupervisorVirt` and `GuestPhys`.
- **`rvhyp.memory_type`** provides `MemType`, which is either `ram()` or `mmio(device)`, and `DeviceMemType`.
- **`rvhyp.state`** provides `PageState` and `MeasureRequirement`. `PageState` has methods that say which states can be cleaned, initialized, assigned or mapped. For each of those, it also gives the state the page moves to.
- **`rvhyp.page`** provides these types:
  - `PhysMemory`, a sparse, zero-filled, byte-addressable memory.
  - `Page`, a page of RAM in a given `PageState` and backed by a `PhysMemory`. It has `get_u64`, `u64_iter`, `as_bytes`, `clean`, `try_initialize` and `to_initialized_page`. A failed `try_initialize` raises `InitializationError`, and the page it carries is in the converted-dirty state.
- **`rvhyp.sequential_pages`** provides `SequentialPages`, a contiguous run of pages that all have one size and one state. You can build one with `from_pages`, `from_page`, `from_mem_range` or `from_page_range`.

  If the input is bad, `from_pages` raises a `SequentialPagesError` subclass:
  - `EmptyPagesError`
  - `NonUniformSizeError`
  - `NonContiguousPagesError`
  - `AddressOverflowError`

  Each of these errors holds the pages in its `pages` attribute. A misaligned range raises `UnalignedPagesError`.
- **`rvhyp.pte`** provides these types:
  - `Pte`, a 64-bit page table entry.
  - `PteFieldBit`, one flag bit of an entry.
  - `PteFieldBits`, a set of status bits.
  - `PteLeafPerms`, the read/write/execute permissions of a leaf entry.

## Example

```python
from rvhyp.address import PageAddr, PageSize, RawAddr
from rvhyp.page import PhysMemory
from rvhyp.pte import Pte, PteFieldBits, PteLeafPerms
from rvhyp.sequential_pages import SequentialPages
from rvhyp.state import PageState

memory = PhysMemory()
base = PageAddr.new(RawAddr.supervisor(0x8000_0000))
run = SequentialPages.from_mem_range(
    base, PageSize.SIZE_4K, 2, PageState.CONVERTED_DIRTY, memory
)
first, second = run

memory.write(first.addr.bits, (0xDEADBEEF).to_bytes(8, "little"))
print(hex(first.get_u64(0)))        # 0xdeadbeef

clean = first.clean()
print(clean.state, clean.get_u64(0))  # PageState.CONVERTED_CLEAN 0

pte = Pte()
pte.set(second.pfn(), PteFieldBits.leaf_with_perms(PteLeafPerms.RW))
print(pte.valid(), pte.leaf(), pte.pfn() == second.pfn())  # True True True
```

## What it does not do

The package models single page table entries. It does not build, walk or populate multi-level page tables. It has no paging-mode definitions, no control and status register fields, and no trap-cause decoding. It provides no command-line program.

## Development

```
pip install -e .[test]
pytest
```