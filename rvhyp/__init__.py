"""Model of RISC-V hypervisor memory: addresses, page owners and states, pages and page table entries."""

__version__ = "0.1.0"