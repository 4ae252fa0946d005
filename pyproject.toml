[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvhyp"
version = "0.1.0"
description = "RISC-V hypervisor memory model: page sizes and addresses, page owners, page states, simulated physical pages and page table entries"
requires-python = ">=3.10"
dependencies = []
keywords = ["riscv", "hypervisor", "paging", "page-table", "pte", "memory"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rvhyp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
