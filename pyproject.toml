[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xv6sim"
version = "0.1.0"
description = "Pure-Python models of a small teaching Unix kernel's MMU, paging, ELF headers, shell parser, allocator, locks and wc utility"
requires-python = ">=3.10"
dependencies = []
keywords = ["operating-system", "kernel", "paging", "mmu", "elf", "shell", "allocator", "simulation", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System Kernels",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xv6sim-wc = "xv6sim.wc:main"

[tool.hatch.build.targets.wheel]
packages = ["xv6sim"]

[tool.pytest.ini_options]
addopts = "-ra"
