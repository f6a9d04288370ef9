[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvkern"
version = "0.1.0"
description = "Building blocks of a small RISC-V teaching kernel in Python: formatted console output, a simulated SBI, C string helpers, intrusive lists, traps, a device-tree memory reader and boot-sector tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "risc-v",
    "operating-system",
    "printf",
    "device-tree",
    "sbi",
    "trap",
    "boot-sector",
    "education",
]
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
rvkern-sign = "rvkern.tools:sign_main"
rvkern-vectors = "rvkern.tools:vector_main"

[tool.hatch.build.targets.wheel]
packages = ["rvkern"]

[tool.pytest.ini_options]
addopts = "-ra"
