"""Building blocks of a RISC-V teaching kernel: formatting, firmware, console, traps, device tree and boot tools."""

__version__ = "0.1.0"