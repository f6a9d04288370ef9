"""Flattened device tree reading: the physical memory range handed over at boot."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .fmt import kformat

FDT_MAGIC = 0xD00DFEED

FDT_BEGIN_NODE = 0x00000001
FDT_END_NODE = 0x00000002
FDT_PROP = 0x00000003
FDT_NOP = 0x00000004
FDT_END = 0x00000009

# magic, totalsize, off_dt_struct, off_dt_strings, off_mem_rsvmap, version,
# last_comp_version, boot_cpuid_phys, size_dt_strings, size_dt_struct
_HEADER = struct.Struct(">10I")

_MEGABYTE = 1024 * 1024


class DtbError(ValueError):
    """The device tree is malformed or does not describe memory."""


@dataclass(frozen=True)
class MemoryInfo:
    """A physical memory range taken from the device tree."""

    base: int
    size: int

    @property
    def end(self) -> int:
        """First address past the range."""
        return self.base + self.size


def _u32(blob: bytes, offset: int) -> int:
    if offset < 0 or offset + 4 > len(blob):
        raise DtbError(f"device tree truncated at offset {offset}")
    return int.from_bytes(blob[offset : offset + 4], "big")


def _u64(blob: bytes, offset: int) -> int:
    if offset < 0 or offset + 8 > len(blob):
        raise DtbError(f"device tree truncated at offset {offset}")
    return int.from_bytes(blob[offset : offset + 8], "big")


def _cstring(blob: bytes, offset: int) -> bytes:
    if offset < 0 or offset >= len(blob):
        raise DtbError(f"string offset {offset} lies outside the device tree")
    end = blob.find(b"\0", offset)
    if end < 0:
        raise DtbError(f"unterminated string at offset {offset}")
    return blob[offset:end]


def _magic(blob: bytes) -> int:
    return int.from_bytes(blob[:4].ljust(4, b"\0"), "big")


def extract_memory_info(blob: bytes) -> MemoryInfo:
    """Find the ``reg`` property of the first memory node in a device tree blob.

    Raises DtbError when the blob is invalid or holds no such property.
    """
    blob = bytes(blob)
    if len(blob) < _HEADER.size:
        raise DtbError("device tree header is truncated")
    fields = _HEADER.unpack_from(blob)
    magic, off_struct, off_strings = fields[0], fields[2], fields[3]
    if magic != FDT_MAGIC:
        raise DtbError(f"Invalid DTB magic number: 0x{magic:x}")

    pos = off_struct
    in_memory_node = False
    while True:
        token = _u32(blob, pos)
        pos += 4
        if token == FDT_BEGIN_NODE:
            name = _cstring(blob, pos)
            if name.startswith(b"memory"):
                in_memory_node = True
            pos = (pos + len(name) + 4) & ~3
        elif token == FDT_END_NODE:
            in_memory_node = False
        elif token == FDT_PROP:
            length = _u32(blob, pos)
            name_offset = _u32(blob, pos + 4)
            pos += 8
            name = _cstring(blob, off_strings + name_offset)
            if in_memory_node and name == b"reg" and length >= 16:
                return MemoryInfo(_u64(blob, pos), _u64(blob, pos + 8))
            pos = (pos + length + 3) & ~3
        elif token == FDT_NOP:
            continue
        elif token == FDT_END:
            raise DtbError("no memory node with a reg property")
        else:
            raise DtbError(f"unexpected token 0x{token:x} at offset {pos - 4}")


def dtb_init(
    blob: bytes, hartid: int, address: int, write: Callable[[str], Any]
) -> Optional[MemoryInfo]:
    """Report the boot device tree through ``write`` and return its memory range.

    Returns None when the address is null, the magic number is wrong or no
    memory range is found; each case is reported as the boot code does.
    """

    def out(fmt: str, *args: Any) -> None:
        write(kformat(fmt, *args))

    out("DTB Init\n")
    out("HartID: %ld\n", hartid)
    out("DTB Address: 0x%lx\n", address)

    if address == 0:
        out("Error: DTB address is null\n")
        return None

    blob = bytes(blob)
    magic = _magic(blob)
    if magic != FDT_MAGIC:
        out("Error: Invalid DTB magic number: 0x%x\n", magic)
        return None

    try:
        info: Optional[MemoryInfo] = extract_memory_info(blob)
    except DtbError:
        out("Warning: Could not extract memory info from DTB\n")
        info = None
    else:
        out("Physical Memory from DTB:\n")
        out("  Base: 0x%016lx\n", info.base)
        out("  Size: 0x%016lx (%ld MB)\n", info.size, info.size // _MEGABYTE)
        out("  End:  0x%016lx\n", info.end - 1)
    out("DTB init completed\n")
    return info