"""Build helpers: boot sector signing and trap vector generation."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator, Sequence, Union

SECTOR_SIZE = 512
_PAYLOAD_LIMIT = 510
_SIGNATURE = b"\x55\xaa"
_VECTOR_COUNT = 256

PathLike = Union[str, "os.PathLike[str]"]


def sign(data: bytes) -> bytes:
    """Pad ``data`` to a 512-byte boot sector ending in the 0x55 0xAA signature."""
    data = bytes(data)
    if len(data) > _PAYLOAD_LIMIT:
        raise ValueError(f"{len(data)} >> {_PAYLOAD_LIMIT}!!")
    return data.ljust(_PAYLOAD_LIMIT, b"\0") + _SIGNATURE


def sign_file(src: PathLike, dst: PathLike) -> int:
    """Write the signed boot sector for ``src`` to ``dst``; returns the input size."""
    data = Path(src).read_bytes()
    Path(dst).write_bytes(sign(data))
    return len(data)


def _vector_lines() -> Iterator[str]:
    yield "# handler"
    yield ".text"
    yield ".globl __alltraps"
    for i in range(_VECTOR_COUNT):
        yield f".globl vector{i}"
        yield f"vector{i}:"
        if (i < 8 or i > 14) and i != 17:
            yield "  pushl $0"
        yield f"  pushl ${i}"
        yield "  jmp __alltraps"
    yield ""
    yield "# vector table"
    yield ".data"
    yield ".globl __vectors"
    yield "__vectors:"
    for i in range(_VECTOR_COUNT):
        yield f"  .long vector{i}"


def vectors() -> str:
    """Assembly for the trap entry stubs and their address table."""
    return "".join(f"{line}\n" for line in _vector_lines())


def sign_main(argv: Sequence[str] | None = None) -> int:
    """Command entry: ``sign <input filename> <output filename>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: <input filename> <output filename>", file=sys.stderr)
        return -1
    src, dst = args
    try:
        size = os.stat(src).st_size
    except OSError as exc:
        print(f"Error opening file '{src}': {exc.strerror}", file=sys.stderr)
        return -1
    print(f"'{src}' size: {size} bytes")
    if size > _PAYLOAD_LIMIT:
        print(f"{size} >> {_PAYLOAD_LIMIT}!!", file=sys.stderr)
        return -1
    try:
        sign_file(src, dst)
    except OSError as exc:
        print(f"write '{dst}' error: {exc.strerror}", file=sys.stderr)
        return -1
    print(f"build {SECTOR_SIZE} bytes boot sector: '{dst}' success!")
    return 0


def vector_main(argv: Sequence[str] | None = None) -> int:
    """Command entry: print the trap vector assembly."""
    sys.stdout.write(vectors())
    return 0