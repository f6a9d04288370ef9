# rvkern

`rvkern` provides the building blocks of a small RISC-V teaching kernel as
plain Python objects. It includes kernel-style formatted output, a simulated
supervisor binary interface (SBI), a console that runs on top of that SBI,
trap frames and trap dispatch, a reader for the memory node of a flattened
device tree, and two build tools. You can create and inspect every part in a
test. Nothing here needs hardware or an emulator.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `rvkern.fmt` | Kernel `printf`-style formatting with `printfmt`, `kformat` and `snprintf`. The `%e` verb prints the message for an `ErrorCode`, and `error_message` returns that message directly. |
| `rvkern.bits` | `BitWord`, a bit field that supports `set_bit`, `clear_bit`, `change_bit`, `test_bit`, `test_and_set_bit` and `test_and_clear_bit`. Also `round_down` and `round_up`. |
| `rvkern.sbi` | `Sbi`, a firmware model for one hart. Its console writes to a text stream and reads from queued characters. It also has a timer, an IPI flag and shutdown. `SbiCall` lists the call numbers. |
| `rvkern.cstring` | Helpers that keep C semantics for NUL-terminated strings and memory: `strnlen`, `strcmp`, `strncmp`, `strfind`, `strtol`, `memmove` and `memcmp`. |
| `rvkern.dlist` | `ListEntry`, an intrusive circular doubly linked list. |
| `rvkern.sync` | `InterruptState`, which tracks the supervisor interrupt-enable bit, and the `local_intr_save` context manager. |
| `rvkern.console` | `Console`, which provides `putc`, `getc`, `cprintf`, `cputs`, `getchar`, `readline`, `warn` and `panic`. `panic` raises `KernelPanic`. |
| `rvkern.trap` | `TrapFrame`, `PushRegs`, the `Cause` and `Irq` codes, and `trap`, which sends a frame to `interrupt_handler` or `exception_handler`. |
| `rvkern.dtb` | `extract_memory_info` finds the `reg` property of the memory node in a device-tree blob and returns a `MemoryInfo`. `dtb_init` prints a boot report of that range. |
| `rvkern.tools` | `sign` and `sign_file` build a 512-byte boot sector. `vectors` generates the assembly for the trap vectors. |

## Examples

Format text the way the kernel console does:

```python
from rvkern.fmt import kformat, snprintf

kformat("%08x|%-5s|%e", 0xBEEF, "ok", -4)
# '0000beef|ok   |out of memory'

snprintf(5, "%d", 123456)
# ('1234', 6)  -- the text that fits, and the full length
```

Write to a console backed by the simulated firmware:

```python
import io
from rvkern.sbi import Sbi
from rvkern.console import Console

out = io.StringIO()
console = Console(Sbi(output=out, input_chars="help\n"))
console.cprintf("%d ticks\n", 100)   # returns 10
console.readline("K> ")              # 'help', echoed to out
```

Parse an integer the way C `strtol` does:

```python
from rvkern.cstring import strtol

strtol("0x1f")   # (31, 4): the value and the index where parsing stopped
```

## Commands

- `rvkern-sign INPUT OUTPUT` pads a binary of at most 510 bytes to a 512-byte
  boot sector and writes the `0x55 0xAA` signature at the end.
- `rvkern-vectors` writes the trap vector assembly to standard output.

## What it does not do

`rvkern` does not include a physical page allocator, a page-table or Sv39
address layer, a timer tick handler, or an interactive debug monitor. It has
no command that boots a whole kernel. The modules above are separate pieces
for you to combine yourself.