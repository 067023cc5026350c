# prosystem-core

Building blocks for emulating a classic home console in pure Python, with
no dependencies beyond the standard library.

- `prosystem_core.cpu`: `Sally`, a 6502-compatible CPU, with a `Bus`
  protocol and `Memory`, a flat byte-addressed memory. `Memory(size)`
  raises `ValueError` for a size that is not positive, and `read`/`write`
  raise `IndexError` for addresses outside it. `write` keeps only the low
  byte of the value.
- `prosystem_core.opcodes`: `decode(opcode)` returns the `Instruction` for an
  opcode byte: its `Operation`, its addressing `Mode`, its base `cycles`, and
  `page_penalty`, which says whether it takes an extra cycle when indexing
  crosses a page. Opcodes the CPU does not implement have `operation` set to
  `None` (`defined` is `False`). They do nothing but still use the cycles in
  the table. A value outside 0–255 raises `ValueError`.
- `prosystem_core.alu`: pure functions for the arithmetic and the flags.
  `set_nz`, `adc`, `sbc` (both with decimal mode), `compare`, `bit`, `asl`,
  `lsr`, `rol` and `ror` all work on plain integers and the `Flag` bits of
  the status register. Each returns the new status, together with the result
  byte where there is one.
- `prosystem_core.riot`: `Riot`, the joystick/console-switch ports and the
  interval timer. It works on a RAM byte array and a memory write function.
  The `Input` enumeration gives the position of each control in the sequence
  passed to `set_input`.
- `prosystem_core.tia`: `Tia`, the two-channel sound generator that fills a
  ring buffer of samples.
- `prosystem_core.equates`: `Register`, the memory-mapped hardware register
  addresses.
- `prosystem_core.rect`: `Rect`, a rectangle whose right and bottom edges are
  inclusive. Its `length`, `height` and `area` properties are computed in
  unsigned 32-bit arithmetic.

## Installation

```
pip install .
```

## Running a program on the CPU

```python
from prosystem_core.cpu import Memory, Sally

memory = Memory(0x10000)
# reset vector -> 0x8000
memory.write(0xFFFC, 0x00)
memory.write(0xFFFD, 0x80)
# LDA #$42 ; STA $10
for offset, byte in enumerate([0xA9, 0x42, 0x85, 0x10]):
    memory.write(0x8000 + offset, byte)

cpu = Sally(memory)
cpu.reset()
cpu.execute_res()                      # loads pc from the reset vector, returns 6
cycles = cpu.execute_instruction() + cpu.execute_instruction()
assert memory.read(0x10) == 0x42
assert cycles == 5
```

Any object with `read(address)` and `write(address, data)` methods can serve
as the CPU's bus. `execute_nmi()` and `execute_irq()` service interrupts
through the vectors at `0xFFFA` and `0xFFFE`. An IRQ is ignored while the
interrupt-disable flag is set. Both return 7.

## Reading controls and running the timer

```python
from prosystem_core.equates import Register
from prosystem_core.riot import Input, Riot

ram = bytearray(0x4000)

def write(address, data):
    ram[address] = data

riot = Riot(ram, write)
riot.reset()

inputs = [0] * len(Input)
inputs[Input.JOY1_UP] = 1
riot.set_input(inputs)        # SWCHA bit 0x10 is pulled low
assert not ram[Register.SWCHA] & 0x10

riot.set_timer(Register.TIM8T, 10)
riot.update_timer(8)          # INTIM now reads 9
```

`set_input` raises `ValueError` if it is given fewer than `len(Input)`
values. Whether each player's buttons work in one-button or two-button mode
follows bits 2 and 4 of SWCHB, which come from `CTLSWB` and the value given
to `set_drb`. When the timer runs out, bit 7 of `INTFLG` is set.

## Generating sound

```python
from prosystem_core.equates import Register
from prosystem_core.tia import Tia

tia = Tia(524)
tia.set_register(Register.AUDC0, 4)
tia.set_register(Register.AUDF0, 10)
tia.set_register(Register.AUDV0, 15)
tia.process(524)
samples = tia.buffer          # bytearray of 624 bytes; the first 524 are used
```

The `size` given to `Tia` must be between 1 and 624; any other value raises
`ValueError`. Each sample is the sum of the two channels' volumes.
`set_register` ignores addresses other than the AUDC, AUDF and AUDV
registers.

## What this package does not do

It has no graphics chip, no cartridge or ROM loading, no memory map that
joins the parts together, no audio or video output, and no command-line
program. It supplies the CPU, the input/timer chip and the sound generator.
A complete console has to be assembled from these parts by the caller.

## Tests

```
pip install .[test]
pytest
```