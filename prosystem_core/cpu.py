"""The 6502-compatible "Sally" processor and a flat memory bus for it."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from . import alu
from .alu import Flag
from .opcodes import Mode, Operation, decode

_RES_VECTOR = 0xFFFC
_NMI_VECTOR = 0xFFFA
_IRQ_VECTOR = 0xFFFE
_STACK_BASE = 0x100


class Bus(Protocol):
    """Anything the processor can read bytes from and write bytes to."""

    def read(self, address: int) -> int: ...

    def write(self, address: int, data: int) -> None: ...


class Memory:
    """A flat, byte-addressed memory usable as a processor bus."""

    def __init__(self, size: int = 0x10000) -> None:
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        self.data = bytearray(size)

    def _check(self, address: int) -> None:
        if not 0 <= address < len(self.data):
            raise IndexError(f"address {address:#x} outside memory of {len(self.data)} bytes")

    def read(self, address: int) -> int:
        """Return the byte at ``address``."""
        self._check(address)
        return self.data[address]

    def write(self, address: int, data: int) -> None:
        """Store the low byte of ``data`` at ``address``."""
        self._check(address)
        self.data[address] = data & 0xFF


def _signed(byte: int) -> int:
    byte &= 0xFF
    return byte - 0x100 if byte & 0x80 else byte


class Sally:
    """Executes instructions one at a time against a ``Bus``."""

    def __init__(self, bus: Bus) -> None:
        self.bus = bus
        self.a = 0
        self.x = 0
        self.y = 0
        self.p = 0
        self.s = 0
        self.pc = 0
        self._cycles = 0

    # -- helpers -----------------------------------------------------------

    def _fetch(self) -> int:
        value = self.bus.read(self.pc)
        self.pc = (self.pc + 1) & 0xFFFF
        return value

    def _fetch_word(self) -> int:
        low = self._fetch()
        return low | (self._fetch() << 8)

    def _read_vector(self, vector: int) -> int:
        low = self.bus.read(vector)
        return low | (self.bus.read(vector + 1) << 8)

    def _push(self, data: int) -> None:
        self.bus.write(self.s + _STACK_BASE, data & 0xFF)
        self.s = (self.s - 1) & 0xFF

    def _pop(self) -> int:
        self.s = (self.s + 1) & 0xFF
        return self.bus.read(self.s + _STACK_BASE)

    def _push_pc(self) -> None:
        self._push(self.pc >> 8)
        self._push(self.pc & 0xFF)

    def _set_flag(self, flag: Flag, on: bool) -> None:
        self.p = (self.p | flag) if on else (self.p & ~flag & 0xFF)
        self.p = int(self.p)

    def _nz(self, value: int) -> int:
        value &= 0xFF
        self.p = int(alu.set_nz(self.p, value))
        return value

    def _resolve(self, mode: Mode) -> int | None:
        """Return the effective address for ``mode``, advancing the program counter."""
        if mode in (Mode.IMPLIED, Mode.ACCUMULATOR):
            return None
        if mode is Mode.IMMEDIATE:
            address = self.pc
            self.pc = (self.pc + 1) & 0xFFFF
            return address
        if mode in (Mode.ZERO_PAGE, Mode.RELATIVE):
            return self._fetch()
        if mode is Mode.ZERO_PAGE_X:
            return (self._fetch() + self.x) & 0xFF
        if mode is Mode.ZERO_PAGE_Y:
            return (self._fetch() + self.y) & 0xFF
        if mode is Mode.ABSOLUTE:
            return self._fetch_word()
        if mode is Mode.ABSOLUTE_X:
            return (self._fetch_word() + self.x) & 0xFFFF
        if mode is Mode.ABSOLUTE_Y:
            return (self._fetch_word() + self.y) & 0xFFFF
        if mode is Mode.INDIRECT:
            base = self._fetch_word()
            low = self.bus.read(base)
            return low | (self.bus.read((base + 1) & 0xFFFF) << 8)
        if mode is Mode.INDIRECT_X:
            pointer = (self._fetch() + self.x) & 0xFF
            high = self.bus.read(pointer + 1)
            return self.bus.read(pointer) | (high << 8)
        # Mode.INDIRECT_Y
        pointer = self._fetch()
        high = self.bus.read(pointer + 1)
        base = self.bus.read(pointer) | (high << 8)
        return (base + self.y) & 0xFFFF

    def _branch(self, address: int, taken: bool) -> None:
        if not taken:
            return
        old = self.pc
        self.pc = (self.pc + _signed(address)) & 0xFFFF
        self._cycles += 2 if (old >> 8) != (self.pc >> 8) else 1

    def _modify(self, address: int | None, operation: Callable[[int, int], tuple[int, int]]) -> None:
        if address is None:
            value, p = operation(self.a, self.p)
            self.a = value
        else:
            value, p = operation(self.bus.read(address), self.p)
            self.bus.write(address, value)
        self.p = int(p)

    # -- operations --------------------------------------------------------

    def _adc(self, address):
        self.a, p = alu.adc(self.a, self.bus.read(address), self.p)
        self.p = int(p)

    def _sbc(self, address):
        self.a, p = alu.sbc(self.a, self.bus.read(address), self.p)
        self.p = int(p)

    def _and(self, address):
        self.a = self._nz(self.a & self.bus.read(address))

    def _ora(self, address):
        self.a = self._nz(self.a | self.bus.read(address))

    def _eor(self, address):
        self.a = self._nz(self.a ^ self.bus.read(address))

    def _asl(self, address):
        self._modify(address, alu.asl)

    def _lsr(self, address):
        self._modify(address, alu.lsr)

    def _rol(self, address):
        self._modify(address, alu.rol)

    def _ror(self, address):
        self._modify(address, alu.ror)

    def _bcc(self, address):
        self._branch(address, not self.p & Flag.C)

    def _bcs(self, address):
        self._branch(address, bool(self.p & Flag.C))

    def _beq(self, address):
        self._branch(address, bool(self.p & Flag.Z))

    def _bne(self, address):
        self._branch(address, not self.p & Flag.Z)

    def _bmi(self, address):
        self._branch(address, bool(self.p & Flag.N))

    def _bpl(self, address):
        self._branch(address, not self.p & Flag.N)

    def _bvc(self, address):
        self._branch(address, not self.p & Flag.V)

    def _bvs(self, address):
        self._branch(address, bool(self.p & Flag.V))

    def _bit(self, address):
        self.p = int(alu.bit(self.a, self.bus.read(address), self.p))

    def _brk(self, address):
        self.pc = (self.pc + 1) & 0xFFFF
        self._set_flag(Flag.B, True)
        self._push_pc()
        self._push(self.p)
        self._set_flag(Flag.I, True)
        self.pc = self._read_vector(_IRQ_VECTOR)

    def _clc(self, address):
        self._set_flag(Flag.C, False)

    def _cld(self, address):
        self._set_flag(Flag.D, False)

    def _cli(self, address):
        self._set_flag(Flag.I, False)

    def _clv(self, address):
        self._set_flag(Flag.V, False)

    def _sec(self, address):
        self._set_flag(Flag.C, True)

    def _sed(self, address):
        self._set_flag(Flag.D, True)

    def _sei(self, address):
        self._set_flag(Flag.I, True)

    def _cmp(self, address):
        self.p = int(alu.compare(self.a, self.bus.read(address), self.p))

    def _cpx(self, address):
        self.p = int(alu.compare(self.x, self.bus.read(address), self.p))

    def _cpy(self, address):
        self.p = int(alu.compare(self.y, self.bus.read(address), self.p))

    def _dec(self, address):
        value = (self.bus.read(address) - 1) & 0xFF
        self.bus.write(address, value)
        self._nz(value)

    def _inc(self, address):
        value = (self.bus.read(address) + 1) & 0xFF
        self.bus.write(address, value)
        self._nz(value)

    def _dex(self, address):
        self.x = self._nz(self.x - 1)

    def _dey(self, address):
        self.y = self._nz(self.y - 1)

    def _inx(self, address):
        self.x = self._nz(self.x + 1)

    def _iny(self, address):
        self.y = self._nz(self.y + 1)

    def _jmp(self, address):
        self.pc = address

    def _jsr(self, address):
        self.pc = (self.pc - 1) & 0xFFFF
        self._push_pc()
        self.pc = address

    def _lda(self, address):
        self.a = self._nz(self.bus.read(address))

    def _ldx(self, address):
        self.x = self._nz(self.bus.read(address))

    def _ldy(self, address):
        self.y = self._nz(self.bus.read(address))

    def _nop(self, address):
        pass

    def _pha(self, address):
        self._push(self.a)

    def _php(self, address):
        self._push(self.p)

    def _pla(self, address):
        self.a = self._nz(self._pop())

    def _plp(self, address):
        self.p = self._pop()

    def _rti(self, address):
        self.p = self._pop()
        low = self._pop()
        self.pc = low | (self._pop() << 8)

    def _rts(self, address):
        low = self._pop()
        self.pc = ((low | (self._pop() << 8)) + 1) & 0xFFFF

    def _sta(self, address):
        self.bus.write(address, self.a)

    def _stx(self, address):
        self.bus.write(address, self.x)

    def _sty(self, address):
        self.bus.write(address, self.y)

    def _tax(self, address):
        self.x = self._nz(self.a)

    def _tay(self, address):
        self.y = self._nz(self.a)

    def _tsx(self, address):
        self.x = self._nz(self.s)

    def _txa(self, address):
        self.a = self._nz(self.x)

    def _txs(self, address):
        self.s = self.x

    def _tya(self, address):
        self.a = self._nz(self.y)

    _DISPATCH = {
        Operation.ADC: _adc, Operation.AND: _and, Operation.ASL: _asl,
        Operation.BCC: _bcc, Operation.BCS: _bcs, Operation.BEQ: _beq,
        Operation.BIT: _bit, Operation.BMI: _bmi, Operation.BNE: _bne,
        Operation.BPL: _bpl, Operation.BRK: _brk, Operation.BVC: _bvc,
        Operation.BVS: _bvs, Operation.CLC: _clc, Operation.CLD: _cld,
        Operation.CLI: _cli, Operation.CLV: _clv, Operation.CMP: _cmp,
        Operation.CPX: _cpx, Operation.CPY: _cpy, Operation.DEC: _dec,
        Operation.DEX: _dex, Operation.DEY: _dey, Operation.EOR: _eor,
        Operation.INC: _inc, Operation.INX: _inx, Operation.INY: _iny,
        Operation.JMP: _jmp, Operation.JSR: _jsr, Operation.LDA: _lda,
        Operation.LDX: _ldx, Operation.LDY: _ldy, Operation.LSR: _lsr,
        Operation.NOP: _nop, Operation.ORA: _ora, Operation.PHA: _pha,
        Operation.PHP: _php, Operation.PLA: _pla, Operation.PLP: _plp,
        Operation.ROL: _rol, Operation.ROR: _ror, Operation.RTI: _rti,
        Operation.RTS: _rts, Operation.SBC: _sbc, Operation.SEC: _sec,
        Operation.SED: _sed, Operation.SEI: _sei, Operation.STA: _sta,
        Operation.STX: _stx, Operation.STY: _sty, Operation.TAX: _tax,
        Operation.TAY: _tay, Operation.TSX: _tsx, Operation.TXA: _txa,
        Operation.TXS: _txs, Operation.TYA: _tya,
    }

    # -- public interface --------------------------------------------------

    def reset(self) -> None:
        """Clear the registers; only the reserved status bit stays set."""
        self.a = 0
        self.x = 0
        self.y = 0
        self.p = int(Flag.R)
        self.s = 0
        self.pc = 0

    def execute_instruction(self) -> int:
        """Run the instruction at the program counter and return its cycle count."""
        instruction = decode(self._fetch())
        self._cycles = instruction.cycles
        if instruction.operation is not None:
            address = self._resolve(instruction.mode)
            self._DISPATCH[instruction.operation](self, address)
            if instruction.page_penalty:
                delta = self.x if instruction.mode.index == "x" else self.y
                if ((address - delta) & 0xFFFF) >> 8 != address >> 8:
                    self._cycles += 1
        return self._cycles

    def execute_res(self) -> int:
        """Jump through the reset vector."""
        self.p = int(Flag.I | Flag.R | Flag.Z)
        self.pc = self._read_vector(_RES_VECTOR)
        return 6

    def execute_nmi(self) -> int:
        """Service a non-maskable interrupt."""
        self._push_pc()
        self._set_flag(Flag.B, False)
        self._push(self.p)
        self._set_flag(Flag.I, True)
        self.pc = self._read_vector(_NMI_VECTOR)
        return 7

    def execute_irq(self) -> int:
        """Service an interrupt request unless interrupts are disabled."""
        if not self.p & Flag.I:
            self._push_pc()
            self._set_flag(Flag.B, False)
            self._push(self.p)
            self._set_flag(Flag.I, True)
            self.pc = self._read_vector(_IRQ_VECTOR)
        return 7