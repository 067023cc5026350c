"""Decoding table for the 6502-compatible "Sally" processor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """How an instruction finds its operand."""

    IMPLIED = "implied"
    ACCUMULATOR = "accumulator"
    IMMEDIATE = "immediate"
    ZERO_PAGE = "zero_page"
    ZERO_PAGE_X = "zero_page_x"
    ZERO_PAGE_Y = "zero_page_y"
    ABSOLUTE = "absolute"
    ABSOLUTE_X = "absolute_x"
    ABSOLUTE_Y = "absolute_y"
    INDIRECT = "indirect"
    INDIRECT_X = "indirect_x"
    INDIRECT_Y = "indirect_y"
    RELATIVE = "relative"

    @property
    def index(self) -> str | None:
        """Name of the register added to the base address, if any."""
        if self in (Mode.ZERO_PAGE_X, Mode.ABSOLUTE_X, Mode.INDIRECT_X):
            return "x"
        if self in (Mode.ZERO_PAGE_Y, Mode.ABSOLUTE_Y, Mode.INDIRECT_Y):
            return "y"
        return None


class Operation(Enum):
    """The operations the processor carries out."""

    ADC = "ADC"
    AND = "AND"
    ASL = "ASL"
    BCC = "BCC"
    BCS = "BCS"
    BEQ = "BEQ"
    BIT = "BIT"
    BMI = "BMI"
    BNE = "BNE"
    BPL = "BPL"
    BRK = "BRK"
    BVC = "BVC"
    BVS = "BVS"
    CLC = "CLC"
    CLD = "CLD"
    CLI = "CLI"
    CLV = "CLV"
    CMP = "CMP"
    CPX = "CPX"
    CPY = "CPY"
    DEC = "DEC"
    DEX = "DEX"
    DEY = "DEY"
    EOR = "EOR"
    INC = "INC"
    INX = "INX"
    INY = "INY"
    JMP = "JMP"
    JSR = "JSR"
    LDA = "LDA"
    LDX = "LDX"
    LDY = "LDY"
    LSR = "LSR"
    NOP = "NOP"
    ORA = "ORA"
    PHA = "PHA"
    PHP = "PHP"
    PLA = "PLA"
    PLP = "PLP"
    ROL = "ROL"
    ROR = "ROR"
    RTI = "RTI"
    RTS = "RTS"
    SBC = "SBC"
    SEC = "SEC"
    SED = "SED"
    SEI = "SEI"
    STA = "STA"
    STX = "STX"
    STY = "STY"
    TAX = "TAX"
    TAY = "TAY"
    TSX = "TSX"
    TXA = "TXA"
    TXS = "TXS"
    TYA = "TYA"


@dataclass(frozen=True)
class Instruction:
    """One decoded opcode.

    ``operation`` is ``None`` for opcodes the processor does not implement;
    those do nothing but still take their ``cycles``. ``page_penalty`` marks
    instructions that take an extra cycle when indexing crosses a page.
    """

    opcode: int
    operation: Operation | None
    mode: Mode
    cycles: int
    page_penalty: bool = False

    @property
    def defined(self) -> bool:
        """Whether the opcode carries out an operation."""
        return self.operation is not None


_CYCLES = (
    7, 6, 0, 0, 0, 3, 5, 0, 3, 2, 2, 0, 0, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    6, 6, 0, 0, 3, 3, 5, 0, 4, 2, 2, 0, 4, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    6, 6, 0, 0, 0, 3, 5, 0, 3, 2, 2, 0, 3, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    6, 6, 0, 0, 0, 3, 5, 0, 4, 2, 2, 0, 5, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    0, 6, 0, 0, 3, 3, 3, 0, 2, 0, 2, 0, 4, 4, 4, 0,
    2, 6, 0, 0, 4, 4, 4, 0, 2, 5, 2, 0, 0, 5, 0, 0,
    2, 6, 2, 0, 3, 3, 3, 0, 2, 2, 2, 0, 4, 4, 4, 0,
    2, 5, 0, 0, 4, 4, 4, 0, 2, 4, 2, 0, 4, 4, 4, 0,
    2, 6, 0, 0, 3, 3, 5, 0, 2, 2, 2, 0, 4, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
    2, 6, 0, 0, 3, 3, 5, 0, 2, 2, 2, 0, 4, 4, 6, 0,
    2, 5, 0, 0, 0, 4, 6, 0, 2, 4, 0, 0, 0, 4, 7, 0,
)

_O = Operation
_M = Mode

_SPEC: dict[int, tuple[Operation, Mode]] = {
    0x00: (_O.BRK, _M.IMPLIED),
    0x01: (_O.ORA, _M.INDIRECT_X),
    0x05: (_O.ORA, _M.ZERO_PAGE),
    0x06: (_O.ASL, _M.ZERO_PAGE),
    0x08: (_O.PHP, _M.IMPLIED),
    0x09: (_O.ORA, _M.IMMEDIATE),
    0x0A: (_O.ASL, _M.ACCUMULATOR),
    0x0D: (_O.ORA, _M.ABSOLUTE),
    0x0E: (_O.ASL, _M.ABSOLUTE),
    0x10: (_O.BPL, _M.RELATIVE),
    0x11: (_O.ORA, _M.INDIRECT_Y),
    0x15: (_O.ORA, _M.ZERO_PAGE_X),
    0x16: (_O.ASL, _M.ZERO_PAGE_X),
    0x18: (_O.CLC, _M.IMPLIED),
    0x19: (_O.ORA, _M.ABSOLUTE_Y),
    0x1D: (_O.ORA, _M.ABSOLUTE_X),
    0x1E: (_O.ASL, _M.ABSOLUTE_X),
    0x20: (_O.JSR, _M.ABSOLUTE),
    0x21: (_O.AND, _M.INDIRECT_X),
    0x24: (_O.BIT, _M.ZERO_PAGE),
    0x25: (_O.AND, _M.ZERO_PAGE),
    0x26: (_O.ROL, _M.ZERO_PAGE),
    0x28: (_O.PLP, _M.IMPLIED),
    0x29: (_O.AND, _M.IMMEDIATE),
    0x2A: (_O.ROL, _M.ACCUMULATOR),
    0x2C: (_O.BIT, _M.ABSOLUTE),
    0x2D: (_O.AND, _M.ABSOLUTE),
    0x2E: (_O.ROL, _M.ABSOLUTE),
    0x30: (_O.BMI, _M.RELATIVE),
    0x31: (_O.AND, _M.INDIRECT_Y),
    0x35: (_O.AND, _M.ZERO_PAGE_X),
    0x36: (_O.ROL, _M.ZERO_PAGE_X),
    0x38: (_O.SEC, _M.IMPLIED),
    0x39: (_O.AND, _M.ABSOLUTE_Y),
    0x3D: (_O.AND, _M.ABSOLUTE_X),
    0x3E: (_O.ROL, _M.ABSOLUTE_X),
    0x40: (_O.RTI, _M.IMPLIED),
    0x41: (_O.EOR, _M.INDIRECT_X),
    0x45: (_O.EOR, _M.ZERO_PAGE),
    0x46: (_O.LSR, _M.ZERO_PAGE),
    0x48: (_O.PHA, _M.IMPLIED),
    0x49: (_O.EOR, _M.IMMEDIATE),
    0x4A: (_O.LSR, _M.ACCUMULATOR),
    0x4C: (_O.JMP, _M.ABSOLUTE),
    0x4D: (_O.EOR, _M.ABSOLUTE),
    0x4E: (_O.LSR, _M.ABSOLUTE),
    0x50: (_O.BVC, _M.RELATIVE),
    0x51: (_O.EOR, _M.INDIRECT_Y),
    0x55: (_O.EOR, _M.ZERO_PAGE_X),
    0x56: (_O.LSR, _M.ZERO_PAGE_X),
    0x58: (_O.CLI, _M.IMPLIED),
    0x59: (_O.EOR, _M.ABSOLUTE_Y),
    0x5D: (_O.EOR, _M.ABSOLUTE_X),
    0x5E: (_O.LSR, _M.ABSOLUTE_X),
    0x60: (_O.RTS, _M.IMPLIED),
    0x61: (_O.ADC, _M.INDIRECT_X),
    0x65: (_O.ADC, _M.ZERO_PAGE),
    0x66: (_O.ROR, _M.ZERO_PAGE),
    0x68: (_O.PLA, _M.IMPLIED),
    0x69: (_O.ADC, _M.IMMEDIATE),
    0x6A: (_O.ROR, _M.ACCUMULATOR),
    0x6C: (_O.JMP, _M.INDIRECT),
    0x6D: (_O.ADC, _M.ABSOLUTE),
    0x6E: (_O.ROR, _M.ABSOLUTE),
    0x70: (_O.BVS, _M.RELATIVE),
    0x71: (_O.ADC, _M.INDIRECT_Y),
    0x75: (_O.ADC, _M.ZERO_PAGE_X),
    0x76: (_O.ROR, _M.ZERO_PAGE_X),
    0x78: (_O.SEI, _M.IMPLIED),
    0x79: (_O.ADC, _M.ABSOLUTE_Y),
    0x7D: (_O.ADC, _M.ABSOLUTE_X),
    0x7E: (_O.ROR, _M.ABSOLUTE_X),
    0x81: (_O.STA, _M.INDIRECT_X),
    0x84: (_O.STY, _M.ZERO_PAGE),
    0x85: (_O.STA, _M.ZERO_PAGE),
    0x86: (_O.STX, _M.ZERO_PAGE),
    0x88: (_O.DEY, _M.IMPLIED),
    0x8A: (_O.TXA, _M.IMPLIED),
    0x8C: (_O.STY, _M.ABSOLUTE),
    0x8D: (_O.STA, _M.ABSOLUTE),
    0x8E: (_O.STX, _M.ABSOLUTE),
    0x90: (_O.BCC, _M.RELATIVE),
    0x91: (_O.STA, _M.INDIRECT_Y),
    0x94: (_O.STY, _M.ZERO_PAGE_X),
    0x95: (_O.STA, _M.ZERO_PAGE_X),
    0x96: (_O.STX, _M.ZERO_PAGE_Y),
    0x98: (_O.TYA, _M.IMPLIED),
    0x99: (_O.STA, _M.ABSOLUTE_Y),
    0x9A: (_O.TXS, _M.IMPLIED),
    0x9D: (_O.STA, _M.ABSOLUTE_X),
    0xA0: (_O.LDY, _M.IMMEDIATE),
    0xA1: (_O.LDA, _M.INDIRECT_X),
    0xA2: (_O.LDX, _M.IMMEDIATE),
    0xA4: (_O.LDY, _M.ZERO_PAGE),
    0xA5: (_O.LDA, _M.ZERO_PAGE),
    0xA6: (_O.LDX, _M.ZERO_PAGE),
    0xA8: (_O.TAY, _M.IMPLIED),
    0xA9: (_O.LDA, _M.IMMEDIATE),
    0xAA: (_O.TAX, _M.IMPLIED),
    0xAC: (_O.LDY, _M.ABSOLUTE),
    0xAD: (_O.LDA, _M.ABSOLUTE),
    0xAE: (_O.LDX, _M.ABSOLUTE),
    0xB0: (_O.BCS, _M.RELATIVE),
    0xB1: (_O.LDA, _M.INDIRECT_Y),
    0xB4: (_O.LDY, _M.ZERO_PAGE_X),
    0xB5: (_O.LDA, _M.ZERO_PAGE_X),
    0xB6: (_O.LDX, _M.ZERO_PAGE_Y),
    0xB8: (_O.CLV, _M.IMPLIED),
    0xB9: (_O.LDA, _M.ABSOLUTE_Y),
    0xBA: (_O.TSX, _M.IMPLIED),
    0xBC: (_O.LDY, _M.ABSOLUTE_X),
    0xBD: (_O.LDA, _M.ABSOLUTE_X),
    0xBE: (_O.LDX, _M.ABSOLUTE_Y),
    0xC0: (_O.CPY, _M.IMMEDIATE),
    0xC1: (_O.CMP, _M.INDIRECT_X),
    0xC4: (_O.CPY, _M.ZERO_PAGE),
    0xC5: (_O.CMP, _M.ZERO_PAGE),
    0xC6: (_O.DEC, _M.ZERO_PAGE),
    0xC8: (_O.INY, _M.IMPLIED),
    0xC9: (_O.CMP, _M.IMMEDIATE),
    0xCA: (_O.DEX, _M.IMPLIED),
    0xCC: (_O.CPY, _M.ABSOLUTE),
    0xCD: (_O.CMP, _M.ABSOLUTE),
    0xCE: (_O.DEC, _M.ABSOLUTE),
    0xD0: (_O.BNE, _M.RELATIVE),
    0xD1: (_O.CMP, _M.INDIRECT_Y),
    0xD5: (_O.CMP, _M.ZERO_PAGE_X),
    0xD6: (_O.DEC, _M.ZERO_PAGE_X),
    0xD8: (_O.CLD, _M.IMPLIED),
    0xD9: (_O.CMP, _M.ABSOLUTE_Y),
    0xDD: (_O.CMP, _M.ABSOLUTE_X),
    0xDE: (_O.DEC, _M.ABSOLUTE_X),
    0xE0: (_O.CPX, _M.IMMEDIATE),
    0xE1: (_O.SBC, _M.INDIRECT_X),
    0xE4: (_O.CPX, _M.ZERO_PAGE),
    0xE5: (_O.SBC, _M.ZERO_PAGE),
    0xE6: (_O.INC, _M.ZERO_PAGE),
    0xE8: (_O.INX, _M.IMPLIED),
    0xE9: (_O.SBC, _M.IMMEDIATE),
    0xEA: (_O.NOP, _M.IMPLIED),
    0xEC: (_O.CPX, _M.ABSOLUTE),
    0xED: (_O.SBC, _M.ABSOLUTE),
    0xEE: (_O.INC, _M.ABSOLUTE),
    0xF0: (_O.BEQ, _M.RELATIVE),
    0xF1: (_O.SBC, _M.INDIRECT_Y),
    0xF5: (_O.SBC, _M.ZERO_PAGE_X),
    0xF6: (_O.INC, _M.ZERO_PAGE_X),
    0xF8: (_O.SED, _M.IMPLIED),
    0xF9: (_O.SBC, _M.ABSOLUTE_Y),
    0xFD: (_O.SBC, _M.ABSOLUTE_X),
    0xFE: (_O.INC, _M.ABSOLUTE_X),
}

# Reads through an indexed address take an extra cycle on a page crossing.
_PAGE_PENALTY = frozenset({
    0x11, 0x19, 0x1D, 0x31, 0x39, 0x3D, 0x51, 0x59, 0x5D, 0x71, 0x79, 0x7D,
    0xB1, 0xB9, 0xBC, 0xBD, 0xBE, 0xD1, 0xD9, 0xDD, 0xF1, 0xF9, 0xFD,
})


def _build(opcode: int, cycles: int) -> Instruction:
    operation, mode = _SPEC.get(opcode, (None, Mode.IMPLIED))
    return Instruction(opcode, operation, mode, cycles, opcode in _PAGE_PENALTY)


_TABLE = tuple(_build(opcode, cycles) for opcode, cycles in enumerate(_CYCLES))


def decode(opcode: int) -> Instruction:
    """Return the instruction for an opcode byte."""
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"opcode must be a byte, got {opcode}")
    return _TABLE[opcode]