"""Arithmetic and logic of the "Sally" processor, as pure functions on bytes.

Every function takes the current status register ``p`` and returns the new
one, together with the computed byte where the operation produces one.
"""

from enum import IntFlag


class Flag(IntFlag):
    """Bits of the processor status register."""

    C = 0x01
    Z = 0x02
    I = 0x04  # noqa: E741
    D = 0x08
    B = 0x10
    R = 0x20
    V = 0x40
    N = 0x80


def _put(p: int, flag: Flag, condition: bool) -> int:
    return (p | flag) if condition else (p & ~flag & 0xFF)


def set_nz(p: int, value: int) -> int:
    """Set Z when ``value`` is zero and N from its top bit."""
    value &= 0xFF
    p = _put(int(p), Flag.Z, value == 0)
    return _put(p, Flag.N, bool(value & 0x80))


def adc(a: int, data: int, p: int) -> tuple[int, int]:
    """Add with carry, in decimal mode when D is set; return ``(a, p)``."""
    a &= 0xFF
    data &= 0xFF
    p = int(p)
    carry = p & Flag.C

    if p & Flag.D:
        low = (a & 15) + (data & 15) + carry
        high = (a >> 4) + (data >> 4)
        if low > 9:
            low += 6
            high += 1
        p = _put(p, Flag.Z, a + data + carry == 0)
        p = _put(p, Flag.N, bool(high & 8))
        p = _put(p, Flag.V, bool(~(a ^ data) & ((high << 4) ^ a) & 0x80))
        if high > 9:
            high += 6
        p = _put(p, Flag.C, high > 15)
        return ((high << 4) | (low & 15)) & 0xFF, p

    total = a + data + carry
    result = total & 0xFF
    p = _put(p, Flag.C, total > 0xFF)
    p = _put(p, Flag.V, bool(~(a ^ data) & (a ^ result) & 0x80))
    return result, set_nz(p, result)


def sbc(a: int, data: int, p: int) -> tuple[int, int]:
    """Subtract with borrow, in decimal mode when D is set; return ``(a, p)``."""
    a &= 0xFF
    data &= 0xFF
    p = int(p)
    borrow = 0 if p & Flag.C else 1

    difference = (a - data - borrow) & 0xFFFF
    result = difference & 0xFF
    p = _put(p, Flag.C, (difference >> 8) == 0)
    p = _put(p, Flag.V, bool((a ^ data) & (a ^ result) & 0x80))
    p = set_nz(p, result)

    if p & Flag.D:
        low = ((a & 15) - (data & 15) - borrow) & 0xFFFF
        high = ((a >> 4) - (data >> 4)) & 0xFFFF
        if low > 9:
            low = (low - 6) & 0xFFFF
            high = (high - 1) & 0xFFFF
        if high > 9:
            high = (high - 6) & 0xFFFF
        return ((high << 4) | (low & 15)) & 0xFF, p

    return result, p


def compare(register: int, data: int, p: int) -> int:
    """Compare a register with ``data`` as CMP, CPX and CPY do."""
    register &= 0xFF
    data &= 0xFF
    p = _put(int(p), Flag.C, register >= data)
    return set_nz(p, register - data)


def bit(a: int, data: int, p: int) -> int:
    """Test bits of ``data`` against the accumulator as BIT does."""
    a &= 0xFF
    data &= 0xFF
    p = _put(int(p), Flag.Z, not (data & a))
    p &= ~(Flag.V | Flag.N) & 0xFF
    return p | (data & 0xC0)


def asl(value: int, p: int) -> tuple[int, int]:
    """Shift left, moving bit 7 into carry; return ``(value, p)``."""
    value &= 0xFF
    p = _put(int(p), Flag.C, bool(value & 0x80))
    value = (value << 1) & 0xFF
    return value, set_nz(p, value)


def lsr(value: int, p: int) -> tuple[int, int]:
    """Shift right, moving bit 0 into carry; return ``(value, p)``."""
    value &= 0xFF
    p = _put(int(p), Flag.C, bool(value & 1))
    value >>= 1
    return value, set_nz(p, value)


def rol(value: int, p: int) -> tuple[int, int]:
    """Rotate left through carry; return ``(value, p)``."""
    value &= 0xFF
    p = int(p)
    old_carry = p & Flag.C
    p = _put(p, Flag.C, bool(value & 0x80))
    value = ((value << 1) | old_carry) & 0xFF
    return value, set_nz(p, value)


def ror(value: int, p: int) -> tuple[int, int]:
    """Rotate right through carry; return ``(value, p)``."""
    value &= 0xFF
    p = int(p)
    old_carry = p & Flag.C
    p = _put(p, Flag.C, bool(value & 1))
    value >>= 1
    if old_carry:
        value |= 0x80
    return value, set_nz(p, value)