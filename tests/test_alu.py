import pytest

from prosystem_core.alu import (
    Flag,
    adc,
    asl,
    bit,
    compare,
    lsr,
    rol,
    ror,
    sbc,
    set_nz,
)

SAMPLES = (0x00, 0x01, 0x0F, 0x10, 0x3C, 0x7F, 0x80, 0x81, 0xC3, 0xFE, 0xFF)
BCD = (0x00, 0x01, 0x09, 0x10, 0x25, 0x42, 0x49, 0x50)


def test_set_nz_zero_and_negative():
    assert set_nz(0, 0) == Flag.Z
    assert set_nz(0, 0x80) == Flag.N
    assert set_nz(Flag.Z | Flag.N | Flag.C, 1) == Flag.C


def test_set_nz_masks_to_byte():
    assert set_nz(0, 0x100) == Flag.Z


@pytest.mark.parametrize("a", SAMPLES)
@pytest.mark.parametrize("data", SAMPLES)
def test_binary_adc_wraps_and_carries(a, data):
    result, p = adc(a, data, 0)
    assert result == (a + data) % 256
    assert bool(p & Flag.C) == (a + data > 0xFF)
    assert bool(p & Flag.Z) == (result == 0)
    assert bool(p & Flag.N) == bool(result & 0x80)


@pytest.mark.parametrize("a", SAMPLES)
@pytest.mark.parametrize("data", SAMPLES)
def test_binary_adc_then_sbc_restores(a, data):
    added, _ = adc(a, data, 0)
    restored, p = sbc(added, data, Flag.C)
    assert restored == a


def test_adc_overflow_on_positive_sum():
    result, p = adc(0x7F, 0x01, 0)
    assert result == 0x80
    assert p & Flag.V
    assert p & Flag.N
    assert not p & Flag.C


def test_adc_overflow_on_negative_sum():
    result, p = adc(0x80, 0x80, 0)
    assert result == 0
    assert p & Flag.V
    assert p & Flag.C
    assert p & Flag.Z


def test_adc_uses_carry_in():
    without, _ = adc(0x10, 0x10, 0)
    with_carry, _ = adc(0x10, 0x10, Flag.C)
    assert with_carry == without + 1


def test_adc_preserves_unrelated_flags():
    _, p = adc(0x01, 0x01, Flag.I | Flag.R | Flag.B)
    assert p & (Flag.I | Flag.R | Flag.B) == Flag.I | Flag.R | Flag.B


def test_decimal_adc_carries_between_digits():
    result, p = adc(0x09, 0x01, Flag.D)
    assert result == 0x10
    assert not p & Flag.C


def test_decimal_adc_carries_out():
    result, p = adc(0x99, 0x01, Flag.D)
    assert result == 0x00
    assert p & Flag.C


@pytest.mark.parametrize("a", SAMPLES)
@pytest.mark.parametrize("data", SAMPLES)
def test_binary_sbc_borrow(a, data):
    result, p = sbc(a, data, Flag.C)
    assert result == (a - data) % 256
    assert bool(p & Flag.C) == (a >= data)
    assert bool(p & Flag.Z) == (a == data)


def test_sbc_without_carry_subtracts_one_more():
    with_carry, _ = sbc(0x20, 0x10, Flag.C)
    without, _ = sbc(0x20, 0x10, 0)
    assert without == with_carry - 1


@pytest.mark.parametrize("register", SAMPLES)
@pytest.mark.parametrize("data", SAMPLES)
def test_compare_flags(register, data):
    p = compare(register, data, 0)
    assert bool(p & Flag.C) == (register >= data)
    assert bool(p & Flag.Z) == (register == data)


def test_compare_keeps_other_flags():
    p = compare(5, 5, Flag.D | Flag.I)
    assert p == Flag.D | Flag.I | Flag.Z | Flag.C


def test_bit_copies_top_bits_and_tests_mask():
    p = bit(0x01, 0xC0, 0)
    assert p == Flag.N | Flag.V | Flag.Z
    p = bit(0x01, 0x01, Flag.N | Flag.V | Flag.Z | Flag.C)
    assert p == Flag.C


def test_asl_moves_top_bit_to_carry():
    value, p = asl(0x81, 0)
    assert value == 0x02
    assert p == Flag.C


def test_lsr_moves_low_bit_to_carry():
    value, p = lsr(0x01, 0)
    assert value == 0
    assert p == Flag.C | Flag.Z


@pytest.mark.parametrize("value", SAMPLES)
@pytest.mark.parametrize("carry", (0, Flag.C))
def test_rol_then_ror_restores(value, carry):
    rotated, p = rol(value, carry)
    restored, p = ror(rotated, p)
    assert restored == value
    assert (p & Flag.C) == carry


@pytest.mark.parametrize("value", SAMPLES)
@pytest.mark.parametrize("carry", (0, Flag.C))
def test_ror_then_rol_restores(value, carry):
    rotated, p = ror(value, carry)
    restored, p = rol(rotated, p)
    assert restored == value
    assert (p & Flag.C) == carry


def test_ror_shifts_carry_into_top_bit():
    value, p = ror(0x00, Flag.C)
    assert value == 0x80
    assert p == Flag.N