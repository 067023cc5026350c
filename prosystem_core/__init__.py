"""Emulation core: a 6502-compatible CPU, the RIOT input/timer chip and the TIA sound generator."""

__version__ = "0.1.0"

__all__ = ["alu", "cpu", "equates", "opcodes", "rect", "riot", "tia"]