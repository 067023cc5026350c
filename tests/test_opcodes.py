import dataclasses

import pytest

from prosystem_core.opcodes import Instruction, Mode, Operation, decode

ALL = [decode(op) for op in range(256)]
DEFINED = [ins for ins in ALL if ins.defined]


def test_lda_immediate():
    ins = decode(0xA9)
    assert ins.operation is Operation.LDA
    assert ins.mode is Mode.IMMEDIATE
    assert ins.cycles == 2
    assert ins.page_penalty is False


def test_brk():
    ins = decode(0x00)
    assert ins.operation is Operation.BRK
    assert ins.mode is Mode.IMPLIED
    assert ins.cycles == 7


def test_jmp_indirect_and_absolute():
    assert decode(0x6C).mode is Mode.INDIRECT
    assert decode(0x6C).cycles == 5
    assert decode(0x4C).mode is Mode.ABSOLUTE
    assert decode(0x4C).operation is Operation.JMP


def test_opcode_round_trip():
    assert [ins.opcode for ins in ALL] == list(range(256))


def test_undefined_opcode_does_nothing():
    ins = decode(0x02)
    assert ins.operation is None
    assert not ins.defined
    assert ins.mode is Mode.IMPLIED


@pytest.mark.parametrize("opcode", [-1, 256, 0x1000])
def test_out_of_range(opcode):
    with pytest.raises(ValueError):
        decode(opcode)


def test_defined_instructions_take_time():
    assert all(ins.cycles > 0 for ins in DEFINED)


def test_penalty_only_on_indexed_reads():
    for ins in ALL:
        if ins.page_penalty:
            assert ins.mode in (Mode.ABSOLUTE_X, Mode.ABSOLUTE_Y, Mode.INDIRECT_Y)
            assert ins.operation not in (Operation.STA, Operation.ASL, Operation.INC)


def test_stores_never_penalised():
    stores = [ins for ins in DEFINED if ins.operation is Operation.STA]
    assert stores
    assert not any(ins.page_penalty for ins in stores)


def test_ldx_absolute_y_penalised_through_y():
    ins = decode(0xBE)
    assert ins.operation is Operation.LDX
    assert ins.page_penalty
    assert ins.mode.index == "y"


def test_branches_are_relative():
    branches = {
        Operation.BCC, Operation.BCS, Operation.BEQ, Operation.BMI,
        Operation.BNE, Operation.BPL, Operation.BVC, Operation.BVS,
    }
    for ins in DEFINED:
        assert (ins.operation in branches) == (ins.mode is Mode.RELATIVE)


@pytest.mark.parametrize(
    "opcode, operation",
    [(0x0A, Operation.ASL), (0x2A, Operation.ROL), (0x4A, Operation.LSR), (0x6A, Operation.ROR)],
)
def test_accumulator_shifts(opcode, operation):
    ins = decode(opcode)
    assert ins.operation is operation
    assert ins.mode is Mode.ACCUMULATOR


def test_mode_index():
    assert decode(0x15).mode.index == "x"
    assert decode(0xB1).mode.index == "y"
    assert decode(0xAD).mode.index is None


def test_every_operation_is_reachable():
    assert {ins.operation for ins in DEFINED} == set(Operation)


def test_instruction_is_frozen():
    ins = decode(0xEA)
    assert ins.operation is Operation.NOP
    with pytest.raises(dataclasses.FrozenInstanceError):
        ins.cycles = 9


def test_decode_returns_shared_instances():
    assert decode(0x85) is decode(0x85)
    assert isinstance(decode(0x85), Instruction)
    assert decode(0x85).operation is Operation.STA