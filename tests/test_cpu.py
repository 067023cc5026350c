import pytest

from prosystem_core.alu import Flag
from prosystem_core.cpu import Memory, Sally
from prosystem_core.opcodes import decode

START = 0x8000


def make_cpu(program, origin=START):
    memory = Memory()
    memory.data[origin:origin + len(program)] = bytes(program)
    memory.write(0xFFFC, origin & 0xFF)
    memory.write(0xFFFD, origin >> 8)
    cpu = Sally(memory)
    cpu.reset()
    cpu.execute_res()
    return cpu, memory


def run(cpu, count):
    return [cpu.execute_instruction() for _ in range(count)]


def test_memory_round_trip_and_masking():
    memory = Memory(0x100)
    memory.write(0x10, 0x1AB)
    assert memory.read(0x10) == 0xAB


@pytest.mark.parametrize("address", [-1, 0x100])
def test_memory_rejects_out_of_range(address):
    memory = Memory(0x100)
    with pytest.raises(IndexError):
        memory.read(address)
    with pytest.raises(IndexError):
        memory.write(address, 0)


def test_memory_rejects_bad_size():
    with pytest.raises(ValueError):
        Memory(0)


def test_reset_clears_registers():
    cpu = Sally(Memory())
    cpu.a, cpu.x, cpu.y, cpu.s, cpu.pc = 1, 2, 3, 4, 5
    cpu.reset()
    assert (cpu.a, cpu.x, cpu.y, cpu.s, cpu.pc) == (0, 0, 0, 0, 0)
    assert cpu.p == Flag.R


def test_execute_res_uses_vector():
    cpu, _ = make_cpu([0xEA])
    assert cpu.pc == START
    assert cpu.p == Flag.I | Flag.R | Flag.Z
    assert cpu.execute_res() == 6


def test_lda_immediate():
    cpu, _ = make_cpu([0xA9, 0x42])
    cycles = cpu.execute_instruction()
    assert cpu.a == 0x42
    assert cpu.pc == START + 2
    assert cycles == decode(0xA9).cycles
    assert not cpu.p & Flag.Z
    assert not cpu.p & Flag.N


def test_lda_zero_sets_z():
    cpu, _ = make_cpu([0xA9, 0x01, 0xA9, 0x00])
    cpu.execute_instruction()
    assert cpu.p & Flag.Z == 0
    cpu.execute_instruction()
    assert cpu.a == 0
    assert cpu.p & Flag.Z == Flag.Z


def test_sta_absolute():
    cpu, memory = make_cpu([0xA9, 0x37, 0x8D, 0x00, 0x20])
    run(cpu, 2)
    assert memory.read(0x2000) == 0x37


def test_jsr_rts_round_trip():
    cpu, memory = make_cpu([0x20, 0x00, 0x90])
    memory.write(0x9000, 0x60)
    cpu.s = 0xFF
    cpu.execute_instruction()
    assert cpu.pc == 0x9000
    cpu.execute_instruction()
    assert cpu.pc == START + 3
    assert cpu.s == 0xFF


def test_pha_pla_round_trip():
    cpu, _ = make_cpu([0xA9, 0x99, 0x48, 0xA9, 0x00, 0x68])
    cpu.s = 0xFF
    run(cpu, 4)
    assert cpu.a == 0x99
    assert cpu.s == 0xFF
    assert cpu.p & Flag.N


def test_stack_wraps_within_page_one():
    cpu, memory = make_cpu([0xA9, 0x5A, 0x48])
    run(cpu, 2)
    assert memory.read(0x100) == 0x5A
    assert cpu.s == 0xFF


def test_branch_not_taken_costs_base_cycles():
    cpu, _ = make_cpu([0xF0, 0x05])
    cpu.p &= ~Flag.Z
    cycles = cpu.execute_instruction()
    assert cpu.pc == START + 2
    assert cycles == decode(0xF0).cycles


def test_branch_taken_same_page():
    cpu, _ = make_cpu([0xD0, 0x05])
    cpu.p &= ~Flag.Z
    cycles = cpu.execute_instruction()
    assert cpu.pc == START + 2 + 5
    assert cycles == decode(0xD0).cycles + 1


def test_branch_taken_backwards_across_page():
    cpu, _ = make_cpu([0xD0, 0xF0])
    cpu.p &= ~Flag.Z
    cycles = cpu.execute_instruction()
    assert cpu.pc == START + 2 - 16
    assert cycles == decode(0xD0).cycles + 2


def test_absolute_x_page_penalty():
    cpu, memory = make_cpu([0xA2, 0x01, 0xBD, 0xFF, 0x20])
    memory.write(0x2100, 0x77)
    cycles = run(cpu, 2)[1]
    assert cpu.a == 0x77
    assert cycles == decode(0xBD).cycles + 1


def test_absolute_x_no_penalty_within_page():
    cpu, memory = make_cpu([0xA2, 0x01, 0xBD, 0x00, 0x20])
    memory.write(0x2001, 0x66)
    cycles = run(cpu, 2)[1]
    assert cpu.a == 0x66
    assert cycles == decode(0xBD).cycles


def test_indirect_y_load():
    cpu, memory = make_cpu([0xA0, 0x03, 0xB1, 0x40])
    memory.write(0x40, 0x00)
    memory.write(0x41, 0x30)
    memory.write(0x3003, 0x5C)
    run(cpu, 2)
    assert cpu.a == 0x5C


def test_jmp_indirect():
    cpu, memory = make_cpu([0x6C, 0x00, 0x30])
    memory.write(0x3000, 0x34)
    memory.write(0x3001, 0x12)
    cpu.execute_instruction()
    assert cpu.pc == 0x1234


def test_inc_wraps_to_zero():
    cpu, memory = make_cpu([0xE6, 0x10])
    memory.write(0x10, 0xFF)
    cpu.execute_instruction()
    assert memory.read(0x10) == 0
    assert cpu.p & Flag.Z


def test_adc_through_cpu_sets_overflow():
    cpu, _ = make_cpu([0x18, 0xA9, 0x50, 0x69, 0x50])
    cpu.p &= ~Flag.D
    run(cpu, 3)
    assert cpu.a == 0xA0
    assert cpu.p & Flag.V
    assert cpu.p & Flag.N
    assert not cpu.p & Flag.C


def test_brk_pushes_state_and_jumps_to_irq_vector():
    cpu, memory = make_cpu([0x00])
    memory.write(0xFFFE, 0x00)
    memory.write(0xFFFF, 0x40)
    cpu.s = 0xFF
    cycles = cpu.execute_instruction()
    assert cycles == decode(0x00).cycles
    assert cpu.pc == 0x4000
    assert cpu.p & Flag.I
    assert memory.read(0x1FF) == (START + 2) >> 8
    assert memory.read(0x1FE) == (START + 2) & 0xFF
    assert memory.read(0x1FD) & Flag.B
    assert cpu.s == 0xFC


def test_nmi_pushes_and_vectors():
    cpu, memory = make_cpu([0xEA])
    memory.write(0xFFFA, 0x00)
    memory.write(0xFFFB, 0x50)
    cpu.s = 0xFF
    cpu.p |= Flag.B
    assert cpu.execute_nmi() == 7
    assert cpu.pc == 0x5000
    assert not memory.read(0x1FD) & Flag.B
    assert memory.read(0x1FF) == START >> 8


def test_irq_masked_when_interrupts_disabled():
    cpu, _ = make_cpu([0xEA])
    cpu.s = 0xFF
    assert cpu.p & Flag.I
    assert cpu.execute_irq() == 7
    assert cpu.pc == START
    assert cpu.s == 0xFF


def test_irq_and_rti_round_trip():
    cpu, memory = make_cpu([0xEA])
    memory.write(0xFFFE, 0x00)
    memory.write(0xFFFF, 0x60)
    memory.write(0x6000, 0x40)
    cpu.s = 0xFF
    cpu.p &= ~Flag.I
    saved_p = cpu.p
    cpu.execute_irq()
    assert cpu.pc == 0x6000
    cpu.execute_instruction()
    assert cpu.pc == START
    assert cpu.p == saved_p
    assert cpu.s == 0xFF


def test_undefined_opcode_only_advances_pc():
    cpu, _ = make_cpu([0x02])
    before = (cpu.a, cpu.x, cpu.y, cpu.p, cpu.s)
    cycles = cpu.execute_instruction()
    assert cycles == decode(0x02).cycles
    assert cpu.pc == START + 1
    assert (cpu.a, cpu.x, cpu.y, cpu.p, cpu.s) == before


def test_asl_accumulator_and_rol_memory():
    cpu, memory = make_cpu([0xA9, 0x81, 0x0A, 0x26, 0x20])
    memory.write(0x20, 0x00)
    run(cpu, 2)
    assert cpu.a == 0x02
    assert cpu.p & Flag.C
    cpu.execute_instruction()
    assert memory.read(0x20) == 0x01
    assert not cpu.p & Flag.C


def test_transfers_and_txs_leaves_flags():
    cpu, _ = make_cpu([0xA2, 0x00, 0x9A, 0xA9, 0x11, 0xAA, 0xA8])
    run(cpu, 2)
    assert cpu.s == 0
    assert cpu.p & Flag.Z
    run(cpu, 3)
    assert cpu.x == 0x11
    assert cpu.y == 0x11
    assert not cpu.p & Flag.Z