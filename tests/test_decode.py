"""Tests for the instruction decoder."""

import pytest
from chip8vm import decode, encode, Instruction, Op, UnknownOpcode
from chip8vm.emulator import HANDLERS


class TestDecode:
    """Test operand extraction."""

    def test_operand_extraction(self):
        instruction = decode(0xDAB9)
        assert instruction.op is Op.DRW
        assert (instruction.x, instruction.y, instruction.n) == (0xA, 0xB, 0x9)

    def test_unused_operands_are_zero(self):
        instruction = decode(0x1AC9)
        assert instruction.op is Op.JP
        assert instruction.nnn == 0xAC9
        assert (instruction.x, instruction.y, instruction.n, instruction.nn) == (0, 0, 0, 0)

    @pytest.mark.parametrize("opcode, op", [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x00E1, Op.SYS),
        (0x0000, Op.SYS),
        (0x8AB6, Op.SHR),
        (0x8AB7, Op.SUBN),
        (0x8ABE, Op.SHL),
        (0xE19E, Op.SKP),
        (0xE1A1, Op.SKNP),
        (0xF10A, Op.LD_VX_K),
        (0xF165, Op.LOAD),
    ])
    def test_disambiguation(self, opcode, op):
        """Leading nibbles 0, 8, E and F need the low bits."""
        assert decode(opcode).op is op

    @pytest.mark.parametrize("opcode", [0x5121, 0x8128, 0x912F, 0xE000, 0xE19F, 0xF0FF, 0xF130])
    def test_unknown_opcodes(self, opcode):
        with pytest.raises(UnknownOpcode) as excinfo:
            decode(opcode)
        assert excinfo.value.opcode == opcode
        assert f"{opcode:04X}" in str(excinfo.value)

    @pytest.mark.parametrize("opcode", [-1, 0x10000])
    def test_not_a_16_bit_value(self, opcode):
        with pytest.raises(ValueError):
            decode(opcode)

    def test_every_opcode_round_trips_or_fails(self):
        """Every 16-bit word either decodes and re-encodes to itself, or is unknown."""
        decoded = set()
        for opcode in range(0x10000):
            try:
                instruction = decode(opcode)
            except UnknownOpcode:
                continue
            assert encode(instruction) == opcode, f"0x{opcode:04X}"
            decoded.add(instruction.op)
        assert decoded == set(Op)


class TestEncode:
    def test_encode(self):
        assert encode(Instruction(op=Op.ADD_REG, x=3, y=0xC)) == 0x83C4
        assert encode(Instruction(op=Op.CLS)) == 0x00E0

    def test_encode_rejects_oversized_operand(self):
        with pytest.raises(ValueError):
            encode(Instruction(op=Op.LD_IMM, x=0x10, nn=1))

    def test_encode_machine_routine(self):
        assert encode(Instruction(op=Op.SYS, nnn=0x123)) == 0x0123

    @pytest.mark.parametrize("nnn", [0x0E0, 0x0EE])
    def test_encode_rejects_machine_routine_shadowed_by_cls_and_ret(self, nnn):
        with pytest.raises(ValueError):
            encode(Instruction(op=Op.SYS, nnn=nnn))


def test_every_op_has_a_handler():
    assert set(HANDLERS) == set(Op)
