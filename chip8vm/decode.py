"""CHIP-8 instruction decoding."""

from enum import Enum

from chex import dataclass

from chip8vm.errors import UnknownOpcode


class Op(Enum):
    """Every documented CHIP-8 instruction, keyed by its encoding pattern.

    Hex digits in the pattern are fixed bits; X and Y are register nibbles,
    N, NN and NNN are 4, 8 and 12-bit immediates.
    """
    CLS = "00E0"
    RET = "00EE"
    SYS = "0NNN"
    JP = "1NNN"
    CALL = "2NNN"
    SE_IMM = "3XNN"
    SNE_IMM = "4XNN"
    SE_REG = "5XY0"
    LD_IMM = "6XNN"
    ADD_IMM = "7XNN"
    LD_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_REG = "9XY0"
    LD_I = "ANNN"
    JP_OFFSET = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I = "FX1E"
    LD_F = "FX29"
    BCD = "FX33"
    STORE = "FX55"
    LOAD = "FX65"

    @property
    def mask(self) -> int:
        """Bits of the opcode fixed by this instruction."""
        return int("".join("F" if c in "0123456789ABCDEF" else "0" for c in self.value), 16)

    @property
    def bits(self) -> int:
        """Value of the fixed bits."""
        return int("".join(c if c in "0123456789ABCDEF" else "0" for c in self.value), 16)

    @property
    def operands(self) -> tuple[str, ...]:
        """Names of the operand fields this instruction uses."""
        names = []
        if "X" in self.value:
            names.append("x")
        if "Y" in self.value:
            names.append("y")
        immediate = self.value.count("N")
        if immediate:
            names.append("n" * immediate)
        return tuple(names)


@dataclass(frozen=True)
class Instruction:
    """Decoded CHIP-8 instruction with extracted operands.

    Operands the instruction does not use are left at 0.
    """
    op: Op
    x: int = 0     # Second nibble (VX register)
    y: int = 0     # Third nibble (VY register)
    n: int = 0     # Fourth nibble (4-bit immediate)
    nn: int = 0    # Last byte (8-bit immediate)
    nnn: int = 0   # Last 12 bits (12-bit address)


# Candidates per leading nibble, most specific pattern first
_OPS_BY_NIBBLE: dict[int, list[Op]] = {}
for _op in Op:
    _OPS_BY_NIBBLE.setdefault(int(_op.value[0], 16), []).append(_op)
for _candidates in _OPS_BY_NIBBLE.values():
    _candidates.sort(key=lambda op: bin(op.mask).count("1"), reverse=True)

_FIELD_EXTRACTORS = {
    "x": lambda opcode: (opcode & 0x0F00) >> 8,
    "y": lambda opcode: (opcode & 0x00F0) >> 4,
    "n": lambda opcode: opcode & 0x000F,
    "nn": lambda opcode: opcode & 0x00FF,
    "nnn": lambda opcode: opcode & 0x0FFF,
}

_FIELD_SHIFTS = {"x": 8, "y": 4, "n": 0, "nn": 0, "nnn": 0}
_FIELD_LIMITS = {"x": 0xF, "y": 0xF, "n": 0xF, "nn": 0xFF, "nnn": 0xFFF}


def decode(instruction: int) -> Instruction:
    """Decode 16-bit instruction into an op and its operands."""
    if not 0 <= instruction <= 0xFFFF:
        raise ValueError(f"Opcode {instruction:#x} is not a 16-bit value")
    for op in _OPS_BY_NIBBLE[instruction >> 12]:
        if instruction & op.mask == op.bits:
            fields = {name: _FIELD_EXTRACTORS[name](instruction) for name in op.operands}
            return Instruction(op=op, **fields)
    raise UnknownOpcode(instruction)


def encode(instruction: Instruction) -> int:
    """Rebuild the 16-bit opcode from an instruction's op and operands."""
    op = instruction.op
    opcode = op.bits
    for name in op.operands:
        value = getattr(instruction, name)
        if not 0 <= value <= _FIELD_LIMITS[name]:
            raise ValueError(f"Operand {name}={value:#x} out of range for {op.name}")
        opcode |= value << _FIELD_SHIFTS[name]
    # 0NNN shares its space with 00E0 and 00EE
    decoded_op = decode(opcode).op
    if decoded_op is not op:
        raise ValueError(f"{op.name} operands encode to 0x{opcode:04X}, which is {decoded_op.name}")
    return opcode
