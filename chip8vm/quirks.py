"""Named policies for the points where CHIP-8 interpreters disagree."""

from enum import Enum

from flax.struct import dataclass


class ShiftSource(Enum):
    """Register shifted by 8XY6/8XYE."""
    VX = "vx"  # CHIP-48 and later: VX shifted in place
    VY = "vy"  # COSMAC VIP: VX = VY shifted


class IndexIncrement(Enum):
    """What FX55/FX65 leave in I afterwards."""
    NONE = "none"
    X_PLUS_ONE = "x+1"  # COSMAC VIP
    X = "x"  # CHIP-48


class SpriteEdge(Enum):
    """What happens to sprite pixels that run past the screen edge."""
    WRAP = "wrap"
    CLIP = "clip"


class JumpOffset(Enum):
    """Register added by BNNN."""
    V0 = "v0"  # BNNN: NNN + V0
    VX = "vx"  # BXNN: XNN + VX


class AddressOverflow(Enum):
    """How addresses past 0xFFF are treated."""
    FATAL = "fatal"
    WRAP = "wrap"


class MachineRoutine(Enum):
    """What 0NNN does; RCA 1802 machine code is never emulated."""
    FATAL = "fatal"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Quirks:
    """Instruction-level behaviour switches, fixed when a machine is created."""
    shift_source: ShiftSource = ShiftSource.VX
    index_increment: IndexIncrement = IndexIncrement.NONE
    sprite_edge: SpriteEdge = SpriteEdge.WRAP
    jump_offset: JumpOffset = JumpOffset.V0
    address_overflow: AddressOverflow = AddressOverflow.FATAL
    reset_vf_on_logic: bool = False
    machine_routine: MachineRoutine = MachineRoutine.FATAL

    @classmethod
    def cosmac_vip(cls) -> "Quirks":
        """Behaviour of the original COSMAC VIP interpreter."""
        return cls(
            shift_source=ShiftSource.VY,
            index_increment=IndexIncrement.X_PLUS_ONE,
            sprite_edge=SpriteEdge.CLIP,
            jump_offset=JumpOffset.V0,
            address_overflow=AddressOverflow.WRAP,
            reset_vf_on_logic=True,
            machine_routine=MachineRoutine.FATAL,
        )

    @classmethod
    def modern(cls) -> "Quirks":
        """Behaviour most ROMs written after CHIP-48 expect."""
        return cls(
            shift_source=ShiftSource.VX,
            index_increment=IndexIncrement.NONE,
            sprite_edge=SpriteEdge.CLIP,
            jump_offset=JumpOffset.VX,
            address_overflow=AddressOverflow.FATAL,
            reset_vf_on_logic=False,
            machine_routine=MachineRoutine.FATAL,
        )
