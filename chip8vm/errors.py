"""Faults raised by the CHIP-8 core.

The core never recovers from these; the host decides whether to halt,
reset or keep going.
"""


class Chip8Error(Exception):
    """Base class for every fault raised by the interpreter core."""


class DecodeError(Chip8Error):
    """Raised when an opcode cannot be decoded."""


class UnknownOpcode(DecodeError):
    """No documented CHIP-8 encoding matches the opcode."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unknown opcode 0x{opcode:04X}")


class ExecutionError(Chip8Error):
    """Raised when a decoded instruction cannot be executed."""


class StackOverflow(ExecutionError):
    """CALL with every stack slot already in use."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Stack overflow: call depth exceeds {depth}")


class StackUnderflow(ExecutionError):
    """RET with an empty stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with empty stack")


class AddressOutOfRange(ExecutionError):
    """A computed memory address falls outside the accessible range."""

    def __init__(self, address: int, reason: str = "outside 0x000-0xFFF"):
        self.address = address
        self.reason = reason
        super().__init__(f"Address 0x{address:04X} out of range ({reason})")


class UnsupportedInstruction(ExecutionError):
    """0NNN machine-code routine, which this interpreter cannot run."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Machine-code routine at 0x{address:03X} is not supported")
