"""CHIP-8 instruction variants produced by the decoder."""

from enum import Enum, auto
from typing import Union

from chex import dataclass


class Operation(Enum):
    """Base for operation tags; reprs as ``Family.NAME``."""

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class NoArgOperation(Operation):
    CLEAR_DISPLAY = auto()  # 00E0 - CLS
    RETURN = auto()         # 00EE - RET


class AddressOperation(Operation):
    SYS = auto()          # 0NNN - SYS
    JUMP = auto()         # 1NNN - JP
    CALL = auto()         # 2NNN - CALL
    SET_INDEX = auto()    # ANNN - LD I
    JUMP_OFFSET = auto()  # BNNN - JP V0


class RegisterImmediateOperation(Operation):
    SKIP_EQUAL = auto()      # 3XNN - SE
    SKIP_NOT_EQUAL = auto()  # 4XNN - SNE
    SET = auto()             # 6XNN - LD
    ADD = auto()             # 7XNN - ADD
    RANDOM_AND = auto()      # CXNN - RND


class SingleRegisterOperation(Operation):
    SKIP_PRESSED = auto()       # EX9E - SKP
    SKIP_NOT_PRESSED = auto()   # EXA1 - SKNP
    READ_DELAY_TIMER = auto()   # FX07 - LD VX, DT
    WAIT_FOR_KEY = auto()       # FX0A - LD VX, K
    SET_DELAY_TIMER = auto()    # FX15 - LD DT, VX
    SET_SOUND_TIMER = auto()    # FX18 - LD ST, VX
    ADD_TO_INDEX = auto()       # FX1E - ADD I, VX
    LOAD_SPRITE = auto()        # FX29 - LD F, VX
    STORE_BCD = auto()          # FX33 - LD B, VX
    STORE_REGISTERS = auto()    # FX55 - LD [I], VX
    READ_TO_REGISTERS = auto()  # FX65 - LD VX, [I]


class TwoRegisterOperation(Operation):
    SKIP_EQUAL = auto()        # 5XY0 - SE
    SET = auto()               # 8XY0 - LD
    OR = auto()                # 8XY1 - OR
    AND = auto()               # 8XY2 - AND
    XOR = auto()               # 8XY3 - XOR
    ADD = auto()               # 8XY4 - ADD
    SUBTRACT = auto()          # 8XY5 - SUB
    SHIFT_RIGHT = auto()       # 8XY6 - SHR
    SUBTRACT_REVERSE = auto()  # 8XY7 - SUBN
    SHIFT_LEFT = auto()        # 8XYE - SHL
    SKIP_NOT_EQUAL = auto()    # 9XY0 - SNE


@dataclass(frozen=True)
class NoArgInstruction:
    """Instruction with no operands (00E0, 00EE)."""
    operation: NoArgOperation


@dataclass(frozen=True)
class AddressInstruction:
    """Instruction carrying a 12-bit address (0NNN, 1NNN, 2NNN, ANNN, BNNN)."""
    operation: AddressOperation
    address: int


@dataclass(frozen=True)
class RegisterImmediateInstruction:
    """Instruction on VX with an 8-bit immediate (3XNN, 4XNN, 6XNN, 7XNN, CXNN)."""
    operation: RegisterImmediateOperation
    register: int
    immediate: int


@dataclass(frozen=True)
class SingleRegisterInstruction:
    """Instruction on VX alone (EXNN, FXNN)."""
    operation: SingleRegisterOperation
    register: int


@dataclass(frozen=True)
class TwoRegisterInstruction:
    """Instruction on VX and VY (5XY0, 8XYN, 9XY0)."""
    operation: TwoRegisterOperation
    vx: int
    vy: int


@dataclass(frozen=True)
class DrawInstruction:
    """DXYN - Draw an N-row sprite at (VX, VY)."""
    vx: int
    vy: int
    height: int


Instruction = Union[
    NoArgInstruction,
    AddressInstruction,
    RegisterImmediateInstruction,
    SingleRegisterInstruction,
    TwoRegisterInstruction,
    DrawInstruction,
]

INSTRUCTION_TYPES = (
    NoArgInstruction,
    AddressInstruction,
    RegisterImmediateInstruction,
    SingleRegisterInstruction,
    TwoRegisterInstruction,
    DrawInstruction,
)
