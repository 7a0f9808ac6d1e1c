"""CHIP-8 opcode table.

Every defined operation has exactly one ``OpcodeDefinition`` row. The rows are
grouped into per-selector sub-tables keyed by whatever part of the word the
decoder dispatches on for that selector:

    selector 0x0          byte1 (CLS, RET), falling back to SYS
    0x1, 0x2, 0xA, 0xB    selector only
    0x3, 0x4, 0x6, 0x7, 0xC
                          selector only
    0x5, 0x9              low nibble of byte1 (must be 0x0)
    0x8                   low nibble of byte1
    0xD                   selector only
    0xE, 0xF              byte1

The decoder, encoder, batch validity tables and assembly formatter all read
from these tables, so extending the instruction set means adding rows here.
"""

import dataclasses
from typing import Optional

from chex import dataclass

from chip8decode.instruction import (
    Operation,
    NoArgOperation,
    AddressOperation,
    RegisterImmediateOperation,
    SingleRegisterOperation,
    TwoRegisterOperation,
    NoArgInstruction,
    AddressInstruction,
    RegisterImmediateInstruction,
    SingleRegisterInstruction,
    TwoRegisterInstruction,
    DrawInstruction,
)


@dataclass(frozen=True)
class OpcodeDefinition:
    """One row of the opcode table."""
    operation: Optional[Operation]  # None for DXYN, which has no tag
    template: str   # Conventional opcode spelling, e.g. "8XY4"
    pattern: int    # Fixed bits of the canonical word
    mask: int       # Which bits of a word are fixed
    mnemonic: str
    syntax: str = ""  # Operand layout, str.format fields named after instruction fields

    def matches(self, word: int) -> bool:
        """Check whether the fixed bits of ``word`` equal this row's pattern."""
        return (word & self.mask) == self.pattern


def _define(operation, template, pattern, mask, mnemonic, syntax=""):
    return OpcodeDefinition(
        operation=operation,
        template=template,
        pattern=pattern,
        mask=mask,
        mnemonic=mnemonic,
        syntax=syntax,
    )


# 00E0 / 00EE, keyed by byte1. The second nibble is not inspected.
NO_ARG_OPCODES = {
    0xE0: _define(NoArgOperation.CLEAR_DISPLAY, "00E0", 0x00E0, 0xF0FF, "CLS"),
    0xEE: _define(NoArgOperation.RETURN, "00EE", 0x00EE, 0xF0FF, "RET"),
}

# xNNN, keyed by selector
ADDRESS_OPCODES = {
    0x0: _define(AddressOperation.SYS, "0NNN", 0x0000, 0xF000, "SYS", "{address}"),
    0x1: _define(AddressOperation.JUMP, "1NNN", 0x1000, 0xF000, "JP", "{address}"),
    0x2: _define(AddressOperation.CALL, "2NNN", 0x2000, 0xF000, "CALL", "{address}"),
    0xA: _define(AddressOperation.SET_INDEX, "ANNN", 0xA000, 0xF000, "LD", "I, {address}"),
    0xB: _define(AddressOperation.JUMP_OFFSET, "BNNN", 0xB000, 0xF000, "JP", "V0, {address}"),
}

# xXNN, keyed by selector
REGISTER_IMMEDIATE_OPCODES = {
    0x3: _define(RegisterImmediateOperation.SKIP_EQUAL, "3XNN", 0x3000, 0xF000, "SE", "{register}, {immediate}"),
    0x4: _define(RegisterImmediateOperation.SKIP_NOT_EQUAL, "4XNN", 0x4000, 0xF000, "SNE", "{register}, {immediate}"),
    0x6: _define(RegisterImmediateOperation.SET, "6XNN", 0x6000, 0xF000, "LD", "{register}, {immediate}"),
    0x7: _define(RegisterImmediateOperation.ADD, "7XNN", 0x7000, 0xF000, "ADD", "{register}, {immediate}"),
    0xC: _define(RegisterImmediateOperation.RANDOM_AND, "CXNN", 0xC000, 0xF000, "RND", "{register}, {immediate}"),
}

# 5XY0 / 9XY0, keyed by selector then by the reserved low nibble
SKIP_REGISTER_OPCODES = {
    0x5: {0x0: _define(TwoRegisterOperation.SKIP_EQUAL, "5XY0", 0x5000, 0xF00F, "SE", "{vx}, {vy}")},
    0x9: {0x0: _define(TwoRegisterOperation.SKIP_NOT_EQUAL, "9XY0", 0x9000, 0xF00F, "SNE", "{vx}, {vy}")},
}

# 8XYN, keyed by low nibble
ARITHMETIC_OPCODES = {
    0x0: _define(TwoRegisterOperation.SET, "8XY0", 0x8000, 0xF00F, "LD", "{vx}, {vy}"),
    0x1: _define(TwoRegisterOperation.OR, "8XY1", 0x8001, 0xF00F, "OR", "{vx}, {vy}"),
    0x2: _define(TwoRegisterOperation.AND, "8XY2", 0x8002, 0xF00F, "AND", "{vx}, {vy}"),
    0x3: _define(TwoRegisterOperation.XOR, "8XY3", 0x8003, 0xF00F, "XOR", "{vx}, {vy}"),
    0x4: _define(TwoRegisterOperation.ADD, "8XY4", 0x8004, 0xF00F, "ADD", "{vx}, {vy}"),
    0x5: _define(TwoRegisterOperation.SUBTRACT, "8XY5", 0x8005, 0xF00F, "SUB", "{vx}, {vy}"),
    0x6: _define(TwoRegisterOperation.SHIFT_RIGHT, "8XY6", 0x8006, 0xF00F, "SHR", "{vx}, {vy}"),
    0x7: _define(TwoRegisterOperation.SUBTRACT_REVERSE, "8XY7", 0x8007, 0xF00F, "SUBN", "{vx}, {vy}"),
    0xE: _define(TwoRegisterOperation.SHIFT_LEFT, "8XYE", 0x800E, 0xF00F, "SHL", "{vx}, {vy}"),
}

DRAW_OPCODE = _define(None, "DXYN", 0xD000, 0xF000, "DRW", "{vx}, {vy}, {height}")

# EXNN, keyed by byte1
KEY_OPCODES = {
    0x9E: _define(SingleRegisterOperation.SKIP_PRESSED, "EX9E", 0xE09E, 0xF0FF, "SKP", "{register}"),
    0xA1: _define(SingleRegisterOperation.SKIP_NOT_PRESSED, "EXA1", 0xE0A1, 0xF0FF, "SKNP", "{register}"),
}

# FXNN, keyed by byte1
MISC_OPCODES = {
    0x07: _define(SingleRegisterOperation.READ_DELAY_TIMER, "FX07", 0xF007, 0xF0FF, "LD", "{register}, DT"),
    0x0A: _define(SingleRegisterOperation.WAIT_FOR_KEY, "FX0A", 0xF00A, 0xF0FF, "LD", "{register}, K"),
    0x15: _define(SingleRegisterOperation.SET_DELAY_TIMER, "FX15", 0xF015, 0xF0FF, "LD", "DT, {register}"),
    0x18: _define(SingleRegisterOperation.SET_SOUND_TIMER, "FX18", 0xF018, 0xF0FF, "LD", "ST, {register}"),
    0x1E: _define(SingleRegisterOperation.ADD_TO_INDEX, "FX1E", 0xF01E, 0xF0FF, "ADD", "I, {register}"),
    0x29: _define(SingleRegisterOperation.LOAD_SPRITE, "FX29", 0xF029, 0xF0FF, "LD", "F, {register}"),
    0x33: _define(SingleRegisterOperation.STORE_BCD, "FX33", 0xF033, 0xF0FF, "LD", "B, {register}"),
    0x55: _define(SingleRegisterOperation.STORE_REGISTERS, "FX55", 0xF055, 0xF0FF, "LD", "[I], {register}"),
    0x65: _define(SingleRegisterOperation.READ_TO_REGISTERS, "FX65", 0xF065, 0xF0FF, "LD", "{register}, [I]"),
}

ALL_OPCODES = (
    tuple(NO_ARG_OPCODES.values())
    + tuple(ADDRESS_OPCODES.values())
    + tuple(REGISTER_IMMEDIATE_OPCODES.values())
    + tuple(d for table in SKIP_REGISTER_OPCODES.values() for d in table.values())
    + tuple(ARITHMETIC_OPCODES.values())
    + (DRAW_OPCODE,)
    + tuple(KEY_OPCODES.values())
    + tuple(MISC_OPCODES.values())
)

OPCODES_BY_OPERATION = {d.operation: d for d in ALL_OPCODES if d.operation is not None}

# Which operation family each instruction variant carries
OPERATION_TYPES = {
    NoArgInstruction: NoArgOperation,
    AddressInstruction: AddressOperation,
    RegisterImmediateInstruction: RegisterImmediateOperation,
    SingleRegisterInstruction: SingleRegisterOperation,
    TwoRegisterInstruction: TwoRegisterOperation,
}


def definition_for(instruction) -> Optional[OpcodeDefinition]:
    """Return the table row for an instruction, or None if it has none."""
    if isinstance(instruction, DrawInstruction):
        return DRAW_OPCODE
    operation_type = OPERATION_TYPES.get(type(instruction))
    if operation_type is None or not isinstance(instruction.operation, operation_type):
        return None
    return OPCODES_BY_OPERATION.get(instruction.operation)


def operand_values(instruction) -> dict:
    """Map operand field names to values, leaving out the operation tag."""
    return {
        field.name: getattr(instruction, field.name)
        for field in dataclasses.fields(instruction)
        if field.name != "operation"
    }
