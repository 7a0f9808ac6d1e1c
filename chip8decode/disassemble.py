"""CHIP-8 assembly formatting and ROM disassembly."""

from typing import List, Optional

from chex import dataclass

from chip8decode.constants import PROGRAM_START, INSTRUCTION_SIZE
from chip8decode.decode import try_decode
from chip8decode.instruction import Instruction
from chip8decode.opcodes import definition_for, operand_values

_OPERAND_FORMATS = {
    "address": "0x{:03X}".format,
    "immediate": "0x{:02X}".format,
    "register": "V{:X}".format,
    "vx": "V{:X}".format,
    "vy": "V{:X}".format,
    "height": "{:d}".format,
}


@dataclass(frozen=True)
class DisassembledLine:
    """One line of a ROM listing."""
    address: int
    raw: bytes
    text: str
    instruction: Optional[Instruction] = None

    def __str__(self):
        return f"{self.address:03X}: {self.raw.hex().upper():<4s}  {self.text}"


def format_instruction(instruction: Instruction) -> str:
    """Render an instruction in conventional CHIP-8 assembly, e.g. ``LD V0, DT``."""
    definition = definition_for(instruction)
    if definition is None:
        raise ValueError(f"Not a CHIP-8 instruction: {instruction!r}")
    operands = {
        name: _OPERAND_FORMATS[name](value)
        for name, value in operand_values(instruction).items()
    }
    return f"{definition.mnemonic} {definition.syntax.format(**operands)}".rstrip()


def load_rom(filename: str) -> bytes:
    """Read ROM data from disk."""
    with open(filename, 'rb') as f:
        return f.read()


def disassemble(data: bytes, origin: int = PROGRAM_START) -> List[DisassembledLine]:
    """Linear listing of ``data`` assumed to be loaded at ``origin``.

    Undefined words are listed as ``DW`` data and a trailing odd byte as
    ``DB``, so this never raises on malformed programs.
    """
    lines = []
    even_length = len(data) - len(data) % INSTRUCTION_SIZE

    for offset in range(0, even_length, INSTRUCTION_SIZE):
        high, low = data[offset], data[offset + 1]
        result = try_decode(high, low)
        if result.ok:
            text = format_instruction(result.instruction)
        else:
            text = f"DW 0x{high:02X}{low:02X}"
        lines.append(DisassembledLine(
            address=origin + offset,
            raw=bytes((high, low)),
            text=text,
            instruction=result.instruction,
        ))

    if even_length < len(data):
        lines.append(DisassembledLine(
            address=origin + even_length,
            raw=bytes((data[-1],)),
            text=f"DB 0x{data[-1]:02X}",
        ))

    return lines
