"""CHIP-8 word layout and memory constants."""

# Word layout
BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF
NIBBLE_MASK = 0xF
ADDRESS_MASK = 0x0FFF

SELECTOR_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F
NN_MASK = 0x00FF

SELECTOR_SHIFT = 12
X_SHIFT = 8
Y_SHIFT = 4

NUM_SELECTORS = 16
NUM_REGISTERS = 16
NUM_WORDS = 0x10000

# Memory layout
MEMORY_SIZE = 4096
PROGRAM_START = 0x200
INSTRUCTION_SIZE = 2
