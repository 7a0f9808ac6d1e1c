"""
Interactive CHIP-8 instruction decoder
"""

import sys

from chip8decode.harness import main

if __name__ == "__main__":
    # Type lines such as "F5 07"; Ctrl-D to quit
    sys.exit(main())
