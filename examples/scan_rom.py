import sys
import time

import jax
import jax.numpy as jnp

from chip8decode import disassemble, load_rom
from chip8decode.batch import valid_mask, words_from_bytes

if __name__ == "__main__":
    rom = load_rom(sys.argv[1])
    words = words_from_bytes(rom)

    # First call includes compilation
    start = time.time()
    mask = jax.block_until_ready(valid_mask(words))
    print("Validity scan (s):", time.time() - start)

    print(f"{int(jnp.sum(mask))}/{words.shape[0]} words decode")

    for line in disassemble(rom):
        print(line)
