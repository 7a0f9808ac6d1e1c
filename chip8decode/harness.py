"""Line-oriented text harness around the decoder.

Reads one instruction per line as two hexadecimal bytes (``F5 07``), decodes
it and prints the resulting instruction. Also exposes the ROM disassembler
and the opcode survey from the command line.
"""

import argparse
import re
import sys
from typing import Optional, TextIO

from chex import dataclass

from chip8decode.decode import InvalidInstruction, decode
from chip8decode.disassemble import disassemble, format_instruction, load_rom
from chip8decode.instruction import Instruction
from chip8decode.logging import ConsoleLogger, LEVEL_ORDER, default_log_level
from chip8decode.survey import survey_opcodes

PROMPT = "Enter 2 byte hexadecimal instruction with space between bytes. Example: F5 07"

_LINE_PATTERN = re.compile(r"([0-9A-Fa-f]{2}) ([0-9A-Fa-f]{2})")


class InputFormatError(ValueError):
    """Raised when a line is not two two-digit hex bytes separated by a space."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Expected two hex bytes such as 'F5 07', got {line.strip()!r}")


@dataclass(frozen=True)
class HarnessConfig:
    """Harness behaviour, usually built from command line flags."""
    prompt: bool = True
    show_assembly: bool = False
    log_level: Optional[str] = None
    use_colors: bool = True
    show_timestamps: bool = True
    stop_on_error: bool = False


def parse_line(line: str) -> tuple[int, int]:
    """Parse ``"F5 07"`` into ``(0xF5, 0x07)``."""
    text = line.strip()
    match = _LINE_PATTERN.fullmatch(text)
    if len(text) != 5 or match is None:
        raise InputFormatError(line)
    return int(match.group(1), 16), int(match.group(2), 16)


def describe(instruction: Instruction, show_assembly: bool = False) -> str:
    """Structural form of an instruction, optionally with its assembly text."""
    text = repr(instruction)
    if show_assembly:
        text = f"{text}  ; {format_instruction(instruction)}"
    return text


def run(
    stream: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
    config: Optional[HarnessConfig] = None,
    logger: Optional[ConsoleLogger] = None,
) -> int:
    """Decode lines from ``stream`` until it ends. Returns the number of rejected lines."""
    stream = stream if stream is not None else sys.stdin
    out = out if out is not None else sys.stdout
    config = config if config is not None else HarnessConfig()
    logger = logger or ConsoleLogger(
        log_level=config.log_level,
        use_colors=config.use_colors,
        show_timestamps=config.show_timestamps,
    )

    errors = 0
    try:
        while True:
            if config.prompt:
                print(PROMPT, file=out, flush=True)

            line = stream.readline()
            if not line:
                break
            if not line.strip():
                continue

            try:
                high, low = parse_line(line)
                instruction = decode(high, low)
            except (InputFormatError, InvalidInstruction) as e:
                errors += 1
                logger.error(str(e))
                if config.stop_on_error:
                    break
                continue

            logger.debug(f"Decoded {high:02X} {low:02X}")
            print(describe(instruction, config.show_assembly), file=out, flush=True)
    except KeyboardInterrupt:
        logger.info("Interrupted")

    return errors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8decode",
        description="Decode CHIP-8 instructions typed as two hex bytes per line",
    )
    parser.add_argument(
        "--no-prompt", action="store_true", help="Do not print the input prompt"
    )
    parser.add_argument(
        "--asm", action="store_true", help="Also print the assembly form of each instruction"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=list(LEVEL_ORDER),
        default=default_log_level(),
        help="Console log level (default from CHIP8DECODE_LOG_LEVEL, else INFO)",
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable coloured log output"
    )
    parser.add_argument(
        "--no-timestamps", action="store_true", help="Omit elapsed time from log lines"
    )
    parser.add_argument(
        "--stop-on-error",
        action="store_true",
        help="Stop at the first rejected line and exit with status 1",
    )
    parser.add_argument(
        "--disassemble", metavar="ROM", type=str, help="Print a listing of a ROM file and exit"
    )
    parser.add_argument(
        "--survey", action="store_true", help="Tally all 65536 words by operation and exit"
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show a progress bar for --survey"
    )
    return parser


def _print_survey(out: TextIO, show_progress: bool):
    survey = survey_opcodes(show_progress=show_progress)
    for template, mnemonic, count in survey.rows():
        print(f"{template}  {mnemonic:<5s} {count:6d}", file=out)
    print(f"valid   {survey.valid:6d}", file=out)
    print(f"invalid {survey.invalid:6d}", file=out)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = HarnessConfig(
        prompt=not args.no_prompt,
        show_assembly=args.asm,
        log_level=args.log_level,
        use_colors=not args.no_color,
        show_timestamps=not args.no_timestamps,
        stop_on_error=args.stop_on_error,
    )
    logger = ConsoleLogger(
        log_level=config.log_level,
        use_colors=config.use_colors,
        show_timestamps=config.show_timestamps,
    )

    if args.disassemble:
        try:
            data = load_rom(args.disassemble)
        except OSError as e:
            logger.error(f"Could not read {args.disassemble}: {e}")
            return 1
        logger.info(f"Loaded {len(data)} bytes from {args.disassemble}")
        for line in disassemble(data):
            print(line, file=sys.stdout)
        return 0

    if args.survey:
        _print_survey(sys.stdout, args.progress)
        return 0

    errors = run(sys.stdin, sys.stdout, config, logger)
    return 1 if errors and config.stop_on_error else 0
