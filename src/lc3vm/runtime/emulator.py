import sys
import logging as lg
import traceback
from pathlib import Path
from typing import Sequence, Tuple

import click

from lc3vm.runtime.memory import Memory
from lc3vm.runtime.console import Console, TerminalConsole
from lc3vm.runtime.errors import LoadError, InvalidTrapVector
import lc3vm.runtime.loader as loader
import lc3vm.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_LOAD_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_INVALID_TRAP = 4
EXIT_EXEC_ERROR = 100


def init_memory(memory: Memory, images: Sequence[bytes]):
    # Every image is checked before anything is written
    parsed = [loader.parse_image(image) for image in images]

    for origin, words in parsed:
        memory.load_image(origin, words)


def execute(images: Sequence[bytes], console: Console | None = None, trace: bool = False) -> cpu.CPU:
    memory = Memory()
    init_memory(memory, images)

    if console is None:
        console = TerminalConsole()

    proc = cpu.CPU(memory, console, trace=trace)

    try:
        proc.run()
    finally:
        console.flush()

    return proc


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug and traces every step')
@click.argument('images', nargs=-1, required=True, type=Path)
def run(verbose: bool, images: Tuple[Path]):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("LC3VM")

    try:
        roms = [loader.read_image_file(path) for path in images]
        execute(roms, trace=verbose)
        sys.exit(EXIT_HALT)

    except LoadError as e:
        lg.error(str(e))
        sys.exit(EXIT_LOAD_ERROR)

    except InvalidTrapVector as e:
        lg.error(f'Execution halted on {e}')
        sys.exit(EXIT_INVALID_TRAP)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.error(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
