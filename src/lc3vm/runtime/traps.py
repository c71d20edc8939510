''' Console service routines reached through the TRAP instruction '''

from typing import TYPE_CHECKING, Callable

import lc3vm.common.ops as ops
from lc3vm.common.hwconf import R0, IN_PROMPT, HALT_MESSAGE
from lc3vm.runtime.errors import Halt, InvalidTrapVector

if TYPE_CHECKING:
    from lc3vm.runtime.cpu import CPU


def getc(cpu: 'CPU'):
    cpu.regs.set(R0, cpu.console.read_char())
    cpu.regs.update_flags(R0)


def out(cpu: 'CPU'):
    cpu.console.write_char(cpu.regs.get(R0) & 0xFF)


def puts(cpu: 'CPU'):
    address = cpu.regs.get(R0)
    word = cpu.memory.read(address)

    while word != 0:
        cpu.console.write_char(word & 0xFF)
        address += 1
        word = cpu.memory.read(address)


def in_(cpu: 'CPU'):
    cpu.console.write_text(IN_PROMPT)
    code = cpu.console.read_char()
    cpu.console.write_char(code)
    cpu.regs.set(R0, code)
    cpu.regs.update_flags(R0)


def putsp(cpu: 'CPU'):
    address = cpu.regs.get(R0)
    word = cpu.memory.read(address)

    while word != 0:
        cpu.console.write_char(word & 0xFF)

        high = word >> 8
        if high:
            cpu.console.write_char(high)

        address += 1
        word = cpu.memory.read(address)


def halt(cpu: 'CPU'):
    cpu.console.write_text(HALT_MESSAGE)
    cpu.console.flush()
    raise Halt()


HANDLERS: dict[int, Callable[['CPU'], None]] = {
    ops.TRAP_GETC: getc,
    ops.TRAP_OUT: out,
    ops.TRAP_PUTS: puts,
    ops.TRAP_IN: in_,
    ops.TRAP_PUTSP: putsp,
    ops.TRAP_HALT: halt
}


def lookup(vector: int, address: int) -> Callable[['CPU'], None]:
    handler = HANDLERS.get(vector)

    if handler is None:
        raise InvalidTrapVector(vector, address)

    return handler
