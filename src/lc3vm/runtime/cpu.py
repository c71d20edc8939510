import logging as lg
from typing import Callable

import lc3vm.common.ops as ops
import lc3vm.runtime.decoder as dec
import lc3vm.runtime.traps as traps
from lc3vm.common.hwconf import R7, PC_START, FL_ZRO, WORD_MASK
from lc3vm.runtime.memory import Memory
from lc3vm.runtime.registers import Registers
from lc3vm.runtime.console import Console
from lc3vm.runtime.errors import Halt, InvalidTrapVector  # noqa: F401


class CPU():
    memory: Memory
    regs: Registers
    console: Console
    halted: bool
    steps: int

    def __init__(self, memory: Memory, console: Console, trace: bool = False):
        self.memory = memory    # Ref. to memory
        self.console = console  # Ref. to host console
        self.trace = trace      # Dump state after every step

        self.regs = Registers()
        self.halted = False
        self.steps = 0

    # - Helpers - #

    def reset(self):
        self.regs.cond = FL_ZRO
        self.regs.pc = PC_START
        self.halted = False
        self.steps = 0

    def fetch(self) -> int:
        pc = self.regs.pc
        instr = self.memory.read(pc)
        self.regs.pc = pc + 1
        return instr

    def instr_address(self) -> int:
        # Address of the instruction being executed, PC is already past it
        return (self.regs.pc - 1) & WORD_MASK

    def pc_relative(self, offset: int) -> int:
        return self.regs.pc + offset

    def set_result(self, reg: int, value: int):
        self.regs.set(reg, value)
        self.regs.update_flags(reg)

    def second_operand(self, instr: int) -> int:
        if dec.imm_flag(instr):
            return dec.imm5(instr)

        return self.regs.get(dec.sr2(instr))

    # - Operations - #

    def br(self, instr: int):
        if self.regs.cond & dec.nzp(instr):
            self.regs.pc = self.pc_relative(dec.pc_offset9(instr))

    def add(self, instr: int):
        a = self.regs.get(dec.sr1(instr))
        b = self.second_operand(instr)
        self.set_result(dec.dr(instr), a + b)

    def ld(self, instr: int):
        address = self.pc_relative(dec.pc_offset9(instr))
        self.set_result(dec.dr(instr), self.memory.read(address))

    def st(self, instr: int):
        address = self.pc_relative(dec.pc_offset9(instr))
        self.memory.write(address, self.regs.get(dec.sr(instr)))

    def jsr(self, instr: int):
        ret_addr = self.regs.pc

        if dec.long_flag(instr):
            target = self.pc_relative(dec.pc_offset11(instr))
        else:
            # JSRR R7 jumps to the old R7
            target = self.regs.get(dec.base_r(instr))

        self.regs.set(R7, ret_addr)
        self.regs.pc = target

    def band(self, instr: int):
        a = self.regs.get(dec.sr1(instr))
        b = self.second_operand(instr)
        self.set_result(dec.dr(instr), a & b)

    def ldr(self, instr: int):
        address = self.regs.get(dec.base_r(instr)) + dec.offset6(instr)
        self.set_result(dec.dr(instr), self.memory.read(address))

    def str_(self, instr: int):
        address = self.regs.get(dec.base_r(instr)) + dec.offset6(instr)
        self.memory.write(address, self.regs.get(dec.sr(instr)))

    def inv(self, instr: int):
        a = self.regs.get(dec.sr1(instr))
        self.set_result(dec.dr(instr), ~a)

    def ldi(self, instr: int):
        pointer = self.memory.read(self.pc_relative(dec.pc_offset9(instr)))
        self.set_result(dec.dr(instr), self.memory.read(pointer))

    def sti(self, instr: int):
        pointer = self.memory.read(self.pc_relative(dec.pc_offset9(instr)))
        self.memory.write(pointer, self.regs.get(dec.sr(instr)))

    def jmp(self, instr: int):
        self.regs.pc = self.regs.get(dec.base_r(instr))

    def lea(self, instr: int):
        self.set_result(dec.dr(instr), self.pc_relative(dec.pc_offset9(instr)))

    def trap(self, instr: int):
        vector = dec.trap_vector(instr)
        # Validate before touching R7
        handler = traps.lookup(vector, self.instr_address())
        self.regs.set(R7, self.regs.pc)
        handler(self)

    def hlt(self, instr: int):
        lg.info(f'Unimplemented opcode {ops.NAMES[dec.opcode(instr)]}, halting')
        raise Halt()

    HANDLERS: dict[int, Callable[['CPU', int], None]] = {
        ops.BR: br,
        ops.ADD: add,
        ops.LD: ld,
        ops.ST: st,
        ops.JSR: jsr,
        ops.AND: band,
        ops.LDR: ldr,
        ops.STR: str_,
        ops.RTI: hlt,
        ops.NOT: inv,
        ops.LDI: ldi,
        ops.STI: sti,
        ops.JMP: jmp,
        ops.RES: hlt,
        ops.LEA: lea,
        ops.TRAP: trap
    }

    # -- Implementation -- #

    def exec_next(self):
        instr = self.fetch()
        op = dec.opcode(instr)

        if self.trace:
            lg.debug(f'{self.instr_address():04X}: {instr:04X} {ops.NAMES[op]}')

        # Counted up front so a halting instruction is included
        self.steps += 1
        handler = self.HANDLERS[op]
        handler(self, instr)

        if self.trace:
            self.regs.debug_dump()

    def run(self):
        self.reset()

        try:
            while True:
                self.exec_next()

        except Halt:
            self.halted = True
            lg.info(f'Execution halted after {self.steps} steps')
