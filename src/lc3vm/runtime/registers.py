import logging as lg

from lc3vm.common.hwconf import (
    REGISTER_COUNT, WORD_MASK, SIGN_BIT,
    PC, COND, FL_POS, FL_ZRO, FL_NEG
)


FLAG_NAMES = {
    FL_POS: 'P',
    FL_ZRO: 'Z',
    FL_NEG: 'N'
}


def flag_for(value: int) -> int:
    if value == 0:
        return FL_ZRO

    if value & SIGN_BIT:
        return FL_NEG

    return FL_POS


class Registers():
    regs: list[int]  # R0-R7, PC, COND

    def __init__(self):
        self.regs = [0] * REGISTER_COUNT

    def get(self, reg: int) -> int:
        return self.regs[reg]

    def set(self, reg: int, value: int):
        self.regs[reg] = value & WORD_MASK

    def update_flags(self, reg: int):
        self.regs[COND] = flag_for(self.regs[reg])

    @property
    def pc(self) -> int:
        return self.regs[PC]

    @pc.setter
    def pc(self, value: int):
        self.set(PC, value)

    @property
    def cond(self) -> int:
        return self.regs[COND]

    @cond.setter
    def cond(self, value: int):
        self.regs[COND] = value

    def debug_dump(self):
        state = [f'R{i}:{self.regs[i]:04X}' for i in range(8)]
        state.append(f'PC:{self.pc:04X}')
        state.append(f'COND:{FLAG_NAMES.get(self.cond, "-")}')

        lg.debug(' '.join(state))
