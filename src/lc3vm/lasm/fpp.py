import logging as lg
from typing import Any, List, Tuple, Dict

import lc3vm.common.ops as ops
from lc3vm.common.hwconf import WORD_MASK, R7

Tokens = List[Any]
Target = int | str  # literal offset or label name


class AsmError(Exception):
    pass


def signed_field(value: int, bits: int, what: str) -> int:
    low = -(1 << (bits - 1))
    high = (1 << (bits - 1)) - 1

    if value < low or value > high:
        raise AsmError(f'{what} {value} does not fit in {bits} bits')

    return value & ((1 << bits) - 1)


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, Any]]
    label_dict: Dict[str, int]
    origin: int | None

    def __init__(self):
        self.cmd_list = list()
        self.label_dict = dict()
        self.origin = None
        self.address = 0
        self.ended = False

    def check_origin(self):
        if self.origin is None:
            raise AsmError('Statement before .ORIG')

    def emit(self, word: int):
        self.check_origin()
        self.cmd_list.append(('word', word & WORD_MASK))
        self.address += 1

    def emit_ref(self, word: int, target: Target, bits: int):
        self.check_origin()
        self.cmd_list.append(('ref', (self.address, word, target, bits)))
        self.address += 1

    # Directives
    def on_orig(self, value: int):
        if self.origin is not None:
            raise AsmError('Only one .ORIG is allowed')

        if value < 0 or value > WORD_MASK:
            raise AsmError(f'Origin {value} is out of range')

        lg.debug(f'Origin @ 0x{value:04X}')
        self.origin = value
        self.address = value

    def on_end(self):
        self.ended = True

    def on_label(self, name: str):
        self.check_origin()

        if name in self.label_dict:
            raise AsmError(f'Duplicate label {name}')

        self.label_dict[name] = self.address
        lg.debug(f'Label {name} @ 0x{self.address:04X}')

    def on_fill(self, value: Target):
        if isinstance(value, str):
            self.check_origin()
            self.cmd_list.append(('addr', value))
            self.address += 1
            return

        if value < -(1 << 15) or value > WORD_MASK:
            raise AsmError(f'.FILL value {value} is out of range')

        self.emit(value)

    def on_blkw(self, count: int):
        if count < 0:
            raise AsmError(f'Negative .BLKW size {count}')

        for _ in range(count):
            self.emit(0)

    def on_stringz(self, text: str):
        for ch in text:
            self.emit(ord(ch))

        self.emit(0)

    # Instructions
    def issue_word(self, word: int):
        lg.debug(f'Issuing word 0x{word:04X}')
        self.emit(word)

    def issue_alu_reg(self, op: int, dr: int, sr1: int, sr2: int):
        self.emit(op << 12 | dr << 9 | sr1 << 6 | sr2)

    def issue_alu_imm(self, op: int, dr: int, sr1: int, imm: int):
        self.emit(op << 12 | dr << 9 | sr1 << 6 | 1 << 5 | signed_field(imm, 5, 'Immediate'))

    def issue_not(self, dr: int, sr: int):
        self.emit(ops.NOT << 12 | dr << 9 | sr << 6 | 0x3F)

    def issue_br(self, mask: int, target: Target):
        self.emit_ref(ops.BR << 12 | mask << 9, target, 9)

    def issue_jmp(self, base: int):
        self.emit(ops.JMP << 12 | base << 6)

    def issue_ret(self):
        self.issue_jmp(R7)

    def issue_jsr(self, target: Target):
        self.emit_ref(ops.JSR << 12 | 1 << 11, target, 11)

    def issue_jsrr(self, base: int):
        self.emit(ops.JSR << 12 | base << 6)

    def issue_pc_rel(self, op: int, reg: int, target: Target):
        self.emit_ref(op << 12 | reg << 9, target, 9)

    def issue_base_rel(self, op: int, reg: int, base: int, offset: int):
        self.emit(op << 12 | reg << 9 | base << 6 | signed_field(offset, 6, 'Offset'))

    def issue_trap(self, vector: int):
        if vector < 0 or vector > 0xFF:
            raise AsmError(f'Trap vector {vector} is out of range')

        self.emit(ops.TRAP << 12 | vector)

    def on_fail(self, rest: str):
        raise AsmError(f'Unknown statement {rest}')
