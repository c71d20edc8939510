''' Bit-field extraction for 16-bit instruction words '''

from lc3vm.common.hwconf import WORD_MASK


def sign_extend(value: int, bit_count: int) -> int:
    if (value >> (bit_count - 1)) & 1:
        value |= WORD_MASK << bit_count

    return value & WORD_MASK


def opcode(instr: int) -> int:
    return (instr >> 12) & 0xF


def dr(instr: int) -> int:
    return (instr >> 9) & 0x7


def sr1(instr: int) -> int:
    return (instr >> 6) & 0x7


def sr2(instr: int) -> int:
    return instr & 0x7


# Same position as DR for stores and BR
sr = dr
nzp = dr
base_r = sr1


def imm_flag(instr: int) -> bool:
    return bool((instr >> 5) & 0x1)


def long_flag(instr: int) -> bool:
    return bool((instr >> 11) & 0x1)


def imm5(instr: int) -> int:
    return sign_extend(instr & 0x1F, 5)


def offset6(instr: int) -> int:
    return sign_extend(instr & 0x3F, 6)


def pc_offset9(instr: int) -> int:
    return sign_extend(instr & 0x1FF, 9)


def pc_offset11(instr: int) -> int:
    return sign_extend(instr & 0x7FF, 11)


def trap_vector(instr: int) -> int:
    return instr & 0xFF
