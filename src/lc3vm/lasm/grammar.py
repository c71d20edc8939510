''' LC-3 assembly grammar '''

import re

import pyparsing as pp

import lc3vm.common.ops as ops
from lc3vm.lasm.fpp import FPP

MNEMONICS = [
    'ADD', 'AND', 'NOT', 'JMP', 'RET', 'JSR', 'JSRR',
    'LD', 'LDI', 'LDR', 'LEA', 'ST', 'STI', 'STR', 'TRAP', 'RTI',
    'GETC', 'OUT', 'PUTS', 'IN', 'PUTSP', 'HALT'
]

WORD_END = '(?![A-Za-z0-9_])'


def kw(literal):
    return pp.CaselessKeyword(literal).suppress()


def g_cmd(literal, func, *operands, fixed=()):
    expr = kw(literal)

    for i, operand in enumerate(operands):
        if i > 0:
            expr = expr + comma

        expr = expr + operand

    return expr.setParseAction(lambda r: (func, fixed + tuple(r)))


def br_mask(text: str) -> int:
    flags = text[2:].lower()

    if not flags:
        return 0b111

    return (0b100 if 'n' in flags else 0) \
        | (0b010 if 'z' in flags else 0) \
        | (0b001 if 'p' in flags else 0)


comma = pp.Suppress(',')
comment = pp.Regex(';.*')

id = pp.Regex('[A-Za-z_][A-Za-z0-9_]*')

reg_ref = pp.Regex('[rR][0-7]' + WORD_END).setParseAction(lambda r: int(r[0][1]))

hex_const = pp.Regex('[xX]-?[0-9a-fA-F]+' + WORD_END).setParseAction(lambda r: int(r[0][1:], 16))
dec_const = pp.Regex('#?[+-]?[0-9]+' + WORD_END).setParseAction(lambda r: int(r[0].lstrip('#')))
number = hex_const | dec_const

br_word = pp.Regex('BR[NZP]{0,3}' + WORD_END, flags=re.IGNORECASE).setParseAction(lambda r: br_mask(r[0]))

reserved = pp.MatchFirst([pp.CaselessKeyword(m) for m in MNEMONICS]) | br_word | reg_ref

label_ref = ~reserved + id
target = number | label_ref

label = (~reserved + id + pp.Optional(pp.Suppress(':'))).setParseAction(lambda r: (FPP.on_label, (r[0],)))

# Operate
add_reg_cmd = g_cmd('ADD', FPP.issue_alu_reg, reg_ref, reg_ref, reg_ref, fixed=(ops.ADD,))
add_imm_cmd = g_cmd('ADD', FPP.issue_alu_imm, reg_ref, reg_ref, number, fixed=(ops.ADD,))
and_reg_cmd = g_cmd('AND', FPP.issue_alu_reg, reg_ref, reg_ref, reg_ref, fixed=(ops.AND,))
and_imm_cmd = g_cmd('AND', FPP.issue_alu_imm, reg_ref, reg_ref, number, fixed=(ops.AND,))
not_cmd = g_cmd('NOT', FPP.issue_not, reg_ref, reg_ref)

# Control
br_cmd = (br_word + target).setParseAction(lambda r: (FPP.issue_br, tuple(r)))
jmp_cmd = g_cmd('JMP', FPP.issue_jmp, reg_ref)
ret_cmd = g_cmd('RET', FPP.issue_ret)
jsr_cmd = g_cmd('JSR', FPP.issue_jsr, target)
jsrr_cmd = g_cmd('JSRR', FPP.issue_jsrr, reg_ref)
rti_cmd = g_cmd('RTI', FPP.issue_word, fixed=(ops.RTI << 12,))

# Data movement
ld_cmd = g_cmd('LD', FPP.issue_pc_rel, reg_ref, target, fixed=(ops.LD,))
ldi_cmd = g_cmd('LDI', FPP.issue_pc_rel, reg_ref, target, fixed=(ops.LDI,))
lea_cmd = g_cmd('LEA', FPP.issue_pc_rel, reg_ref, target, fixed=(ops.LEA,))
st_cmd = g_cmd('ST', FPP.issue_pc_rel, reg_ref, target, fixed=(ops.ST,))
sti_cmd = g_cmd('STI', FPP.issue_pc_rel, reg_ref, target, fixed=(ops.STI,))
ldr_cmd = g_cmd('LDR', FPP.issue_base_rel, reg_ref, reg_ref, number, fixed=(ops.LDR,))
str_cmd = g_cmd('STR', FPP.issue_base_rel, reg_ref, reg_ref, number, fixed=(ops.STR,))

# Service calls
trap_cmd = g_cmd('TRAP', FPP.issue_trap, number)
getc_cmd = g_cmd('GETC', FPP.issue_trap, fixed=(ops.TRAP_GETC,))
out_cmd = g_cmd('OUT', FPP.issue_trap, fixed=(ops.TRAP_OUT,))
puts_cmd = g_cmd('PUTS', FPP.issue_trap, fixed=(ops.TRAP_PUTS,))
in_cmd = g_cmd('IN', FPP.issue_trap, fixed=(ops.TRAP_IN,))
putsp_cmd = g_cmd('PUTSP', FPP.issue_trap, fixed=(ops.TRAP_PUTSP,))
halt_cmd = g_cmd('HALT', FPP.issue_trap, fixed=(ops.TRAP_HALT,))

# Directives
orig_dir = g_cmd('.ORIG', FPP.on_orig, number)
fill_dir = g_cmd('.FILL', FPP.on_fill, target)
blkw_dir = g_cmd('.BLKW', FPP.on_blkw, number)
stringz_dir = g_cmd('.STRINGZ', FPP.on_stringz, pp.QuotedString('"', esc_char='\\'))
end_dir = g_cmd('.END', FPP.on_end)

# Fail on unknown statement
unknown = pp.Regex(r'\S.*').setParseAction(lambda r: (FPP.on_fail, (r[0],)))

asm_cmd = add_reg_cmd \
    | add_imm_cmd \
    | and_reg_cmd \
    | and_imm_cmd \
    | not_cmd \
    | br_cmd \
    | jmp_cmd \
    | ret_cmd \
    | jsr_cmd \
    | jsrr_cmd \
    | rti_cmd \
    | ld_cmd \
    | ldi_cmd \
    | lea_cmd \
    | st_cmd \
    | sti_cmd \
    | ldr_cmd \
    | str_cmd \
    | trap_cmd \
    | getc_cmd \
    | out_cmd \
    | puts_cmd \
    | in_cmd \
    | putsp_cmd \
    | halt_cmd

directive = orig_dir \
    | fill_dir \
    | blkw_dir \
    | stringz_dir \
    | end_dir

statement = asm_cmd | directive | label | unknown

program = pp.ZeroOrMore(statement)
program.ignore(comment)
