# Opcodes, bits [15:12]
BR = 0x0    # if COND & nzp: PC + off9 -> PC
ADD = 0x1   # SR1 + (SR2 | imm5) -> DR
LD = 0x2    # M[PC + off9] -> DR
ST = 0x3    # SR -> M[PC + off9]
JSR = 0x4   # PC -> R7; PC + off11 | BaseR -> PC
AND = 0x5   # SR1 & (SR2 | imm5) -> DR
LDR = 0x6   # M[BaseR + off6] -> DR
STR = 0x7   # SR -> M[BaseR + off6]
RTI = 0x8   # unused, halts
NOT = 0x9   # ~SR -> DR
LDI = 0xA   # M[M[PC + off9]] -> DR
STI = 0xB   # SR -> M[M[PC + off9]]
JMP = 0xC   # BaseR -> PC
RES = 0xD   # reserved, halts
LEA = 0xE   # PC + off9 -> DR
TRAP = 0xF  # PC -> R7; service call

NAMES = {
    BR: 'BR',
    ADD: 'ADD',
    LD: 'LD',
    ST: 'ST',
    JSR: 'JSR',
    AND: 'AND',
    LDR: 'LDR',
    STR: 'STR',
    RTI: 'RTI',
    NOT: 'NOT',
    LDI: 'LDI',
    STI: 'STI',
    JMP: 'JMP',
    RES: 'RES',
    LEA: 'LEA',
    TRAP: 'TRAP'
}

# Trap vectors
TRAP_GETC = 0x20   # char -> R0, no echo
TRAP_OUT = 0x21    # R0 -> console
TRAP_PUTS = 0x22   # word string at R0 -> console
TRAP_IN = 0x23     # prompt, char -> R0, echo
TRAP_PUTSP = 0x24  # byte string at R0 -> console
TRAP_HALT = 0x25   # stop execution
