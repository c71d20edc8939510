# Address space
MEMORY_SIZE = 1 << 16
WORD_MASK = 0xFFFF
SIGN_BIT = 1 << 15

# Default entry point
PC_START = 0x3000

# Register file
R0 = 0
R1 = 1
R2 = 2
R3 = 3
R4 = 4
R5 = 5
R6 = 6
R7 = 7
PC = 8
COND = 9
REGISTER_COUNT = 10

# Condition flags
FL_POS = 1 << 0
FL_ZRO = 1 << 1
FL_NEG = 1 << 2

# Console texts
IN_PROMPT = 'Enter a character: '
HALT_MESSAGE = 'HALT\n'
