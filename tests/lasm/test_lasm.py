import pytest
from click.testing import CliRunner

import lc3vm.lasm.asm as asm
from lc3vm.lasm.fpp import AsmError

from unit_utils import words_of


def assemble(source: str) -> list[int]:
    return words_of(asm.compile_source(source))


def test_operate():
    source = '''
        .ORIG x3000
        ADD R0, R0, #5
        ADD R2, R0, R1
        ADD R0, R0, #-1
        AND R0, R0, #0
        NOT R1, R0
        .END
    '''
    assert assemble(source) == [0x3000, 0x1025, 0x1401, 0x103F, 0x5020, 0x923F]


def test_pc_relative_labels():
    source = '''
        .ORIG x3000
        LD R1, DATA
        LDI R2, DATA
        LEA R0, DATA
        ST R1, DATA
DATA    .FILL xBEEF
        .END
    '''
    assert assemble(source) == [0x3000, 0x2203, 0xA402, 0xE001, 0x3200, 0xBEEF]


def test_control():
    source = '''
        .ORIG x3000
LOOP    BRnz LOOP
        BR LOOP
        JSR SUB
        JSRR R3
        JMP R2
SUB     RET
        .END
    '''
    assert assemble(source) == [0x3000, 0x0DFF, 0x0FFE, 0x4802, 0x40C0, 0xC080, 0xC1C0]


def test_base_relative_and_traps():
    source = '''
        .ORIG x4000
        LDR R3, R4, #-1
        STR R1, R2, #1
        TRAP x25
        GETC
        OUT
        PUTS
        IN
        PUTSP
        HALT
        RTI
        .END
    '''
    assert assemble(source) == [
        0x4000,
        0x673F, 0x7281,
        0xF025, 0xF020, 0xF021, 0xF022, 0xF023, 0xF024, 0xF025,
        0x8000
    ]


def test_literal_offsets():
    source = '''
        .ORIG x3000
        LEA R0, #3
        BRz #-1
        .END
    '''
    assert assemble(source) == [0x3000, 0xE003, 0x05FF]


def test_directives():
    source = '''
        .ORIG x3000
START   .BLKW 2
        .STRINGZ "ab"
        .FILL #-1
        .FILL START
        .END
    '''
    assert assemble(source) == [0x3000, 0, 0, 0x61, 0x62, 0, 0xFFFF, 0x3000]


def test_stringz_escapes():
    assert assemble('.ORIG x3000\n.STRINGZ "a\\n"\n.END') == [0x3000, 0x61, 0x0A, 0]


def test_case_comments_and_colons():
    source = '''
        ; Header comment
        .orig x3000
loop:   add r0, r0, #5  ; trailing comment
        brp loop
        .end
    '''
    assert assemble(source) == [0x3000, 0x1025, 0x03FE]


def test_text_after_end_ignored():
    assert assemble('.ORIG x3000\nHALT\n.END\nthis is not assembly') == [0x3000, 0xF025]


@pytest.mark.parametrize('source', [
    'HALT',
    'HALT\n.ORIG x3000',
    '.ORIG x3000\n.ORIG x4000',
    '.ORIG x3000\nADD R0, R0, #16',
    '.ORIG x3000\nADD R0, R1',
    '.ORIG x3000\nLD R0, NOWHERE',
    '.ORIG x3000\nA HALT\nA HALT',
    '.ORIG x3000\nTRAP x100',
    '.ORIG x3000\nLDR R0, R1, #32',
    '.ORIG x3000\nBR FAR\n.BLKW 300\nFAR HALT',
])
def test_errors(source):
    with pytest.raises(AsmError):
        asm.compile_source(source)


def test_compile_command(tmp_path):
    source = tmp_path / 'prog.asm'
    source.write_text('.ORIG x3000\nHALT\n.END\n')
    binary = tmp_path / 'out' / 'prog.obj'

    result = CliRunner().invoke(asm.compile, [str(source), str(binary)])

    assert result.exit_code == 0
    assert binary.read_bytes() == bytes([0x30, 0x00, 0xF0, 0x25])


def test_compile_command_reports_errors(tmp_path):
    source = tmp_path / 'bad.asm'
    source.write_text('.ORIG x3000\nLD R0, NOWHERE\n')

    result = CliRunner().invoke(asm.compile, [str(source), str(tmp_path / 'bad.obj')])

    assert result.exit_code == 1
    assert not (tmp_path / 'bad.obj').exists()
