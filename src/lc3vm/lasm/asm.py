import struct
import logging as lg
from pathlib import Path

import click
import pyparsing as pp

import lc3vm.lasm.grammar as grammar
from lc3vm.lasm.fpp import FPP, AsmError, signed_field


def resolve_label(first_pass: FPP, name: str) -> int:
    if name not in first_pass.label_dict:
        raise AsmError(f'Undefined label {name}')

    return first_pass.label_dict[name]


def compile_source(source: str) -> bytes:
    # First pass
    first_pass = FPP()

    try:
        actions = grammar.program.parse_string(source, parse_all=True)
    except pp.ParseException as e:
        raise AsmError(f'Syntax error: {e}') from e

    for (func, args) in actions:  # type: ignore
        if first_pass.ended:
            break

        func(first_pass, *args)

    if first_pass.origin is None:
        raise AsmError('Missing .ORIG')

    # Second pass
    words: list[int] = []

    for (t, d) in first_pass.cmd_list:
        if t == 'word':
            words.append(d)

        if t == 'addr':
            words.append(resolve_label(first_pass, d))

        if t == 'ref':
            (address, word, target, bits) = d

            if isinstance(target, str):
                offset = resolve_label(first_pass, target) - (address + 1)
            else:
                offset = target

            words.append(word | signed_field(offset, bits, 'Offset'))

    lg.info(f'Assembled {len(words)} words @ 0x{first_pass.origin:04X}')

    # Dumping results
    return struct.pack(f'>{len(words) + 1}H', first_pass.origin, *words)


def compile_file(filepath: str | Path) -> bytes:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Compiling file {filepath}')
    return compile_source(filepath.read_text())


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, source: Path, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("LC3 ASM")

    try:
        bytestr = compile_file(source)
    except AsmError as e:
        raise click.ClickException(str(e))

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)


if __name__ == "__main__":
    compile()
