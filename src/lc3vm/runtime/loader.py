import struct
import logging as lg
from pathlib import Path

from lc3vm.runtime.memory import Memory
from lc3vm.runtime.errors import LoadError


def parse_image(data: bytes) -> tuple[int, list[int]]:
    ''' Splits a big-endian image into its origin and payload words '''
    if len(data) < 2:
        raise LoadError('Image is shorter than one word')

    if len(data) % 2:
        lg.warning('Image has an odd trailing byte, ignored')
        data = data[:-1]

    count = len(data) // 2
    words = list(struct.unpack(f'>{count}H', data))
    return words[0], words[1:]


def load_image(memory: Memory, data: bytes) -> int:
    origin, words = parse_image(data)
    memory.load_image(origin, words)
    return origin


def read_image_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise LoadError(f'Failed to load image: {path} ({e.strerror})') from e
