import logging as lg
from array import array
from typing import Sequence

from lc3vm.common.hwconf import MEMORY_SIZE, WORD_MASK


class Memory():
    ''' Flat word-addressed memory, every 16-bit address is valid '''
    data: array

    def __init__(self):
        self.data = array('H', bytes(MEMORY_SIZE * 2))

    def read(self, address: int) -> int:
        return self.data[address & WORD_MASK]

    def write(self, address: int, value: int):
        self.data[address & WORD_MASK] = value & WORD_MASK

    def load_image(self, origin: int, words: Sequence[int]):
        # Overlapping loads simply overwrite, the last one wins
        lg.debug(f'Loading {len(words)} words @ 0x{origin:04X}')

        for i, word in enumerate(words):
            self.write(origin + i, word)
