import pytest

import lc3vm.runtime.loader as loader
from lc3vm.runtime.errors import LoadError
from lc3vm.runtime.memory import Memory

from unit_utils import image


def test_parse_big_endian():
    assert loader.parse_image(bytes([0x30, 0x00, 0x12, 0x34, 0xAB, 0xCD])) == (0x3000, [0x1234, 0xABCD])


def test_origin_only_image():
    assert loader.parse_image(bytes([0x40, 0x00])) == (0x4000, [])


@pytest.mark.parametrize('data', [b'', b'\x30'])
def test_short_image_fails(data):
    with pytest.raises(LoadError):
        loader.parse_image(data)


def test_odd_trailing_byte_ignored():
    assert loader.parse_image(bytes([0x30, 0x00, 0x00, 0x01, 0xFF])) == (0x3000, [0x0001])


def test_load_image():
    memory = Memory()
    origin = loader.load_image(memory, image(0x3000, [0xE003, 0x0042]))

    assert origin == 0x3000
    assert memory.read(0x3000) == 0xE003
    assert memory.read(0x3001) == 0x0042
    assert memory.read(0x3002) == 0


def test_read_image_file(tmp_path):
    path = tmp_path / 'prog.obj'
    path.write_bytes(image(0x3000, [0xF025]))

    assert loader.read_image_file(path) == bytes([0x30, 0x00, 0xF0, 0x25])


def test_read_missing_file(tmp_path):
    with pytest.raises(LoadError):
        loader.read_image_file(tmp_path / 'missing.obj')
