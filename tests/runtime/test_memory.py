from lc3vm.common.hwconf import MEMORY_SIZE
from lc3vm.runtime.memory import Memory


def test_zero_initialised():
    memory = Memory()
    assert len(memory.data) == MEMORY_SIZE
    assert memory.read(0x0000) == 0
    assert memory.read(0xFFFF) == 0


def test_read_write():
    memory = Memory()
    memory.write(0x3000, 0xBEEF)
    assert memory.read(0x3000) == 0xBEEF


def test_address_wraps():
    memory = Memory()
    memory.write(0x10001, 7)
    assert memory.read(0x0001) == 7
    assert memory.read(0x10001) == 7


def test_value_masked():
    memory = Memory()
    memory.write(0x4000, 0x1FFFF)
    assert memory.read(0x4000) == 0xFFFF


def test_load_image_wraps_past_top():
    memory = Memory()
    memory.load_image(0xFFFF, [1, 2, 3])

    assert memory.read(0xFFFF) == 1
    assert memory.read(0x0000) == 2
    assert memory.read(0x0001) == 3


def test_last_load_wins():
    memory = Memory()
    memory.load_image(0x3000, [1, 2, 3])
    memory.load_image(0x3001, [9])

    assert [memory.read(a) for a in range(0x3000, 0x3003)] == [1, 9, 3]
