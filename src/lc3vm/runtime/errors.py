class Halt(Exception):
    pass


class LoadError(Exception):
    pass


class InvalidTrapVector(Exception):
    def __init__(self, vector: int, address: int):
        super().__init__(f'Invalid trap vector 0x{vector:02X} at 0x{address:04X}')
        self.vector = vector
        self.address = address
