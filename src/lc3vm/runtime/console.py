import errno
import os
import sys
import termios
import tty
from typing import BinaryIO


class Console():
    ''' Host side of the trap routines '''

    def write_char(self, code: int):
        raise NotImplementedError()

    def read_char(self) -> int:
        raise NotImplementedError()

    def flush(self):
        pass

    def write_text(self, text: str):
        for ch in text:
            self.write_char(ord(ch))


class StreamConsole(Console):
    ''' Reads bytes from a binary stream, writes bytes to a binary stream '''

    def __init__(self, source: BinaryIO, sink: BinaryIO | None = None):
        self.source = source
        self.sink = sink

    def output(self) -> BinaryIO:
        # Resolved late so that a replaced sys.stdout is honoured
        return self.sink if self.sink is not None else sys.stdout.buffer

    def write_char(self, code: int):
        # One byte per character, no text encoding in between
        self.output().write(bytes([code & 0xFF]))

    def flush(self):
        self.output().flush()

    def read_char(self) -> int:
        self.flush()
        data = self.source.read(1)
        if not data:
            raise EOFError('Console input exhausted')

        return data[0]


class TerminalConsole(StreamConsole):
    ''' Process stdin/stdout, unbuffered and without echo on a tty '''

    def __init__(self):
        super().__init__(sys.stdin.buffer)

    def read_char(self) -> int:
        try:
            if not sys.stdin.isatty():
                # A hung-up terminal also ends up here
                return super().read_char()

            return self.read_cbreak()

        except OSError as e:
            if e.errno != errno.EIO:
                raise

            raise EOFError('Console hung up') from e

    def read_cbreak(self) -> int:
        self.flush()
        fd = sys.stdin.fileno()
        saved = termios.tcgetattr(fd)
        try:
            # TCSANOW keeps keys typed ahead of the read
            tty.setcbreak(fd, termios.TCSANOW)
            data = os.read(fd, 1)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)

        if not data:
            raise EOFError('Console input exhausted')

        return data[0]
