# Copyright (c) 2026 kilo contributors
# SPDX-License-Identifier: ISC
#
# Shared fixtures for the kilo/lsh pytest suite: a Terminal wired to pipes,
# so that input can be fed and output inspected byte for byte, and a pty
# pair for tests that need a real terminal.

import fcntl
import os
import struct
import sys
import termios

import pytest

# Ensure the modules are importable from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rawterm import Terminal  # noqa: E402

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class PipeTerminal:
    """A Terminal reading from one pipe and writing to another."""

    def __init__(self):
        self.in_r, self.in_w = os.pipe()
        self.out_r, self.out_w = os.pipe()
        os.set_blocking(self.out_r, False)
        self.term = Terminal(self.in_r, self.out_w)

    def feed(self, data):
        """Make 'data' available as terminal input."""
        os.write(self.in_w, data)

    def end_input(self):
        """
        Close the writing end of the input pipe. Reads then return no data,
        just like a raw-mode read that timed out.
        """
        if self.in_w is not None:
            os.close(self.in_w)
            self.in_w = None

    def pending_input(self):
        """Return the input bytes that haven't been consumed yet."""
        self.end_input()
        return _read_all(self.in_r)

    def output(self):
        """Return (and consume) everything written to the terminal so far."""
        return _read_all(self.out_r)

    def close(self):
        for fd in (self.in_r, self.in_w, self.out_r, self.out_w):
            if fd is not None:
                os.close(fd)


def _read_all(fd):
    chunks = []
    while True:
        try:
            data = os.read(fd, 65536)
        except BlockingIOError:
            break
        if not data:
            break
        chunks.append(data)
    return b"".join(chunks)


@pytest.fixture
def pipe_term():
    pt = PipeTerminal()
    yield pt
    pt.close()


@pytest.fixture
def pty_pair():
    """Yield (master, slave) file descriptors of a fresh pty."""
    if not hasattr(os, "openpty"):
        pytest.skip("no pty support")
    try:
        master, slave = os.openpty()
    except OSError as e:
        pytest.skip(f"openpty() failed: {e}")
    os.set_blocking(master, False)
    yield master, slave
    os.close(slave)
    os.close(master)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def set_window_size(fd, rows, cols):
    """Set the size the kernel reports for the terminal 'fd'."""
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, cols, 0, 0))


def drain(fd):
    """Read whatever is available on the non-blocking 'fd'."""
    try:
        return _read_all(fd)
    except OSError:
        # EIO on a pty master once the slave side has no data
        return b""
