import random

import pytest

from chip8emu import Emulator


def assemble(*words):
    """Pack 16-bit words into a big-endian program."""
    out = bytearray()
    for word in words:
        out += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(out)


@pytest.fixture
def emulator():
    emu = Emulator(rng=random.Random(1234))
    emu.load_rom(b"")
    return emu


@pytest.fixture
def make_emulator():
    def _make(*words, **kwargs):
        kwargs.setdefault("rng", random.Random(1234))
        emu = Emulator(**kwargs)
        emu.load_rom(assemble(*words))
        emu.start()
        return emu
    return _make


@pytest.fixture
def asm():
    return assemble
