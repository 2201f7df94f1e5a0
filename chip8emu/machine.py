# Machine state and memory.
#
# Memory map (Cowgod's reference):
#   0x000 - 0x1FF  reserved for the interpreter (font sprites live at 0x050)
#   0x200 - 0xFFF  program / data space
#
# The frame buffer and call stack are kept next to RAM since they share its
# lifetime and reset.

import numpy as np

from . import config
from .config import log
from .errors import MemoryFault, RomTooLarge

VF = 0xF


class Registers:
    """CPU registers: V0-VF, I, PC, SP and the two timers."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.v = [0] * config.NUM_REGISTERS  # 16 general-purpose registers
        self.i = 0                           # I register (memory pointer)
        self.pc = 0                          # program counter
        self.sp = 0                          # stack pointer
        self.delay = 0                       # delay timer
        self.sound = 0                       # sound timer

    def __repr__(self):
        regs = " ".join("V%X=%02X" % (n, value) for n, value in enumerate(self.v))
        return "<Registers %s I=%04X PC=%04X SP=%d DT=%d ST=%d>" % (
            regs, self.i, self.pc, self.sp, self.delay, self.sound)


class Memory:

    def __init__(self):
        self.ram = bytearray(config.RAM_SIZE)
        self.vram = np.zeros(config.width * config.height, dtype=bool)
        self.stack = np.zeros(config.STACK_SIZE, dtype=np.uint16)
        self.reset()

    def reset(self):
        self.ram[:] = bytes(len(self.ram))
        self.clear_vram()
        self.stack[:] = 0
        # Load fontset into memory
        self.ram[config.FONT_LOCATION:config.FONT_LOCATION + len(config.FONTSET)] = bytes(config.FONTSET)

    def clear_vram(self):
        self.vram[:] = False

    def load_program(self, data, location=config.PROGRAM_START):
        if location < 0 or location >= len(self.ram):
            raise MemoryFault(location)
        limit = min(config.MAX_ROM_SIZE, len(self.ram) - location)
        if len(data) > limit:
            raise RomTooLarge(len(data), limit)
        self.reset()
        self.ram[location:location + len(data)] = bytes(data)
        log("Loaded %d bytes at 0x%03X" % (len(data), location))

    # ---- Bounds-checked access ----
    def check_range(self, address, length=1):
        """Raise MemoryFault unless address..address+length-1 is inside RAM."""
        if address < 0:
            raise MemoryFault(address)
        end = address + length - 1
        if end >= len(self.ram):
            raise MemoryFault(max(address, len(self.ram)))

    def read(self, address):
        self.check_range(address)
        return self.ram[address]

    def read_word(self, address):
        self.check_range(address, 2)
        return (self.ram[address] << 8) | self.ram[address + 1]

    def write(self, address, value):
        self.check_range(address)
        self.ram[address] = value & 0xFF

    # ---- Frame buffer ----
    def pixel(self, x, y):
        return bool(self.vram[(x % config.width) + (y % config.height) * config.width])

    def frame(self):
        """Snapshot of the frame buffer as a (height, width) array."""
        return self.vram.reshape(config.height, config.width).copy()

    # ---- Debug dumps ----
    def dump(self):
        lines = []
        for base in range(0, len(self.ram), 16):
            row = self.ram[base:base + 16]
            pairs = [row[i:i + 2].hex() for i in range(0, len(row), 2)]
            lines.append("%04x %s" % (base, " ".join(pairs)))
        return lines

    def dump_stack(self):
        return [int(address) for address in self.stack]
