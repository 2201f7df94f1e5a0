# Scheduler: fetch -> decode -> execute, a fixed number of ticks per frame,
# timers once per frame. The frontend paces frames at FRAME_HZ and reads
# the draw / tone signals after each one.

import collections
import enum

from . import config
from .config import log
from .cpu import Cpu
from .errors import Chip8Error, Chip8Fault
from .instruction import Instruction
from .keypad import Keypad
from .machine import Memory, Registers
from .rom import Rom

Frame = collections.namedtuple("Frame", "draw tone")


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class Emulator:

    def __init__(self, keypad=None, ticks_per_frame=config.TICKS_PER_FRAME,
                 wait_for_key=False, rng=None):
        self.registers = Registers()
        self.memory = Memory()
        self.keypad = keypad if keypad is not None else Keypad()
        self.cpu = Cpu(self.registers, self.memory, self.keypad, rng=rng,
                       wait_for_key=wait_for_key)
        self.ticks_per_frame = ticks_per_frame
        self.state = State.IDLE
        self.paused = False
        self.rom = None
        self.draw_needed = False
        self.tone_active = False
        self.cycle_count = 0

    @property
    def running(self):
        return self.state is State.RUNNING

    @property
    def rom_loaded(self):
        return self.rom is not None

    # ---- Program loading ----
    def load_rom(self, rom):
        if self.running:
            raise Chip8Error("Cannot load rom, emulator is already running one.")
        if not isinstance(rom, Rom):
            rom = Rom(rom)
        self.rom = rom
        self._boot()

    def _boot(self):
        self.registers.reset()
        self.memory.load_program(self.rom.data, config.PROGRAM_START)
        self.registers.pc = config.PROGRAM_START
        self.cpu.should_draw = False
        self.draw_needed = True
        self.tone_active = False

    def reset(self):
        """Reload the current ROM from scratch and stop."""
        self.state = State.IDLE
        self.paused = False
        self.keypad.reset()
        if self.rom is not None:
            self._boot()
        else:
            self.registers.reset()
            self.memory.reset()
        log("Emulator reset")

    def start(self):
        if not self.rom_loaded:
            raise Chip8Error("Cannot start emulator, no ROM has been loaded.")
        self.state = State.RUNNING

    def stop(self):
        self.state = State.IDLE

    def toggle_pause(self):
        self.paused = not self.paused
        log("paused:", self.paused)
        return self.paused

    # ---- Cycle ----
    def fetch(self):
        pc = self.registers.pc
        word = self.memory.read_word(pc)
        self.registers.pc = (pc + 2) & 0xFFFF
        return Instruction(word)

    def tick(self):
        pc = self.registers.pc
        instruction = None
        try:
            instruction = self.fetch()
            self.cpu.execute(instruction)
        except Chip8Fault as e:
            e.pc = pc
            e.word = instruction.word if instruction is not None else None
            self.state = State.IDLE
            # show whatever was drawn before the fault
            if self.cpu.should_draw:
                self.draw_needed = True
                self.cpu.should_draw = False
            log("Emulation halted:", e)
            raise
        self.cycle_count += 1

    def update_timers(self):
        if self.registers.delay > 0:
            self.registers.delay -= 1
        if self.registers.sound > 0:
            self.registers.sound -= 1

    def update(self):
        """Run one frame. Returns a Frame(draw, tone) of the signals raised."""
        if not self.running or self.paused:
            return Frame(False, self.tone_active)

        first_half = self.ticks_per_frame // 2
        for _ in range(first_half):
            self.tick()
        self.update_timers()
        self.tone_active = self.registers.sound > 0
        for _ in range(self.ticks_per_frame - first_half):
            self.tick()

        drew = self.cpu.should_draw
        if drew:
            self.draw_needed = True
            self.cpu.should_draw = False
        return Frame(drew, self.tone_active)

    def consume_draw(self):
        """Return the draw-needed signal and clear it."""
        drew = self.draw_needed
        self.draw_needed = False
        return drew

    def frame(self):
        return self.memory.frame()
