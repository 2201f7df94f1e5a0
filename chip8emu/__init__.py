from .cpu import Cpu
from .emulator import Emulator, Frame, State
from .errors import (Chip8Error, Chip8Fault, MemoryFault, RomError,
                     RomNotFound, RomTooLarge, StackFault)
from .instruction import Instruction, Opcode, decode, disassemble
from .keypad import Keypad
from .machine import Memory, Registers
from .rom import Rom

__version__ = "0.1.0"
