# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#3.1
#
# One handler per Opcode. Handlers receive the decoded Instruction and work on
# the Registers / Memory / Keypad the Cpu was built with. PC has already been
# advanced past the instruction by the time a handler runs.

import random

from . import config
from .config import log
from .errors import StackFault
from .instruction import Opcode
from .machine import VF


class Cpu:

    def __init__(self, registers, memory, keypad, rng=None, wait_for_key=False):
        self.registers = registers
        self.memory = memory
        self.keypad = keypad
        self.rng = rng if rng is not None else random.Random()
        # Fx0A re-executes until a key is down instead of falling through
        self.wait_for_key = wait_for_key
        self.should_draw = False
        self.setup_funcmap()

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Opcode.CLS: self._00E0,
            Opcode.RET: self._00EE,
            Opcode.SYS: self._0nnn,
            Opcode.JP: self._1nnn,
            Opcode.CALL: self._2nnn,
            Opcode.SE_VX_KK: self._3xkk,
            Opcode.SNE_VX_KK: self._4xkk,
            Opcode.SE_VX_VY: self._5xy0,
            Opcode.LD_VX_KK: self._6xkk,
            Opcode.ADD_VX_KK: self._7xkk,
            Opcode.LD_VX_VY: self._8xy0,
            Opcode.OR_VX_VY: self._8xy1,
            Opcode.AND_VX_VY: self._8xy2,
            Opcode.XOR_VX_VY: self._8xy3,
            Opcode.ADD_VX_VY: self._8xy4,
            Opcode.SUB_VX_VY: self._8xy5,
            Opcode.SHR_VX: self._8xy6,
            Opcode.SUBN_VX_VY: self._8xy7,
            Opcode.SHL_VX: self._8xyE,
            Opcode.SNE_VX_VY: self._9xy0,
            Opcode.LD_I: self._Annn,
            Opcode.JP_V0: self._Bnnn,
            Opcode.RND_VX_KK: self._Cxkk,
            Opcode.DRW_VX_VY: self._Dxyn,
            Opcode.SKP_VX: self._Ex9E,
            Opcode.SKNP_VX: self._ExA1,
            Opcode.LD_VX_DT: self._Fx07,
            Opcode.LD_VX_K: self._Fx0A,
            Opcode.LD_DT_VX: self._Fx15,
            Opcode.LD_ST_VX: self._Fx18,
            Opcode.ADD_I_VX: self._Fx1E,
            Opcode.LD_F_VX: self._Fx29,
            Opcode.LD_B_VX: self._Fx33,
            Opcode.LD_I_VX: self._Fx55,
            Opcode.LD_VX_I: self._Fx65,
            Opcode.UNKNOWN: self._unknown,
        }

    def execute(self, instruction):
        self.funcmap[instruction.decode()](instruction)

    def random_byte(self):
        return self.rng.getrandbits(8)

    def _skip(self):
        self.registers.pc = (self.registers.pc + 2) & 0xFFFF

    # ---- Opcode Handlers ----

    # 0nnn - SYS addr, only used on the original hardware, ignored here
    def _0nnn(self, ins):
        log("SYS call ignored (0nnn)")

    # 00E0 - CLS
    def _00E0(self, ins):
        self.memory.clear_vram()
        self.should_draw = True
        log("Clear the display (all pixels turned off)")

    # 00EE - RET
    def _00EE(self, ins):
        regs = self.registers
        if regs.sp == 0:
            raise StackFault("Stack underflow on RET", regs.sp)
        regs.pc = int(self.memory.stack[regs.sp])
        regs.sp -= 1
        log("Return to", hex(regs.pc))

    # 1nnn - Jump to address nnn
    def _1nnn(self, ins):
        self.registers.pc = ins.addr
        log("Jump to address", hex(ins.addr))

    # 2nnn - Call subroutine at nnn
    def _2nnn(self, ins):
        regs = self.registers
        if regs.sp + 1 >= config.STACK_SIZE:
            raise StackFault("Stack overflow on CALL", regs.sp)
        regs.sp += 1
        self.memory.stack[regs.sp] = regs.pc
        regs.pc = ins.addr
        log("Call subroutine at", hex(ins.addr))

    # 3xkk - Skip next instruction if Vx == kk
    def _3xkk(self, ins):
        if self.registers.v[ins.x] == ins.kk:
            self._skip()
            log(f"Skip next instruction: V{ins.x:X} == {ins.kk}")

    # 4xkk - Skip next instruction if Vx != kk
    def _4xkk(self, ins):
        if self.registers.v[ins.x] != ins.kk:
            self._skip()
            log(f"Skip next instruction: V{ins.x:X} != {ins.kk}")

    # 5xy0 - Skip next instruction if Vx == Vy
    def _5xy0(self, ins):
        v = self.registers.v
        if v[ins.x] == v[ins.y]:
            self._skip()
            log(f"Skip next instruction: V{ins.x:X} == V{ins.y:X}")

    # 6xkk - Set Vx = kk
    def _6xkk(self, ins):
        self.registers.v[ins.x] = ins.kk
        log(f"Set V{ins.x:X} = {ins.kk}")

    # 7xkk - Add immediate, no carry
    def _7xkk(self, ins):
        v = self.registers.v
        v[ins.x] = (v[ins.x] + ins.kk) & 0xFF
        log(f"Add {ins.kk} to V{ins.x:X}: {v[ins.x]}")

    # 8xy0 - Vx = Vy
    def _8xy0(self, ins):
        v = self.registers.v
        v[ins.x] = v[ins.y]

    # 8xy1 - Vx |= Vy
    def _8xy1(self, ins):
        v = self.registers.v
        v[ins.x] |= v[ins.y]

    # 8xy2 - Vx &= Vy
    def _8xy2(self, ins):
        v = self.registers.v
        v[ins.x] &= v[ins.y]

    # 8xy3 - Vx ^= Vy
    def _8xy3(self, ins):
        v = self.registers.v
        v[ins.x] ^= v[ins.y]

    # 8xy4 - Vx += Vy, VF = carry
    def _8xy4(self, ins):
        v = self.registers.v
        s = v[ins.x] + v[ins.y]
        v[ins.x] = s & 0xFF
        v[VF] = 1 if s > 0xFF else 0
        log(f"Add V{ins.y:X} to V{ins.x:X}: result {v[ins.x]}, carry={v[VF]}")

    # 8xy5 - Vx -= Vy, VF = NOT borrow
    def _8xy5(self, ins):
        v = self.registers.v
        flag = 1 if v[ins.x] >= v[ins.y] else 0
        v[ins.x] = (v[ins.x] - v[ins.y]) & 0xFF
        v[VF] = flag
        log(f"Subtract V{ins.y:X} from V{ins.x:X}: result {v[ins.x]}, NOT borrow={flag}")

    # 8xy6 - Vx >>= 1, VF = bit shifted out
    def _8xy6(self, ins):
        v = self.registers.v
        flag = v[ins.x] & 1
        v[ins.x] >>= 1
        v[VF] = flag

    # 8xy7 - Vx = Vy - Vx, VF = NOT borrow
    def _8xy7(self, ins):
        v = self.registers.v
        flag = 1 if v[ins.y] >= v[ins.x] else 0
        v[ins.x] = (v[ins.y] - v[ins.x]) & 0xFF
        v[VF] = flag
        log(f"Set V{ins.x:X} = V{ins.y:X} - V{ins.x:X}: result {v[ins.x]}, NOT borrow={flag}")

    # 8xyE - Vx <<= 1, VF = bit shifted out
    def _8xyE(self, ins):
        v = self.registers.v
        flag = (v[ins.x] >> 7) & 1
        v[ins.x] = (v[ins.x] << 1) & 0xFF
        v[VF] = flag

    # 9xy0 - Skip next instruction if Vx != Vy
    def _9xy0(self, ins):
        v = self.registers.v
        if v[ins.x] != v[ins.y]:
            self._skip()
            log(f"Skip next instruction: V{ins.x:X} != V{ins.y:X}")

    # Annn - Set I = nnn
    def _Annn(self, ins):
        self.registers.i = ins.addr
        log(f"Set I = {ins.addr:03X}")

    # Bnnn - Jump to address nnn + V0
    def _Bnnn(self, ins):
        self.registers.pc = ins.addr + self.registers.v[0]
        log(f"Jump to address V0 + {ins.addr:03X} = {self.registers.pc:03X}")

    # Cxkk - Vx = random byte & kk
    def _Cxkk(self, ins):
        self.registers.v[ins.x] = self.random_byte() & ins.kk
        log(f"Set V{ins.x:X} = random_byte & {ins.kk} -> {self.registers.v[ins.x]}")

    # Dxyn - Draw n-byte sprite from I at (Vx, Vy), VF = collision
    def _Dxyn(self, ins):
        regs = self.registers
        mem = self.memory
        if ins.n:
            mem.check_range(regs.i, ins.n)
        px = regs.v[ins.x]
        py = regs.v[ins.y]
        buf = mem.vram
        collision = False
        for row in range(ins.n):
            sprite = mem.ram[regs.i + row]
            if sprite == 0:
                continue
            base = ((py + row) % config.height) * config.width
            for bit in range(8):
                if sprite & (0x80 >> bit):
                    idx = base + (px + bit) % config.width
                    if buf[idx]:
                        collision = True
                    buf[idx] = not buf[idx]
        regs.v[VF] = 1 if collision else 0
        self.should_draw = True
        log(f"Drew sprite, collision={regs.v[VF]}")

    # Ex9E - Skip next instruction if key Vx is down
    def _Ex9E(self, ins):
        if self.keypad.is_down(self.registers.v[ins.x]):
            self._skip()

    # ExA1 - Skip next instruction if key Vx is up
    def _ExA1(self, ins):
        if not self.keypad.is_down(self.registers.v[ins.x]):
            self._skip()

    # Fx07 - Vx = delay timer
    def _Fx07(self, ins):
        self.registers.v[ins.x] = self.registers.delay

    # Fx0A - Vx = first key found down (keys 0x0-0xE)
    def _Fx0A(self, ins):
        for key in range(0x0F):
            if self.keypad.is_down(key):
                self.registers.v[ins.x] = key
                log(f"Key {key:X} stored in V{ins.x:X}")
                return
        if self.wait_for_key:
            # stall: PC will re-execute this instruction next tick
            self.registers.pc = (self.registers.pc - 2) & 0xFFFF

    # Fx15 - delay timer = Vx
    def _Fx15(self, ins):
        self.registers.delay = self.registers.v[ins.x]

    # Fx18 - sound timer = Vx
    def _Fx18(self, ins):
        self.registers.sound = self.registers.v[ins.x]

    # Fx1E - I += Vx
    def _Fx1E(self, ins):
        self.registers.i = (self.registers.i + self.registers.v[ins.x]) & 0xFFFF

    # Fx29 - I = address of the font sprite for digit Vx
    def _Fx29(self, ins):
        self.registers.i = config.FONT_LOCATION + self.registers.v[ins.x] * config.FONT_SPRITE_SIZE

    # Fx33 - BCD of Vx into I, I+1, I+2
    def _Fx33(self, ins):
        regs = self.registers
        self.memory.check_range(regs.i, 3)
        val = regs.v[ins.x]
        ram = self.memory.ram
        ram[regs.i] = val // 100
        ram[regs.i + 1] = (val // 10) % 10
        ram[regs.i + 2] = val % 10

    # Fx55 - Store V0..Vx at I
    def _Fx55(self, ins):
        regs = self.registers
        self.memory.check_range(regs.i, ins.x + 1)
        self.memory.ram[regs.i:regs.i + ins.x + 1] = bytes(regs.v[:ins.x + 1])

    # Fx65 - Load V0..Vx from I
    def _Fx65(self, ins):
        regs = self.registers
        self.memory.check_range(regs.i, ins.x + 1)
        regs.v[:ins.x + 1] = list(self.memory.ram[regs.i:regs.i + ins.x + 1])

    def _unknown(self, ins):
        log("Unknown opcode: %04X" % ins.word)
