# Instruction decoding.
# Every 16-bit word is an instruction; fields are read straight from the bits:
#   msn  - bits 15:12, operation family
#   x    - bits 11:8,  first register
#   y    - bits 7:4,   second register
#   n    - bits 3:0,   nibble (sprite height)
#   kk   - bits 7:0,   byte literal
#   addr - bits 11:0,  12-bit address
# Words that match no pattern decode to UNKNOWN, never an error.

import enum


class Opcode(enum.Enum):
    CLS = "CLS"
    RET = "RET"
    SYS = "SYS"
    JP = "JP"
    CALL = "CALL"
    SE_VX_KK = "SE_VX_KK"
    SNE_VX_KK = "SNE_VX_KK"
    SE_VX_VY = "SE_VX_VY"
    LD_VX_KK = "LD_VX_KK"
    ADD_VX_KK = "ADD_VX_KK"
    LD_VX_VY = "LD_VX_VY"
    OR_VX_VY = "OR_VX_VY"
    AND_VX_VY = "AND_VX_VY"
    XOR_VX_VY = "XOR_VX_VY"
    ADD_VX_VY = "ADD_VX_VY"
    SUB_VX_VY = "SUB_VX_VY"
    SHR_VX = "SHR_VX"
    SUBN_VX_VY = "SUBN_VX_VY"
    SHL_VX = "SHL_VX"
    SNE_VX_VY = "SNE_VX_VY"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND_VX_KK = "RND_VX_KK"
    DRW_VX_VY = "DRW_VX_VY"
    SKP_VX = "SKP_VX"
    SKNP_VX = "SKNP_VX"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I_VX = "ADD_I_VX"
    LD_F_VX = "LD_F_VX"
    LD_B_VX = "LD_B_VX"
    LD_I_VX = "LD_I_VX"
    LD_VX_I = "LD_VX_I"
    UNKNOWN = "UNKNOWN"


# Families decided by the leading nibble alone
_BY_MSN = {
    0x1: Opcode.JP,         # 1nnn - Jump to address nnn
    0x2: Opcode.CALL,       # 2nnn - Call subroutine at nnn
    0x3: Opcode.SE_VX_KK,   # 3xkk - Skip next if Vx == kk
    0x4: Opcode.SNE_VX_KK,  # 4xkk - Skip next if Vx != kk
    0x5: Opcode.SE_VX_VY,   # 5xy0 - Skip next if Vx == Vy
    0x6: Opcode.LD_VX_KK,   # 6xkk - Vx = kk
    0x7: Opcode.ADD_VX_KK,  # 7xkk - Vx += kk
    0x9: Opcode.SNE_VX_VY,  # 9xy0 - Skip next if Vx != Vy
    0xA: Opcode.LD_I,       # Annn - I = nnn
    0xB: Opcode.JP_V0,      # Bnnn - Jump to nnn + V0
    0xC: Opcode.RND_VX_KK,  # Cxkk - Vx = random & kk
    0xD: Opcode.DRW_VX_VY,  # Dxyn - Draw n-byte sprite at (Vx, Vy)
}

# 8xyN - register arithmetic, keyed on n
_ALU = {
    0x0: Opcode.LD_VX_VY,
    0x1: Opcode.OR_VX_VY,
    0x2: Opcode.AND_VX_VY,
    0x3: Opcode.XOR_VX_VY,
    0x4: Opcode.ADD_VX_VY,
    0x5: Opcode.SUB_VX_VY,
    0x6: Opcode.SHR_VX,
    0x7: Opcode.SUBN_VX_VY,
    0xE: Opcode.SHL_VX,
}

# ExKK - keypad skips, keyed on kk
_KEYS = {
    0x9E: Opcode.SKP_VX,
    0xA1: Opcode.SKNP_VX,
}

# FxKK - timers, memory and misc, keyed on kk
_MISC = {
    0x07: Opcode.LD_VX_DT,
    0x0A: Opcode.LD_VX_K,
    0x15: Opcode.LD_DT_VX,
    0x18: Opcode.LD_ST_VX,
    0x1E: Opcode.ADD_I_VX,
    0x29: Opcode.LD_F_VX,
    0x33: Opcode.LD_B_VX,
    0x55: Opcode.LD_I_VX,
    0x65: Opcode.LD_VX_I,
}


def decode(word):
    """Classify a 16-bit word into an :class:`Opcode`."""
    word &= 0xFFFF
    msn = word >> 12
    if msn == 0x0:
        addr = word & 0x0FFF
        if addr == 0x0E0:
            return Opcode.CLS
        if addr == 0x0EE:
            return Opcode.RET
        return Opcode.SYS
    if msn == 0x8:
        return _ALU.get(word & 0x000F, Opcode.UNKNOWN)
    if msn == 0xE:
        return _KEYS.get(word & 0x00FF, Opcode.UNKNOWN)
    if msn == 0xF:
        return _MISC.get(word & 0x00FF, Opcode.UNKNOWN)
    return _BY_MSN[msn]


class Instruction:
    __slots__ = ("word",)

    def __init__(self, word):
        object.__setattr__(self, "word", word & 0xFFFF)

    def __setattr__(self, name, value):
        raise AttributeError("Instruction is immutable")

    def __eq__(self, other):
        return isinstance(other, Instruction) and other.word == self.word

    def __hash__(self):
        return hash(self.word)

    def __repr__(self):
        return "Instruction(0x%04X)" % self.word

    @property
    def msn(self):
        return self.word >> 12

    @property
    def x(self):
        return (self.word & 0x0F00) >> 8

    @property
    def y(self):
        return (self.word & 0x00F0) >> 4

    @property
    def n(self):
        return self.word & 0x000F

    @property
    def kk(self):
        return self.word & 0x00FF

    @property
    def addr(self):
        return self.word & 0x0FFF

    def decode(self):
        return decode(self.word)

    def mnemonic(self):
        """Assembler text for this instruction, e.g. ``DRW V1, V2, 5``."""
        op = self.decode()
        fmt = _MNEMONICS.get(op)
        if fmt is None:
            return "??? 0x%04X" % self.word
        return fmt.format(x="%X" % self.x, y="%X" % self.y, n=self.n,
                          kk="0x%02X" % self.kk, addr="0x%03X" % self.addr)


_MNEMONICS = {
    Opcode.CLS: "CLS",
    Opcode.RET: "RET",
    Opcode.SYS: "SYS {addr}",
    Opcode.JP: "JP {addr}",
    Opcode.CALL: "CALL {addr}",
    Opcode.SE_VX_KK: "SE V{x}, {kk}",
    Opcode.SNE_VX_KK: "SNE V{x}, {kk}",
    Opcode.SE_VX_VY: "SE V{x}, V{y}",
    Opcode.LD_VX_KK: "LD V{x}, {kk}",
    Opcode.ADD_VX_KK: "ADD V{x}, {kk}",
    Opcode.LD_VX_VY: "LD V{x}, V{y}",
    Opcode.OR_VX_VY: "OR V{x}, V{y}",
    Opcode.AND_VX_VY: "AND V{x}, V{y}",
    Opcode.XOR_VX_VY: "XOR V{x}, V{y}",
    Opcode.ADD_VX_VY: "ADD V{x}, V{y}",
    Opcode.SUB_VX_VY: "SUB V{x}, V{y}",
    Opcode.SHR_VX: "SHR V{x}",
    Opcode.SUBN_VX_VY: "SUBN V{x}, V{y}",
    Opcode.SHL_VX: "SHL V{x}",
    Opcode.SNE_VX_VY: "SNE V{x}, V{y}",
    Opcode.LD_I: "LD I, {addr}",
    Opcode.JP_V0: "JP V0, {addr}",
    Opcode.RND_VX_KK: "RND V{x}, {kk}",
    Opcode.DRW_VX_VY: "DRW V{x}, V{y}, {n}",
    Opcode.SKP_VX: "SKP V{x}",
    Opcode.SKNP_VX: "SKNP V{x}",
    Opcode.LD_VX_DT: "LD V{x}, DT",
    Opcode.LD_VX_K: "LD V{x}, K",
    Opcode.LD_DT_VX: "LD DT, V{x}",
    Opcode.LD_ST_VX: "LD ST, V{x}",
    Opcode.ADD_I_VX: "ADD I, V{x}",
    Opcode.LD_F_VX: "LD F, V{x}",
    Opcode.LD_B_VX: "LD B, V{x}",
    Opcode.LD_I_VX: "LD [I], V{x}",
    Opcode.LD_VX_I: "LD V{x}, [I]",
}


def disassemble(program, origin=0x200):
    """List ``(address, word, text)`` for each big-endian word in ``program``.

    A trailing odd byte is ignored.
    """
    listing = []
    for offset in range(0, len(program) - 1, 2):
        word = (program[offset] << 8) | program[offset + 1]
        listing.append((origin + offset, word, Instruction(word).mnemonic()))
    return listing
