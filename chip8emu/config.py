# ---- Configuration ----
# Memory map (Cowgod's CHIP-8 reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#2.1)
RAM_SIZE = 4096
PROGRAM_START = 0x200
MAX_ROM_SIZE = RAM_SIZE - PROGRAM_START  # 3584
FONT_LOCATION = 0x50
FONT_SPRITE_SIZE = 5
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16

# Display
width, height = 64, 32
scale = 10
window_width, window_height = width * scale, height * scale

# Scheduling
FRAME_HZ = 60
TICKS_PER_FRAME = 10

# Sound
beep_frequency = 440
beep_duration = 0.2
sample_rate = 44100

#make it true if you want the logs
logs_on = False


def log(*args):
    if logs_on:
        print(*args)


# Standard CHIP-8 fontset (80 bytes)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes
