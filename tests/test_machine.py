import pytest

from chip8emu import Keypad, Memory, Registers, config
from chip8emu.errors import MemoryFault, RomTooLarge


def test_registers_start_zeroed():
    regs = Registers()
    assert regs.v == [0] * 16
    assert (regs.i, regs.pc, regs.sp, regs.delay, regs.sound) == (0, 0, 0, 0, 0)


def test_registers_reset():
    regs = Registers()
    regs.v[4] = 7
    regs.pc = 0x300
    regs.sound = 9
    regs.reset()
    assert regs.v[4] == 0
    assert regs.pc == 0
    assert regs.sound == 0


def test_memory_holds_font():
    mem = Memory()
    font = mem.ram[config.FONT_LOCATION:config.FONT_LOCATION + 80]
    assert list(font) == config.FONTSET
    assert mem.ram[config.FONT_LOCATION - 1] == 0


def test_memory_reset_clears_everything_but_font():
    mem = Memory()
    mem.ram[0x300] = 1
    mem.vram[10] = True
    mem.stack[3] = 0x222
    mem.reset()
    assert mem.ram[0x300] == 0
    assert not mem.vram.any()
    assert mem.dump_stack() == [0] * 16
    assert mem.ram[config.FONT_LOCATION] == 0xF0


def test_load_program_limits():
    mem = Memory()
    mem.load_program(bytes([1]) * 3584)
    assert mem.ram[0x200] == 1
    assert mem.ram[0xFFF] == 1
    with pytest.raises(RomTooLarge):
        mem.load_program(bytes(3585))


def test_bounds_checked_access():
    mem = Memory()
    mem.write(0xFFF, 0x1FF)
    assert mem.read(0xFFF) == 0xFF
    mem.ram[0xFFE] = 0x12
    assert mem.read_word(0xFFE) == 0x12FF
    with pytest.raises(MemoryFault) as exc:
        mem.read(0x1000)
    assert exc.value.address == 0x1000
    with pytest.raises(MemoryFault):
        mem.write(-1, 0)
    with pytest.raises(MemoryFault):
        mem.read_word(0xFFF)
    with pytest.raises(MemoryFault):
        mem.check_range(0xFF0, 17)
    mem.check_range(0xFF0, 16)


def test_pixel_indexing_is_row_major():
    mem = Memory()
    mem.vram[5 + 3 * 64] = True
    assert mem.pixel(5, 3)
    assert mem.pixel(69, 35)
    assert mem.frame()[3, 5]


def test_frame_is_a_snapshot():
    mem = Memory()
    frame = mem.frame()
    mem.vram[0] = True
    assert not frame[0, 0]


def test_dump():
    mem = Memory()
    lines = mem.dump()
    assert len(lines) == 256
    assert lines[0] == "0000 0000 0000 0000 0000 0000 0000 0000 0000"
    assert lines[5] == "0050 f090 9090 f020 6020 2070 f010 f080 f0f0"


def test_keypad():
    keys = Keypad()
    assert keys.is_up(3)
    keys.press(3)
    assert keys.is_down(3)
    keys.release(3)
    assert not keys.is_down(3)
    keys.press(0xF)
    keys.reset()
    assert not keys.is_down(0xF)


def test_keypad_ignores_out_of_range_keys():
    keys = Keypad()
    keys.press(16)
    assert not keys.is_down(16)
    assert not keys.is_down(200)


def test_load_program_at_higher_location_cannot_grow_ram():
    mem = Memory()
    with pytest.raises(RomTooLarge) as exc:
        mem.load_program(bytes(3584), location=0x300)
    assert exc.value.limit == config.RAM_SIZE - 0x300
    assert len(mem.ram) == config.RAM_SIZE
    mem.load_program(bytes([7]) * (config.RAM_SIZE - 0x300), location=0x300)
    assert mem.ram[0xFFF] == 7
    assert len(mem.ram) == config.RAM_SIZE


def test_load_program_location_outside_ram():
    mem = Memory()
    with pytest.raises(MemoryFault):
        mem.load_program(b"\x00", location=config.RAM_SIZE)
    with pytest.raises(MemoryFault):
        mem.load_program(b"\x00", location=-1)
    assert len(mem.ram) == config.RAM_SIZE
