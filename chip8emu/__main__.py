# ---- Entry point ----
import sys

from . import config
from .emulator import Emulator
from .errors import RomError
from .rom import Rom

USAGE = """Usage: chip8emu [options] rom.ch8

Options:
  -h, --help      show this message and exit
  --logs          print interpreter logs (toggle at runtime with F1)
  --wait-key      Fx0A halts until a key is pressed
  --ticks N       instructions per frame (default %d)
  --scale N       window pixels per CHIP-8 pixel (default %d)
""" % (config.TICKS_PER_FRAME, config.scale)


def usage():
    print(USAGE, end="")


def parse_args(argv):
    opts = {"rom": None, "wait_for_key": False,
            "ticks": config.TICKS_PER_FRAME, "scale": config.scale}
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg in ("-h", "--help"):
            return None
        elif arg == "--logs":
            config.logs_on = True
        elif arg == "--wait-key":
            opts["wait_for_key"] = True
        elif arg in ("--ticks", "--scale"):
            if not args or not args[0].isdigit() or int(args[0]) < 1:
                raise ValueError("%s expects a positive number" % arg)
            opts[arg[2:]] = int(args.pop(0))
        elif opts["rom"] is None:
            opts["rom"] = arg
    if opts["rom"] is None:
        return None
    return opts


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts = parse_args(argv)
    except ValueError as e:
        print(e)
        usage()
        return 1
    if opts is None:
        usage()
        return 0

    try:
        rom = Rom.from_file(opts["rom"])
    except RomError as e:
        print(e)
        return 1

    # Imported late so --help and bad ROMs never need a display
    import pyglet
    from .window import Chip8Window

    emulator = Emulator(ticks_per_frame=opts["ticks"], wait_for_key=opts["wait_for_key"])
    emulator.load_rom(rom)
    emulator.start()
    Chip8Window(emulator, scale=opts["scale"])
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
