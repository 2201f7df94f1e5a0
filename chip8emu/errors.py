class Chip8Error(Exception):
    """Base class for everything the interpreter raises on purpose."""


# ---- Loading ----
class RomError(Chip8Error):
    pass


class RomNotFound(RomError):
    def __init__(self, filename):
        super().__init__("File does not exist: %s" % filename)
        self.filename = filename


class RomTooLarge(RomError):
    def __init__(self, size, limit):
        super().__init__("ROM is %d bytes, the maximum allowed size is %d" % (size, limit))
        self.size = size
        self.limit = limit


# ---- Runtime faults ----
class Chip8Fault(Chip8Error):
    """A fatal condition hit while executing a program.

    The scheduler fills in ``pc`` (address of the faulting instruction) and
    ``word`` (the instruction itself) before handing the fault to its caller.
    """

    def __init__(self, message):
        super().__init__(message)
        self.message = message
        self.pc = None
        self.word = None

    def __str__(self):
        if self.pc is None:
            return self.message
        if self.word is None:
            return "%s (fetching at 0x%03X)" % (self.message, self.pc)
        return "%s (instruction %04X at 0x%03X)" % (self.message, self.word, self.pc)


class MemoryFault(Chip8Fault):
    def __init__(self, address):
        super().__init__("Memory access out of bounds: 0x%04X" % address)
        self.address = address


class StackFault(Chip8Fault):
    def __init__(self, message, sp):
        super().__init__(message)
        self.sp = sp
