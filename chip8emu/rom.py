# ---- Load ROM ----
# A ROM is a raw stream of big-endian opcodes, no header. Anything up to
# MAX_ROM_SIZE bytes is accepted as-is.

import os

from . import config
from .config import log
from .errors import RomNotFound, RomTooLarge


class Rom:

    def __init__(self, data, filename=""):
        data = bytes(data)
        if len(data) > config.MAX_ROM_SIZE:
            raise RomTooLarge(len(data), config.MAX_ROM_SIZE)
        self.data = data
        self.filename = filename

    @classmethod
    def from_file(cls, path):
        path = os.fspath(path)
        if not os.path.isfile(path):
            raise RomNotFound(path)
        size = os.path.getsize(path)
        if size > config.MAX_ROM_SIZE:
            raise RomTooLarge(size, config.MAX_ROM_SIZE)
        log("Loading ROM:", path)
        with open(path, "rb") as f:
            data = f.read()
        return cls(data, filename=path)

    @property
    def size(self):
        return len(self.data)

    def __len__(self):
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __repr__(self):
        return "<Rom %r %d bytes>" % (self.filename, self.size)
