# Input - store key input states and check these per cycle.
# The hex keypad has 16 logical keys (0x0-0xF); the frontend maps physical
# keys onto them and the CPU only ever asks whether one is down.

from . import config


class Keypad:

    def __init__(self):
        self.key_inputs = [0] * config.NUM_KEYS

    def reset(self):
        self.key_inputs = [0] * config.NUM_KEYS

    def press(self, key):
        if 0 <= key < config.NUM_KEYS:
            self.key_inputs[key] = 1

    def release(self, key):
        if 0 <= key < config.NUM_KEYS:
            self.key_inputs[key] = 0

    def is_down(self, key):
        return 0 <= key < config.NUM_KEYS and bool(self.key_inputs[key])

    def is_up(self, key):
        return not self.is_down(key)
