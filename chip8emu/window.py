# Output - 64x32 display (pixels are either on or off) & sound buzzer.
# We're subclassing pyglet (that'll handle graphics, sound output, and keyboard handling)
# and overriding whatever def we need from there. The interpreter itself lives in
# Emulator; this window only paces frames and moves data in and out of it.

import numpy as np
import pyglet
from pyglet.media import synthesis
from pyglet.window import key

from . import config
from .config import log
from .emulator import Emulator
from .errors import Chip8Fault

# Key mapping - maps physical keyboard keys to the CHIP-8 keypad
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Beeper:
    """Plays a sine tone while the sound timer is running."""

    def __init__(self, frequency=config.beep_frequency, duration=config.beep_duration):
        self.frequency = frequency
        self.duration = duration
        self.player = None
        self.sound_playing = False

    def start_tone(self):
        # Play beep only if it hasn't started yet
        if self.sound_playing:
            return
        wave = synthesis.Sine(duration=self.duration, frequency=self.frequency,
                              sample_rate=config.sample_rate)
        player = pyglet.media.Player()
        player.queue(wave)
        player.play()
        self.player = player
        self.sound_playing = True

        # Ensure the flag drops once the tone has played out
        def on_eos():
            self.sound_playing = False
            player.delete()
            if self.player is player:
                self.player = None

        player.on_eos = on_eos

    def pause_tone(self):
        if self.player is not None:
            self.player.pause()
            self.player.delete()
            self.player = None
        self.sound_playing = False

    def update(self, tone_active):
        if tone_active:
            self.start_tone()
        else:
            self.pause_tone()


class Chip8Window(pyglet.window.Window):

    def __init__(self, emulator=None, scale=config.scale):
        self.scale = scale
        self.win_width = config.width * scale
        self.win_height = config.height * scale
        super().__init__(
            width=self.win_width,
            height=self.win_height,
            caption="CHIP-8 Emulator",
            resizable=False,
        )
        self.emulator = emulator if emulator is not None else Emulator()
        self.beeper = Beeper()
        self.has_exit = False

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((config.height, config.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.win_width,
            self.win_height,
            'RGBA',
            np.repeat(np.repeat(self._small_framebuf, scale, axis=0), scale, axis=1).tobytes(),
        )

        self.paused_label = pyglet.text.Label(
            "PAUSED (Esc to resume, F5 to reset)",
            font_size=12,
            x=self.win_width // 2,
            y=self.win_height // 2,
            anchor_x='center',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        pyglet.clock.schedule_interval(self._frame_tick, 1.0 / config.FRAME_HZ)

    # ---- Frame ----
    def _frame_tick(self, dt):
        if self.has_exit:
            return
        try:
            frame = self.emulator.update()
        except Chip8Fault as e:
            print("Emulation error:", e)
            self.has_exit = True
            self.beeper.pause_tone()
            self.close()
            return
        self.beeper.update(frame.tone and not self.emulator.paused)

    # ---- Drawing ----
    def on_draw(self):
        self.clear()
        if self.emulator.consume_draw():
            # pyglet's origin is bottom-left, CHIP-8's is top-left
            frame = self.emulator.frame()[::-1]
            self._small_framebuf[..., :3] = (frame * 255).astype(np.uint8)[..., None]
            scaled = np.repeat(np.repeat(self._small_framebuf, self.scale, axis=0), self.scale, axis=1)
            self.image.set_data('RGBA', self.win_width * 4, scaled.tobytes())
        self.image.blit(0, 0)
        if self.emulator.paused:
            self.paused_label.draw()

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        #@Override
        if symbol == key.ESCAPE:
            paused = self.emulator.toggle_pause()
            if paused:
                self.beeper.pause_tone()
            return
        if symbol == key.F1:
            config.logs_on = not config.logs_on
            print("logs_on:", config.logs_on)
            return
        if symbol == key.F5 and self.emulator.paused:
            self.emulator.reset()
            self.emulator.start()
            return
        if symbol in KEYMAP:
            self.emulator.keypad.press(KEYMAP[symbol])

    def on_key_release(self, symbol, modifiers):
        #@Override
        if symbol in KEYMAP:
            self.emulator.keypad.release(KEYMAP[symbol])

    def on_close(self):
        log("Window closed")
        pyglet.clock.unschedule(self._frame_tick)
        self.beeper.pause_tone()
        self.emulator.stop()
        super().on_close()
