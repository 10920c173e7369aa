#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer as a looping square wave within PyGame / SDL.

The emulated buzzer simply has an 'on' or 'off' status.  One cycle of the wave
is generated at the requested tone, in the mixer's unsigned 8-bit format, and
PyGame loops it for as long as the buzzer is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()

    def set_frequency(self, frequency):
        # Setting PyGame's playback rate is very slow, so build a new single-cycle sample instead
        if frequency == self.frequency:
            return

        super().set_frequency(frequency)
        cycle_size = max(2, int(PLAYBACK_FREQUENCY / frequency))
        half_cycle = cycle_size // 2
        wave = b"\xFF" * half_cycle + b"\x00" * (cycle_size - half_cycle)

        if self.buzzer_enabled:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(buffer=wave)
        self.sound.set_volume(DEFAULT_VOLUME)

        if self.buzzer_enabled:
            # If the tone changed while the buzzer was on, keep playing with the new sample
            self.sound.play(-1)

    def enable_buzzer(self, enabled):
        # If a sample is already playing, it won't be restarted
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
