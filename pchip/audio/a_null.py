#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.  The buzzer state is still tracked, so the host's sound
gating can be checked without an audio device.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

DEFAULT_TONE = 440.0  # Hz


class Audio:
    def __init__(self):
        # Buzzer should be disabled (not playing sounds) by default
        self.buzzer_enabled = False
        self.frequency = None
        self.set_frequency(DEFAULT_TONE)

    def set_frequency(self, frequency):
        # Set the buzzer tone in Hz
        self.frequency = frequency

    def enable_buzzer(self, enabled):
        # The buzzer should play while the sound timer is above zero.  This is called every frame, so only changes in
        # state should do any real work.
        self.buzzer_enabled = enabled

    def shutdown(self):
        self.buzzer_enabled = False
