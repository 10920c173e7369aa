#!/usr/bin/env python3

"""
Keypad Emulator

The 16 hex keys (0-F) as simple held/released flags.  The host writes the
whole state once per frame, and the key skip instructions read it back.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(ValueError):
    pass


class Keypad:
    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def set_state(self, states):
        states = [bool(state) for state in states]

        if len(states) != NUM_KEYS:
            raise KeypadError("Keypad state must cover exactly {} keys, got {}".format(NUM_KEYS, len(states)))

        self.keys = states

    def set_key(self, key, down):
        self.keys[key & 0xF] = bool(down)

    def is_key_down(self, key):
        # Only the low nibble selects a key, whatever is in the register
        return self.keys[key & 0xF]

    def release_all(self):
        self.keys = [False] * NUM_KEYS
