#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required, or driven directly through press_key and
release_key when running headless.

The keymap is a comma-separated list of 16 host key codes, the first for hex key
0 and the last for hex key F.  Plugins look host keys up in keymap_dict to find
the hex key they control.

The last key released is remembered for the key wait instruction.  The 'reset'
switch, setup_keypress, is called when a wait begins so older keypresses don't
count.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import NUM_KEYS


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer, force_lowercase=False):
        self.keymap_dict = {}
        self.renderer = renderer
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None
        keymap_split = keymap.split(",")

        if len(keymap_split) != NUM_KEYS:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if force_lowercase:
                # If we are working with characters rather than keyscan codes, we should convert to lowercase
                key_defined_ord = ord(chr(key_defined_ord).lower())

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return False  # Don't exit the program

    def press_key(self, key):
        self.key_down[key] = True

    def release_key(self, key):
        # Only a key that was actually held counts as a keypress
        if self.key_down[key]:
            self.key_down[key] = False
            self.last_keypress = key

    def release_all(self):
        self.key_down = [False] * NUM_KEYS

    def is_key_down(self, key):
        return self.key_down[key]

    def get_key_states(self):
        return [self.is_key_down(key) for key in range(NUM_KEYS)]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def shutdown(self):
        pass
