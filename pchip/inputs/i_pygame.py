#!/usr/bin/env python3

"""
PyGame Input Plugin

Unlike the Curses plugin, this scans the keyboard and properly detects key
'press' and 'release' events.  Note that the check should not be called more
often than 60Hz, as constantly checking the queue is time consuming.

Keys held when the window loses focus would never see their release event, so
they are all let go at that point (without counting as a keypress).

If the window is closed or ESC is released, process_messages asks the host to
quit, and the host will then shut PyGame down too, so any linked Renderer must
be able to handle that.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        super().__init__(keymap, renderer)

        # Event type to handler.  A handler returns True to request a quit.
        self.event_handlers = {
            pygame.QUIT: lambda event: True,
            pygame.KEYDOWN: self._on_key_down,
            pygame.KEYUP: self._on_key_up,
            pygame.WINDOWFOCUSLOST: self._on_focus_lost
        }

    def process_messages(self):
        quit_requested = False

        for event in pygame.event.get():
            handler = self.event_handlers.get(event.type)

            # Keep draining the queue after a quit, so no key events are left behind
            if handler is not None and handler(event):
                quit_requested = True

        return quit_requested

    def _on_key_down(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.press_key(hex_key)

        return False

    def _on_key_up(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.release_key(hex_key)

        return False

    def _on_focus_lost(self, _):
        self.release_all()
        return False
