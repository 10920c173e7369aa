#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws frames in a standard Linux-style TTY Terminal, the Windows Command
Prompt, or PowerShell.  Each lit pixel is an inverted run of spaces, stretched
horizontally by the scale so the screen keeps roughly the right aspect ratio.

The top line of the terminal is used for the title bar.  Only pixels which
changed since the previous frame are written, as Curses calls are slow.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.prev_frame = None
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = 0 if curses_cursor_mode is None else curses_cursor_mode
        self.screen = curses.initscr()
        curses.curs_set(self.cursor_mode)
        curses.noecho()
        curses.cbreak()

        super().__init__(scale)

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  The extra line at the top holds the title.
        self.pad = curses.newpad(height + 2, width * self.scale + 1)
        self.prev_frame = None
        super().set_resolution(width, height)

    def draw_frame(self, snapshot):
        width = self.width
        prev_frame = self.prev_frame

        for location, pixel in enumerate(snapshot):
            if prev_frame is not None and prev_frame[location] == pixel:
                continue

            y, x = divmod(location, width)
            self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if pixel else curses.A_NORMAL)

        self.prev_frame = snapshot
        self._refresh()
        super().draw_frame(snapshot)

    def _refresh(self):
        screen_height, screen_width = self.screen.getmaxyx()  # This doesn't seem to ever change/work on Windows?!

        if screen_height != self.last_screen_height or screen_width != self.last_screen_width:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width

        self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)

    def set_title(self, title):
        if self.pad:
            line_width = self.width * self.scale
            title_len = len(title)

            if line_width > title_len:
                self.pad.addstr(0, 0, title + " " * (line_width - title_len), curses.A_REVERSE)

        super().set_title(title)

    def shutdown(self):
        if self.pad:
            del self.pad
            self.pad = None

        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
