#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and the host reads a snapshot of the whole
screen back out when it is ready to draw a frame (usually at 60Hz).  Keeping the
pixels away from the rendering system means PyGame/Curses are never called
from inside an instruction, which keeps the CPU fast and lets it run with no
display at all.

Unlike other computers, programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method.
Collisions (where any pixel was set, but was unset by an XOR) are reported
back to the CPU so it can raise the Vf flag.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT, allow_wrapping=True):
        self.allow_wrapping = allow_wrapping
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        # One byte per pixel.  Anything non-zero is lit
        self.vram = memoryview(bytearray(self.vid_size))

    def clear(self):
        self.vram[:] = bytes(self.vid_size)

    def xor_pixel(self, x, y):
        # Returns True on a collision, False if not, or None if the pixel fell off the screen

        if self.allow_wrapping:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram[vram_loc]
        self.vram[vram_loc] = pixel ^ 1

        return pixel != 0

    def draw_sprite(self, x_pos, y_pos, sprite):
        # Sprites are always 8 pixels wide, with one byte per row.  The start position always wraps, even when clipping
        # the rest of the sprite.
        x_pos %= self.vid_width
        y_pos %= self.vid_height
        collided = False

        for y, spr_data in enumerate(sprite):
            for x in range(8):
                if spr_data & (0x80 >> x):
                    # Don't stop drawing.  Once set, the flag stays set for the whole sprite.
                    if self.xor_pixel(x_pos + x, y_pos + y):
                        collided = True

        return collided

    def get_pixel(self, x, y):
        return self.vram[y * self.vid_width + x]

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def snapshot(self):
        return bytes(self.vram)

    def rows(self):
        # For text output and tests: one string per row, '#' for lit pixels
        snapshot = self.snapshot()
        vid_width = self.vid_width

        return [
            "".join("#" if pixel else "." for pixel in snapshot[row:row + vid_width])
            for row in range(0, self.vid_size, vid_width)
        ]
