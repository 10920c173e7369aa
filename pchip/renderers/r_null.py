#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin when running headless,
such as when testing ROMs or only watching the trace log.  The most recent
frame is kept, so it can still be inspected afterwards.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.last_frame = None
        self.frames_drawn = 0
        self.title = None
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw_frame(self, snapshot):
        # The snapshot holds one byte per pixel, row-major, non-zero if lit
        self.last_frame = snapshot
        self.frames_drawn += 1

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
