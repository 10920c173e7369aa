#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws frames onto an SDL window surface via PyGame.  Each frame is written into
a surface at the emulated screen size, and the contents are then stretched (in
the correct aspect ratio using 'Nearest Neighbour' translation) to fit the
window itself.  This means we don't have to draw the same pixel multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_PALETTE = "222222,DDDDDD"  # Background, then foreground


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 640  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_map = self._parse_palette(DEFAULT_PALETTE if pygame_palette is None else pygame_palette)

        super().__init__(scale)

    def _parse_palette(self, palette):
        palette_split = palette.split(",")

        if len(palette_split) != 2:
            raise RendererError("The palette needs exactly 2 colours: background, then foreground.")

        rgb_map = []

        for colour in palette_split:
            if len(colour) != 6:
                raise RendererError("Palette colours must all be 6 hex digits long.")

            try:
                rgb = int(colour, 16)
            except ValueError:
                raise RendererError("Invalid palette colour defined.") from None

            # Split compound RGB values for faster byte-based lookup later
            rgb_map.append(bytes((rgb >> 16, (rgb >> 8) & 0xFF, rgb & 0xFF)))

        return rgb_map

    def set_resolution(self, width, height):
        self.rgb_buffer = bytearray(width * height * 3)  # 24-bit
        super().set_resolution(width, height)

    def draw_frame(self, snapshot):
        background, foreground = self.rgb_map

        # Update RGB buffer in-place to minimise allocations and PyGame calls
        for location, pixel in enumerate(snapshot):
            rgb_location = location * 3
            self.rgb_buffer[rgb_location:rgb_location + 3] = foreground if pixel else background

        # Blitting the bytearray straight to the surface is much quicker than very frequent PixelArray updates
        render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().draw_frame(snapshot)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame can segfault if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
