#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "PlainChip Interpreter"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000      # 4K addressable space
PROGRAM_START = 0x200  # Everything below this is reserved for the interpreter and font
MAX_ROM_SIZE = MEM_SIZE - PROGRAM_START
FONT_START = 0x50
FONT_CHAR_SIZE = 5

# Built-in hex digit sprites, 0-F, 4 pixels wide and 5 rows high
FONT_DATA = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Call stack depth
STACK_SIZE = 16

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Number of hex keys on the keypad
NUM_KEYS = 0x10

# Timing
TIMER_FREQ = 60.0          # 60Hz delay and sound timers
DEFAULT_CLOCK_SPEED = 700  # Instructions per second, unless overridden

# Default mappings for keys 0-F, later populated into a dictionary.  The layout follows the usual
# 1234/QWER/ASDF/ZXCV block.  On a QWERTY keyboard the keyscans and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Runtime-selectable quirks, and whether each is enabled when not specified
CPU_QUIRKS = ["shift", "load", "logic", "jump"]
DEFAULT_QUIRKS = {
    "shift": True,        # 8xy6/8xyE shift Vx in place rather than copying Vy
    "load": False,        # Fx55/Fx65 leave I alone rather than advancing it past the last register
    "logic": False,       # 8xy1/8xy2/8xy3 leave Vf alone rather than resetting it
    "jump": False,        # Bnnn jumps to V0 + nnn rather than Vx + nn
    "screen_wrap": True   # Sprites wrap around the screen edges rather than being clipped
}
