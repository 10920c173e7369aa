#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import sys
from argparse import ArgumentParser
from pchip import main
from pchip.constants import DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, CPU_QUIRKS


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in operations/second (default {}, 0 = uncapped)".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 640), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--max_frames", type=int, default=0,
        help="stop after this many 60Hz frames, e.g. for headless test runs (default 0 = run until quit)"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in hex, e.g. 000000,33FF66"
    )

    for sys_quirk in CPU_QUIRKS + ["screen_wrap"]:
        parser.add_argument(
            "--{}_quirks".format(sys_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(sys_quirk.replace("_", " "))
        )

    parser.add_argument(
        "--unknown_opcode_fatal", type=int, choices=[0, 1], default=0,
        help="halt on opcodes outside the CHIP-8 instruction set, rather than skipping them (default 0)"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable debug logging, including a live trace of every instruction.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


if __name__ == "__main__":
    args = vars(parse_args())
    # It is possible to start the interpreter from a GUI by calling this with a dictionary
    sys.exit(main(args))
