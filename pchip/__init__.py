#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

Returns 0 if the user quit, or 1 if the ROM could not be loaded or the CPU
halted on a fault.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_QUIRKS
from .cpu import CPU
from .errors import EmulationError
from .framebuffer import Framebuffer
from .hostio import Loader
from .inputs.i_null import InputsError
from .keypad import Keypad
from .memory import Memory
from .shell import Shell
from .stack import Stack
from .tracer import Tracer

log = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def main(args):
    logging.basicConfig(
        level=logging.DEBUG if args["debug"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    log.info("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminals can only ring a bell, so stay quiet unless asked
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    # Read the ROM binary before opening any windows, so a bad filename fails cleanly
    rom = Loader().load_binary(args["filename"])

    # Build the machine
    screen_wrap_quirks = args["screen_wrap_quirks"]
    framebuffer = Framebuffer(
        allow_wrapping=(DEFAULT_QUIRKS["screen_wrap"] if screen_wrap_quirks is None else bool(screen_wrap_quirks))
    )
    tracer = Tracer()
    tracer.set_live(args["debug"])
    cpu = CPU(
        Memory(), Stack(), framebuffer, Keypad(), tracer, unknown_opcode_fatal=bool(args["unknown_opcode_fatal"]),
        **quirk_settings
    )

    try:
        cpu.load(rom)
    except EmulationError as error:
        log.error("Unable to load %s: %s", args["filename"], error)
        return 1

    # Set up a new rendering system, then the host inputs, linked to the renderer in case it provides inputs too
    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"]
    )

    try:
        inputs = Inputs(args["keymap"], renderer)
    except InputsError:
        renderer.shutdown()
        raise

    audio = Audio()
    shell = Shell(cpu, renderer, inputs, audio, clock_speed=args["clock_speed"], max_frames=args["max_frames"])

    try:
        fault = shell.run()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()

    log.info("Shut down after %d frames", shell.frame_count)
    return 0 if fault is None else 1
