#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from plainchip import parse_args
from pchip import main
from pchip.constants import APP_NAME, DEFAULT_KEYMAP
from pchip.cpu import CPU
from pchip.shell import Shell
from pchip.stack import StackUnderflow
from pchip.renderers.r_null import Renderer
from pchip.inputs.i_null import Inputs, InputsError
from pchip.audio.a_null import Audio


class QuittingInputs(Inputs):
    def process_messages(self):
        return True


class TestShell(unittest.TestCase):
    def setUp(self):
        self.cpu = CPU()
        self.renderer = Renderer()
        self.inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.audio = Audio()

    def _make_shell(self, rom, clock_speed=60, max_frames=0, inputs=None):
        self.cpu.load(rom)
        return Shell(
            self.cpu, self.renderer, self.inputs if inputs is None else inputs, self.audio, clock_speed=clock_speed,
            max_frames=max_frames
        )

    def test_shell_initial_title(self):
        self._make_shell(b"\x12\x00")
        self.assertEqual("{} - 0 FPS, 0 OPS".format(APP_NAME), self.renderer.title)

    def test_shell_default_clock_speed(self):
        shell = self._make_shell(b"\x12\x00", clock_speed=None)
        self.assertEqual(700, shell.clock_speed)

    def test_shell_step_credit(self):
        # 90 instructions per second is one and a half per frame
        shell = self._make_shell(b"\x12\x00", clock_speed=90)
        shell.run_frame()
        self.assertEqual(1, shell.perf_counter_ops)
        shell.run_frame()
        self.assertEqual(3, shell.perf_counter_ops)
        shell.run_frame()
        shell.run_frame()
        self.assertEqual(6, shell.perf_counter_ops)

    def test_shell_uncapped_single_step(self):
        shell = self._make_shell(b"\x12\x00", clock_speed=0)
        self.assertIsNone(shell.steps_per_frame)
        shell.run_frame()
        self.assertEqual(1, shell.perf_counter_ops)

    def test_shell_timers_tick_per_frame(self):
        shell = self._make_shell(b"\x12\x00", clock_speed=600)
        self.cpu.dt = 10

        for _ in range(3):
            shell.run_frame()

        self.assertEqual(7, self.cpu.dt)
        self.assertEqual(30, shell.perf_counter_ops)

    def test_shell_buzzer(self):
        shell = self._make_shell(b"\x12\x00")
        self.cpu.st = 2
        shell.run_frame()
        self.assertTrue(self.audio.buzzer_enabled)
        shell.run_frame()
        self.assertFalse(self.audio.buzzer_enabled)

    def test_shell_redraw_only_on_change(self):
        shell = self._make_shell(b"\x00\xE0\x12\x02")
        self.assertTrue(shell.run_frame())
        self.assertEqual(1, self.renderer.frames_drawn)
        self.assertFalse(shell.run_frame())
        self.assertEqual(1, self.renderer.frames_drawn)
        self.assertEqual(self.cpu.display(), self.renderer.last_frame)

    def test_shell_key_wait(self):
        shell = self._make_shell(b"\xF3\x0A\x12\x02")
        self.inputs.press_key(0x9)
        self.inputs.release_key(0x9)  # Released before the wait begins, so ignored

        shell.run_frame()
        self.assertTrue(self.cpu.awaiting_keypress)
        self.assertIsNone(self.inputs.get_keypress())

        self.inputs.press_key(0x5)
        shell.run_frame()
        self.assertTrue(self.cpu.awaiting_keypress)
        self.assertTrue(self.cpu.keypad.is_key_down(0x5))

        self.inputs.release_key(0x5)
        shell.run_frame()
        self.assertFalse(self.cpu.awaiting_keypress)
        self.assertEqual(0x5, self.cpu.v[0x3])
        self.assertEqual(0x202, self.cpu.pc)

    def test_shell_max_frames(self):
        shell = self._make_shell(b"\x12\x00", clock_speed=600, max_frames=3)
        self.assertIsNone(shell.run())
        self.assertEqual(3, shell.frame_count)
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertEqual(1, self.renderer.frames_drawn)  # Initial frame only

    def test_shell_quit(self):
        shell = self._make_shell(b"\x12\x00", inputs=QuittingInputs(DEFAULT_KEYMAP, self.renderer))
        self.assertIsNone(shell.run())
        self.assertEqual(0, shell.frame_count)

    def test_shell_fault(self):
        shell = self._make_shell(b"\x00\xEE", max_frames=5)
        self.cpu.st = 10

        with self.assertLogs("pchip.shell", level="ERROR") as logs:
            fault = shell.run()

        self.assertIsInstance(fault, StackUnderflow)
        self.assertIn("Stack:", logs.output[0])
        self.assertFalse(self.audio.buzzer_enabled)
        self.assertEqual(0, shell.frame_count)


class TestMain(unittest.TestCase):
    def setUp(self):
        handle, self.filename = tempfile.mkstemp(suffix=".ch8")
        self.handle = handle

    def tearDown(self):
        os.remove(self.filename)

    def _write_rom(self, rom):
        with os.fdopen(self.handle, "wb") as f:
            f.write(rom)

    def _args(self, *extra):
        return vars(parse_args([self.filename, "-r", "null", "--max_frames", "2"] + list(extra)))

    def test_main_parse_args(self):
        self._write_rom(b"\x12\x00")
        args = self._args("--shift_quirks", "0", "--screen_wrap_quirks", "1")
        self.assertEqual(0, args["shift_quirks"])
        self.assertEqual(1, args["screen_wrap_quirks"])
        self.assertIsNone(args["load_quirks"])
        self.assertEqual(DEFAULT_KEYMAP, args["keymap"])
        self.assertFalse(args["debug"])

    def test_main_runs(self):
        self._write_rom(b"\x00\xE0\x12\x02")
        self.assertEqual(0, main(self._args()))

    def test_main_fault(self):
        self._write_rom(b"\x00\xEE")
        self.assertEqual(1, main(self._args()))

    def test_main_rom_too_large(self):
        self._write_rom(bytes(3585))
        self.assertEqual(1, main(self._args()))

    def test_main_bad_keymap(self):
        self._write_rom(b"\x12\x00")
        self.assertRaises(InputsError, main, self._args("-k", "1,2,3"))
