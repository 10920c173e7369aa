#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.cpu import CPU
from pchip.tracer import Tracer


class TestTracer(unittest.TestCase):
    def setUp(self):
        self.tracer = Tracer()
        self.cpu = CPU(tracer=self.tracer)
        self.cpu.load(b"\x6A\x05\xF1\x0A")

    def test_tracer_live_setting(self):
        self.assertFalse(self.tracer.is_live())
        self.tracer.set_live(True)
        self.assertTrue(self.tracer.is_live())

    def test_tracer_before_first_step(self):
        trace_str = self.tracer.trace(self.cpu, "---")
        self.assertEqual(
            "V: 0x" + "00" * 16 + " I: 0x0000 DT: 0x00 ST: 0x00 PC: 0x200 OP: 0x0000 IN: ---", trace_str
        )

    def test_tracer_registers_high_first(self):
        self.cpu.step()
        trace_str = self.tracer.trace(self.cpu, "LD Va, 0x05")
        self.assertEqual(
            "V: 0x" + "00" * 5 + "05" + "00" * 10 + " I: 0x0000 DT: 0x00 ST: 0x00 PC: 0x200 OP: 0x6a05 IN: LD Va, 0x05",
            trace_str
        )

    def test_tracer_verbose(self):
        self.cpu.stack.push(0x20A)
        trace_str = self.tracer.trace(self.cpu, "---", verbose=True)
        self.assertTrue(trace_str.endswith("\nStack: 0x20a"))

    def test_tracer_verbose_empty_stack_and_key_wait(self):
        self.cpu.step()
        self.cpu.step()
        lines = self.tracer.trace(self.cpu, "---", verbose=True).split("\n")
        self.assertEqual("Stack: (Empty)", lines[1])
        self.assertEqual("Waiting for a keypress into V1", lines[2])

    def test_tracer_cpu_dump(self):
        self.cpu.step()
        self.assertIn("IN: LD Va, 0x05", self.cpu.dump())
