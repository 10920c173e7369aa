#!/usr/bin/env python3

"""
CPU Tracer

If live tracing is enabled, the CPU logs one of these lines (at debug level)
before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Decoded instruction

If a crash occurs, all of the above will be reported, with the addition of the
stack contents.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Tracer:
    def __init__(self):
        self.live = False

    def trace(self, cpu, instruction, verbose=False):
        trace_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[cpu.v[reg_num] for reg_num in range(15, -1, -1)] +
            [cpu.i, cpu.dt, cpu.st, cpu.trace_pc, 0 if cpu.opcode is None else cpu.opcode.word, instruction]
        )

        if verbose:
            stack_items = cpu.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            trace_str += "\nStack:{}".format(stack_str or " (Empty)")

            if cpu.awaiting_keypress:
                trace_str += "\nWaiting for a keypress into V{:01x}".format(cpu.key_register)

        return trace_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live
