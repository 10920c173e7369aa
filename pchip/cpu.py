#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
does not keep its own time.  The host calls step() once per instruction, at
whatever rate it has been configured for, and tick_timers() once per 60Hz
frame, so ROMs see correctly paced timers whatever the instruction rate.

Each step fetches the instruction word at the program counter, decodes it into
an Opcode descriptor, moves the program counter on, then calls the handler for
that kind of instruction.  Jumps, calls and returns overwrite the program
counter afterwards, and skips move it on once more.

Quirks
------

Historical interpreters disagree about a handful of instructions.  Each quirk
can be switched per CPU, and defaults to the behaviour most ROMs expect:

- Shift quirks      : On.  8xy6/8xyE shift Vx in place.  Off shifts Vy into Vx.
- Load quirks       : Off. Fx55/Fx65 leave I unchanged.  On adds x + 1 to I.
- Logic quirks      : Off. 8xy1/8xy2/8xy3 leave Vf alone.  On resets Vf to 0.
- Jump quirks       : Off. Bnnn jumps to V0 + nnn.  On jumps to Vx + nnn.

Display wrapping is a property of the Framebuffer rather than the CPU.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from random import Random
from .constants import PROGRAM_START, FONT_START, FONT_CHAR_SIZE, DEFAULT_QUIRKS
from .decoder import (
    decode, disassemble, SYS, CLS, RET, JP, CALL, SE_VX_BYTE, SNE_VX_BYTE, SE_VX_VY, LD_VX_BYTE, ADD_VX_BYTE,
    LD_VX_VY, OR, AND, XOR, ADD_VX_VY, SUB, SHR, SUBN, SHL, SNE_VX_VY, LD_I, JP_V0, RND, DRW, SKP, SKNP, LD_VX_DT,
    LD_VX_K, LD_DT_VX, LD_ST_VX, ADD_I_VX, LD_F_VX, LD_B_VX, LD_MEM_VX, LD_VX_MEM, UNKNOWN
)
from .errors import EmulationError
from .framebuffer import Framebuffer
from .keypad import Keypad
from .memory import Memory
from .stack import Stack
from .tracer import Tracer

log = logging.getLogger(__name__)


class CPUError(EmulationError):
    pass


class UnknownOpcode(CPUError):
    pass


class CPU:
    def __init__(self, memory=None, stack=None, framebuffer=None, keypad=None, tracer=None, shift_quirks=None,
                 load_quirks=None, logic_quirks=None, jump_quirks=None, unknown_opcode_fatal=False, seed=None):

        self.memory = Memory() if memory is None else memory
        self.stack = Stack() if stack is None else stack
        self.framebuffer = Framebuffer() if framebuffer is None else framebuffer
        self.keypad = Keypad() if keypad is None else keypad
        self.tracer = Tracer() if tracer is None else tracer
        self.live_trace = self.tracer.is_live()
        self.unknown_opcode_fatal = unknown_opcode_fatal
        self.random = Random(seed)

        self.shift_quirks = DEFAULT_QUIRKS["shift"] if shift_quirks is None else shift_quirks
        self.load_quirks = DEFAULT_QUIRKS["load"] if load_quirks is None else load_quirks
        self.logic_quirks = DEFAULT_QUIRKS["logic"] if logic_quirks is None else logic_quirks
        self.jump_quirks = DEFAULT_QUIRKS["jump"] if jump_quirks is None else jump_quirks

        # One handler per decoded instruction kind
        self.instructions = {
            SYS: self._0nnn,
            CLS: self._00E0,
            RET: self._00EE,
            JP: self._1nnn,
            CALL: self._2nnn,
            SE_VX_BYTE: self._3xkk,
            SNE_VX_BYTE: self._4xkk,
            SE_VX_VY: self._5xy0,
            LD_VX_BYTE: self._6xkk,
            ADD_VX_BYTE: self._7xkk,
            LD_VX_VY: self._8xy0,
            OR: self._8xy1,
            AND: self._8xy2,
            XOR: self._8xy3,
            ADD_VX_VY: self._8xy4,
            SUB: self._8xy5,
            SHR: self._8xy6,
            SUBN: self._8xy7,
            SHL: self._8xyE,
            SNE_VX_VY: self._9xy0,
            LD_I: self._Annn,
            JP_V0: self._Bnnn,
            RND: self._Cxkk,
            DRW: self._Dxyn,
            SKP: self._Ex9E,
            SKNP: self._ExA1,
            LD_VX_DT: self._Fx07,
            LD_VX_K: self._Fx0A,
            LD_DT_VX: self._Fx15,
            LD_ST_VX: self._Fx18,
            ADD_I_VX: self._Fx1E,
            LD_F_VX: self._Fx29,
            LD_B_VX: self._Fx33,
            LD_MEM_VX: self._Fx55,
            LD_VX_MEM: self._Fx65,
            UNKNOWN: self._opcode_unknown
        }

        self.loaded = False
        self.reset()

    def reset(self):
        # Initialise registers
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register

        # Initialise timers
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        # Initialise program counter and current opcode
        self.pc = PROGRAM_START
        self.trace_pc = PROGRAM_START
        self.opcode = None

        # Input-related vars
        self.awaiting_keypress = False
        self.key_register = 0

        # Set whenever an instruction changes the display
        self.display_changed = False

        # The first fault to escape a step halts the CPU until the next load
        self.fault = None

        self.stack = Stack(self.stack.size)
        self.framebuffer.clear()

    def load(self, rom):
        # A ROM that does not fit leaves the CPU unloaded, so nothing can run
        self.loaded = False
        self.reset()
        self.memory.load(rom)
        self.loaded = True
        log.info("Loaded %d byte ROM at 0x%03x", len(rom), PROGRAM_START)

    def step(self):
        # Run one instruction.  Returns True if the display needs redrawing afterwards.
        if self.fault is not None:
            raise CPUError("Emulation halted by an earlier fault: {}".format(self.fault))

        if not self.loaded:
            raise CPUError("No ROM has been loaded")

        if self.awaiting_keypress:
            return False

        self.display_changed = False
        # Keep track of the program counter before altering it in any way, in case there is a crash
        self.trace_pc = self.pc
        self.opcode = None

        try:
            self.opcode = decode(self.fetch())
            self.inc_pc()  # Program counter updates after fetch and decode, but before execute

            if self.live_trace:
                log.debug(self.tracer.trace(self, disassemble(self.opcode)))

            self.instructions[self.opcode.kind]()
        except EmulationError as error:
            self.fault = error
            raise

        return self.display_changed

    def tick_timers(self):
        # Called at 60Hz by the host, however many instructions ran in between
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def fetch(self):
        return self.memory.read_word(self.pc)

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFFF

    def set_keys(self, states):
        self.keypad.set_state(states)

    def notify_key_pressed(self, key):
        # Resolves a pending Fx0A.  Presses while not waiting are of no interest.
        if not self.awaiting_keypress:
            return

        self.v[self.key_register] = key & 0xF
        self.awaiting_keypress = False

    def display(self):
        return self.framebuffer.snapshot()

    @property
    def sound_active(self):
        return self.st > 0

    def dump(self):
        # Verbose state report for crash messages
        instruction = "---" if self.opcode is None else disassemble(self.opcode)
        return self.tracer.trace(self, instruction, verbose=True)

    def _opcode_unknown(self):
        message = "Opcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction".format(
            self.opcode.word, self.trace_pc
        )

        if self.unknown_opcode_fatal:
            raise UnknownOpcode(message)

        # Other interpreters defined extra opcodes, so carry on rather than refusing to run the ROM at all
        log.warning("%s, skipping", message)

    def _0nnn(self):  # SYS addr
        # Machine code routines can't be run, and most interpreters ignore them too
        log.debug("Ignoring machine code call to 0x%03x", self.opcode.nnn)

    def _00E0(self):  # CLS
        self.framebuffer.clear()
        self.display_changed = True

    def _00EE(self):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self.pc = self.opcode.nnn

    def _2nnn(self):  # CALL addr
        self.stack.push(self.pc)
        self.pc = self.opcode.nnn

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.opcode.x] == self.opcode.kk:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.opcode.x] != self.opcode.kk:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.opcode.x] == self.v[self.opcode.y]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.opcode.x] = self.opcode.kk

    def _7xkk(self):  # ADD Vx, byte
        # No carry flag for this one
        vx = self.opcode.x
        self.v[vx] = (self.v[vx] + self.opcode.kk) & 0xFF

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.opcode.x] = self.v[self.opcode.y]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.opcode.x] |= self.v[self.opcode.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.opcode.x] &= self.v[self.opcode.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.opcode.x] ^= self.v[self.opcode.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        val = self.v[self.opcode.x] + self.v[self.opcode.y]
        self.v[self.opcode.x] = val & 0xFF
        # Vf is set when carrying, and this must happen AFTER Vx is set, as Vf may be one of the operands
        self.v[0xF] = int(val > 0xFF)

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.opcode.x] = val & 0xFF
        # Vf is set when NOT borrowing, after Vx is set for the same reason as ADD
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.opcode.x] - self.v[self.opcode.y])

    def _8xy6(self):  # SHR Vx {, Vy}
        val = self.v[self.opcode.x if self.shift_quirks else self.opcode.y]
        self.v[self.opcode.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.opcode.y] - self.v[self.opcode.x])

    def _8xyE(self):  # SHL Vx {, Vy}
        val = self.v[self.opcode.x if self.shift_quirks else self.opcode.y]
        self.v[self.opcode.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.opcode.x] != self.v[self.opcode.y]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        self.i = self.opcode.nnn

    def _Bnnn(self):  # JP V0, addr
        # This is a nasty quirk which breaks lots of games if set incorrectly
        vr = self.opcode.x if self.jump_quirks else 0
        self.pc = self.v[vr] + self.opcode.nnn

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.opcode.x] = self.random.randint(0, 0xFF) & self.opcode.kk

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        sprite = self.memory.read_block(self.i, self.opcode.n)
        collided = self.framebuffer.draw_sprite(self.v[self.opcode.x], self.v[self.opcode.y], sprite)
        self.v[0xF] = int(collided)
        self.display_changed = True

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_key_down(self.v[self.opcode.x]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[self.opcode.x]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.opcode.x] = self.dt

    def _Fx0A(self):  # LD Vx, K
        # Timers and the display still need servicing while waiting, so control goes back to the host, and further
        # steps do nothing until it reports a keypress.
        self.awaiting_keypress = True
        self.key_register = self.opcode.x

    def _Fx15(self):  # LD DT, Vx
        self.dt = self.v[self.opcode.x]

    def _Fx18(self):  # LD ST, Vx
        self.st = self.v[self.opcode.x]

    def _Fx1E(self):  # ADD I, Vx
        self.i = (self.i + self.v[self.opcode.x]) & 0xFFFF

    def _Fx29(self):  # LD F, Vx
        self.i = FONT_START + FONT_CHAR_SIZE * (self.v[self.opcode.x] & 0xF)

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.opcode.x]
        i = self.i
        self.memory.write_byte(i, val // 100)            # Most-significant digit
        self.memory.write_byte(i + 1, (val // 10) % 10)  # Middle digit
        self.memory.write_byte(i + 2, val % 10)          # Least-significant digit

    def _post_Fx55_Fx65(self):
        if self.load_quirks:
            self.i = (self.i + self.opcode.x + 1) & 0xFFFF

    def _Fx55(self):  # LD [I], Vx
        i = self.i

        for reg in range(self.opcode.x + 1):
            self.memory.write_byte(i + reg, self.v[reg])

        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        i = self.i

        for reg in range(self.opcode.x + 1):
            self.v[reg] = self.memory.read_byte(i + reg)

        self._post_Fx55_Fx65()
