#!/usr/bin/env python3

"""
Host Shell

Drives a CPU in real time, and connects it to the renderer, input, and audio
plugins.  Everything happens in 60Hz frames:

    1. Host input messages are processed (and a quit request honoured).
    2. The keypad state is copied into the CPU, and a pending key wait is
       resolved if a key was pressed.
    3. The CPU runs this frame's share of instructions.  At 700 instructions
       per second that is 11.67 a frame, so the fractional remainder carries
       on into the next frame.
    4. The timers tick exactly once, and the buzzer follows the sound timer.
    5. If any instruction changed the display, the frame is drawn.

A clock speed of 0 leaves the CPU uncapped.  It then runs for as long as the
frame allows, rather than a fixed number of instructions.

If the CPU faults, the loop stops and the fault is handed back to the caller
rather than raised, along with a report in the log.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED
from .errors import EmulationError

FRAME_FREQ = 60.0  # 60Hz display refresh, input polling, and timer ticks
FRAME_INTERVAL = 1.0 / FRAME_FREQ

log = logging.getLogger(__name__)


class Shell:
    def __init__(self, cpu, renderer, inputs, audio, clock_speed=None, max_frames=0):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.clock_speed = DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed
        self.max_frames = max_frames or 0
        self.steps_per_frame = None if self.clock_speed <= 0 else self.clock_speed / FRAME_FREQ
        self.step_credit = 0.0

        # Performance-related vars
        self.frame_count = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.report_perf()

    def run(self):
        # Returns None if the user quit or the frame limit was reached, otherwise the fault that halted the CPU
        cpu = self.cpu
        self.renderer.set_resolution(*cpu.framebuffer.get_vid_size())
        self.renderer.draw_frame(cpu.display())
        this_time = perf_counter()
        next_frame_time = this_time
        next_perf_report_time = int(this_time) + 1.0

        try:
            while True:
                if this_time >= next_perf_report_time:
                    next_perf_report_time = int(this_time) + 1.0
                    self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                    self.perf_counter_fps = 0
                    self.perf_counter_ops = 0

                if self.inputs.process_messages():
                    log.info("Quit requested")
                    return None

                next_frame_time += FRAME_INTERVAL
                self.run_frame(next_frame_time)
                self.frame_count += 1
                self.perf_counter_fps += 1

                if self.max_frames and self.frame_count >= self.max_frames:
                    log.info("Stopped after %d frames", self.frame_count)
                    return None

                if self.steps_per_frame is not None:
                    # Wait for the next frame.  Unfortunately we have to do this to get the timing right
                    while perf_counter() < next_frame_time:
                        pass

                this_time = perf_counter()

                if this_time - next_frame_time > FRAME_INTERVAL:
                    # Too far behind (or uncapped) to catch up, so don't try to
                    next_frame_time = this_time
        except EmulationError as error:
            log.error("Emulation halted: %s\n%s", error, cpu.dump())
            return error
        finally:
            self.audio.enable_buzzer(False)

    def run_frame(self, frame_end_time=None):
        # Run a single frame's worth of emulation.  Returns True if the display was redrawn.
        cpu = self.cpu
        inputs = self.inputs
        cpu.set_keys(inputs.get_key_states())

        if cpu.awaiting_keypress:
            key = inputs.get_keypress()

            if key is not None:
                cpu.notify_key_pressed(key)

        was_awaiting = cpu.awaiting_keypress
        redraw = False

        if self.steps_per_frame is None:
            # Uncapped, so run until the frame time is used up
            while not cpu.awaiting_keypress and (frame_end_time is None or perf_counter() < frame_end_time):
                redraw = cpu.step() or redraw
                self.perf_counter_ops += 1

                if frame_end_time is None:
                    break
        else:
            self.step_credit += self.steps_per_frame
            steps = int(self.step_credit)
            self.step_credit -= steps

            for _ in range(steps):
                if cpu.awaiting_keypress:
                    # Nothing more can happen until the next frame's keypresses arrive
                    break

                redraw = cpu.step() or redraw
                self.perf_counter_ops += 1

        if cpu.awaiting_keypress and not was_awaiting:
            # A key wait has just begun, so only keys released from now on count
            inputs.setup_keypress()

        cpu.tick_timers()
        self.audio.enable_buzzer(cpu.sound_active)

        if redraw:
            self.renderer.draw_frame(cpu.display())

        return redraw

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)

        if fps:
            log.debug(title)
