#!/usr/bin/env python3

"""
Memory Emulator

The whole 4K address space as a flat byte array.  The first 512 bytes belong to
the interpreter (only the hex font lives there in this implementation), and
programs are loaded from 0x200 upwards.

Every access is bounds-checked.  A program reaching outside the 4K space is
almost certainly malformed or written for a different variant, so it is
reported rather than wrapped around.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, PROGRAM_START, MAX_ROM_SIZE, FONT_START, FONT_DATA
from .errors import EmulationError


class MemoryFault(EmulationError):
    pass


class RomTooLarge(MemoryFault):
    pass


class OutOfBounds(MemoryFault):
    pass


class Memory:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size
        self.reset()

    def reset(self):
        # Zero everything, then put the font back where programs expect to find it
        self.zero_block(0, self.mem_size)
        self.write_block(FONT_START, FONT_DATA)

    def load(self, rom):
        rom_size = len(rom)

        if rom_size > MAX_ROM_SIZE:
            raise RomTooLarge(
                "ROM is {} bytes, but only {} bytes are available from 0x{:03x}".format(
                    rom_size, MAX_ROM_SIZE, PROGRAM_START
                )
            )

        self.reset()
        self.write_block(PROGRAM_START, rom)

    def read_byte(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def write_byte(self, location, byte):
        self.check_bounds(location)
        self.mem[location] = byte & 0xFF

    def read_word(self, location):
        # Instructions are stored big-endian
        self.check_bounds(location + 1)
        return (self.read_byte(location) << 8) | self.mem[location + 1]

    def read_block(self, location, size=1):
        if size > 0:
            self.check_bounds(location)
            self.check_bounds(location + size - 1)

        return bytes(self.mem[location:location + size])

    def write_block(self, location, block):
        block_size = len(block)

        if not block_size:
            return

        block_top = location + block_size
        self.check_bounds(location)
        self.check_bounds(block_top - 1)
        self.mem[location:block_top] = block

    def zero_block(self, location, size):
        block_top = location + size
        self.check_bounds(location)
        self.check_bounds(block_top - 1)
        self.mem[location:block_top] = bytes(size)

    def check_bounds(self, location):
        if location < 0 or location > self.mem_top:
            raise OutOfBounds("Memory access at 0x{:x} is outside 0x000-0x{:03x}".format(location, self.mem_top))
