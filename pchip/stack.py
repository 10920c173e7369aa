#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program.  This means we can simply wrap a list
to fully (and quickly) emulate it.

Only the call and return instructions touch the stack, so the only mutations
are push and pop.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE
from .errors import EmulationError


class StackError(EmulationError):
    pass


class StackOverflow(StackError):
    pass


class StackUnderflow(StackError):
    pass


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.items = []
        self.size = size

    def __len__(self):
        return len(self.items)

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflow("Stack overflow ({} levels deep)".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow (return with no call)") from None

    def get_items(self):
        # For traces and crash reports
        return tuple(self.items)
