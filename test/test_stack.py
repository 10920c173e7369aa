#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.errors import EmulationError
from pchip.stack import Stack, StackError, StackOverflow, StackUnderflow


class TestStack(unittest.TestCase):
    def setUp(self):
        self.stack = Stack()

    def _populate_stack(self, depth=16):
        for item in range(depth):
            self.stack.push(0x200 + item * 2)

    def test_stack_push_pop(self):
        self.stack.push(0x0)
        self.stack.push(0x1)
        self.stack.push(0xFFF)
        self.assertEqual(0xFFF, self.stack.pop())
        self.assertEqual(0x1, self.stack.pop())
        self.assertEqual(0x0, self.stack.pop())
        self.assertEqual(0, len(self.stack))

    def test_stack_full_depth(self):
        self._populate_stack()
        self.assertEqual(16, len(self.stack))
        self.assertEqual(0x21E, self.stack.pop())

    def test_stack_overflow(self):
        self._populate_stack()
        self.assertRaises(StackOverflow, self.stack.push, 0x1)
        # A failed push leaves the stack as it was
        self.assertEqual(16, len(self.stack))

    def test_stack_underflow(self):
        self.assertRaises(StackUnderflow, self.stack.pop)

    def test_stack_underflow_after_emptying(self):
        self.stack.push(0x202)
        self.stack.pop()
        self.assertRaises(StackUnderflow, self.stack.pop)

    def test_stack_small(self):
        stack = Stack(3)

        for item in range(3):
            stack.push(item)

        self.assertRaises(StackOverflow, stack.push, 3)

    def test_stack_error_hierarchy(self):
        self.assertTrue(issubclass(StackOverflow, StackError))
        self.assertTrue(issubclass(StackUnderflow, StackError))
        self.assertTrue(issubclass(StackError, EmulationError))

    def test_stack_get_items(self):
        self.stack.push(0x202)
        self.stack.push(0x30A)
        self.assertEqual((0x202, 0x30A), self.stack.get_items())
