#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip import decoder
from pchip.decoder import decode, disassemble, INSTRUCTION_KINDS, MNEMONICS, UNKNOWN


class TestDecoder(unittest.TestCase):
    def _check_kind(self, word, kind):
        self.assertEqual(kind, decode(word).kind, "0x{:04x}".format(word))

    def test_decoder_fields(self):
        opcode = decode(0xD12F)
        self.assertEqual(0xD12F, opcode.word)
        self.assertEqual(0x1, opcode.x)
        self.assertEqual(0x2, opcode.y)
        self.assertEqual(0xF, opcode.n)
        self.assertEqual(0x2F, opcode.kk)
        self.assertEqual(0x12F, opcode.nnn)

    def test_decoder_masks_word(self):
        self.assertEqual(0x00E0, decode(0x100E0).word)

    def test_decoder_category_0(self):
        self._check_kind(0x00E0, decoder.CLS)
        self._check_kind(0x00EE, decoder.RET)
        self._check_kind(0x0000, decoder.SYS)
        self._check_kind(0x0123, decoder.SYS)
        self._check_kind(0x00E1, decoder.SYS)
        self._check_kind(0x0FFF, decoder.SYS)

    def test_decoder_single_nibble_categories(self):
        self._check_kind(0x1ABC, decoder.JP)
        self._check_kind(0x2ABC, decoder.CALL)
        self._check_kind(0x3A12, decoder.SE_VX_BYTE)
        self._check_kind(0x4A12, decoder.SNE_VX_BYTE)
        self._check_kind(0x6A05, decoder.LD_VX_BYTE)
        self._check_kind(0x7A03, decoder.ADD_VX_BYTE)
        self._check_kind(0xA22A, decoder.LD_I)
        self._check_kind(0xB300, decoder.JP_V0)
        self._check_kind(0xC0FF, decoder.RND)
        self._check_kind(0xD01F, decoder.DRW)

    def test_decoder_category_5_9(self):
        self._check_kind(0x5120, decoder.SE_VX_VY)
        self._check_kind(0x9120, decoder.SNE_VX_VY)

        for last_nibble in range(1, 16):
            self._check_kind(0x5120 | last_nibble, UNKNOWN)
            self._check_kind(0x9120 | last_nibble, UNKNOWN)

    def test_decoder_category_8(self):
        expected = {
            0x0: decoder.LD_VX_VY,
            0x1: decoder.OR,
            0x2: decoder.AND,
            0x3: decoder.XOR,
            0x4: decoder.ADD_VX_VY,
            0x5: decoder.SUB,
            0x6: decoder.SHR,
            0x7: decoder.SUBN,
            0xE: decoder.SHL
        }

        for last_nibble in range(16):
            self._check_kind(0x8AB0 | last_nibble, expected.get(last_nibble, UNKNOWN))

    def test_decoder_category_e_f(self):
        self._check_kind(0xE29E, decoder.SKP)
        self._check_kind(0xE2A1, decoder.SKNP)
        self._check_kind(0xE29F, UNKNOWN)
        self._check_kind(0xF307, decoder.LD_VX_DT)
        self._check_kind(0xF30A, decoder.LD_VX_K)
        self._check_kind(0xF315, decoder.LD_DT_VX)
        self._check_kind(0xF318, decoder.LD_ST_VX)
        self._check_kind(0xF31E, decoder.ADD_I_VX)
        self._check_kind(0xF329, decoder.LD_F_VX)
        self._check_kind(0xF333, decoder.LD_B_VX)
        self._check_kind(0xF355, decoder.LD_MEM_VX)
        self._check_kind(0xF365, decoder.LD_VX_MEM)

        for word in 0xF000, 0xF075, 0xF085, 0xFFFF:
            self._check_kind(word, UNKNOWN)

    def test_decoder_total_and_deterministic(self):
        # Every 16-bit word decodes to exactly one kind, the same way every time
        valid_kinds = INSTRUCTION_KINDS | {UNKNOWN}

        for word in range(0x10000):
            opcode = decode(word)
            self.assertIn(opcode.kind, valid_kinds)
            self.assertEqual(opcode, decode(word))

    def test_decoder_category_0_never_unknown(self):
        for word in range(0x1000):
            self.assertNotEqual(UNKNOWN, decode(word).kind)

    def test_decoder_every_kind_has_mnemonic(self):
        for kind in INSTRUCTION_KINDS | {UNKNOWN}:
            self.assertIn(kind, MNEMONICS)

    def test_disassemble(self):
        self.assertEqual("CLS", disassemble(decode(0x00E0)))
        self.assertEqual("LD Va, 0x05", disassemble(decode(0x6A05)))
        self.assertEqual("LD I, 0x22a", disassemble(decode(0xA22A)))
        self.assertEqual("DRW V0, V1, 0xf", disassemble(decode(0xD01F)))
        self.assertEqual("SHR V3, V4", disassemble(decode(0x8346)))
        self.assertEqual("LD [I], V2", disassemble(decode(0xF255)))
        self.assertEqual("??? 0xffff", disassemble(decode(0xFFFF)))
