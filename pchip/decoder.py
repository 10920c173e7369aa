#!/usr/bin/env python3

"""
Opcode Decoder

Turns a raw 16-bit instruction word into an Opcode descriptor: the word
itself, a 'kind' naming the instruction, and every operand field the encoding
can carry.  Decoding is stateless and never fails.  Bit patterns the base
CHIP-8 instruction set does not assign decode to UNKNOWN, and the CPU decides
what to do with them.

Field names follow the usual CHIP-8 notation:
    nnn = address (lowest 12 bits)
    kk  = byte (lowest 8 bits)
    n   = nibble (lowest 4 bits)
    x/y = register numbers (second and third nibbles)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Opcode = namedtuple("Opcode", ["word", "kind", "x", "y", "n", "kk", "nnn"])

# Instruction kinds
SYS = "SYS"                  # 0nnn
CLS = "CLS"                  # 00E0
RET = "RET"                  # 00EE
JP = "JP"                    # 1nnn
CALL = "CALL"                # 2nnn
SE_VX_BYTE = "SE_VX_BYTE"    # 3xkk
SNE_VX_BYTE = "SNE_VX_BYTE"  # 4xkk
SE_VX_VY = "SE_VX_VY"        # 5xy0
LD_VX_BYTE = "LD_VX_BYTE"    # 6xkk
ADD_VX_BYTE = "ADD_VX_BYTE"  # 7xkk
LD_VX_VY = "LD_VX_VY"        # 8xy0
OR = "OR"                    # 8xy1
AND = "AND"                  # 8xy2
XOR = "XOR"                  # 8xy3
ADD_VX_VY = "ADD_VX_VY"      # 8xy4
SUB = "SUB"                  # 8xy5
SHR = "SHR"                  # 8xy6
SUBN = "SUBN"                # 8xy7
SHL = "SHL"                  # 8xyE
SNE_VX_VY = "SNE_VX_VY"      # 9xy0
LD_I = "LD_I"                # Annn
JP_V0 = "JP_V0"              # Bnnn
RND = "RND"                  # Cxkk
DRW = "DRW"                  # Dxyn
SKP = "SKP"                  # Ex9E
SKNP = "SKNP"                # ExA1
LD_VX_DT = "LD_VX_DT"        # Fx07
LD_VX_K = "LD_VX_K"          # Fx0A
LD_DT_VX = "LD_DT_VX"        # Fx15
LD_ST_VX = "LD_ST_VX"        # Fx18
ADD_I_VX = "ADD_I_VX"        # Fx1E
LD_F_VX = "LD_F_VX"          # Fx29
LD_B_VX = "LD_B_VX"          # Fx33
LD_MEM_VX = "LD_MEM_VX"      # Fx55
LD_VX_MEM = "LD_VX_MEM"      # Fx65
UNKNOWN = "UNKNOWN"

# How much of the word identifies the instruction, selected by its first nibble.  A mask of 0xF000 means the first
# nibble alone is enough.
CATEGORY_MASKS = {
    0x0: 0xFFFF,
    0x1: 0xF000,
    0x2: 0xF000,
    0x3: 0xF000,
    0x4: 0xF000,
    0x5: 0xF00F,
    0x6: 0xF000,
    0x7: 0xF000,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xA: 0xF000,
    0xB: 0xF000,
    0xC: 0xF000,
    0xD: 0xF000,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

# Masked word to instruction kind
KINDS = {
    0x00E0: CLS,
    0x00EE: RET,
    0x1000: JP,
    0x2000: CALL,
    0x3000: SE_VX_BYTE,
    0x4000: SNE_VX_BYTE,
    0x5000: SE_VX_VY,
    0x6000: LD_VX_BYTE,
    0x7000: ADD_VX_BYTE,
    0x8000: LD_VX_VY,
    0x8001: OR,
    0x8002: AND,
    0x8003: XOR,
    0x8004: ADD_VX_VY,
    0x8005: SUB,
    0x8006: SHR,
    0x8007: SUBN,
    0x800E: SHL,
    0x9000: SNE_VX_VY,
    0xA000: LD_I,
    0xB000: JP_V0,
    0xC000: RND,
    0xD000: DRW,
    0xE09E: SKP,
    0xE0A1: SKNP,
    0xF007: LD_VX_DT,
    0xF00A: LD_VX_K,
    0xF015: LD_DT_VX,
    0xF018: LD_ST_VX,
    0xF01E: ADD_I_VX,
    0xF029: LD_F_VX,
    0xF033: LD_B_VX,
    0xF055: LD_MEM_VX,
    0xF065: LD_VX_MEM
}

# Every kind the decoder can produce, other than UNKNOWN
INSTRUCTION_KINDS = frozenset(KINDS.values()) | {SYS}

# Assembler-style rendering of each kind, fed with the Opcode's fields
MNEMONICS = {
    SYS: "SYS 0x{nnn:03x}",
    CLS: "CLS",
    RET: "RET",
    JP: "JP 0x{nnn:03x}",
    CALL: "CALL 0x{nnn:03x}",
    SE_VX_BYTE: "SE V{x:01x}, 0x{kk:02x}",
    SNE_VX_BYTE: "SNE V{x:01x}, 0x{kk:02x}",
    SE_VX_VY: "SE V{x:01x}, V{y:01x}",
    LD_VX_BYTE: "LD V{x:01x}, 0x{kk:02x}",
    ADD_VX_BYTE: "ADD V{x:01x}, 0x{kk:02x}",
    LD_VX_VY: "LD V{x:01x}, V{y:01x}",
    OR: "OR V{x:01x}, V{y:01x}",
    AND: "AND V{x:01x}, V{y:01x}",
    XOR: "XOR V{x:01x}, V{y:01x}",
    ADD_VX_VY: "ADD V{x:01x}, V{y:01x}",
    SUB: "SUB V{x:01x}, V{y:01x}",
    SHR: "SHR V{x:01x}, V{y:01x}",
    SUBN: "SUBN V{x:01x}, V{y:01x}",
    SHL: "SHL V{x:01x}, V{y:01x}",
    SNE_VX_VY: "SNE V{x:01x}, V{y:01x}",
    LD_I: "LD I, 0x{nnn:03x}",
    JP_V0: "JP V0, 0x{nnn:03x}",
    RND: "RND V{x:01x}, 0x{kk:02x}",
    DRW: "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    SKP: "SKP V{x:01x}",
    SKNP: "SKNP V{x:01x}",
    LD_VX_DT: "LD V{x:01x}, DT",
    LD_VX_K: "LD V{x:01x}, K",
    LD_DT_VX: "LD DT, V{x:01x}",
    LD_ST_VX: "LD ST, V{x:01x}",
    ADD_I_VX: "ADD I, V{x:01x}",
    LD_F_VX: "LD F, V{x:01x}",
    LD_B_VX: "LD B, V{x:01x}",
    LD_MEM_VX: "LD [I], V{x:01x}",
    LD_VX_MEM: "LD V{x:01x}, [I]",
    UNKNOWN: "??? 0x{word:04x}"
}


def decode(word):
    word &= 0xFFFF
    category = word >> 12
    kind = KINDS.get(word & CATEGORY_MASKS[category])

    if kind is None:
        # 00E0 and 00EE are the only exact matches in the 0 category.  Anything else there is a machine code call.
        kind = SYS if category == 0x0 else UNKNOWN

    return Opcode(
        word=word,
        kind=kind,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF
    )


def disassemble(opcode):
    return MNEMONICS[opcode.kind].format(**opcode._asdict())
