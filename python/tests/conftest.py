from __future__ import annotations

import struct

import pytest

HEADER = b"NES\x1a" + bytes(12)
PRG_LEN = 0x8000
CHR_BANK_LEN = 0x2000
CHR_START = len(HEADER) + PRG_LEN

STAGE_1_TABLE = CHR_START + 0x0A00
BLOCKS_AT = 0x0100
WALLS_AT = 0x0200

# Stage 1 of the synthetic image, as problem text.
STAGE_1_TEXT = (
    "2 7\n"
    "####....\n"
    "#.......\n"
    + "........\n" * 5
    + "......|.\n"
    + "........\n" * 3
    + "112.....\n"
)


def build_image(
    blocks: bytes | None = None, move_remain: int = 7, held: int = 2
) -> bytearray:
    """Return an iNES image whose stages 1 and 26 both hold ``STAGE_1_TEXT``."""
    if blocks is None:
        blocks = bytes(40) + bytes([1, 1, 2, 0, 0, 0, 0, 0])
    assert len(blocks) == 48
    walls = bytes([0b11110000, 0b10000000]) + bytes(10)
    pipes = bytes(7) + bytes([0b00000010]) + bytes(4)

    chr_ = bytearray(4 * CHR_BANK_LEN)
    for bank, table in ((0, 0x0A00), (2, 0x1A00)):
        base = bank * CHR_BANK_LEN
        # High pointer bits are ignored by the game.
        struct.pack_into("<HH", chr_, base + table, BLOCKS_AT | 0x8000, WALLS_AT)
        chr_[base + BLOCKS_AT : base + BLOCKS_AT + 50] = blocks + bytes([move_remain, held])
        chr_[base + WALLS_AT : base + WALLS_AT + 24] = walls + pipes

    return bytearray(HEADER) + bytearray(PRG_LEN) + chr_


@pytest.fixture
def rom_image() -> bytearray:
    return build_image()
