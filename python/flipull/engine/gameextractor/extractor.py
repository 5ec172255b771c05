"""Reads ADVANCE-mode stages out of the game's iNES ROM image."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path

from flipull.models.block import Block
from flipull.models.errors import OutOfRangeError, RomError
from flipull.models.moves import BOARD_HEIGHT, BOARD_WIDTH
from flipull.models.problem import FIELD_TOP, Problem, ProblemBoard, Tile, TileKind

logger = logging.getLogger(__name__)

MAGIC = b"NES\x1a"
HEADER_LEN = 16
PRG_LEN = 0x8000
CHR_BANK_LEN = 0x2000
CHR_BANK_COUNT = 4
CHR_LEN = CHR_BANK_LEN * CHR_BANK_COUNT

STAGE_COUNT = 50
_STAGES_PER_TABLE = 25
# (CHR bank, pointer table offset) for stages 1-25 and 26-50.
_POINTER_TABLES = ((0, 0x0A00), (2, 0x1A00))
_POINTER_MASK = 0x3FFF

_FIELD_ROWS = BOARD_HEIGHT - FIELD_TOP
_FIELD_BYTES = _FIELD_ROWS * BOARD_WIDTH


@dataclass(frozen=True)
class Rom:
    prg: bytes
    chr: bytes

    @classmethod
    def from_ines(cls, data: bytes) -> Rom:
        if len(data) < HEADER_LEN:
            raise RomError("Unexpected end of file inside the iNES header.")
        header, body = data[:HEADER_LEN], data[HEADER_LEN:]
        if not header.startswith(MAGIC):
            raise RomError("Missing iNES magic.")
        if len(body) < PRG_LEN:
            raise RomError("Unexpected end of file inside PRG.")
        prg, chr_ = body[:PRG_LEN], body[PRG_LEN:]
        if len(chr_) != CHR_LEN:
            raise RomError(
                f"CHR size mismatch (expected {CHR_LEN:#06x}, got {len(chr_):#06x})."
            )
        return cls(prg=prg, chr=chr_)

    @classmethod
    def from_file(cls, path: Path) -> Rom:
        return cls.from_ines(path.read_bytes())

    def chr_bank(self, bank: int) -> bytes:
        return self.chr[CHR_BANK_LEN * bank : CHR_BANK_LEN * (bank + 1)]


class GameExtractor:
    """Builds ``Problem`` values from the stage tables in CHR ROM."""

    @staticmethod
    def extract(rom: Rom, stage: int) -> Problem:
        """Return stage *stage* (1-based, 1..50) of ADVANCE mode."""
        if not 1 <= stage <= STAGE_COUNT:
            raise OutOfRangeError("stage", stage, 1, STAGE_COUNT)
        table, index = divmod(stage - 1, _STAGES_PER_TABLE)
        bank_id, table_offset = _POINTER_TABLES[table]
        bank = rom.chr_bank(bank_id)
        offset = table_offset + 4 * index
        logger.debug("Reading stage %d from CHR bank %d at %#06x", stage, bank_id, offset)

        blocks_ptr, walls_ptr = struct.unpack_from("<HH", bank, offset)
        blocks_buf = GameExtractor._read(bank, blocks_ptr, _FIELD_BYTES + 2)
        walls_buf = GameExtractor._read(bank, walls_ptr, 2 * BOARD_HEIGHT)

        tiles: list[list[Tile]] = [[None] * BOARD_WIDTH for _ in range(BOARD_HEIGHT)]

        for i, value in enumerate(blocks_buf[:_FIELD_BYTES]):
            row, col = divmod(i, BOARD_WIDTH)
            # Wild blocks never start on the board in this mode.
            if value > Block.NORMAL_4:
                raise RomError(f"Stage {stage}: invalid board block value {value}.")
            if value:
                tiles[FIELD_TOP + row][col] = Block(value)

        move_remain = blocks_buf[_FIELD_BYTES]
        held_value = blocks_buf[_FIELD_BYTES + 1]
        try:
            held = Block.from_value(held_value)
        except OutOfRangeError as err:
            raise RomError(
                f"Stage {stage}: invalid held block value {held_value}."
            ) from err

        for kind, bitmaps in (
            (TileKind.WALL, walls_buf[:BOARD_HEIGHT]),
            (TileKind.PIPE, walls_buf[BOARD_HEIGHT:]),
        ):
            for row, bits in enumerate(bitmaps):
                for col in range(BOARD_WIDTH):
                    if bits & (0x80 >> col):
                        tiles[row][col] = kind

        return Problem(
            board=ProblemBoard.from_rows(tiles), held=held, move_remain=move_remain
        )

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _read(bank: bytes, pointer: int, length: int) -> bytes:
        start = pointer & _POINTER_MASK
        buf = bank[start : start + length]
        if len(buf) != length:
            raise RomError(f"Pointer {pointer:#06x} runs past the end of its CHR bank.")
        return buf
