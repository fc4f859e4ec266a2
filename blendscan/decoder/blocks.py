"""Best-effort walk over the block list that follows the header."""

import logging
import os
import struct
from typing import BinaryIO

from blendscan.config import DecoderConfig
from blendscan.decoder.header import BlendHeader
from blendscan.decoder.models import BlockFindings

logger = logging.getLogger(__name__)

THUMBNAIL_CODE = b"TEST"
SCENE_CODE = b"SC"
DNA_CODE = b"DNA1"
END_CODE = b"ENDB"

RENDER_ENGINES = (
    (b"CYCLES", "Cycles"),
    (b"EEVEE", "Eevee"),
    (b"WORKBENCH", "Workbench"),
)


class BlockScanError(Exception):
    """Raised when the block list cannot be followed any further."""


def scan_blocks(
    stream: BinaryIO,
    header: BlendHeader,
    findings: BlockFindings,
    config: DecoderConfig,
) -> None:
    """Read block headers until DNA1/ENDB, end of stream or the block cap.

    ``stream`` must be positioned just after the file header. Results are
    written into ``findings`` as they are found, so a BlockScanError leaves
    everything gathered before the failure in place.
    """
    order = header.byte_order
    block_header = struct.Struct(f"{order}4sI{header.block_pointer_bytes}xII")

    while True:
        raw = stream.read(block_header.size)
        if not raw:
            return
        if len(raw) < block_header.size:
            raise BlockScanError(
                f"truncated block header ({len(raw)} of {block_header.size} bytes)"
            )

        findings.blocks_read += 1
        code, length, _sdna_index, _count = block_header.unpack(raw)

        if code.startswith(THUMBNAIL_CODE):
            consumed = _read_thumbnail(stream, order, findings, config)
            _skip(stream, length - consumed)
        elif code.startswith(SCENE_CODE):
            _read_scene(stream, length, findings, config)
        elif code.startswith(DNA_CODE) or code == END_CODE or findings.blocks_read > config.max_blocks:
            return
        else:
            _skip(stream, length)


def detect_render_engine(payload: bytes) -> str | None:
    upper = payload.upper()
    for needle, name in RENDER_ENGINES:
        if needle in upper:
            return name
    return None


def _read_thumbnail(
    stream: BinaryIO,
    order: str,
    findings: BlockFindings,
    config: DecoderConfig,
) -> int:
    dimensions = stream.read(8)
    if len(dimensions) < 8:
        logger.debug("Short thumbnail header (%d of 8 bytes)", len(dimensions))
        return len(dimensions)

    width, height = struct.unpack(f"{order}ii", dimensions)
    data_size = width * height * 4
    if not 0 < data_size < config.max_thumbnail_bytes:
        logger.debug("Ignoring thumbnail of %dx%d", width, height)
        return 8

    pixels = stream.read(data_size)
    if len(pixels) < data_size:
        logger.debug("Short thumbnail data (%d of %d bytes)", len(pixels), data_size)
        return 8 + len(pixels)

    findings.thumbnail = pixels
    findings.thumb_width = width
    findings.thumb_height = height
    return 8 + data_size


def _read_scene(
    stream: BinaryIO,
    length: int,
    findings: BlockFindings,
    config: DecoderConfig,
) -> None:
    if findings.render_engine is not None or length > config.max_scene_block_bytes:
        _skip(stream, length)
        return

    payload = stream.read(length)
    if len(payload) < length:
        logger.debug("Short scene block (%d of %d bytes)", len(payload), length)
        return
    findings.render_engine = detect_render_engine(payload)


def _skip(stream: BinaryIO, count: int) -> None:
    if count > 0:
        stream.seek(count, os.SEEK_CUR)
