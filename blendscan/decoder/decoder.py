"""Entry points for decoding .blend metadata."""

import logging
from pathlib import Path
from typing import BinaryIO

from blendscan.config import DecoderConfig
from blendscan.decoder.blocks import BlockScanError, scan_blocks
from blendscan.decoder.header import HEADER_SIZE, HeaderError, parse_header
from blendscan.decoder.models import BlockFindings, FormatInfo

logger = logging.getLogger(__name__)


def decode(stream: BinaryIO, config: DecoderConfig | None = None) -> FormatInfo:
    """Decode header and block metadata from an open binary stream.

    Never raises: failures are reported through ``FormatInfo.error``.
    """
    config = config or DecoderConfig()

    try:
        data = stream.read(HEADER_SIZE)
    except OSError as e:
        return FormatInfo(error=str(e))

    try:
        header = parse_header(data)
    except HeaderError as e:
        return FormatInfo(error=str(e))

    findings = BlockFindings()
    error = None
    try:
        scan_blocks(stream, header, findings, config)
    except (BlockScanError, OSError, ValueError) as e:
        error = f"header OK, block scan failed: {e}"

    return FormatInfo(
        version=header.version,
        raw_version=header.raw_version,
        pointer_size=header.pointer_size,
        endianness=header.endianness.value,
        thumbnail=findings.thumbnail,
        thumb_width=findings.thumb_width,
        thumb_height=findings.thumb_height,
        render_engine=findings.render_engine,
        error=error,
    )


def decode_file(path: str | Path, config: DecoderConfig | None = None) -> FormatInfo:
    try:
        with open(path, "rb") as stream:
            info = decode(stream, config)
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
        return FormatInfo(error=str(e))

    if info.error:
        logger.debug("Decoded %s with error: %s", path, info.error)
    return info
