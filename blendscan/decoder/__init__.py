"""Metadata decoding for .blend files."""

from blendscan.decoder.blocks import detect_render_engine
from blendscan.decoder.decoder import decode, decode_file
from blendscan.decoder.header import HEADER_SIZE, MAGIC, parse_header, parse_version
from blendscan.decoder.models import Endianness, FormatInfo
from blendscan.decoder.thumbnail import save_thumbnail, thumbnail_image

__all__ = [
    "Endianness",
    "FormatInfo",
    "HEADER_SIZE",
    "MAGIC",
    "decode",
    "decode_file",
    "detect_render_engine",
    "parse_header",
    "parse_version",
    "save_thumbnail",
    "thumbnail_image",
]
