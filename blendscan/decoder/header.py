"""Parsing of the fixed 12-byte .blend file header."""

from dataclasses import dataclass

from blendscan.decoder.models import Endianness

MAGIC = b"BLENDER"
HEADER_SIZE = 12

_POINTER_FLAGS = {ord("-"): 64, ord("_"): 32}
_ENDIANNESS_FLAGS = {ord("v"): Endianness.LITTLE, ord("V"): Endianness.BIG}


class HeaderError(ValueError):
    """Raised when the leading bytes are not a usable .blend header."""


@dataclass(frozen=True)
class BlendHeader:
    pointer_size: int | None
    endianness: Endianness
    raw_version: str
    version: str | None

    @property
    def block_pointer_bytes(self) -> int:
        # Unknown pointer flags are read with the 64-bit layout.
        return (self.pointer_size or 64) // 8

    @property
    def byte_order(self) -> str:
        return ">" if self.endianness is Endianness.BIG else "<"


def parse_header(data: bytes) -> BlendHeader:
    if len(data) < HEADER_SIZE:
        raise HeaderError("Unable to read header")
    if data[:7] != MAGIC:
        raise HeaderError("Not a blend file")

    raw_version, version = parse_version(data[9:12])
    return BlendHeader(
        pointer_size=_POINTER_FLAGS.get(data[7]),
        endianness=_ENDIANNESS_FLAGS.get(data[8], Endianness.UNKNOWN),
        raw_version=raw_version,
        version=version,
    )


def parse_version(raw: bytes) -> tuple[str, str | None]:
    """Turn the three version characters into ``"c0.c1.c2"``.

    The characters are joined as they are, so ``b"280"`` gives ``"2.8.0"``.
    Bytes that are not ASCII give no version string.
    """
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError:
        return raw.decode("ascii", errors="replace"), None

    if len(text) != 3:
        return text, None
    return text, ".".join(text)
