"""Data models for decoded .blend metadata."""

import base64
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Endianness(Enum):
    """Byte order declared in a .blend header."""

    LITTLE = "little"
    BIG = "big"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FormatInfo:
    """Metadata recovered from one candidate file.

    Every field is optional: a file that fails to decode still produces a
    FormatInfo, with ``error`` describing what went wrong and any fields that
    were read before the failure left in place.
    """

    version: str | None = None
    raw_version: str | None = None
    pointer_size: int | None = None
    endianness: str | None = None
    thumbnail: bytes | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None
    render_engine: str | None = None
    error: str | None = None

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail is not None

    @property
    def thumbnail_base64(self) -> str | None:
        if self.thumbnail is None:
            return None
        return base64.b64encode(self.thumbnail).decode("ascii")

    def describe(self) -> str:
        if self.version:
            pointer = self.pointer_size if self.pointer_size is not None else "?"
            endianness = self.endianness or "?"
            return (
                f"{self.version} (raw {self.raw_version or '???'}, "
                f"{pointer}-bit, {endianness} endian)"
            )
        if self.error:
            return f"Unknown ({self.error})"
        return "Unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "raw": self.raw_version,
            "pointer_size": self.pointer_size,
            "endianness": self.endianness,
            "thumbnail": self.thumbnail_base64,
            "thumb_width": self.thumb_width,
            "thumb_height": self.thumb_height,
            "render_engine": self.render_engine,
            "error": self.error,
        }


@dataclass
class BlockFindings:
    """Values collected while walking the block list."""

    thumbnail: bytes | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None
    render_engine: str | None = None
    blocks_read: int = 0
