"""blendscan - Index directory trees of .blend files and read their metadata."""

__version__ = "0.1.0"

from blendscan.decoder import FormatInfo, decode, decode_file
from blendscan.scanner import ScanRegistry

__all__ = ["FormatInfo", "ScanRegistry", "decode", "decode_file"]
