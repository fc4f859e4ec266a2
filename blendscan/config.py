"""Configuration module for blendscan."""

from dataclasses import dataclass, field


@dataclass
class DecoderConfig:
    max_blocks: int = 3000
    max_thumbnail_bytes: int = 10 * 1024 * 1024
    max_scene_block_bytes: int = 64 * 1024 * 1024


@dataclass
class ScannerConfig:
    extension: str = "blend"
    poll_interval: float = 0.2
    search_limit: int = 2000
    progress_interval: int = 25


@dataclass
class Config:
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
