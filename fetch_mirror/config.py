"""Configuration objects and constants for the mirror."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_USER_AGENT = "fetch-mirror/0.1"
ERROR_MAX_LENGTH = 100


@dataclass
class MirrorConfig:
    """Top-level settings that control where pages and assets are written."""

    output_root: Path = field(default_factory=lambda: Path("sources"))
    html_root: Path = field(default_factory=lambda: Path("."))
    log_root: Path = field(default_factory=lambda: Path("logs"))
    timeout: float = 30.0
    error_max_length: int = ERROR_MAX_LENGTH
    user_agent: str = DEFAULT_USER_AGENT
