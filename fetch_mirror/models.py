"""Data models used throughout the mirror pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List
from urllib.parse import urlparse

from bs4 import Tag


@dataclass(frozen=True)
class Page:
    """Target page URL; one trailing slash is dropped on construction."""

    url: str

    def __post_init__(self) -> None:
        if self.url.endswith("/"):
            object.__setattr__(self, "url", self.url[:-1])

    @property
    def host(self) -> str:
        return urlparse(self.url).hostname or ""

    @property
    def path(self) -> str:
        return urlparse(self.url).path

    @property
    def scheme(self) -> str:
        return urlparse(self.url).scheme

    @property
    def slug(self) -> str:
        """Filesystem-safe name used for the output directory and log file."""
        return f"{self.host}{self.path}".replace("/", "_")


class AssetAttribute(str, Enum):
    SRC = "src"
    HREF = "href"


@dataclass
class AssetReference:
    """An asset URL discovered on a tag, along with the attribute holding it."""

    tag: Tag
    attribute: AssetAttribute
    url: str


@dataclass
class PageAssets:
    """Asset-bearing tags grouped by category, each in document order."""

    images: List[Tag] = field(default_factory=list)
    scripts: List[Tag] = field(default_factory=list)
    stylesheets: List[Tag] = field(default_factory=list)


@dataclass
class MirrorResult:
    """Outcome of a full page download."""

    page: Page
    html_path: Path
    page_dir: Path
    saved_assets: int
    failed_assets: int


@dataclass
class MetadataReport:
    """Link and image counts plus the previous fetch time for a page."""

    url: str
    num_links: int
    images: int
    last_fetched: str
