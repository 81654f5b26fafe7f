"""Helpers for mapping asset URLs onto fetch URLs and local paths."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urljoin

from .errors import StorageError
from .models import Page

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
LEADING_DOTS_PATTERN = re.compile(r"^[./]+")
UNSAFE_CHARS_PATTERN = re.compile(r"[^A-Za-z0-9._/-]")


def resolve_fetch_url(raw: str, page: Page) -> str:
    """Return the absolute URL an asset should be fetched from."""
    if SCHEME_PATTERN.match(raw):
        return raw
    if raw.startswith("//"):
        return f"{page.scheme}:{raw}"
    if not page.path:
        base = page.url + "/"
    else:
        base = urljoin(page.url, ".")
    return urljoin(base, raw)


def sanitize_asset_path(raw: str) -> str:
    """Turn an asset URL into a relative, filesystem-legal path."""
    path = SCHEME_PATTERN.sub("", raw)
    path = LEADING_DOTS_PATTERN.sub("", path)
    path = UNSAFE_CHARS_PATTERN.sub("_", path)
    segments = [s for s in path.split("/") if s not in ("", ".", "..")]
    return "/".join(segments)


def localize_path(raw: str, target_dir: Path) -> Path:
    """Map an asset URL onto a file below ``target_dir``."""
    relative = sanitize_asset_path(raw)
    if not relative:
        raise StorageError(f"cannot derive a file name from {raw!r}")
    return Path(target_dir) / relative


def truncate(message: str, limit: int) -> str:
    return message[:limit]
