"""Asset downloading and tag rewriting."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Tuple

from bs4 import Tag

from .fetcher import Fetcher
from .models import AssetAttribute, AssetReference, Page
from .utils import localize_path, resolve_fetch_url, truncate

logger = logging.getLogger("fetch_mirror")


def reference_for(tag: Tag) -> AssetReference:
    """Pick the URL-bearing attribute of a tag; ``src`` wins over ``href``."""
    if tag.has_attr(AssetAttribute.SRC.value):
        attribute = AssetAttribute.SRC
    else:
        attribute = AssetAttribute.HREF
    return AssetReference(tag=tag, attribute=attribute, url=tag.get(attribute.value, ""))


def relative_reference(destination: Path, html_root: Path) -> str:
    """Express a saved asset path relative to the directory holding the HTML."""
    return Path(os.path.relpath(destination, html_root)).as_posix()


def download_and_rewrite(
    tag: Tag,
    target_dir: Path,
    page: Page,
    fetcher: Fetcher,
    html_root: Path,
    error_max_length: int,
) -> bool:
    """Download one asset and point its tag at the local copy."""
    reference = reference_for(tag)
    try:
        asset_url = resolve_fetch_url(reference.url, page)
        destination = localize_path(reference.url, target_dir)
        destination.parent.mkdir(parents=True, exist_ok=True)
        data = fetcher.fetch(asset_url)
        destination.write_bytes(data)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning(
            "One asset failed to save to %s: %s",
            target_dir,
            truncate(str(exc), error_max_length),
        )
        return False

    tag[reference.attribute.value] = relative_reference(destination, html_root)
    logger.debug("Saved %s to %s", asset_url, destination)
    return True


def download_assets(
    tags: Iterable[Tag],
    target_dir: Path,
    page: Page,
    fetcher: Fetcher,
    html_root: Path,
    error_max_length: int,
) -> Tuple[int, int]:
    """Localize each tag in order; returns ``(saved, failed)`` counts."""
    saved = failed = 0
    for tag in tags:
        if download_and_rewrite(tag, target_dir, page, fetcher, html_root, error_max_length):
            saved += 1
        else:
            failed += 1
    return saved, failed
