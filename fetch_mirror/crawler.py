"""High-level orchestration for mirroring pages and reporting metadata."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from bs4 import BeautifulSoup

from .assets import download_assets
from .config import MirrorConfig
from .content import count_images, count_links, locate_assets, parse_document
from .errors import MirrorError, StorageError
from .fetcher import Fetcher
from .models import MetadataReport, MirrorResult, Page

logger = logging.getLogger("fetch_mirror")

NOT_AVAILABLE = "N/A"
ASSET_DIRS = ("images", "js", "css")


def build_page_dir(config: MirrorConfig, page: Page) -> Path:
    """Recreate the page's output directory, discarding any previous run."""
    page_dir = config.output_root / page.slug
    try:
        config.output_root.mkdir(parents=True, exist_ok=True)
        if page_dir.exists():
            shutil.rmtree(page_dir)
        page_dir.mkdir(parents=True)
    except OSError as exc:
        raise StorageError(f"cannot prepare {page_dir}: {exc}") from exc
    return page_dir


def save_page(
    document: BeautifulSoup,
    page: Page,
    config: MirrorConfig,
    fetcher: Fetcher,
) -> MirrorResult:
    """Download the page's assets, rewrite their tags and write the HTML."""
    page_dir = build_page_dir(config, page)
    assets = locate_assets(document)

    saved = failed = 0
    for tags, subdir in zip(
        (assets.images, assets.scripts, assets.stylesheets), ASSET_DIRS
    ):
        ok, bad = download_assets(
            tags,
            page_dir / subdir,
            page,
            fetcher,
            config.html_root,
            config.error_max_length,
        )
        saved += ok
        failed += bad

    html_path = config.html_root / f"{page.slug}.html"
    try:
        config.html_root.mkdir(parents=True, exist_ok=True)
        html_path.write_text(document.decode(), encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"cannot write {html_path}: {exc}") from exc

    return MirrorResult(
        page=page,
        html_path=html_path,
        page_dir=page_dir,
        saved_assets=saved,
        failed_assets=failed,
    )


def read_last_fetched(log_path: Path) -> str:
    """Return the last timestamp recorded in a page log, or ``N/A``."""
    try:
        lines = log_path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return NOT_AVAILABLE
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"cannot read {log_path}: {exc}") from exc
    for line in reversed(lines):
        if line.strip():
            return line.strip()
    return NOT_AVAILABLE


def append_fetch_time(log_path: Path) -> str:
    stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as handle:
            handle.write(stamp + "\n")
    except OSError as exc:
        raise StorageError(f"cannot write {log_path}: {exc}") from exc
    return stamp


def report_metadata(
    document: BeautifulSoup,
    page: Page,
    config: MirrorConfig,
) -> MetadataReport:
    """Count links and images, then record this fetch in the page log."""
    log_path = config.log_root / f"{page.slug}.txt"
    report = MetadataReport(
        url=page.url,
        num_links=count_links(document),
        images=count_images(document),
        last_fetched=read_last_fetched(log_path),
    )
    append_fetch_time(log_path)
    return report


def mirror_page(
    url: str,
    config: MirrorConfig,
    fetcher: Fetcher,
) -> Optional[MirrorResult]:
    """Fetch a page and save it with its assets; errors stop at this boundary."""
    page = Page(url)
    logger.info("Fetching %s...", page.url)
    try:
        document = parse_document(fetcher.fetch(page.url))
        result = save_page(document, page, config, fetcher)
    except MirrorError as exc:
        logger.error("Error while fetching %s: %s", page.url, exc)
        return None
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error while fetching %s", page.url)
        return None

    logger.info(
        "Saved %s (%d assets saved, %d failed)",
        result.html_path,
        result.saved_assets,
        result.failed_assets,
    )
    return result


def fetch_metadata(
    url: str,
    config: MirrorConfig,
    fetcher: Fetcher,
) -> Optional[MetadataReport]:
    """Fetch a page and report its metadata; errors stop at this boundary."""
    page = Page(url)
    logger.info("Fetching %s...", page.url)
    try:
        document = parse_document(fetcher.fetch(page.url))
        return report_metadata(document, page, config)
    except MirrorError as exc:
        logger.error("Error while fetching %s: %s", page.url, exc)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error while fetching %s", page.url)
    return None


Outcome = Union[MirrorResult, MetadataReport, None]


def run(
    urls: Sequence[str],
    config: MirrorConfig,
    metadata: bool = False,
    fetcher: Optional[Fetcher] = None,
) -> List[Outcome]:
    """Process each URL in order; one result (or ``None``) per URL."""
    fetcher = fetcher or Fetcher(config)
    handler = fetch_metadata if metadata else mirror_page
    outcomes: List[Outcome] = []
    try:
        for url in urls:
            outcomes.append(handler(url, config, fetcher))
    finally:
        fetcher.close()
    return outcomes
