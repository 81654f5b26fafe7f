"""HTML parsing and asset discovery utilities."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .errors import ParseError
from .models import PageAssets

IMAGE_SELECTOR = "img[src]"
SCRIPT_SELECTOR = 'script[src], link[as="script"]'
STYLESHEET_SELECTOR = 'link[rel="stylesheet"]'
LINK_SELECTOR = "a[href]"


def parse_document(data: bytes) -> BeautifulSoup:
    """Parse fetched HTML bytes into a mutable document tree."""
    try:
        return BeautifulSoup(data, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(str(exc)) from exc


def locate_assets(document: BeautifulSoup) -> PageAssets:
    """Collect image, script and stylesheet tags in document order."""
    return PageAssets(
        images=document.select(IMAGE_SELECTOR),
        scripts=document.select(SCRIPT_SELECTOR),
        stylesheets=document.select(STYLESHEET_SELECTOR),
    )


def count_links(document: BeautifulSoup) -> int:
    return len(document.select(LINK_SELECTOR))


def count_images(document: BeautifulSoup) -> int:
    return len(document.select(IMAGE_SELECTOR))
