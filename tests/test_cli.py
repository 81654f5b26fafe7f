import re
import sys

import pytest

from conftest import FakeResponse, FakeSession
from fetch_mirror import cli, crawler
from fetch_mirror.fetcher import Fetcher
from fetch_mirror.models import MetadataReport

ANSI = re.compile(r"\x1b\[[0-9;]*m")

PAGE = b'<html><body><a href="/x">x</a><a href="/y">y</a><img src="a.png"></body></html>'


@pytest.fixture
def fake_network(monkeypatch):
    routes = {
        "https://example.com/page": FakeResponse(content=PAGE),
        "https://example.com/a.png": FakeResponse(content=b"img"),
    }
    monkeypatch.setattr(crawler, "Fetcher", lambda config: Fetcher(config, session=FakeSession(routes)))
    return routes


def test_parse_args_defaults():
    args = cli.parse_args(["https://example.com"])
    assert args.urls == ["https://example.com"]
    assert args.metadata is False
    assert str(args.output) == "sources"
    assert args.timeout == 30.0


def test_metadata_report_survives_failed_url(fake_network, tmp_path, capsys):
    cli.main(
        [
            "--metadata",
            "--logs",
            str(tmp_path / "logs"),
            "https://does-not-resolve.invalid",
            "https://example.com/page",
        ]
    )
    out = ANSI.sub("", capsys.readouterr().out)
    assert "site: https://example.com/page" in out
    assert "num_links: 2" in out
    assert "images: 1" in out
    assert "last_fetched: N/A" in out
    assert "does-not-resolve" not in out


def test_download_mode_writes_page(fake_network, tmp_path):
    cli.main(
        [
            "--output",
            str(tmp_path / "sources"),
            "--html-dir",
            str(tmp_path),
            "https://example.com/page",
        ]
    )
    html = (tmp_path / "example.com_page.html").read_text(encoding="utf-8")
    assert 'src="sources/example.com_page/images/a.png"' in html
    assert (tmp_path / "sources/example.com_page/images/a.png").read_bytes() == b"img"


def test_format_report_contains_fields():
    text = ANSI.sub("", cli.format_report(MetadataReport("https://e.com", 4, 5, "N/A")))
    assert text.splitlines() == [
        "site: https://e.com",
        "num_links: 4",
        "images: 5",
        "last_fetched: N/A",
    ]


def test_repeated_runs_leave_stdout_alone(fake_network, tmp_path):
    before = sys.stdout
    for _ in range(2):
        cli.main(["--metadata", "--logs", str(tmp_path / "logs"), "https://example.com/page"])
    assert sys.stdout is before
