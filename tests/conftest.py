from dataclasses import dataclass, field
from typing import Dict, List, Union

import pytest
import requests

from fetch_mirror.config import MirrorConfig
from fetch_mirror.fetcher import Fetcher


@dataclass
class FakeResponse:
    status_code: int = 200
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)


class FakeSession:
    """Stands in for requests.Session, serving canned responses by URL."""

    def __init__(self, routes: Dict[str, Union[FakeResponse, Exception]]):
        self.routes = routes
        self.headers: Dict[str, str] = {}
        self.calls: List[str] = []
        self.closed = False

    def get(self, url, timeout=None, allow_redirects=True):
        assert allow_redirects is False
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True


@pytest.fixture
def config(tmp_path):
    return MirrorConfig(
        output_root=tmp_path / "sources",
        html_root=tmp_path,
        log_root=tmp_path / "logs",
        timeout=5.0,
    )


@pytest.fixture
def make_fetcher(config):
    def _make(routes):
        session = FakeSession(routes)
        return Fetcher(config, session=session), session

    return _make
