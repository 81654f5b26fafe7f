"""Error types raised by the mirror pipeline."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"
    IO_FAILED = "io_failed"


class MirrorError(Exception):
    """Base error carrying a closed kind and a human-readable detail."""

    kind: ErrorKind = ErrorKind.IO_FAILED

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class FetchError(MirrorError):
    kind = ErrorKind.FETCH_FAILED


class ParseError(MirrorError):
    kind = ErrorKind.PARSE_FAILED


class StorageError(MirrorError):
    kind = ErrorKind.IO_FAILED
