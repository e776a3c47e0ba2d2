"""
Ten ways to read a resource.

read1/read2 work on bundled package data; read3..read9 on the local resource
directory; read10 on a URL. Every handle is opened in a ``with`` block so it
is released on both normal and exceptional exit.
"""

from __future__ import annotations

import io
import locale
import logging
import mmap
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

import requests

from readkit.resolver import ResourceResolver, default_resolver

logger = logging.getLogger(__name__)

TOKEN_DELIMITER = " "
TOKEN_COUNT = 3
_CHUNK_SIZE = 1024
_HTTP_CHUNK_SIZE = 8192


class InsufficientTokensError(ValueError):
    """Raised when a file holds fewer tokens than the tokenizing reader needs."""


def _resolver(resolver: ResourceResolver | None) -> ResourceResolver:
    return resolver if resolver is not None else default_resolver()


def _platform_encoding() -> str:
    """Encoding used by the raw byte readers (read8, read9): the locale's, not forced UTF-8."""
    return locale.getpreferredencoding(False)


def convert_stream_to_string(stream: IO[bytes]) -> str:
    """
    Decode a binary stream as UTF-8 line by line; every line gets a trailing '\\n'.

    Line terminators (\\n, \\r\\n, \\r) are normalized. The stream is closed on return.
    """
    parts: list[str] = []
    with io.TextIOWrapper(stream, encoding="utf-8") as text:
        for line in text:
            parts.append(line.rstrip("\n"))
            parts.append("\n")
    return "".join(parts)


def read1(filename: str, resolver: ResourceResolver | None = None) -> str:
    """Bundled resource as a byte stream, decoded and reassembled line by line."""
    resource = _resolver(resolver).bundled(filename)
    logger.debug("read1: opening bundled resource %s", filename)
    with resource.open("rb") as stream:
        return convert_stream_to_string(stream)


def read2(filename: str, resolver: ResourceResolver | None = None) -> str:
    """Bundled resource read in one call from its filesystem location, terminators preserved."""
    with _resolver(resolver).bundled_path(filename) as path:
        logger.debug("read2: reading %s", path)
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()


def read3(filename: str, resolver: ResourceResolver | None = None) -> str | None:
    """First line of a local file, or None if the file is empty."""
    path = _resolver(resolver).local(filename)
    with open(path, encoding="utf-8") as reader:
        line = reader.readline()
    return line.rstrip("\n") if line else None


def read4(filename: str, resolver: ResourceResolver | None = None) -> list[str]:
    """All lines of a local file, terminators stripped."""
    path = _resolver(resolver).local(filename)
    with path.open(encoding="utf-8") as fh:
        lines = [line.rstrip("\n") for line in fh]
    logger.debug("read4: %d lines from %s", len(lines), path)
    return lines


def read5(filename: str, resolver: ResourceResolver | None = None) -> str | None:
    """Same as read3, but opened through the Path API."""
    path = _resolver(resolver).local(filename)
    with path.open("r", encoding="utf-8") as reader:
        line = reader.readline()
    return line.rstrip("\n") if line else None


@contextmanager
def lines(filename: str, resolver: ResourceResolver | None = None) -> Iterator[Iterator[str]]:
    """
    Scoped lazy line stream. The yielded generator is single-pass and must be
    consumed inside the ``with`` block; the file is closed when the block exits.
    """
    path = _resolver(resolver).local(filename)
    with path.open(encoding="utf-8") as fh:
        yield (line.rstrip("\n") for line in fh)


def read6(filename: str, resolver: ResourceResolver | None = None) -> list[str]:
    """Every line upper-cased, materialized before the stream closes."""
    with lines(filename, resolver) as stream:
        return [line.upper() for line in stream]


def _tokens(text: IO[str], delimiter: str) -> Iterator[str]:
    """
    Yield delimiter-separated tokens from a character stream, reading in chunks.

    One delimiter is skipped before each token, so consecutive delimiters give
    empty tokens ("a  b" -> "a", "", "b"). A single leading delimiter and a
    trailing delimiter at end of input do not produce a token.
    """
    pending = ""
    first = True
    while True:
        chunk = text.read(_CHUNK_SIZE)
        if not chunk:
            break
        if first:
            first = False
            if chunk.startswith(delimiter):
                chunk = chunk[len(delimiter):]
        pending += chunk
        *complete, pending = pending.split(delimiter)
        yield from complete
    if pending:
        yield pending


def read7(filename: str, resolver: ResourceResolver | None = None) -> str:
    """
    First three space-delimited tokens joined by single spaces.

    Only the space character separates tokens, so a line break inside the first
    three tokens stays part of a token. Raises InsufficientTokensError when the
    file holds fewer than three tokens.
    """
    path = _resolver(resolver).local(filename)
    with path.open(encoding="utf-8", newline="") as text:
        tokens = _tokens(text, TOKEN_DELIMITER)
        picked = [tok for _, tok in zip(range(TOKEN_COUNT), tokens)]
    if len(picked) < TOKEN_COUNT:
        raise InsufficientTokensError(
            f"Expected {TOKEN_COUNT} tokens in {path}, found {len(picked)}"
        )
    return " ".join(picked)


def read8(filename: str, resolver: ResourceResolver | None = None) -> str:
    """Bytes available on a binary stream read into an exactly-sized buffer, decoded raw."""
    path = _resolver(resolver).local(filename)
    with open(path, "rb") as stream:
        available = os.fstat(stream.fileno()).st_size - stream.tell()
        if available <= 0:
            return ""
        buffer = bytearray(available)
        count = stream.readinto(buffer)
    logger.debug("read8: %d of %d bytes from %s", count, available, path)
    return bytes(buffer).decode(_platform_encoding())


def read9(filename: str, resolver: ResourceResolver | None = None) -> str:
    """Whole file through a read-only memory map, copied into a buffer of the file's size."""
    path = _resolver(resolver).local(filename)
    with open(path, "rb") as handle:
        size = os.fstat(handle.fileno()).st_size
        if size == 0:
            return ""
        buffer = bytearray(size)
        with mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
            filled = len(mapped)
            buffer[:filled] = mapped[:filled]
    logger.debug("read9: mapped %d bytes from %s", filled, path)
    return bytes(buffer[:filled]).decode(_platform_encoding())


def read10(url: str, timeout: Any = None) -> str:
    """
    GET url and decode the body like read1. Any failure, including DNS errors,
    refused connections and a body cut short mid-read, raises
    requests.RequestException, which is an OSError. The body is pulled through
    iter_content so requests wraps transport errors. The status code is not
    checked; timeout=None waits indefinitely.
    """
    logger.debug("read10: GET %s", url)
    with requests.get(url, stream=True, timeout=timeout) as response:
        body = b"".join(response.iter_content(chunk_size=_HTTP_CHUNK_SIZE))
    logger.debug("read10: %d bytes from %s", len(body), url)
    return convert_stream_to_string(io.BytesIO(body))
