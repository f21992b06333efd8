"""Pytest configuration and fixtures."""

import io
from typing import Callable

import pytest

from mps7log.proto import MPS7Header, MPS7Record


def build_log(records: list[MPS7Record], version: int = 1, prefix: str = "MPS7") -> bytes:
    """Encode a whole log: header followed by every record."""
    header = MPS7Header(prefix=prefix, version=version, record_count=len(records))
    return header.to_bytes() + b"".join(record.to_bytes() for record in records)


@pytest.fixture
def log_stream() -> Callable[..., io.BytesIO]:
    """Factory for in-memory MPS7 log streams."""

    def _make(records: list[MPS7Record], version: int = 1, prefix: str = "MPS7") -> io.BytesIO:
        return io.BytesIO(build_log(records, version=version, prefix=prefix))

    return _make
