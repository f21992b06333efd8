from typing import BinaryIO
import struct

from .errors import ReaderFailure, Truncated

# Network byte order throughout
HEADER_FORMAT = struct.Struct(">4sBI")
RECORD_PREFIX_FORMAT = struct.Struct(">BIQ")
AMOUNT_FORMAT = struct.Struct(">Q")


def read_exact(fd: BinaryIO, n: int, stage: str) -> bytes:
    """
    Read exactly n bytes from a binary stream.

    Short reads are retried until n bytes arrive or the stream reports
    end of data (an empty or None read), so raw unbuffered sources behave
    like buffered files.

    Args:
        fd: Sequential byte source exposing read(n)
        n: Number of bytes the field occupies
        stage: Decode stage for error messages (e.g., "header")

    Raises:
        ReaderFailure: If the stream raises OSError
        Truncated: If the stream ends before n bytes are available
    """
    data = b""
    while len(data) < n:
        try:
            chunk = fd.read(n - len(data))
        except OSError as e:
            raise ReaderFailure(stage, e) from e
        if not chunk:
            raise Truncated(stage, n, len(data))
        data += chunk
    return data


def double_from_bits(bits: int) -> float:
    """Reinterpret an unsigned 64-bit pattern as an IEEE-754 binary64."""
    return struct.unpack(">d", struct.pack(">Q", bits))[0]


def bits_from_double(value: float) -> int:
    return struct.unpack(">Q", struct.pack(">d", value))[0]
