from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from .errors import Truncated
from .wire import HEADER_FORMAT, read_exact


@dataclass(slots=True, frozen=True)
class MPS7Header:
    """
    MPS7 log header (9 bytes total).

    Binary format:
    ┌─────────────┬──────┬──────────────┐
    │ Magic       │ Ver  │ Record Count │
    │ 4 bytes     │ 1B   │ 4 bytes      │
    │ 'MPS7'      │ u8   │ u32          │
    └─────────────┴──────┴──────────────┘
    Byte order: All integers use big-endian encoding (most significant byte first).

    Decoding never judges the magic or version; that is the parser's
    compatibility check.
    """

    SIZE: ClassVar[int] = 9
    MAGIC: ClassVar[str] = "MPS7"

    prefix: str
    version: int
    record_count: int

    def matches(self, version: int) -> bool:
        return self.prefix == self.MAGIC and self.version == version

    def to_bytes(self) -> bytes:
        return HEADER_FORMAT.pack(
            self.prefix.encode("latin-1"), self.version, self.record_count
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "MPS7Header":
        if len(data) < cls.SIZE:
            raise Truncated("header", cls.SIZE, len(data))

        prefix, version, record_count = HEADER_FORMAT.unpack(data[: cls.SIZE])

        # latin-1 maps every byte to one character, so any prefix decodes
        return cls(prefix.decode("latin-1"), version, record_count)

    @classmethod
    def from_stream(cls, fd: BinaryIO) -> "MPS7Header":
        """Read and decode the header from the start of a stream."""
        return cls.from_bytes(read_exact(fd, cls.SIZE, "header"))
