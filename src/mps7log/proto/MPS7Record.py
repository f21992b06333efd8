from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import BinaryIO, ClassVar, Optional

from .errors import Truncated, UnrecognizedRecordType
from .wire import (
    AMOUNT_FORMAT,
    RECORD_PREFIX_FORMAT,
    bits_from_double,
    double_from_bits,
    read_exact,
)


class RecordType(IntEnum):
    DEBIT = 0
    CREDIT = 1
    START_AUTOPAY = 2
    END_AUTOPAY = 3

    @property
    def has_amount(self) -> bool:
        return self in (RecordType.DEBIT, RecordType.CREDIT)

    @property
    def label(self) -> str:
        return {
            RecordType.DEBIT: "Debit",
            RecordType.CREDIT: "Credit",
            RecordType.START_AUTOPAY: "StartAutopay",
            RecordType.END_AUTOPAY: "EndAutopay",
        }[self]


def _record_type(tag: int) -> RecordType:
    try:
        return RecordType(tag)
    except ValueError:
        raise UnrecognizedRecordType(tag) from None


@dataclass(slots=True, frozen=True)
class MPS7Record:
    """
    A single transaction log record.

    Binary format:
    ┌──────────┬───────────┬──────────┬──────────────────────────┐
    │ Type     │ Timestamp │ User ID  │ Amount                   │
    │ 1 byte   │ 4 bytes   │ 8 bytes  │ 8 bytes (Debit/Credit)   │
    │ u8       │ u32       │ u64      │ IEEE-754 binary64        │
    └──────────┴───────────┴──────────┴──────────────────────────┘

    Byte order: All fields use big-endian encoding (most significant byte first).
    The amount is the raw bit pattern of the double, not a numeric cast.
    Autopay records carry no amount field at all, so amount is None for them.
    """

    PREFIX_SIZE: ClassVar[int] = 13
    AMOUNT_SIZE: ClassVar[int] = 8

    kind: RecordType
    timestamp: int
    user_id: int
    amount: Optional[float] = None  # None for autopay events

    def __post_init__(self) -> None:
        if self.kind.has_amount and self.amount is None:
            raise ValueError(f"{self.kind.label} record requires an amount")
        if not self.kind.has_amount and self.amount is not None:
            raise ValueError(f"{self.kind.label} record carries no amount, got {self.amount}")

    @property
    def size(self) -> int:
        """Encoded size in bytes."""
        if self.kind.has_amount:
            return self.PREFIX_SIZE + self.AMOUNT_SIZE
        return self.PREFIX_SIZE

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    def __str__(self) -> str:
        amount = f"{self.amount:f}" if self.amount is not None else "-"
        return f"{self.kind.label}, {self.timestamp}, {self.user_id}, {amount}"

    def to_bytes(self) -> bytes:
        data = RECORD_PREFIX_FORMAT.pack(self.kind.value, self.timestamp, self.user_id)
        if self.kind.has_amount:
            data += AMOUNT_FORMAT.pack(bits_from_double(self.amount))
        return data

    @classmethod
    def from_bytes(cls, data: bytes) -> "MPS7Record":
        """
        Deserialize a record from a buffer starting at the type tag.

        Args:
            data: Binary data holding at least one whole record

        Raises:
            Truncated: If the prefix or the amount field is incomplete
            UnrecognizedRecordType: If the type tag is outside 0..3
        """
        if len(data) < cls.PREFIX_SIZE:
            raise Truncated("record prefix", cls.PREFIX_SIZE, len(data))

        tag, timestamp, user_id = RECORD_PREFIX_FORMAT.unpack(data[: cls.PREFIX_SIZE])
        kind = _record_type(tag)

        amount = None
        if kind.has_amount:
            chunk = data[cls.PREFIX_SIZE : cls.PREFIX_SIZE + cls.AMOUNT_SIZE]
            if len(chunk) < cls.AMOUNT_SIZE:
                raise Truncated("record amount", cls.AMOUNT_SIZE, len(chunk))
            amount = double_from_bits(AMOUNT_FORMAT.unpack(chunk)[0])

        return cls(kind=kind, timestamp=timestamp, user_id=user_id, amount=amount)

    @classmethod
    def from_stream(cls, fd: BinaryIO) -> "MPS7Record":
        """
        Read the next record from a stream.

        Only the amount-bearing kinds consume the extra 8 bytes; autopay
        records leave the following bytes untouched for the next call.
        """
        data = read_exact(fd, cls.PREFIX_SIZE, "record prefix")
        if _record_type(data[0]).has_amount:
            data += read_exact(fd, cls.AMOUNT_SIZE, "record amount")
        return cls.from_bytes(data)
