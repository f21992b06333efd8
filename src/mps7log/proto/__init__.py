"""MPS7 wire format decoding for MPS7Log."""

from .errors import (
    DecodeError,
    NotReady,
    ReaderFailure,
    Truncated,
    UnrecognizedRecordType,
)
from .MPS7Header import MPS7Header
from .MPS7Record import MPS7Record, RecordType
from .Decoder import Decoder, Frame
from .MPS7Parser import MPS7Parser, ProtocolState

__all__ = [
    "MPS7Header",
    "MPS7Record",
    "RecordType",
    "Decoder",
    "Frame",
    "MPS7Parser",
    "ProtocolState",
    "DecodeError",
    "NotReady",
    "ReaderFailure",
    "Truncated",
    "UnrecognizedRecordType",
]
