from enum import Enum
from typing import BinaryIO

from .MPS7Header import MPS7Header
from .MPS7Record import MPS7Record


class Frame(Enum):
    HEADER = "header"
    RECORD = "record"


class Decoder:
    """
    Decodes MPS7 frames from a sequential byte source.

    The caller names the frame it expects; the decoder never guesses.

    Usage:
        dec = Decoder(fd)
        header = dec.decode(Frame.HEADER)
        record = dec.decode(Frame.RECORD)
    """

    def __init__(self, fd: BinaryIO) -> None:
        self._fd = fd

    def decode(self, frame: Frame) -> MPS7Header | MPS7Record:
        if frame is Frame.HEADER:
            return MPS7Header.from_stream(self._fd)
        if frame is Frame.RECORD:
            return MPS7Record.from_stream(self._fd)
        raise ValueError(f"Unknown frame: {frame!r}")
