from enum import Enum
from typing import BinaryIO, Iterator, Optional

from .Decoder import Decoder, Frame
from .errors import DecodeError, NotReady
from .MPS7Header import MPS7Header
from .MPS7Record import MPS7Record


class ProtocolState(Enum):
    STARTING = "starting"
    COMPATIBLE = "compatible"
    READY = "ready"
    RECOVERY = "recovery"


# Forward-only; READY and RECOVERY are terminal
_TRANSITIONS: dict[ProtocolState, frozenset[ProtocolState]] = {
    ProtocolState.STARTING: frozenset({ProtocolState.COMPATIBLE, ProtocolState.RECOVERY}),
    ProtocolState.COMPATIBLE: frozenset({ProtocolState.READY}),
    ProtocolState.READY: frozenset(),
    ProtocolState.RECOVERY: frozenset(),
}

_HEADER_KNOWN = frozenset({ProtocolState.COMPATIBLE, ProtocolState.READY})


class MPS7Parser:
    """
    Protocol state machine over one MPS7 byte stream.

    The header is read at most once, on the first compatibility check.
    Records are only readable after a check has succeeded. The parser
    never closes the stream; that stays with the caller.

    Usage:
        with open("txnlog.dat", "rb") as f:
            parser = MPS7Parser(f)
            if parser.compatible(1):
                for record in parser:
                    print(record)

    Not safe for concurrent use; build one parser per stream.
    """

    def __init__(self, fd: BinaryIO) -> None:
        self._decoder = Decoder(fd)
        self._header: Optional[MPS7Header] = None
        self._state = ProtocolState.STARTING

    @property
    def state(self) -> ProtocolState:
        return self._state

    @property
    def header(self) -> Optional[MPS7Header]:
        """The cached header, or None until it has been read."""
        return self._header

    @property
    def record_count(self) -> Optional[int]:
        """Declared record count, or None while the header is unknown."""
        if self._state in _HEADER_KNOWN:
            return self._header.record_count
        return None

    def _advance(self, target: ProtocolState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise RuntimeError(
                f"Illegal protocol transition {self._state.name} -> {target.name}"
            )
        self._state = target

    def compatible(self, version: int) -> bool:
        """
        Check the stream header against the MPS7 magic and a version.

        The first call decodes the header; later calls compare against
        the cached copy and never touch the stream again. A header that
        cannot be read moves the parser to RECOVERY for good.
        """
        if self._state is ProtocolState.RECOVERY:
            return False

        if self._state is ProtocolState.STARTING:
            try:
                self._header = self._decoder.decode(Frame.HEADER)
            except DecodeError:
                self._advance(ProtocolState.RECOVERY)
                return False
            self._advance(ProtocolState.COMPATIBLE)

        if not self._header.matches(version):
            return False

        if self._state is ProtocolState.COMPATIBLE:
            self._advance(ProtocolState.READY)
        return True

    def __len__(self) -> int:
        # 0 also stands for "header unknown"; record_count tells them apart
        return self.record_count or 0

    def next(self) -> MPS7Record:
        """
        Decode the next record from the stream.

        Raises:
            NotReady: If no compatibility check has succeeded
            DecodeError: If the record cannot be decoded
        """
        if self._state is not ProtocolState.READY:
            raise NotReady(self._state)
        return self._decoder.decode(Frame.RECORD)

    def __iter__(self) -> Iterator[MPS7Record]:
        """Yield exactly len(self) records."""
        if self._state is not ProtocolState.READY:
            raise NotReady(self._state)
        for _ in range(len(self)):
            yield self.next()
