class DecodeError(ValueError):
    """Base class for every failure raised while decoding an MPS7 stream."""


class Truncated(DecodeError):
    """Fewer bytes were available than a fixed-width field declares."""

    def __init__(self, stage: str, expected: int, got: int) -> None:
        self.stage = stage
        self.expected = expected
        self.got = got
        super().__init__(
            f"Truncated {stage}: expected {expected} bytes, got {got}"
        )


class ReaderFailure(DecodeError):
    """The underlying byte source raised while a field was being read."""

    def __init__(self, stage: str, cause: OSError) -> None:
        self.stage = stage
        super().__init__(f"Read failed during {stage}: {cause}")


class NotReady(DecodeError):
    """A protocol operation was called before its required state."""

    def __init__(self, state) -> None:
        self.state = state
        super().__init__(
            f"Not Ready ({state.name}): must satisfy compatibility check first"
        )


class UnrecognizedRecordType(DecodeError):
    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"Unrecognized record type tag: {tag}")
