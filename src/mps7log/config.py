from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_INFILE = Path("txnlog.dat")
DEFAULT_WIRE_VERSION = 1
DEFAULT_USERS = (2456938384156277127,)

# Every CLI option also reads MPS7_<OPTION> from the environment
ENV_PREFIX = "MPS7"


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved options for one report run."""

    infile: Path = DEFAULT_INFILE
    wire_version: int = DEFAULT_WIRE_VERSION
    users: tuple[int, ...] = DEFAULT_USERS
    verbose: bool = False
    log_dir: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        if not 0 <= self.wire_version <= 0xFF:
            raise ValueError(f"Wire version must fit in one byte, got {self.wire_version}")
