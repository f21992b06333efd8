"""CLI entrypoint for mps7log."""

from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_INFILE, DEFAULT_USERS, DEFAULT_WIRE_VERSION, ENV_PREFIX, Settings
from .ledger import Aggregator
from .plog import Plog
from .proto import DecodeError, MPS7Parser, ProtocolState, RecordType


def report(settings: Settings, plog: Plog) -> Aggregator:
    """Decode settings.infile and print the ledger summary."""
    try:
        f = open(settings.infile, "rb")
    except OSError as e:
        raise click.ClickException(f"Error file open - {settings.infile}: {e}") from e

    with f:
        parser = MPS7Parser(f)

        if not parser.compatible(settings.wire_version):
            if parser.state is ProtocolState.RECOVERY:
                raise click.ClickException(f"Unreadable MPS7 header in {settings.infile}")
            raise click.ClickException(
                f"Incorrect MPS7 version - expecting {settings.wire_version}"
            )

        header = parser.header
        plog.verbose(
            f"header prefix={header.prefix} version={header.version} records={len(parser)}"
        )

        agg = Aggregator()
        try:
            agg.consume(parser, lambda i, rec: plog.verbose(f"{i}) {rec}"))
        except DecodeError as e:
            raise click.ClickException(f"Record decode failed - {e}") from e

    plog.info(f"total credit amount={agg.total(RecordType.CREDIT):.2f}")
    plog.info(f"total debit amount={agg.total(RecordType.DEBIT):.2f}")
    plog.info(f"autopays started={agg.count(RecordType.START_AUTOPAY)}")
    plog.info(f"autopays ended={agg.count(RecordType.END_AUTOPAY)}")
    for uid in settings.users:
        plog.info(f"balance for user {uid}={agg.balance(uid):.2f}")

    return agg


@click.command()
@click.version_option(__version__, prog_name="mps7log")
@click.option(
    "--infile",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_INFILE,
    show_default=True,
    envvar=f"{ENV_PREFIX}_INFILE",
    help="Path to binary (log) file",
)
@click.option(
    "--wire-version",
    type=click.IntRange(0, 0xFF),
    default=DEFAULT_WIRE_VERSION,
    show_default=True,
    envvar=f"{ENV_PREFIX}_WIRE_VERSION",
    help="MPS7 version the log must declare",
)
@click.option(
    "--user",
    "users",
    type=click.IntRange(0, 2**64 - 1),
    multiple=True,
    default=DEFAULT_USERS,
    envvar=f"{ENV_PREFIX}_USER",
    help="User id to report a balance for (repeatable)",
)
@click.option(
    "--verbose",
    is_flag=True,
    envvar=f"{ENV_PREFIX}_VERBOSE",
    help="Log header and every record to MPS7.log",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar=f"{ENV_PREFIX}_LOG_DIR",
    help="Directory for MPS7.log (defaults to the working directory)",
)
def main(
    infile: Path,
    wire_version: int,
    users: tuple[int, ...],
    verbose: bool,
    log_dir: Path | None,
) -> None:
    """mps7log - Summarize an MPS7 transaction log."""
    settings = Settings(
        infile=infile,
        wire_version=wire_version,
        users=tuple(users),
        verbose=verbose,
        log_dir=log_dir or Path.cwd(),
    )

    try:
        plog = Plog(settings.verbose, settings.log_dir)
    except OSError as e:
        raise click.ClickException(f"Log file create failed - {e}") from e

    with plog:
        report(settings, plog)


if __name__ == "__main__":
    main()
