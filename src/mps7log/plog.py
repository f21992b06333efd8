"""
Diagnostics sink for the MPS7Log command line.

info() always reaches stdout; verbose() only reaches the log file, and
only when verbose output was requested.
"""

import itertools
import logging
from pathlib import Path
from typing import Optional

import click

LOG_PREFIX = "MPS7"

_instances = itertools.count()


class Plog:
    """
    Console and file logger for one CLI run.

    Usage:
        with Plog(verbose=True, log_dir=Path.cwd()) as plog:
            plog.info("balance for user 12=8.99")
            plog.verbose("0) Credit, 1000000000, 12, 8.990000")
    """

    def __init__(self, verbose: bool = False, log_dir: Optional[Path] = None) -> None:
        self._verbose = verbose
        self._handler: Optional[logging.FileHandler] = None
        # One child logger per sink so concurrent sinks never share handlers
        self._logger = logging.getLogger(f"{__name__}.{next(_instances)}")

        if verbose:
            path = Path(log_dir or Path.cwd()) / f"{LOG_PREFIX}.log"
            self._handler = logging.FileHandler(path, mode="w", encoding="utf-8")
            self._handler.setFormatter(
                logging.Formatter(
                    f"{LOG_PREFIX}:%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S"
                )
            )
            self._logger.addHandler(self._handler)
            self._logger.setLevel(logging.INFO)
            self._logger.propagate = False

    @property
    def path(self) -> Optional[Path]:
        """Log file path, or None when not verbose."""
        if self._handler is None:
            return None
        return Path(self._handler.baseFilename)

    def info(self, msg: str) -> None:
        click.echo(msg)
        if self._verbose:
            self._logger.info(msg)

    def verbose(self, msg: str) -> None:
        if self._verbose:
            self._logger.info(msg)

    def close(self) -> None:
        if self._handler is not None:
            self._handler.flush()
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None

    def __enter__(self) -> "Plog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
