#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 23:14:37 krylon>
#
# /data/code/python/cidrscan/common.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.common

(c) 2026 Benjamin Walkenhorst

Application-wide settings: where the log and config files live, and the
loggers every part of the scanner writes to. The log file records which
worker thread a message came from, since most of the work of a scan
happens in the worker pool.
"""

import logging
import logging.handlers
import os
import pathlib
import sys
from dataclasses import dataclass
from threading import Lock
from typing import Final, Optional

AppName: Final[str] = "CidrScan"
AppVersion: Final[str] = "0.1.0"

# Overrides the default base directory, e.g. for running several scans
# side by side.
basedir_env: Final[str] = f"{AppName.upper()}_BASEDIR"

log_format: Final[str] = \
    "%(asctime)s %(threadName)-16s %(name)-20s %(levelname)-8s %(message)s"
log_max_size: Final[int] = 4 * 2**20  # 4 MiB
log_max_count: Final[int] = 10
log_level_tty: int = logging.WARNING


class ScanError(Exception):
    """Base class for application-specific Exceptions."""


def default_basedir() -> pathlib.Path:
    """Return the base directory to use if none was set explicitly."""
    folder: Final[Optional[str]] = os.environ.get(basedir_env)
    if folder:
        return pathlib.Path(folder)
    return pathlib.Path.home() / f".{AppName.lower()}.d"


@dataclass(slots=True)
class Paths:
    """Paths knows where CidrScan keeps its files."""

    root: pathlib.Path

    def base(self, folder: Optional[str | os.PathLike] = None) -> pathlib.Path:
        """Return the base directory, after moving it to <folder> if given."""
        if folder:
            self.root = pathlib.Path(folder)
        return self.root

    @property
    def log(self) -> pathlib.Path:
        """Return the path of the log file."""
        return self.root / f"{AppName.lower()}.log"

    @property
    def config(self) -> pathlib.Path:
        """Return the path of the configuration file."""
        return self.root / f"{AppName.lower()}.toml"


path: Final[Paths] = Paths(default_basedir())

_lock: Final[Lock] = Lock()  # pylint: disable-msg=C0103
_cache: Final[dict[str, logging.Logger]] = {}  # pylint: disable-msg=C0103


def _drop_loggers() -> None:
    for log_obj in _cache.values():
        for handler in list(log_obj.handlers):
            log_obj.removeHandler(handler)
            handler.close()
    _cache.clear()


def set_basedir(folder: str | os.PathLike) -> None:
    """Move the base directory to <folder>.

    Loggers handed out so far are detached from the old log file, the next
    call to get_logger() opens the new one.
    """
    with _lock:
        path.base(folder)
        init_app()
        _drop_loggers()


def init_app() -> None:
    """Create the base directory if it does not exist."""
    path.root.mkdir(parents=True, exist_ok=True)


def set_tty_level(level: int) -> None:
    """Set the level of messages that are echoed to the terminal."""
    global log_level_tty  # pylint: disable-msg=W0603
    with _lock:
        log_level_tty = level
        for log_obj in _cache.values():
            for handler in log_obj.handlers:
                if not isinstance(handler, logging.FileHandler):
                    handler.setLevel(level)


def _file_handler(fmt: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path.log,
                                                   'a',
                                                   log_max_size,
                                                   log_max_count,
                                                   encoding="utf-8")
    handler.setFormatter(fmt)
    return handler


def _tty_handler(fmt: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    handler.setLevel(log_level_tty)
    return handler


def get_logger(name: str, terminal: bool = True) -> logging.Logger:
    """Return the logger for the subsystem <name>.

    Everything goes to the log file in the base directory. With <terminal>,
    messages at log_level_tty or above are echoed to stderr as well.
    """
    with _lock:
        if name in _cache:
            return _cache[name]

        init_app()
        fmt: Final[logging.Formatter] = logging.Formatter(log_format)
        log_obj: Final[logging.Logger] = logging.getLogger(f"{AppName.lower()}.{name}")
        log_obj.setLevel(logging.DEBUG)
        log_obj.propagate = False
        log_obj.addHandler(_file_handler(fmt))
        if terminal:
            log_obj.addHandler(_tty_handler(fmt))

        _cache[name] = log_obj
        return log_obj


# Local Variables: #
# python-indent: 4 #
# End: #
