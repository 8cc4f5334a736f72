#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 18:02:44 krylon>
#
# /data/code/python/cidrscan/config.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.config

(c) 2026 Benjamin Walkenhorst

Read settings from the configuration file. A config file looks like this:

    [scan]
    workers = 32
    timeout_ms = 500
    deadline = 60.0
    ports = [22, 80, 443]
    exclude_edges = false

    [dns]
    timeout = 2.5

All settings are optional.
"""

import logging
import pathlib
import tomllib
from dataclasses import dataclass, field
from typing import Any, Final, Optional, Union

from cidrscan import common
from cidrscan.common import ScanError
from cidrscan.probe import default_timeout
from cidrscan.resolve import dns_timeout
from cidrscan.scanner import default_workers
from cidrscan.target import InvalidPort, PortSet

default_ports: Final[list[int]] = [
    21,
    22,
    23,
    25,
    53,
    80,
    110,
    143,
    443,
    445,
    3306,  # MySQL
    3389,  # RDP
    5432,  # PostgreSQL
    6379,  # Redis
    8080,
]


class ConfigError(ScanError):
    """ConfigError indicates a broken configuration file."""


@dataclass(kw_only=True, slots=True)
class Config:
    """Config holds the tunable parameters of a scan."""

    workers: int = default_workers
    timeout_ms: int = int(default_timeout * 1000)
    deadline: Optional[float] = None
    ports: PortSet = field(default_factory=lambda: PortSet.from_list(default_ports))
    exclude_edges: bool = False
    dns_timeout: float = dns_timeout

    @property
    def timeout(self) -> float:
        """Return the probe timeout in seconds."""
        return self.timeout_ms / 1000.0

    @classmethod
    def load(cls, path: Optional[Union[str, pathlib.Path]] = None) -> 'Config':
        """Load the configuration from <path> or the default location.

        If the file does not exist, the defaults are used.
        """
        log: Final[logging.Logger] = common.get_logger("config")
        if path is None:
            path = common.path.config
        path = pathlib.Path(path)

        if not path.exists():
            log.debug("No configuration file at %s, using defaults.", path)
            return cls()

        try:
            with open(path, "rb") as fh:
                raw: dict[str, Any] = tomllib.load(fh)
        except tomllib.TOMLDecodeError as err:
            raise ConfigError(f"Cannot parse {path}: {err}") from err
        except OSError as err:
            raise ConfigError(f"Cannot read {path}: {err}") from err

        log.debug("Read configuration from %s", path)
        return cls.from_dict(raw, log)

    @classmethod
    def from_dict(cls, raw: dict[str, Any], log: Optional[logging.Logger] = None) -> 'Config':
        """Build a Config from the parsed content of a configuration file."""
        if log is None:
            log = common.get_logger("config")
        cfg = cls()

        for section in raw:
            if section not in ("scan", "dns"):
                log.warning("Unknown section [%s] in configuration", section)

        scan: Final[dict[str, Any]] = _section(raw, "scan")
        for key, val in scan.items():
            match key:
                case "workers":
                    cfg.workers = _positive_int(key, val)
                case "timeout_ms":
                    cfg.timeout_ms = _positive_int(key, val)
                case "deadline":
                    cfg.deadline = _positive_number(key, val)
                case "exclude_edges":
                    if not isinstance(val, bool):
                        raise ConfigError(f"scan.{key} must be true or false, not {val!r}")
                    cfg.exclude_edges = val
                case "ports":
                    cfg.ports = _ports(val)
                case _:
                    log.warning("Unknown setting scan.%s in configuration", key)

        dns: Final[dict[str, Any]] = _section(raw, "dns")
        for key, val in dns.items():
            match key:
                case "timeout":
                    cfg.dns_timeout = _positive_number(key, val)
                case _:
                    log.warning("Unknown setting dns.%s in configuration", key)

        return cfg


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    sec = raw.get(name, {})
    if not isinstance(sec, dict):
        raise ConfigError(f"[{name}] must be a table")
    return sec


def _positive_int(key: str, val: Any) -> int:
    if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
        raise ConfigError(f"{key} must be a positive integer, not {val!r}")
    return val


def _positive_number(key: str, val: Any) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)) or val <= 0:
        raise ConfigError(f"{key} must be a positive number, not {val!r}")
    return float(val)


def _ports(val: Any) -> PortSet:
    try:
        match val:
            case str():
                return PortSet.parse(val)
            case list() if all(isinstance(p, int) and not isinstance(p, bool) for p in val):
                return PortSet.from_list(val)
            case _:
                raise ConfigError(f"ports must be a list of numbers or a string, not {val!r}")
    except InvalidPort as err:
        raise ConfigError(f"Invalid port list in configuration: {err}") from err


# Local Variables: #
# python-indent: 4 #
# End: #
