#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 14:20:37 krylon>
#
# /data/code/python/cidrscan/model.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.model

(c) 2026 Benjamin Walkenhorst
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from ipaddress import IPv4Address, IPv6Address
from types import MappingProxyType
from typing import Union

Address = Union[IPv4Address, IPv6Address]


@dataclass(frozen=True, slots=True, order=True)
class ProbeTarget:
    """ProbeTarget is one (host, port) pair to probe."""

    host: Address
    port: int

    def __post_init__(self) -> None:
        assert 0 < self.port < 65536, "Port must be a number between 1 and 65535"

    def __str__(self) -> str:
        if self.host.version == 6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class PortState(Enum):
    """PortState is the classification of a single probe."""

    Open = auto()
    Closed = auto()
    Timeout = auto()
    Error = auto()


@dataclass(frozen=True, slots=True)
class ProbeOutcome:
    """ProbeOutcome is the result of probing one ProbeTarget."""

    state: PortState
    detail: str = ""

    @classmethod
    def open(cls) -> 'ProbeOutcome':
        """Return an Open outcome."""
        return cls(state=PortState.Open)

    @classmethod
    def closed(cls) -> 'ProbeOutcome':
        """Return a Closed outcome."""
        return cls(state=PortState.Closed)

    @classmethod
    def timeout(cls) -> 'ProbeOutcome':
        """Return a Timeout outcome."""
        return cls(state=PortState.Timeout)

    @classmethod
    def error(cls, detail: str) -> 'ProbeOutcome':
        """Return an Error outcome carrying a description of the cause."""
        return cls(state=PortState.Error, detail=detail)

    def __str__(self) -> str:
        if self.state == PortState.Error:
            return f"Error({self.detail})"
        return self.state.name


@dataclass(frozen=True, slots=True)
class ScanReport(Mapping):
    """ScanReport maps every ProbeTarget of a scan to its ProbeOutcome.

    Entries are kept in target generation order, regardless of the order
    in which the probes finished. A report with complete=False is a
    snapshot of a scan still in progress.
    """

    results: Mapping[ProbeTarget, ProbeOutcome]
    expected: int
    complete: bool

    def __post_init__(self) -> None:
        if not isinstance(self.results, MappingProxyType):
            object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    def __getitem__(self, key: ProbeTarget) -> ProbeOutcome:
        return self.results[key]

    def __iter__(self) -> Iterator[ProbeTarget]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def by_state(self, state: PortState) -> list[ProbeTarget]:
        """Return all targets whose outcome has the given state."""
        return [t for t, o in self.results.items() if o.state == state]

    def open_targets(self) -> list[ProbeTarget]:
        """Return all targets that accepted a connection."""
        return self.by_state(PortState.Open)

    def hosts_with_open_ports(self) -> dict[Address, list[int]]:
        """Return the open ports, grouped by host."""
        hosts: dict[Address, list[int]] = {}
        for t in self.open_targets():
            hosts.setdefault(t.host, []).append(t.port)
        return hosts

    def summary(self) -> dict[PortState, int]:
        """Count the outcomes per state."""
        cnt: dict[PortState, int] = {s: 0 for s in PortState}
        for o in self.results.values():
            cnt[o.state] += 1
        return cnt


# Local Variables: #
# python-indent: 4 #
# End: #
