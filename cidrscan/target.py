#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 15:12:48 krylon>
#
# /data/code/python/cidrscan/target.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.target

(c) 2026 Benjamin Walkenhorst

Expand host and port specifications into the set of targets to probe.

Host specifications look like 192.168.1.1/24, 10.0.0.7 (a single host),
2001:db8::/126 or www.example.com/30. Port specifications are comma
separated lists of ports and ranges, e.g. 22,80,110-120. A lone "-" means
all ports.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from ipaddress import (IPv4Network, IPv6Network, ip_address, ip_network)
from typing import Final, Optional, Union

from cidrscan.common import ScanError
from cidrscan.model import Address, ProbeTarget
from cidrscan.resolve import HostResolver, ResolveError

port_min: Final[int] = 1
port_max: Final[int] = 65535
prefix_max: Final[int] = 128


class InvalidCidr(ScanError):
    """InvalidCidr indicates a malformed host specification."""


class InvalidPort(ScanError):
    """InvalidPort indicates a malformed port specification."""


@dataclass(frozen=True, slots=True)
class CidrBlock:
    """CidrBlock is a range of addresses given by a base address and a prefix length.

    All addresses of the range are part of the expansion, including the
    network and broadcast address. With exclude_edges, IPv4 blocks of
    four or more addresses leave those two out.
    """

    net: Union[IPv4Network, IPv6Network]
    exclude_edges: bool = False

    @classmethod
    def parse(cls,
              spec: str,
              exclude_edges: bool = False,
              resolver: Optional[HostResolver] = None) -> 'CidrBlock':
        """Parse a host specification.

        A hostname in place of the address is resolved, the resolver is
        created on demand if none is passed in.
        """
        spec = spec.strip()
        if spec == "":
            raise InvalidCidr("Missing address")

        host, sep, mask = spec.partition("/")
        if host == "":
            raise InvalidCidr(f"Missing address in {spec!r}")

        prefix: Optional[int] = None
        if sep:
            if not (mask.isascii() and mask.isdigit()):
                raise InvalidCidr(f"Bad netmask {mask!r} in {spec!r}")
            prefix = int(mask)
            if prefix > prefix_max:
                raise InvalidCidr(f"Prefix length {prefix} is out of range 0-{prefix_max}")

        addr: Address
        try:
            addr = ip_address(host)
        except ValueError as verr:
            if ":" in host or all(c.isdigit() or c == "." for c in host):
                raise InvalidCidr(f"Bad IP address {host!r}") from verr
            if resolver is None:
                resolver = HostResolver()
            try:
                addr = resolver.resolve(host)
            except ResolveError as err:
                raise InvalidCidr(f"Cannot resolve {host!r}: {err}") from err

        bits: Final[int] = addr.max_prefixlen
        if prefix is None:
            prefix = bits
        elif prefix > bits:
            raise InvalidCidr(
                f"Prefix length {prefix} is out of range 0-{bits} for IPv{addr.version}")

        return cls(net=ip_network(f"{addr}/{prefix}", strict=False),
                   exclude_edges=exclude_edges)

    @property
    def prefix(self) -> int:
        """Return the prefix length."""
        return self.net.prefixlen

    @property
    def _trim_edges(self) -> bool:
        return self.exclude_edges and self.net.version == 4 and self.net.prefixlen <= 30

    def __len__(self) -> int:
        cnt: int = self.net.num_addresses
        if self._trim_edges:
            cnt -= 2
        return cnt

    def __iter__(self) -> Iterator[Address]:
        first: int = int(self.net.network_address)
        last: int = int(self.net.broadcast_address)
        if self._trim_edges:
            first += 1
            last -= 1
        addr_class = type(self.net.network_address)
        for i in range(first, last + 1):
            yield addr_class(i)

    def __contains__(self, addr: object) -> bool:
        if not isinstance(addr, type(self.net.network_address)):
            return False
        if addr not in self.net:
            return False
        if self._trim_edges:
            return addr not in (self.net.network_address, self.net.broadcast_address)
        return True

    def __str__(self) -> str:
        return str(self.net)


def _parse_port(token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise InvalidPort(f"{token!r} is not a port number")
    port: Final[int] = int(token)
    if not port_min <= port <= port_max:
        raise InvalidPort(f"Port {port} is out of range {port_min}-{port_max}")
    return port


def _expand_token(token: str) -> Iterable[int]:
    token = token.strip()
    if token == "":
        raise InvalidPort("Empty port in port list")
    if token == "-":
        return range(port_min, port_max + 1)
    if "-" in token:
        lo, _, hi = token.partition("-")
        first = _parse_port(lo)
        last = _parse_port(hi)
        if first > last:
            raise InvalidPort(f"Port range {token!r} is reversed")
        return range(first, last + 1)
    return (_parse_port(token), )


@dataclass(frozen=True, slots=True)
class PortSet:
    """PortSet is an ordered, duplicate-free set of port numbers."""

    ports: tuple[int, ...]
    _rank: dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_rank", {p: i for i, p in enumerate(self.ports)})
        if len(self.ports) == 0:
            raise InvalidPort("Port list is empty")
        if len(self._rank) != len(self.ports):
            raise InvalidPort("Port list contains duplicates")
        for p in self.ports:
            if not port_min <= p <= port_max:
                raise InvalidPort(f"Port {p} is out of range {port_min}-{port_max}")

    @classmethod
    def parse(cls, spec: str) -> 'PortSet':
        """Parse a comma separated list of ports and port ranges."""
        seen: set[int] = set()
        ports: list[int] = []
        for token in spec.split(","):
            for p in _expand_token(token):
                if p not in seen:
                    seen.add(p)
                    ports.append(p)
        return cls(ports=tuple(ports))

    @classmethod
    def from_list(cls, ports: Iterable[int]) -> 'PortSet':
        """Create a PortSet from a sequence of port numbers, dropping duplicates."""
        return cls(ports=tuple(dict.fromkeys(ports)))

    def __len__(self) -> int:
        return len(self.ports)

    def __iter__(self) -> Iterator[int]:
        return iter(self.ports)

    def __contains__(self, port: object) -> bool:
        return port in self._rank

    def index(self, port: int) -> int:
        """Return the position of <port> in the PortSet."""
        return self._rank[port]

    def __str__(self) -> str:
        return ",".join(str(p) for p in self.ports)


@dataclass(frozen=True, slots=True)
class TargetSet:
    """TargetSet is the cartesian product of a CidrBlock and a PortSet.

    Iterating it yields ProbeTargets host by host, all ports of a host in
    PortSet order before moving on. It can be iterated any number of times.
    """

    hosts: CidrBlock
    ports: PortSet

    def __len__(self) -> int:
        return len(self.hosts) * len(self.ports)

    def __iter__(self) -> Iterator[ProbeTarget]:
        for host in self.hosts:
            for port in self.ports:
                yield ProbeTarget(host=host, port=port)

    def __contains__(self, target: object) -> bool:
        return isinstance(target, ProbeTarget) and \
            target.host in self.hosts and \
            target.port in self.ports


def expand(cidr: CidrBlock, ports: PortSet) -> TargetSet:
    """Return the lazy sequence of all (host, port) pairs to probe."""
    return TargetSet(hosts=cidr, ports=ports)


# Local Variables: #
# python-indent: 4 #
# End: #
