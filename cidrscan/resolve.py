#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 14:41:03 krylon>
#
# /data/code/python/cidrscan/resolve.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.resolve

(c) 2026 Benjamin Walkenhorst

Turn hostnames in a host specification into addresses.
"""

import logging
from dataclasses import dataclass, field
from ipaddress import ip_address
from typing import Final, Optional

from dns.exception import DNSException, Timeout
from dns.rcode import Rcode
from dns.resolver import (NXDOMAIN, Answer, LifetimeTimeout, NoAnswer,
                          NoNameservers, Resolver)

from cidrscan import common
from cidrscan.common import ScanError
from cidrscan.model import Address

dns_timeout: Final[float] = 2.5


class ResolveError(ScanError):
    """ResolveError indicates a hostname could not be turned into an address."""


@dataclass(kw_only=True, slots=True)
class HostResolver:
    """HostResolver looks up the address of a hostname, IPv4 first."""

    log: logging.Logger = field(default_factory=lambda: common.get_logger("resolve"))
    timeout: float = dns_timeout
    res: Optional[Resolver] = None

    def _resolver(self) -> Resolver:
        """Return the Resolver, creating it on first use."""
        if self.res is None:
            try:
                self.res = Resolver()
            except DNSException as err:
                raise ResolveError(f"Cannot set up DNS resolver: {err}") from err
            self.res.timeout = self.timeout
            self.res.lifetime = self.timeout
        return self.res

    def resolve(self, name: str) -> Address:
        """Return the first address <name> resolves to."""
        res: Final[Resolver] = self._resolver()
        for rtype in ("A", "AAAA"):
            try:
                answer: Answer = res.resolve(name, rtype)
                match answer.response.rcode():
                    case Rcode.NOERROR if answer.rrset is not None:
                        addr = ip_address(answer.rrset[0].to_text())
                        self.log.debug("Resolved %s (%s) to %s",
                                       name,
                                       rtype,
                                       addr)
                        return addr
                    case _:
                        self.log.error("Unexpected response code %s resolving %s",
                                       answer.response.rcode(),
                                       name)
            except NXDOMAIN as nx:
                raise ResolveError(f"No such host: {name}") from nx
            except NoAnswer:
                pass
            except (NoNameservers, LifetimeTimeout, Timeout) as fail:
                raise ResolveError(f"Failed to resolve {name}: {fail}") from fail
            except DNSException as err:
                raise ResolveError(f"Failed to resolve {name}: {err}") from err

        raise ResolveError(f"{name} has no address records")


# Local Variables: #
# python-indent: 4 #
# End: #
