#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 15:47:20 krylon>
#
# /data/code/python/cidrscan/probe.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.probe

(c) 2026 Benjamin Walkenhorst
"""

import logging
import socket
from typing import Callable, Final

from cidrscan import common
from cidrscan.model import ProbeOutcome, ProbeTarget

ProbeFunc = Callable[[ProbeTarget, float], ProbeOutcome]

default_timeout: Final[float] = 0.5


def probe(target: ProbeTarget, timeout: float) -> ProbeOutcome:
    """Attempt a TCP connection to <target> and classify the result.

    The connection is closed right after it has been established, no data
    is sent or received. Each call makes exactly one attempt.
    """
    log: Final[logging.Logger] = common.get_logger("probe")
    family: Final[int] = socket.AF_INET6 if target.host.version == 6 else socket.AF_INET
    conn: socket.socket

    try:
        conn = socket.socket(family, socket.SOCK_STREAM)
    except OSError as err:
        log.debug("Cannot create socket to probe %s: %s", target, err)
        return ProbeOutcome.error(f"cannot create socket: {err}")

    try:
        conn.settimeout(timeout)
        conn.connect((str(target.host), target.port))
    except ConnectionRefusedError:
        return ProbeOutcome.closed()
    except TimeoutError:
        return ProbeOutcome.timeout()
    except OSError as err:
        cname: Final[str] = err.__class__.__name__
        log.debug("%s trying to connect to %s - %s",
                  cname,
                  target,
                  err)
        return ProbeOutcome.error(err.strerror or str(err))
    finally:
        conn.close()

    log.debug("%s is open", target)
    return ProbeOutcome.open()


# Local Variables: #
# python-indent: 4 #
# End: #
