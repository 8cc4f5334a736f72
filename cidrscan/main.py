#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 18:40:12 krylon>
#
# /data/code/python/cidrscan/main.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.main

(c) 2026 Benjamin Walkenhorst
"""


import argparse
import logging
import pathlib
import sys
from threading import Thread
from typing import Final, Optional, Sequence

from cidrscan import common
from cidrscan.config import Config
from cidrscan.model import PortState, ScanReport
from cidrscan.resolve import HostResolver
from cidrscan.scanner import Scanner
from cidrscan.target import CidrBlock, PortSet, expand


def build_parser() -> argparse.ArgumentParser:
    """Return the command line parser."""
    argp: argparse.ArgumentParser = argparse.ArgumentParser(
        prog=common.AppName.lower(),
        description="Find open TCP ports on a range of hosts.")
    argp.add_argument("hosts",
                      help="The hosts to scan in CIDR notation, e.g. 192.168.1.1/24")
    argp.add_argument("ports",
                      nargs="?",
                      help="Comma separated ports and port ranges, e.g. 22,80,8000-8080")
    argp.add_argument("-t", "--timeout-ms",
                      type=int,
                      help="How long to wait for a single connection attempt")
    argp.add_argument("-w", "--workers",
                      type=int,
                      help="The number of connection attempts to run in parallel")
    argp.add_argument("-d", "--deadline",
                      type=float,
                      help="Do not start new probes after this many seconds")
    argp.add_argument("-e", "--exclude-edges",
                      action="store_true",
                      help="Skip the network and broadcast address of IPv4 networks")
    argp.add_argument("-a", "--all",
                      action="store_true",
                      help="List all targets, not just the open ones")
    argp.add_argument("-v", "--verbose",
                      action="store_true",
                      help="Print informational messages")
    argp.add_argument("-b", "--basedir",
                      type=pathlib.Path,
                      default=common.path.base(),
                      help="Directory to store application data in")
    return argp


def print_report(report: ScanReport, show_all: bool = False) -> None:
    """Print the results of a scan."""
    for target, outcome in report.items():
        if show_all or outcome.state == PortState.Open:
            print(f"{target}\t{outcome}")

    summary: Final[str] = ", ".join(f"{n} {s.name.lower()}"
                                    for s, n in report.summary().items())
    print(f"{len(report)} targets: {summary}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a scan from the command line and return the exit status."""
    argp: Final[argparse.ArgumentParser] = build_parser()
    args = argp.parse_args(argv)
    common.set_basedir(args.basedir)
    if args.verbose:
        common.set_tty_level(logging.INFO)

    log: Final[logging.Logger] = common.get_logger("main")

    try:
        cfg: Config = Config.load()
        if args.timeout_ms is not None:
            if args.timeout_ms <= 0:
                argp.error("--timeout-ms must be positive")
            cfg.timeout_ms = args.timeout_ms
        if args.workers is not None:
            if args.workers <= 0:
                argp.error("--workers must be positive")
            cfg.workers = args.workers
        if args.deadline is not None:
            if args.deadline < 0:
                argp.error("--deadline must not be negative")
            cfg.deadline = args.deadline
        if args.exclude_edges:
            cfg.exclude_edges = True

        ports: PortSet = cfg.ports
        if args.ports is not None:
            ports = PortSet.parse(args.ports)
        hosts: CidrBlock = CidrBlock.parse(args.hosts,
                                           exclude_edges=cfg.exclude_edges,
                                           resolver=HostResolver(timeout=cfg.dns_timeout))
    except common.ScanError as err:
        log.error("%s", err)
        print(f"{common.AppName}: {err}", file=sys.stderr)
        return 1

    scanner: Final[Scanner] = Scanner(wcnt=cfg.workers,
                                      timeout=cfg.timeout,
                                      deadline=cfg.deadline)
    result: list[ScanReport] = []

    def run() -> None:
        result.append(scanner.scan(expand(hosts, ports)))

    worker: Final[Thread] = Thread(target=run, name="scan_main", daemon=False)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(0.5)
    except KeyboardInterrupt:
        print("Cancelling scan, waiting for running probes to finish.", file=sys.stderr)
        scanner.cancel()
        worker.join()

    if not result:
        # The scan thread died, its exception has been reported already.
        return 1

    print_report(result[0], args.all)
    return 0


if __name__ == '__main__':
    sys.exit(main())

# Local Variables: #
# python-indent: 4 #
# End: #
