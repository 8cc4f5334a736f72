#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 16:09:55 krylon>
#
# /data/code/python/cidrscan/collector.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.collector

(c) 2026 Benjamin Walkenhorst
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Final

from cidrscan import common
from cidrscan.common import ScanError
from cidrscan.model import ProbeOutcome, ProbeTarget, ScanReport
from cidrscan.target import TargetSet


class CollectorError(ScanError):
    """CollectorError indicates the scan results have become inconsistent.

    This is never caused by user input, it means the scheduler is broken.
    """


class DuplicateResult(CollectorError):
    """DuplicateResult indicates a target was recorded twice."""


class UnknownTarget(CollectorError):
    """UnknownTarget indicates a result for a target that is not part of the scan."""


@dataclass(kw_only=True, slots=True)
class Collector:
    """Collector gathers the outcomes of a scan as they come in."""

    targets: TargetSet
    log: logging.Logger = field(default_factory=lambda: common.get_logger("collector"))
    lock: RLock = field(default_factory=RLock)
    _results: dict[ProbeTarget, ProbeOutcome] = field(default_factory=dict)
    _closed: bool = False

    @property
    def closed(self) -> bool:
        """Return True if the scan has finished."""
        with self.lock:
            return self._closed

    @property
    def progress(self) -> tuple[int, int]:
        """Return the number of recorded outcomes and the number of targets."""
        with self.lock:
            return len(self._results), len(self.targets)

    def record(self, target: ProbeTarget, outcome: ProbeOutcome) -> None:
        """Store the outcome for a target. Each target may be recorded once."""
        with self.lock:
            if self._closed:
                raise CollectorError(f"Result for {target} arrived after the scan was closed")
            if target in self._results:
                self.log.critical("Duplicate result for %s: %s (already have %s)",
                                  target,
                                  outcome,
                                  self._results[target])
                raise DuplicateResult(f"{target} was recorded twice")
            if target not in self.targets:
                raise UnknownTarget(f"{target} is not part of {self.targets.hosts}")
            self._results[target] = outcome

    def close(self) -> None:
        """Mark the scan as finished.

        Every target has to be recorded at this point.
        """
        with self.lock:
            cnt: Final[int] = len(self._results)
            expected: Final[int] = len(self.targets)
            if cnt != expected:
                raise CollectorError(f"Cannot close scan with {cnt} of {expected} results")
            self._closed = True

    def finalize(self) -> ScanReport:
        """Return the results as a read-only ScanReport in target order.

        If the scan has not been closed, yet, the report is a snapshot and
        is marked as incomplete.
        """
        with self.lock:
            complete: Final[bool] = self._closed
            snapshot: Final[dict[ProbeTarget, ProbeOutcome]] = dict(self._results)

        if not complete:
            self.log.debug("Snapshot of incomplete scan, %d of %d results",
                           len(snapshot),
                           len(self.targets))

        ordered: dict[ProbeTarget, ProbeOutcome] = {}
        if len(snapshot) == len(self.targets):
            for t in self.targets:
                ordered[t] = snapshot[t]
        else:
            # Do not walk a large target set for a handful of results.
            for t in sorted(snapshot, key=self._sort_key):
                ordered[t] = snapshot[t]

        return ScanReport(results=ordered,
                          expected=len(self.targets),
                          complete=complete)

    def _sort_key(self, t: ProbeTarget) -> tuple[int, int]:
        return int(t.host), self.targets.ports.index(t.port)


# Local Variables: #
# python-indent: 4 #
# End: #
