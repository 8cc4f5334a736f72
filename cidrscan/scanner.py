#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:31:06 krylon>
#
# /data/code/python/cidrscan/scanner.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.scanner

(c) 2026 Benjamin Walkenhorst

The Scanner runs probes over a TargetSet using a fixed number of worker
threads. The calling thread walks the TargetSet and feeds the targets into
a queue that holds at most one target per worker, so no more than wcnt
sockets are open at any time, no matter how large the TargetSet is.
"""


import logging
import time
from dataclasses import dataclass, field
from queue import Full, Queue, ShutDown
from threading import RLock, Thread
from typing import Final, Optional

from cidrscan import common
from cidrscan.collector import Collector, CollectorError
from cidrscan.common import ScanError
from cidrscan.model import ProbeOutcome, ProbeTarget, ScanReport
from cidrscan.probe import ProbeFunc, default_timeout, probe
from cidrscan.target import TargetSet

default_workers: Final[int] = 32
q_timeout: Final[float] = 0.25

reason_cancelled: Final[str] = "cancelled"
reason_deadline: Final[str] = "scan deadline exceeded"


@dataclass(kw_only=True, slots=True)
class Scanner:
    """Scanner probes all targets of a TargetSet in parallel.

    wcnt is the number of probes in flight at the same time, timeout the
    time budget of a single probe in seconds. If deadline is set, targets
    that have not been started <deadline> seconds after the scan began are
    not probed at all.
    """

    log: logging.Logger = field(default_factory=lambda: common.get_logger("scanner"))
    lock: RLock = field(default_factory=RLock)
    wcnt: int = default_workers
    timeout: float = default_timeout
    deadline: Optional[float] = None
    probe_fn: ProbeFunc = probe
    scanQ: Queue[ProbeTarget] = field(init=False)
    _active: bool = False
    _cancelled: bool = False
    _cancel_pending: bool = False
    _overdue: bool = False
    _stop_at: Optional[float] = None
    _failure: Optional[Exception] = None
    _collector: Optional[Collector] = None

    def __post_init__(self) -> None:
        assert self.wcnt > 0, "Scanner needs at least one worker"
        assert self.timeout > 0, "Probe timeout must be positive"
        assert self.deadline is None or self.deadline >= 0
        self.scanQ = Queue(self.wcnt)

    @property
    def active(self) -> bool:
        """Return the Scanner's active flag."""
        with self.lock:
            return self._active

    @property
    def progress(self) -> tuple[int, int]:
        """Return the number of finished targets and the total number of targets."""
        with self.lock:
            if self._collector is None:
                return 0, 0
            return self._collector.progress

    def cancel(self) -> None:
        """Stop the running scan early.

        Probes that are in flight are allowed to finish, targets that have
        not been started are recorded as cancelled. If no scan is running,
        the next call to scan() is cancelled right away.
        """
        with self.lock:
            if not self._active:
                self._cancel_pending = True
                self.log.info("Scan was cancelled before it started.")
                return
            if self._cancelled:
                return
            self._cancelled = True
        self.log.warning("Scan was cancelled, unscanned targets will not be probed.")

    def snapshot(self) -> Optional[ScanReport]:
        """Return the results gathered so far, or None if no scan was started."""
        with self.lock:
            col = self._collector
        if col is None:
            return None
        return col.finalize()

    def scan(self, targets: TargetSet) -> ScanReport:
        """Probe every target in <targets> and return the complete report."""
        with self.lock:
            if self._active:
                raise ScanError("Scanner is already running")
            self._active = True
            self._cancelled = self._cancel_pending
            self._cancel_pending = False
            self._overdue = False
            self._failure = None
            self.scanQ = Queue(self.wcnt)
            col: Final[Collector] = Collector(targets=targets)
            self._collector = col
            self._stop_at = None
            if self.deadline is not None:
                self._stop_at = time.monotonic() + self.deadline

        self.log.info("Scanning %d targets (%s x %d ports) with %d workers, timeout %.3fs",
                      len(targets),
                      targets.hosts,
                      len(targets.ports),
                      self.wcnt,
                      self.timeout)
        started: Final[float] = time.monotonic()

        workers: list[Thread] = []
        for wid in range(1, self.wcnt + 1):
            w: Thread = Thread(target=self._scan_worker,
                               name=f"scan_worker_{wid:02d}",
                               args=(wid, col),
                               daemon=False)
            w.start()
            workers.append(w)

        try:
            self._feed(targets, col)
        except BaseException:
            with self.lock:
                self._cancelled = True
            raise
        finally:
            self.scanQ.shutdown()
            for w in workers:
                w.join()
            with self.lock:
                self._active = False
                failure = self._failure

        if failure is not None:
            raise failure

        col.close()
        report: Final[ScanReport] = col.finalize()
        self.log.info("Scan of %s finished after %.2fs: %s",
                      targets.hosts,
                      time.monotonic() - started,
                      ", ".join(f"{s.name} {n}" for s, n in report.summary().items()))
        return report

    def _halt_reason(self) -> Optional[str]:
        """Return the reason why no more probes may be started, or None."""
        with self.lock:
            if self._cancelled:
                return reason_cancelled
            if self._stop_at is not None and time.monotonic() >= self._stop_at:
                if not self._overdue:
                    self._overdue = True
                    self.log.warning("Scan deadline of %.2fs has passed.", self.deadline)
                return reason_deadline
        return None

    def _feed(self, targets: TargetSet, col: Collector) -> None:
        """Hand the targets to the workers, in order."""
        self.log.debug("Feeder is coming up...")
        for t in targets:
            if not self._admit(t, col):
                self.log.error("A worker has failed, aborting scan.")
                break
        self.log.debug("Feeder is quitting.")

    def _admit(self, t: ProbeTarget, col: Collector) -> bool:
        """Queue a target for probing, or record why it was not.

        Returns False if a worker has failed and the scan must be aborted.
        """
        while True:
            with self.lock:
                if self._failure is not None:
                    return False
            reason = self._halt_reason()
            if reason is not None:
                col.record(t, ProbeOutcome.error(reason))
                return True
            try:
                self.scanQ.put(t, True, q_timeout)
                return True
            except Full:
                pass

    def _probe(self, t: ProbeTarget) -> ProbeOutcome:
        try:
            return self.probe_fn(t, self.timeout)
        except Exception as err:  # pylint: disable-msg=W0718
            cname: Final[str] = err.__class__.__name__
            self.log.error("%s probing %s: %s",
                           cname,
                           t,
                           err)
            return ProbeOutcome.error(f"{cname}: {err}")

    def _scan_worker(self, wid: int, col: Collector) -> None:
        self.log.debug("Scan worker %02d starting up.",
                       wid)
        try:
            while True:
                try:
                    t: ProbeTarget = self.scanQ.get()
                except ShutDown:
                    return

                try:
                    reason = self._halt_reason()
                    if reason is not None:
                        outcome = ProbeOutcome.error(reason)
                    else:
                        outcome = self._probe(t)
                    col.record(t, outcome)
                finally:
                    self.scanQ.task_done()
        except CollectorError as err:
            self.log.critical("Scan worker %02d: %s",
                              wid,
                              err)
            with self.lock:
                if self._failure is None:
                    self._failure = err
                self._cancelled = True
        finally:
            self.log.debug("Scan worker %02d is quitting.", wid)


# Local Variables: #
# python-indent: 4 #
# End: #
