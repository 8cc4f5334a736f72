#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 21:49:13 krylon>
#
# /data/code/python/cidrscan/test_main.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.test_main

(c) 2026 Benjamin Walkenhorst
"""

import io
import os
import shutil
import socket
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime
from typing import Final
from unittest import mock

from cidrscan import common
from cidrscan.main import main

test_dir: Final[str] = os.path.join(
    "/tmp",
    datetime.now().strftime(f"{common.AppName.lower()}_test_main_%Y%m%d_%H%M%S"))


class TestMain(unittest.TestCase):
    """Test the command line interface."""

    @classmethod
    def setUpClass(cls) -> None:
        """Prepare the testing environment."""
        common.set_basedir(test_dir)

    @classmethod
    def tearDownClass(cls) -> None:
        """Clean up afterwards."""
        shutil.rmtree(test_dir, ignore_errors=True)

    def run_main(self, *argv: str) -> tuple[int, str, str]:
        """Run main() and return the exit status and output."""
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(["--basedir", test_dir, *argv])
        return status, out.getvalue(), err.getvalue()

    def test_01_scan_loopback(self) -> None:
        """Scan a listener on the loopback interface."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.bind(("127.0.0.1", 0))
            listener.listen(4)
            port: Final[int] = listener.getsockname()[1]

            status, out, _ = self.run_main("127.0.0.1/32", str(port), "--timeout-ms", "500")

        self.assertEqual(status, 0)
        self.assertIn(f"127.0.0.1:{port}\tOpen", out)
        self.assertIn("1 targets: 1 open", out)

    def test_02_invalid_ports(self) -> None:
        """A broken port list fails before anything is probed."""
        with mock.patch("cidrscan.scanner.Scanner.scan") as scan:
            status, _, err = self.run_main("10.0.0.0/30", "80,,443")
        self.assertEqual(status, 1)
        self.assertIn("Empty port", err)
        scan.assert_not_called()

    def test_03_invalid_cidr(self) -> None:
        """A broken host specification fails before anything is probed."""
        with mock.patch("cidrscan.scanner.Scanner.scan") as scan:
            status, _, err = self.run_main("192.168.1.1/33", "80")
        self.assertEqual(status, 1)
        self.assertIn("out of range", err)
        scan.assert_not_called()

    def test_04_bad_option(self) -> None:
        """Nonsensical option values are usage errors."""
        with self.assertRaises(SystemExit):
            self.run_main("10.0.0.0/30", "80", "--workers", "0")


# Local Variables: #
# python-indent: 4 #
# End: #
