#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 23:31:02 krylon>
#
# /data/code/python/cidrscan/test_common.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.test_common

(c) 2026 Benjamin Walkenhorst
"""

import logging
import os
import pathlib
import shutil
import unittest
from datetime import datetime
from typing import Final
from unittest import mock

from cidrscan import common

test_dir: Final[str] = os.path.join(
    "/tmp",
    datetime.now().strftime(f"{common.AppName.lower()}_test_common_%Y%m%d_%H%M%S"))


class TestCommon(unittest.TestCase):
    """Test the base directory and the loggers."""

    @classmethod
    def setUpClass(cls) -> None:
        """Prepare the testing environment."""
        common.set_basedir(test_dir)

    @classmethod
    def tearDownClass(cls) -> None:
        """Clean up afterwards."""
        common.set_tty_level(logging.WARNING)
        common.set_basedir(test_dir)
        shutil.rmtree(test_dir, ignore_errors=True)

    def test_01_paths(self) -> None:
        """Log and config file live in the base directory."""
        base: Final[pathlib.Path] = pathlib.Path(test_dir)
        self.assertEqual(common.path.base(), base)
        self.assertTrue(base.is_dir())
        self.assertEqual(common.path.log, base / "cidrscan.log")
        self.assertEqual(common.path.config, base / "cidrscan.toml")

    def test_02_default_basedir(self) -> None:
        """The environment can override the default base directory."""
        with mock.patch.dict(os.environ, {common.basedir_env: "/srv/scans"}):
            self.assertEqual(common.default_basedir(), pathlib.Path("/srv/scans"))
        with mock.patch.dict(os.environ, {common.basedir_env: ""}):
            self.assertEqual(common.default_basedir(),
                             pathlib.Path.home() / ".cidrscan.d")

    def test_03_logger_cache(self) -> None:
        """Asking for the same subsystem twice yields the same logger."""
        log1: Final[logging.Logger] = common.get_logger("cache_test")
        log2: Final[logging.Logger] = common.get_logger("cache_test")
        self.assertIs(log1, log2)
        self.assertEqual(log1.name, "cidrscan.cache_test")
        self.assertFalse(log1.propagate)
        self.assertEqual(len(log1.handlers), 2)

        quiet: Final[logging.Logger] = common.get_logger("quiet_test", terminal=False)
        self.assertEqual(len(quiet.handlers), 1)
        self.assertIsInstance(quiet.handlers[0], logging.FileHandler)

    def test_04_tty_level(self) -> None:
        """Changing the terminal level leaves the log file alone."""
        log: Final[logging.Logger] = common.get_logger("tty_test")
        common.set_tty_level(logging.INFO)
        try:
            for handler in log.handlers:
                if isinstance(handler, logging.FileHandler):
                    self.assertEqual(handler.level, logging.NOTSET)
                else:
                    self.assertEqual(handler.level, logging.INFO)
            # Loggers created later pick up the new level, too.
            later: Final[logging.Logger] = common.get_logger("tty_test_later")
            levels = [h.level for h in later.handlers
                      if not isinstance(h, logging.FileHandler)]
            self.assertEqual(levels, [logging.INFO])
        finally:
            common.set_tty_level(logging.WARNING)

    def test_05_move_basedir(self) -> None:
        """After moving the base directory, messages go to the new log file."""
        old_log: Final[logging.Logger] = common.get_logger("move_test", terminal=False)
        old_log.info("before the move")
        elsewhere: Final[str] = os.path.join(test_dir, "elsewhere")

        common.set_basedir(elsewhere)
        try:
            self.assertEqual(old_log.handlers, [])
            new_log: Final[logging.Logger] = common.get_logger("move_test", terminal=False)
            new_log.info("after the move")
            for handler in new_log.handlers:
                handler.flush()

            moved: Final[str] = (pathlib.Path(elsewhere) / "cidrscan.log").read_text("utf-8")
            self.assertIn("after the move", moved)
            self.assertNotIn("before the move", moved)
            self.assertIn("MainThread", moved)
        finally:
            common.set_basedir(test_dir)


# Local Variables: #
# python-indent: 4 #
# End: #
