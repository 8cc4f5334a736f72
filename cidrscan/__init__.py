#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 13:51:20 krylon>
#
# /data/code/python/cidrscan/__init__.py
# created on 18. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the CidrScan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
cidrscan.__init__

(c) 2026 Benjamin Walkenhorst
"""

# Local Variables: #
# python-indent: 4 #
# End: #
