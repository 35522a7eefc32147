################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import os

from dumpctl.common import utils
from dumpctl.tests.base import BaseTestCase


class TestLoggable(BaseTestCase):

    def test_loggable(self):
        examples = [
            ("plain", "crashed", "crashed"),
            ("utf-8", "café", "café"),
            ("undecodable byte", os.fsdecode(b"cr\xffash"), "cr\\xffash"),
            ("lone surrogate", "a\ud800b", "a\\ud800b"),
            ("not a string", 1234, "1234"),
        ]
        for description, value, expected in examples:
            result = utils.loggable(value)
            self.assertEqual(expected, result, description)
            result.encode("utf-8")
