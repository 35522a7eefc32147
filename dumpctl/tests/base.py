################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import io
import os

import fixtures
from oslo_config import fixture as config_fixture
from testtools import TestCase

from dumpctl import config


class FakeLog(object):
    def __init__(self):
        self.logs = {"info": [], "warning": [], "error": []}

    def clear_logs(self):
        self.logs = {"info": [], "warning": [], "error": []}

    def _add(self, level, string_log, *args):
        self.logs[level].append(string_log % args if args else string_log)

    def info(self, string_log, *args):
        self._add('info', string_log, *args)

    def debug(self, string_log, *args):
        self._add('info', string_log, *args)

    def warning(self, string_log, *args):
        self._add('warning', string_log, *args)

    def error(self, string_log, *args):
        self._add('error', string_log, *args)

    def critical(self, string_log, *args):
        self._add('error', string_log, *args)

    def get_all(self):
        return "\n".join("%s: %s" % (k, v) for k, v in self.logs.items())


class FlakyStream(object):
    """Binary stream whose first read_failures readinto() calls fail."""

    def __init__(self, content, read_failures=0, none_reads=0):
        self.stream = io.BytesIO(content)
        self.read_failures = read_failures
        self.none_reads = none_reads
        self.calls = 0

    def readinto(self, b):
        self.calls += 1
        if self.read_failures:
            self.read_failures -= 1
            raise OSError(5, "Input/output error")
        if self.none_reads:
            self.none_reads -= 1
            return None
        return self.stream.readinto(b)


class FlakyWriter(object):
    """Stand-in for os.write that fails, stalls or writes short."""

    def __init__(self, failures=0, zero_writes=0, max_chunk=None):
        self.real_write = os.write
        self.failures = failures
        self.zero_writes = zero_writes
        self.max_chunk = max_chunk
        self.calls = 0

    def __call__(self, fd, data):
        self.calls += 1
        if self.failures:
            self.failures -= 1
            raise OSError(28, "No space left on device")
        if self.zero_writes:
            self.zero_writes -= 1
            return 0
        if self.max_chunk is not None:
            data = data[:self.max_chunk]
        return self.real_write(fd, data)


class MockedStdin(object):
    def __init__(self, coredump_content):
        self.buffer = io.BytesIO(coredump_content)


class BaseTestCase(TestCase):

    def setUp(self):
        """Run before each test method to initialize test environment."""
        super(BaseTestCase, self).setUp()

        self.fake_log = FakeLog()
        for module in ('transfer', 'storage', 'store', 'hook', 'catalog',
                       'cli'):
            self.useFixture(
                fixtures.MonkeyPatch('dumpctl.%s.LOG' % module, self.fake_log))

        self.config_fixture = self.useFixture(config_fixture.Config(config.CONF))
        self.tempdir = self.useFixture(fixtures.TempDir()).path

    def read_file(self, path, mode="rb"):
        with open(path, mode) as f:
            return f.read()

    def write_file(self, path, content):
        with open(path, "wb") as f:
            f.write(content)
