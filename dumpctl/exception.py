################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
"""Failures raised by dumpctl actions.

Every fatal condition is raised as a DumpctlException subclass and converted
into a log entry and a process exit status by dumpctl.cli.main.
"""

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_SETUP = 3


class DumpctlException(Exception):
    msg_fmt = "An unknown exception occurred."
    exit_code = EXIT_FAILURE

    def __init__(self, message=None, **kwargs):
        self.kwargs = kwargs
        if not message:
            message = self.msg_fmt % kwargs
        super(DumpctlException, self).__init__(message)


class UsageError(DumpctlException):
    msg_fmt = "Invalid usage: %(reason)s"
    exit_code = EXIT_USAGE


class InvalidCrashField(UsageError):
    msg_fmt = "Error: failure parsing %(name)s, '%(value)s': %(reason)s"


class StorageError(DumpctlException):
    msg_fmt = "Error: could not store core: %(reason)s"


class InvalidStoragePath(UsageError):
    msg_fmt = "Error: store requires an absolute path, but got '%(path)s'"


class DirectoryCreateFailed(StorageError):
    msg_fmt = "Error: could not create path '%(path)s', mkdir failed: %(reason)s"


class StorageOpenFailed(StorageError):
    msg_fmt = "Error: could not open %(what)s '%(path)s': %(reason)s"


class InvalidTimestamp(StorageError):
    msg_fmt = "Error: cannot convert timestamp %(timestamp)s to a date: %(reason)s"


class LeafNameTooLong(StorageError):
    msg_fmt = ("Error: formatted storage path too long "
               "(needed %(length)d bytes, limit is %(limit)d)")


class CopyFailed(StorageError):
    msg_fmt = ("Error: could not read/write core file, giving up after "
               "%(errors)d errors (%(written)d bytes written)")


class InfoWriteFailed(StorageError):
    msg_fmt = "Error: could not write %(path)s: %(reason)s"


class HookInstallFailed(DumpctlException):
    msg_fmt = "Error: could not configure the core pattern hook: %(reason)s"
    exit_code = EXIT_SETUP


class CrashNotFound(DumpctlException):
    msg_fmt = "No stored crash matches '%(match)s' in %(path)s"
