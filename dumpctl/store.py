################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import collections
import os
import re
import sys

from oslo_log import log as logging

from dumpctl.common import constants
from dumpctl.common import utils
from dumpctl import exception
from dumpctl import storage
from dumpctl import transfer

LOG = logging.getLogger(__name__)

_HEX_RE = re.compile(r"0[xX][0-9a-fA-F]+")
_OCT_RE = re.compile(r"0[0-7]*")
_DEC_RE = re.compile(r"[1-9][0-9]*")


def parse_unum(value, name):
    """Parse an unsigned number the way strtoumax(value, &end, 0) reads it.

    A 0x prefix means hexadecimal and a leading 0 means octal. Signs,
    whitespace, trailing characters and values that do not fit in 64 bits
    are rejected.

    parse_unum('0x1A', 'pid') -> 26
    parse_unum('017', 'pid')  -> 15
    """
    if not value:
        raise exception.InvalidCrashField(name=name, value=value,
                                          reason="empty value")
    if _HEX_RE.fullmatch(value):
        number = int(value, 16)
    elif _OCT_RE.fullmatch(value):
        number = int(value, 8)
    elif _DEC_RE.fullmatch(value):
        number = int(value, 10)
    elif value[:1] in ("-", "+"):
        raise exception.InvalidCrashField(name=name, value=value,
                                          reason="not an unsigned number")
    else:
        raise exception.InvalidCrashField(
            "Error: trailing characters in %s, '%s'" % (name, value),
            name=name, value=value)

    if number > constants.UINTMAX_MAX:
        raise exception.InvalidCrashField(name=name, value=value,
                                          reason="Numerical result out of range")
    return number


_CrashRecord = collections.namedtuple(
    "CrashRecord",
    ["pid", "uid", "gid", "signal", "timestamp", "core_limit", "comm", "path"])


class CrashRecord(_CrashRecord):
    """Metadata the kernel passes along with a core."""

    __slots__ = ()

    @classmethod
    def from_args(cls, args):
        """Build a record from the store arguments.

        args is '%P %u %g %s %t %c %e [%E]'. The core limit (%c) is kept as
        given and is not used. The executable path (%E) is kept verbatim,
        the kernel replaces its '/' with '!'.
        """
        if not constants.STORE_ARGS_MIN <= len(args) <= constants.STORE_ARGS_MAX:
            raise exception.UsageError(
                "Error: store requires %d or %d arguments, got %d"
                % (constants.STORE_ARGS_MIN, constants.STORE_ARGS_MAX,
                   len(args)))
        return cls(pid=parse_unum(args[0], "pid"),
                   uid=parse_unum(args[1], "uid"),
                   gid=parse_unum(args[2], "gid"),
                   signal=parse_unum(args[3], "signal"),
                   timestamp=parse_unum(args[4], "timestamp"),
                   core_limit=args[5],
                   comm=args[6],
                   path=args[7] if len(args) > 7 else "")

    def info_lines(self):
        return ["%s: %s\n" % (key, getattr(self, key))
                for key in constants.INFO_KEYS]


StoreResult = collections.namedtuple("StoreResult",
                                     ["directory", "core_bytes", "record"])


def validate_store_args(root_dir, args):
    errors = []
    count = len(args)
    if count not in (constants.STORE_ARGS_MIN, constants.STORE_ARGS_MAX):
        errors.append("store requires %d or %d arguments, got %d"
                      % (constants.STORE_ARGS_MIN, constants.STORE_ARGS_MAX,
                         count))
    if not root_dir.startswith(os.sep):
        errors.append("store requires an absolute path, but got '%s'"
                      % root_dir)
    if errors:
        raise exception.UsageError("Error: " + "; ".join(errors))


def _open_stored_file(leaf_fd, name, leaf):
    try:
        return os.open(name, os.O_CREAT | os.O_WRONLY,
                       constants.STORED_FILE_MODE, dir_fd=leaf_fd)
    except OSError as e:
        raise exception.StorageOpenFailed(what="%s file" % name,
                                          path=os.path.join(leaf, name),
                                          reason=e.strerror)


def write_core(leaf_fd, leaf, in_stream, buffer_size, max_errors):
    core_fd = _open_stored_file(leaf_fd, constants.CORE_FILE, leaf)
    try:
        return transfer.copy_stream_to_fd(core_fd, in_stream,
                                          buffer_size=buffer_size,
                                          max_errors=max_errors)
    finally:
        os.close(core_fd)


def write_info(leaf_fd, leaf, record):
    info_fd = _open_stored_file(leaf_fd, constants.INFO_FILE, leaf)
    path = os.path.join(leaf, constants.INFO_FILE)
    try:
        with os.fdopen(info_fd, "w", encoding="utf-8",
                       errors="surrogateescape") as f:
            f.writelines(record.info_lines())
    except OSError as e:
        raise exception.InfoWriteFailed(path=path, reason=e.strerror or e)


def store(root_dir, args, in_stream=None,
          buffer_size=constants.COPY_BUFFER_SIZE,
          max_errors=constants.MAX_COPY_ERRORS):
    """Store the core read from in_stream below root_dir.

    Parameters
    ----------
    root_dir : str
        Absolute path of the storage root, created if missing
    args : list
        The 7 or 8 tokens the kernel passes after 'store'
    in_stream : binary file object
        The core image, stdin by default

    Returns
    -------
    StoreResult
        Leaf directory path, number of core bytes stored and the record
    """
    validate_store_args(root_dir, args)
    record = CrashRecord.from_args(args)
    if in_stream is None:
        in_stream = sys.stdin.buffer

    LOG.critical("Process %s (%s) of user %s dumped core."
                 % (record.pid, utils.loggable(record.comm), record.uid))

    root_fd = storage.ensure_directory_tree(root_dir)
    try:
        name, leaf_fd = storage.allocate_leaf(root_fd, record.timestamp,
                                              record.pid, record.uid)
    finally:
        os.close(root_fd)

    leaf = os.path.join(root_dir, name)
    try:
        core_bytes = write_core(leaf_fd, leaf, in_stream,
                                buffer_size, max_errors)
        LOG.info("Wrote %d bytes of core to %s", core_bytes,
                 utils.loggable(os.path.join(leaf, constants.CORE_FILE)))
        write_info(leaf_fd, leaf, record)
    finally:
        os.close(leaf_fd)

    return StoreResult(directory=leaf, core_bytes=core_bytes, record=record)
