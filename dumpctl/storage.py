################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import errno
import os
import time

from oslo_log import log as logging

from dumpctl.common import constants
from dumpctl.common import utils
from dumpctl import exception

LOG = logging.getLogger(__name__)


def iter_path_prefixes(path):
    """Yield each successively longer prefix of an absolute path.

    iter_path_prefixes('/var/lib/coredump') -> '/var', '/var/lib',
                                               '/var/lib/coredump'
    """
    start = 1
    while True:
        sep = path.find(os.sep, start)
        if sep == -1:
            yield path
            return
        yield path[:sep]
        start = sep + 1


def open_directory(path, dir_fd=None, nofollow=False):
    flags = os.O_RDONLY | os.O_DIRECTORY
    if nofollow:
        flags |= os.O_NOFOLLOW
    return os.open(path, flags, dir_fd=dir_fd)


def ensure_directory_tree(path, mode=constants.STORAGE_DIR_MODE):
    """Create every directory of an absolute path and open the last one.

    A component that already exists is not an error, so concurrent callers
    can race on the same tree.

    Returns
    -------
    int
        File descriptor of the opened directory
    """
    if not path.startswith(os.sep):
        raise exception.InvalidStoragePath(path=path)

    for prefix in iter_path_prefixes(path):
        try:
            os.mkdir(prefix, mode)
            LOG.debug("Created storage directory %s", utils.loggable(prefix))
        except OSError as e:
            if e.errno != errno.EEXIST:
                raise exception.DirectoryCreateFailed(path=prefix,
                                                      reason=e.strerror)

    try:
        return open_directory(path)
    except OSError as e:
        raise exception.StorageOpenFailed(what="storage dir", path=path,
                                          reason=e.strerror)


def format_leaf_name(timestamp, pid, uid):
    """Name of the directory holding one crash, the timestamp taken as UTC.

    format_leaf_name(0, 1234, 0) -> '1970-01-01_00:00:00.pid=1234.uid=0'
    """
    try:
        tm = time.gmtime(timestamp)
    except (OverflowError, OSError, ValueError) as e:
        raise exception.InvalidTimestamp(timestamp=timestamp, reason=e)
    return constants.LEAF_NAME_FORMAT.format(
        time=time.strftime(constants.LEAF_TIME_FORMAT, tm), pid=pid, uid=uid)


def _name_max(dir_fd):
    try:
        return os.fpathconf(dir_fd, "PC_NAME_MAX")
    except (OSError, ValueError):
        return constants.NAME_MAX


def allocate_leaf(parent_fd, timestamp, pid, uid,
                  mode=constants.LEAF_DIR_MODE):
    """Create or reuse the crash directory below parent_fd and open it.

    The name is resolved relative to the parent descriptor and a symlink in
    its place is refused.

    Returns
    -------
    tuple(str, int)
        The leaf name and the file descriptor of the opened leaf directory
    """
    name = format_leaf_name(timestamp, pid, uid)
    length = len(os.fsencode(name))
    limit = _name_max(parent_fd)
    if length > limit:
        raise exception.LeafNameTooLong(length=length, limit=limit)

    try:
        os.mkdir(name, mode, dir_fd=parent_fd)
    except FileExistsError:
        LOG.info("Reusing existing storage dir %s", name)
    except OSError as e:
        raise exception.DirectoryCreateFailed(path=name, reason=e.strerror)

    try:
        return name, open_directory(name, dir_fd=parent_fd, nofollow=True)
    except OSError as e:
        raise exception.StorageOpenFailed(what="storage dir", path=name,
                                          reason=e.strerror)
