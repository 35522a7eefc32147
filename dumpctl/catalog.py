################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
"""Read back the cores stored by the store action.

Nothing here writes below the storage directory.
"""
import collections
import os
import re
import subprocess
import sys

from oslo_log import log as logging

from dumpctl.common import constants
from dumpctl.common import utils
from dumpctl import exception

LOG = logging.getLogger(__name__)

_LEAF_RE = re.compile(constants.LEAF_NAME_REGEX)

StoredCrash = collections.namedtuple(
    "StoredCrash", ["name", "directory", "time", "pid", "uid", "info",
                    "core_size"])


def parse_leaf_name(name):
    """Split a crash directory name into (time, pid, uid), or None."""
    match = _LEAF_RE.match(name)
    if not match:
        return None
    return match.group(1), int(match.group(2)), int(match.group(3))


def read_info(path):
    """Read an info.txt record into an ordered dict of strings.

    Lines without a 'key: value' separator are skipped.
    """
    info = collections.OrderedDict()
    try:
        with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
            for line in f:
                key, sep, value = line.rstrip("\n").partition(": ")
                if sep:
                    info[key] = value
    except FileNotFoundError:
        LOG.debug("No record in %s", utils.loggable(path))
    except OSError as e:
        raise exception.StorageOpenFailed(what="crash record", path=path,
                                          reason=e.strerror)
    return info


def _core_size(directory):
    try:
        return os.stat(os.path.join(directory, constants.CORE_FILE)).st_size
    except FileNotFoundError:
        return None
    except OSError as e:
        raise exception.StorageOpenFailed(
            what="core file",
            path=os.path.join(directory, constants.CORE_FILE),
            reason=e.strerror)


def scan(root_dir):
    """Return the stored crashes below root_dir, oldest first."""
    crashes = []
    try:
        entries = sorted(os.scandir(root_dir), key=lambda e: e.name)
    except FileNotFoundError:
        LOG.info("Storage dir %s does not exist", utils.loggable(root_dir))
        return crashes
    except OSError as e:
        raise exception.StorageOpenFailed(what="storage dir", path=root_dir,
                                          reason=e.strerror)

    for entry in entries:
        parsed = parse_leaf_name(entry.name)
        if parsed is None or not entry.is_dir(follow_symlinks=False):
            continue
        time_str, pid, uid = parsed
        crashes.append(StoredCrash(
            name=entry.name,
            directory=entry.path,
            time=time_str,
            pid=pid,
            uid=uid,
            info=read_info(os.path.join(entry.path, constants.INFO_FILE)),
            core_size=_core_size(entry.path)))
    return crashes


def select(crashes, match=None):
    """Crashes whose pid, comm or directory name equals match.

    Without a match, only the most recent crash is selected.
    """
    if match is None:
        return crashes[-1:]
    return [c for c in crashes
            if match in (str(c.pid), c.name, c.info.get("comm"))]


def _find(root_dir, match):
    found = select(scan(root_dir), match)
    if not found:
        raise exception.CrashNotFound(match=match or "*", path=root_dir)
    return found


def list_crashes(root_dir, out=None):
    out = out or sys.stdout
    crashes = scan(root_dir)
    if not crashes:
        out.write("No coredumps found.\n")
        return crashes

    row = "{:<19}  {:>8}  {:>6}  {:>4}  {:<8}  {}\n"
    out.write(row.format("TIME", "PID", "UID", "SIG", "COREFILE", "EXE"))
    for crash in crashes:
        out.write(row.format(
            crash.time, crash.pid, crash.uid,
            crash.info.get("signal", "-"),
            "present" if crash.core_size is not None else "missing",
            crash.info.get("comm", "-")))
    return crashes


def show_info(root_dir, match=None, out=None):
    out = out or sys.stdout
    crashes = _find(root_dir, match)
    for i, crash in enumerate(crashes):
        if i:
            out.write("\n")
        out.write("directory: %s\n" % crash.directory)
        for key, value in crash.info.items():
            out.write("%s: %s\n" % (key, value))
        if crash.core_size is None:
            out.write("core: missing\n")
        else:
            out.write("core: %d bytes\n" % crash.core_size)
    return crashes


def executable_path(info):
    """Executable path of a record with the kernel's '!' mangling undone."""
    path = info.get("path", "")
    return path.replace("!", "/")


def run_gdb(root_dir, match=None, gdb_command="gdb"):
    """Run the debugger on the most recent crash matching match."""
    crash = _find(root_dir, match)[-1]
    if crash.core_size is None:
        raise exception.CrashNotFound(
            "Crash %s has no core file" % crash.name,
            match=match or "*", path=root_dir)

    core = os.path.join(crash.directory, constants.CORE_FILE)
    exe = executable_path(crash.info)
    if exe:
        cmd = [gdb_command, exe, core]
    else:
        cmd = [gdb_command, "--core", core]
    LOG.info("Running %s", utils.loggable(" ".join(cmd)))
    try:
        return subprocess.call(cmd)
    except OSError as e:
        raise exception.DumpctlException(
            "Failed to run %s: %s" % (gdb_command, e))
