################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################

DUMPCTL_PROG = "dumpctl"
DEFAULT_STORAGE_DIR = "/var/lib/systemd/coredump"
CORE_PATTERN_FILE = "/proc/sys/kernel/core_pattern"

# https://man7.org/linux/man-pages/man5/core.5.html
# %P global pid, %u uid, %g gid, %s signal, %t timestamp, %c core size limit,
# %e truncated command name, %E executable path
CORE_PATTERN_TEMPLATE = "| {path} store %P %u %g %s %t %c %e %E"

CORE_FILE = "core"
INFO_FILE = "info.txt"

# 'YYYY-MM-DD_HH:MM:SS.pid=PID.uid=UID'
LEAF_TIME_FORMAT = "%Y-%m-%d_%H:%M:%S"
LEAF_NAME_FORMAT = "{time}.pid={pid}.uid={uid}"
LEAF_NAME_REGEX = r"^(\d{4,}-\d{2}-\d{2}_\d{2}:\d{2}:\d{2})\.pid=(\d+)\.uid=(\d+)$"

STORAGE_DIR_MODE = 0o777
LEAF_DIR_MODE = 0o755
STORED_FILE_MODE = 0o644

# Fallback when the filesystem does not report PC_NAME_MAX
NAME_MAX = 255

COPY_BUFFER_SIZE = 4096
MAX_COPY_ERRORS = 10

# store accepts 7 tokens, or 8 when the kernel passes %E
STORE_ARGS_MIN = 7
STORE_ARGS_MAX = 8

UINTMAX_MAX = 2 ** 64 - 1

# Order of the lines written to info.txt
INFO_KEYS = ("pid", "uid", "gid", "signal", "timestamp", "comm", "path")
