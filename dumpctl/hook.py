################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import errno
import os

from oslo_log import log as logging

from dumpctl.common import constants
from dumpctl.common import utils
from dumpctl import exception

LOG = logging.getLogger(__name__)


def core_pattern_line(path):
    return constants.CORE_PATTERN_TEMPLATE.format(path=path)


def install_hook(self_path, core_pattern_file=constants.CORE_PATTERN_FILE):
    """Register self_path as the kernel core dump handler.

    The kernel runs the handler without a shell or a working directory, so
    the path is made absolute with symlinks resolved and must be an
    executable file. Any previous registration in core_pattern_file is
    replaced.

    Returns
    -------
    str
        The line written to core_pattern_file
    """
    resolved = os.path.realpath(self_path)
    if not os.path.isfile(resolved):
        raise exception.HookInstallFailed(
            reason="failed to determine real path of '%s': %s"
                   % (self_path, os.strerror(errno.ENOENT)))
    if not os.access(resolved, os.X_OK):
        # e.g. dumpctl/__main__.py when started with "python -m dumpctl"
        raise exception.HookInstallFailed(
            reason="%s is not executable, the kernel could not run it; "
                   "run setup through the installed dumpctl script"
                   % resolved)

    line = core_pattern_line(resolved)
    try:
        f = open(core_pattern_file, "w")
    except OSError as e:
        raise exception.HookInstallFailed(
            reason="could not open %s to configure system, check perms: %s"
                   % (core_pattern_file, e.strerror))

    try:
        with f:
            f.write(line)
    except OSError as e:
        raise exception.HookInstallFailed(
            reason="failed to write to %s (but open worked): %s"
                   % (core_pattern_file, e.strerror))

    LOG.info("Configured %s: %s", utils.loggable(core_pattern_file),
             utils.loggable(line))
    return line
