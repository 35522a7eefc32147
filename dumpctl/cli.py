################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
""" dumpctl command entry"""

import os
import sys

from oslo_log import log as logging

from dumpctl import catalog
from dumpctl.common import constants
from dumpctl.common import utils
from dumpctl import config
from dumpctl import exception
from dumpctl import hook
from dumpctl import store

CONF = config.CONF
LOG = logging.getLogger(__name__)


def _max_args(action, args, count):
    if len(args) > count:
        raise exception.UsageError(
            "Error: %s takes at most %d argument(s), got %d"
            % (action, count, len(args)))


def do_store(prog, args):
    result = store.store(CONF.storage_dir, args,
                         buffer_size=CONF.copy_buffer_size,
                         max_errors=CONF.max_copy_errors)
    LOG.info("Stored core of pid %s in %s",
             result.record.pid, utils.loggable(result.directory))
    return 0


def do_setup(prog, args):
    _max_args("setup", args, 0)
    hook.install_hook(prog, CONF.core_pattern_file)
    return 0


def do_list(prog, args):
    _max_args("list", args, 0)
    catalog.list_crashes(CONF.storage_dir)
    return 0


def do_info(prog, args):
    _max_args("info", args, 1)
    catalog.show_info(CONF.storage_dir, args[0] if args else None)
    return 0


def do_gdb(prog, args):
    _max_args("gdb", args, 1)
    return catalog.run_gdb(CONF.storage_dir, args[0] if args else None,
                           gdb_command=CONF.gdb_command)


ACTIONS = {
    'store': do_store,
    'setup': do_setup,
    'list': do_list,
    'info': do_info,
    'gdb': do_gdb,
}


def main(argv=None, default_config_files=None):
    if argv is None:
        argv = sys.argv
    prog = argv[0] if argv else constants.DUMPCTL_PROG

    config.parse_args(argv[1:], prog=os.path.basename(prog),
                      default_config_files=default_config_files)
    logging.setup(CONF, constants.DUMPCTL_PROG)

    action = CONF.action.name
    try:
        if action not in ACTIONS:
            CONF.print_usage()
            raise exception.UsageError(
                "Error: an action is required but none was found")
        return ACTIONS[action](prog, CONF.action.action_args or [])
    except exception.HookInstallFailed as e:
        LOG.critical("%s", utils.loggable(e))
        return e.exit_code
    except exception.DumpctlException as e:
        LOG.error("%s", utils.loggable(e))
        return e.exit_code
