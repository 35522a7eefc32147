################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
""" Define configuration and command line for dumpctl"""

import argparse

from oslo_config import cfg
from oslo_log import log as logging

from dumpctl.common import constants

CONF = cfg.CONF

ACTIONS = ('store', 'setup', 'list', 'info', 'gdb')

ACTION_HELP = {
    'store': 'store a core read from stdin: <global-pid> <uid> <gid> '
             '<signal-number> <unix-timestamp> <core-limit> '
             '<executable-filename> [<exe-path>]',
    'setup': 'register this program in %s' % constants.CORE_PATTERN_FILE,
    'list': 'list the stored cores',
    'info': 'show the record of a stored core: [<pid|comm|directory>]',
    'gdb': 'run the debugger on a stored core: [<pid|comm|directory>]',
}

cli_opts = [
    cfg.StrOpt("storage-dir",
               short="D",
               default=constants.DEFAULT_STORAGE_DIR,
               help="Store the coredumps in this directory"),
]

storage_opts = [
    cfg.StrOpt("core_pattern_file",
               default=constants.CORE_PATTERN_FILE,
               help="Kernel file holding the core dump hook registration"),
    cfg.IntOpt("copy_buffer_size",
               default=constants.COPY_BUFFER_SIZE,
               min=1,
               help="Size in bytes of the buffer used to copy a core"),
    cfg.IntOpt("max_copy_errors",
               default=constants.MAX_COPY_ERRORS,
               min=0,
               help="Number of read/write errors tolerated while copying a core"),
    cfg.StrOpt("gdb_command",
               default="gdb",
               help="Debugger run by the gdb action"),
]


def add_action_parsers(subparsers):
    for name in ACTIONS:
        parser = subparsers.add_parser(name, help=ACTION_HELP[name])
        # kernel supplied values (e.g. a comm of '-bash') are not options
        parser.add_argument('action_args', nargs=argparse.REMAINDER)


action_opt = cfg.SubCommandOpt("action",
                               title="Actions",
                               handler=add_action_parsers)

CONF.register_cli_opts(cli_opts)
CONF.register_cli_opt(action_opt)
CONF.register_opts(storage_opts)

logging.register_options(CONF)
# Log to stderr and mirror to syslog, without a level prefix on the message
CONF.set_default("use_stderr", True)
CONF.set_default("use_syslog", True)
CONF.set_default("syslog_log_facility", "LOG_DAEMON")
CONF.set_default("logging_default_format_string", "%(message)s")


def parse_args(argv, prog=None, default_config_files=None):
    CONF(argv,
         project=constants.DUMPCTL_PROG,
         prog=prog,
         default_config_files=default_config_files)
    return CONF
