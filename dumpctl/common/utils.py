################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import os


def loggable(value):
    """Text safe to hand to any log handler, syslog included.

    Command line values and paths may carry bytes that are not UTF-8; they
    arrive as surrogate escapes and are rendered as backslash escapes.

    loggable(os.fsdecode(b'cr\xffash')) -> 'cr\\xffash'
    """
    value = str(value)
    try:
        return os.fsencode(value).decode('utf-8', 'backslashreplace')
    except UnicodeError:
        return value.encode('utf-8', 'backslashreplace').decode('utf-8')
