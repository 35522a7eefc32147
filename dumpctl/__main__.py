################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################
import sys

from dumpctl import cli


if __name__ == "__main__":
    sys.exit(cli.main())
