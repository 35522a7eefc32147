################################################################################
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
################################################################################

# Values that would come from the invocation of 'dumpctl store'
# %P %u %g %s %t %c %e %E
STORE_ARGS = ["1234", "0", "0", "11", "0", "0", "crashed", "/usr/bin/crashed"]

# Kernel mangled executable path, '/' replaced with '!'
STORE_ARGS_MANGLED = ["999999", "8", "7", "6", "1671181200", "18446744073709551615",
                      "process_name", "!usr!local!bin!process_name"]

EXPECTED_LEAF = "1970-01-01_00:00:00.pid=1234.uid=0"
EXPECTED_LEAF_MANGLED = "2022-12-16_09:00:00.pid=999999.uid=8"

CORE_CONTENT = b"\x7fELF\x02\x01\x01\x00\x00\x04"

EXPECTED_INFO = (
    "pid: 1234\n"
    "uid: 0\n"
    "gid: 0\n"
    "signal: 11\n"
    "timestamp: 0\n"
    "comm: crashed\n"
    "path: /usr/bin/crashed\n"
)

CORE_PATTERN_LINE = "| /usr/local/bin/dumpctl store %P %u %g %s %t %c %e %E"

# (description, text, expected value or None when the text is rejected)
UNUM_EXAMPLES = [
    ("decimal", "1234", 1234),
    ("zero", "0", 0),
    ("hexadecimal", "0x1A", 26),
    ("upper case hex prefix", "0X1a", 26),
    ("octal", "017", 15),
    ("largest value", "18446744073709551615", 2 ** 64 - 1),
    ("trailing characters", "123abc", None),
    ("negative", "-1", None),
    ("explicit sign", "+1", None),
    ("leading whitespace", " 1", None),
    ("trailing newline", "1\n", None),
    ("empty", "", None),
    ("bad octal digit", "08", None),
    ("bare hex prefix", "0x", None),
    ("overflow", "18446744073709551616", None),
]
