#!/usr/bin/env python
#
# Copyright (c) 2025 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
import setuptools

setuptools.setup(
    name='dumpctl',
    version='1.0.0',
    description='Coredump storage handler for the kernel core_pattern hook',
    license='Apache-2.0',
    platforms=['linux'],
    python_requires='>=3.8',
    install_requires=['oslo.config', 'oslo.log'],
    extras_require={
        'test': ['fixtures', 'testtools', 'mock', 'pytest'],
    },
    packages=['dumpctl', 'dumpctl.common', 'dumpctl.tests'],
    entry_points={
        'console_scripts': [
            'dumpctl = dumpctl.cli:main'
        ],
    }
)
