#!/usr/bin/env python3
# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0

"""Setup script for macos-securitylogs."""

from setuptools import setup, find_packages

setup(
    name="macos-securitylogs",
    version="0.1.0",
    description="Query and export Gatekeeper, XProtect and TCC entries from the macOS unified log",
    author="Aria Akhavan",
    license="Apache-2.0",
    packages=find_packages(include=["macos_securitylogs", "macos_securitylogs.*"]),
    python_requires=">=3.9",
    install_requires=[
        "lz4>=4.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "macos-securitylogs=macos_securitylogs.cli:main",
        ],
    },
)
