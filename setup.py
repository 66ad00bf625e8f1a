#!/usr/bin/env python3
"""
Packaging for the rose chart workbench.

Supports standard pip installs, including editable installs with
pip install -e . (add [test] for the test tooling).
"""

from setuptools import setup, find_packages

setup(
    name="rose-chart",
    version="0.1.0",
    description="Rose chart engine and workbench for 24-hour cyclic event counts",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.6.0",
        "pydantic>=2.5.0",
        "rich>=13.7.0",
        "numpy>=1.26.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "rose-chart=rose_chart.main:main",
        ],
    },
)
