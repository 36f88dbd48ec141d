#!/usr/bin/env python3
# =============================================================================
#  flagdec — setup.py
#
#  Build backend configuration lives in pyproject.toml; package metadata is
#  kept here.  The version is read from flagdec/__init__.py so there is a
#  single source of truth.
#
#  Typical use:
#      pip install -e ".[dev]"
#      python -m build
#      python -m pytest
# =============================================================================

from __future__ import annotations

import re
from pathlib import Path

from setuptools import setup, find_packages

_HERE = Path(__file__).resolve().parent


def _read_version() -> str:
    """Extract ``__version__`` from the package."""
    init = _HERE / "flagdec" / "__init__.py"
    text = init.read_text(encoding="utf-8")
    match = re.search(r'^__version__(?::\s*str)?\s*=\s*"([^"]+)"', text, re.MULTILINE)
    if match:
        return match.group(1)
    return "0.0.0"


def _read_long_description() -> str:
    """Read README.md for the long description."""
    readme = _HERE / "README.md"
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="flagdec",
    version=_read_version(),
    description=(
        "Decode captured 32-bit proxy flag and state words "
        "into their symbolic names."
    ),
    long_description=_read_long_description(),
    long_description_content_type="text/markdown",
    license="MIT",
    author="flagdec contributors",
    python_requires=">=3.10",
    packages=find_packages(
        include=[
            "flagdec",
            "flagdec.*",
        ],
        exclude=[
            "tests",
            "tests.*",
        ],
    ),
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "ruff>=0.4",
            "mypy>=1.10",
            "black>=24.0",
            "isort>=5.13",
        ],
    },

    # setuptools generates the wrapper script calling flagdec.__main__:main
    entry_points={
        "console_scripts": [
            "flagdec=flagdec.__main__:main",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Debuggers",
        "Topic :: Utilities",
    ],
    keywords=[
        "flags",
        "bitmask",
        "debugging",
        "haproxy",
        "decoder",
    ],
    zip_safe=False,
)
