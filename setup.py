#!/usr/bin/env python3
"""Minimal setup.py for pip compatibility."""

from setuptools import setup, find_packages

# Read version from __version__.py
version_dict = {}
with open("src/fsmemo/__version__.py") as fp:
    exec(fp.read(), version_dict)

setup(
    name="fsmemo",
    version=version_dict["__version__"],
    description="Memoized filesystem access and best-effort module loading",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        # Core dependencies
        "pydantic>=2.0",
        "pyyaml",
        # Async file I/O
        "aiofiles",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-asyncio",
            "pytest-cov",
            "pytest-xdist",
            "black",
            "ruff",
            "isort",
            "mypy",
            "types-PyYAML",
            "types-aiofiles",
            "pre-commit",
        ]
    },
)
