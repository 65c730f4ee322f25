#!/usr/bin/env python3
"""Setup script for product_identity package.
"""

from setuptools import find_packages, setup

setup(
    name="product_identity",
    version="0.1.0",
    description="Product name parsing and similarity scoring for depletion data deduplication",
    author="Product Identity Team",
    packages=find_packages(include=["product_identity*"]),
    python_requires=">=3.10",
    install_requires=[
        "pandas>=1.5.0",
        "rapidfuzz>=3.0.0",
        "pyyaml>=6.0",
        "openpyxl>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "numpy>=1.23.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "pandas-stubs>=2.0.0",
            "types-PyYAML>=6.0.0",
        ],
    },
)
