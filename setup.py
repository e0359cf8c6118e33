#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
KmerScan: per-record k-mer counting for FASTA/FASTQ files

Reads plain, gzip or bzip2 compressed FASTA/FASTQ files and reports, for
every record, the k-mers occurring at least a given number of times.

Version: 0.1
License: MIT (see LICENSE)
"""

from setuptools import setup, find_packages
import os
import sys

# Ensure we can import version
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "kmerscan"))

from version import __version__

# Read long description from README
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

# Read requirements from requirements.txt
def read_requirements(filename):
    """Read requirements from file."""
    filepath = os.path.join(os.path.dirname(__file__), filename)
    if not os.path.exists(filepath):
        return []
    with open(filepath, "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]

install_requires = read_requirements("requirements.txt")

extras_require = {
    "dev": read_requirements("requirements-dev.txt"),
}

setup(
    name="kmerscan",
    version=__version__,
    author="KmerScan Development Team",
    description="Per-record k-mer counting for FASTA/FASTQ files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "kmerscan=kmerscan.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="kmer counting bioinformatics fasta fastq",
)
