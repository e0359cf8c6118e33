#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

Pytest configuration and shared fixtures.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

import bz2
import gzip
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="kmerscan_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def simple_fasta():
    """Two FASTA records, one wrapped over several lines."""
    return (
        ">seq1 first record\n"
        "ACGTACGT\n"
        ">seq2\n"
        "ACGTA\n"
        "CGTAC\n"
        "GT\n"
    )


@pytest.fixture
def simple_fastq():
    """Generate simple FASTQ reads for testing."""
    return """@read1
ATCGATCGATCG
+
IIIIIIIIIIII
@read2 sample=2
gctagctagcta
+
IIIIIIIIIIII
"""


@pytest.fixture
def write_file(temp_output_dir):
    """
    Factory writing text or bytes to a file in the temp directory.

    compression: None, 'gzip' or 'bzip2'.
    """
    def _write(name, content, compression=None):
        path = temp_output_dir / name
        data = content.encode("utf-8") if isinstance(content, str) else content
        if compression == 'gzip':
            with gzip.open(path, 'wb') as f:
                f.write(data)
        elif compression == 'bzip2':
            with bz2.open(path, 'wb') as f:
                f.write(data)
        else:
            path.write_bytes(data)
        return path

    return _write

# KmerScan v0.1.0
# Any usage is subject to this software's license.
