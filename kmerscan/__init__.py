#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

Package initialization and version metadata.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

from .version import __version__
from .errors import (
    ErrorKind,
    KmerScanError,
    InvalidConfigurationError,
    SourceError,
    SourceIOError,
    SourceFormatError,
)
from .counting import count_kmers, filter_kmers, process, iter_reports
from .io import SeqRecord, read_records

__all__ = [
    "__version__",
    "ErrorKind",
    "KmerScanError",
    "InvalidConfigurationError",
    "SourceError",
    "SourceIOError",
    "SourceFormatError",
    "count_kmers",
    "filter_kmers",
    "process",
    "iter_reports",
    "SeqRecord",
    "read_records",
]

# KmerScan v0.1.0
# Any usage is subject to this software's license.
