#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

Error types for KmerScan.

Every error raised by the package derives from KmerScanError and carries an
ErrorKind tag, so callers can branch on ``err.kind`` instead of parsing
messages:

- INVALID_CONFIGURATION: a caller-supplied parameter violates its constraint
  (k <= 0, negative threshold, unreadable config file). Raised before any
  record is read.
- SOURCE_IO: the input could not be opened, read or decompressed.
- SOURCE_FORMAT: the input is not valid FASTA/FASTQ, or a record could not
  be decoded.

Windows containing non-ASCII bytes are not errors; the counter skips them.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ErrorKind(Enum):
    """Tag identifying the category of a KmerScanError."""
    INVALID_CONFIGURATION = "invalid_configuration"
    SOURCE = "source"
    SOURCE_IO = "source_io"
    SOURCE_FORMAT = "source_format"


class KmerScanError(Exception):
    """Base class for all KmerScan errors."""
    kind: Optional[ErrorKind] = None

    @property
    def is_source_error(self) -> bool:
        """True for errors coming from the record source."""
        return self.kind in (ErrorKind.SOURCE, ErrorKind.SOURCE_IO, ErrorKind.SOURCE_FORMAT)


class InvalidConfigurationError(KmerScanError, ValueError):
    """Raised when k, threshold or another setting is out of range."""
    kind = ErrorKind.INVALID_CONFIGURATION

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class SourceError(KmerScanError):
    """Raised when the record source fails. Aborts the run."""
    kind = ErrorKind.SOURCE

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{self.path}: {message}"
        return message


class SourceIOError(SourceError):
    """Open, read or decompression failure."""
    kind = ErrorKind.SOURCE_IO


class SourceFormatError(SourceError):
    """Malformed record framing, unknown format or undecodable text."""
    kind = ErrorKind.SOURCE_FORMAT


__all__ = [
    "ErrorKind",
    "KmerScanError",
    "InvalidConfigurationError",
    "SourceError",
    "SourceIOError",
    "SourceFormatError",
]

# KmerScan v0.1.0
# Any usage is subject to this software's license.
