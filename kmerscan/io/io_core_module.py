#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for KmerScan.

Consolidated module containing:
- The SeqRecord data structure handed to the counting core
- File utilities with compression detection (gzip, bzip2)
- FASTA/FASTQ format detection
- Record iteration over FASTA/FASTQ files via BioPython

Records keep their identifier and sequence as raw bytes. Text handles are
decoded as UTF-8 with ``surrogateescape`` so every input byte, valid UTF-8 or
not, survives the round trip through BioPython's text parsers.

FASTA sequence lines are joined with every space and carriage return removed,
so "AC GT" is read as "ACGT". FASTQ sequence lines only lose trailing
whitespace.
"""


# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import bz2
import gzip
import logging
import zlib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from ..errors import SourceFormatError, SourceIOError

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

GZIP_MAGIC = b"\x1f\x8b"
BZIP2_MAGIC = b"BZh"
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"

SUPPORTED_FORMATS = ("auto", "fasta", "fastq")

# Read and decompression failures; bz2 reports corrupt streams as OSError
READ_ERRORS = (OSError, EOFError, zlib.error)


# =============================================================================
# SECTION 2: CORE RECORD DATA STRUCTURE
# =============================================================================

@dataclass(frozen=True)
class SeqRecord:
    """
    A single FASTA/FASTQ record.

    Attributes:
        id: Full header line after the leading '>' or '@' (bytes)
        sequence: Residue characters (bytes)
        quality: Quality string for FASTQ records, None for FASTA
    """
    id: bytes
    sequence: bytes
    quality: Optional[bytes] = None

    def upper(self) -> 'SeqRecord':
        """
        Return a copy with the sequence upper-cased.

        Only ASCII letters change; any other byte is left as is.
        """
        return replace(self, sequence=self.sequence.upper())

    def is_fasta(self) -> bool:
        """Check if the record lacks quality information."""
        return self.quality is None

    def is_fastq(self) -> bool:
        """Check if the record has quality information."""
        return self.quality is not None

    def __len__(self) -> int:
        """Length of the sequence."""
        return len(self.sequence)

    def __repr__(self) -> str:
        """String representation."""
        return f"SeqRecord(id={self.id!r}, length={len(self.sequence)})"


def _to_bytes(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


# =============================================================================
# SECTION 3: FILE UTILITIES
# =============================================================================
# Helper functions for file handling with automatic compression detection

def detect_compression(filepath: Union[str, Path]) -> Optional[str]:
    """
    Detect the compression of a file from its magic bytes.

    Falls back to the file suffix when the file is too short to carry a
    magic number (e.g. an empty file).

    Args:
        filepath: Path to file

    Returns:
        'gzip', 'bzip2', 'zstd' or None for uncompressed input
    """
    filepath = Path(filepath)

    try:
        with open(filepath, 'rb') as handle:
            head = handle.read(4)
    except OSError as e:
        raise SourceIOError(f"cannot open input: {e.strerror or e}", filepath) from e

    if head.startswith(GZIP_MAGIC):
        return 'gzip'
    if head.startswith(BZIP2_MAGIC):
        return 'bzip2'
    if head.startswith(ZSTD_MAGIC):
        return 'zstd'

    if len(head) < 2:
        if filepath.suffix in ('.gz', '.gzip'):
            return 'gzip'
        if filepath.suffix in ('.bz2', '.bzip2'):
            return 'bzip2'

    return None


def is_gzipped(filepath: Union[str, Path]) -> bool:
    """
    Check if file is gzip compressed.

    Args:
        filepath: Path to file

    Returns:
        True if file is gzipped
    """
    return detect_compression(filepath) == 'gzip'


def open_file(filepath: Union[str, Path]) -> TextIO:
    """
    Open a sequence file for reading with automatic decompression.

    Args:
        filepath: Path to file

    Returns:
        Text handle decoding UTF-8 with surrogateescape

    Raises:
        SourceIOError: If the file cannot be opened
        SourceFormatError: If the compression is not supported
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise SourceIOError("input file not found", filepath)

    compression = detect_compression(filepath)
    logger.debug(f"Opening {filepath} (compression: {compression or 'none'})")

    try:
        if compression == 'gzip':
            return gzip.open(filepath, 'rt', encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
        if compression == 'bzip2':
            return bz2.open(filepath, 'rt', encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
        if compression == 'zstd':
            raise SourceFormatError("zstd-compressed input is not supported", filepath)
        return open(filepath, 'r', encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
    except OSError as e:
        raise SourceIOError(f"cannot open input: {e.strerror or e}", filepath) from e


# =============================================================================
# SECTION 4: FORMAT DETECTION
# =============================================================================

def sniff_format(first_char: str) -> Optional[str]:
    """
    Map the first non-whitespace character of a file to its format.

    Args:
        first_char: First non-whitespace character ('' for empty input)

    Returns:
        'fasta', 'fastq', or None for empty input

    Raises:
        SourceFormatError: If the character starts neither format
    """
    if not first_char:
        return None
    if first_char == '>':
        return 'fasta'
    if first_char == '@':
        return 'fastq'
    raise SourceFormatError(
        f"not a FASTA or FASTQ file (unexpected leading character {first_char!r})"
    )


def _peek_first_char(handle: TextIO) -> str:
    """Read up to the first non-whitespace character of a handle."""
    while True:
        char = handle.read(1)
        if not char or not char.isspace():
            return char


def detect_format(filepath: Union[str, Path]) -> Optional[str]:
    """
    Detect whether a (possibly compressed) file is FASTA or FASTQ.

    Args:
        filepath: Path to file

    Returns:
        'fasta', 'fastq', or None for an empty file
    """
    filepath = Path(filepath)

    with open_file(filepath) as handle:
        try:
            first_char = _peek_first_char(handle)
        except READ_ERRORS as e:
            raise SourceIOError(f"read failure: {e}", filepath) from e

    try:
        return sniff_format(first_char)
    except SourceFormatError as e:
        raise SourceFormatError(str(e), filepath) from None


# =============================================================================
# SECTION 5: RECORD ITERATION
# =============================================================================

def _iter_raw(handle: TextIO, fmt: str) -> Iterator[tuple]:
    """Yield (title, sequence, quality) string tuples from a text handle."""
    if fmt == 'fastq':
        for title, sequence, quality in FastqGeneralIterator(handle):
            yield title, sequence, quality
    else:
        for title, sequence in SimpleFastaParser(handle):
            yield title, sequence, None


def read_records(
    filepath: Union[str, Path],
    fmt: str = 'auto'
) -> Iterator[SeqRecord]:
    """
    Read a FASTA/FASTQ file and yield SeqRecord objects.

    BioPython's string-level parsers are used rather than ``SeqIO.parse`` so
    that sequences with non-ASCII bytes reach the counter unchanged.

    Args:
        filepath: Path to a FASTA/FASTQ file (can be gzip or bzip2 compressed)
        fmt: 'auto' to detect from content, or 'fasta' / 'fastq'

    Yields:
        SeqRecord objects, in file order

    Raises:
        SourceIOError: On open, read or decompression failure
        SourceFormatError: On malformed records or an unknown format

    Examples:
        >>> for record in read_records("reads.fq.gz"):
        ...     print(record.id, len(record))
    """
    filepath = Path(filepath)

    if fmt not in SUPPORTED_FORMATS:
        raise SourceFormatError(
            f"unknown input format '{fmt}' (expected one of {', '.join(SUPPORTED_FORMATS)})",
            filepath
        )

    if fmt == 'auto':
        fmt = detect_format(filepath)
        if fmt is None:
            logger.info(f"Input is empty: {filepath}")
            return

    logger.debug(f"Parsing {filepath} as {fmt.upper()}")

    count = 0

    with open_file(filepath) as handle:
        try:
            for title, sequence, quality in _iter_raw(handle, fmt):
                yield SeqRecord(
                    id=_to_bytes(title),
                    sequence=_to_bytes(sequence),
                    quality=_to_bytes(quality) if quality is not None else None,
                )
                count += 1
        except READ_ERRORS as e:
            raise SourceIOError(f"read failure after {count} records: {e}", filepath) from e
        except ValueError as e:
            raise SourceFormatError(
                f"malformed {fmt.upper()} record after {count} records: {e}", filepath
            ) from e

    logger.debug(f"Read {count} records from {filepath}")


def count_records(filepath: Union[str, Path], fmt: str = 'auto') -> int:
    """
    Count number of records in a FASTA/FASTQ file.

    Args:
        filepath: Path to file

    Returns:
        Number of records
    """
    return sum(1 for _ in read_records(filepath, fmt))

# KmerScan v0.1.0
# Any usage is subject to this software's license.
