"""
Record I/O module for KmerScan.

Handles reading FASTA/FASTQ records, plain or compressed, into SeqRecord
values for the counting core.
"""

from .io_core_module import (
    SeqRecord,
    SUPPORTED_FORMATS,
    detect_compression,
    detect_format,
    is_gzipped,
    open_file,
    read_records,
    count_records,
)

__all__ = [
    "SeqRecord",
    "SUPPORTED_FORMATS",
    "detect_compression",
    "detect_format",
    "is_gzipped",
    "open_file",
    "read_records",
    "count_records",
]
