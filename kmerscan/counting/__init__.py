"""
K-mer counting for KmerScan.

- kmer_counter.py: per-sequence k-mer frequency tables and threshold filter
- stream_processor.py: per-record reports over a stream of SeqRecord values
"""

from .kmer_counter import (
    count_kmers,
    filter_kmers,
    validate_k,
    validate_threshold,
)
from .stream_processor import (
    KmerReport,
    ProcessingStats,
    count_record,
    iter_reports,
    format_report,
    process,
)

__all__ = [
    "count_kmers",
    "filter_kmers",
    "validate_k",
    "validate_threshold",
    "KmerReport",
    "ProcessingStats",
    "count_record",
    "iter_reports",
    "format_report",
    "process",
]
