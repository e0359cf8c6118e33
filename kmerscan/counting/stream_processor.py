#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

Per-record k-mer reporting over a stream of sequence records.

For each record pulled from the source the processor upper-cases the
sequence, skips it if it is shorter than k, counts its k-mers, keeps those
seen at least ``threshold`` times, and writes one report section:

    >record id
    <TAB> KMER COUNT
    <TAB> KMER COUNT

Records are handled strictly one after another. With ``workers > 1`` the
counting runs in a process pool; ``Executor.map`` keeps the reports in
source order.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from itertools import islice
from typing import Callable, Dict, Iterable, Iterator, List, Optional, TextIO, Tuple, Union

from ..errors import InvalidConfigurationError, SourceFormatError
from ..io.io_core_module import SeqRecord
from .kmer_counter import count_kmers, filter_kmers, validate_k, validate_threshold

logger = logging.getLogger(__name__)

Sink = Union[TextIO, Callable[[str], object]]

WORKER_CHUNKSIZE = 64


# ============================================================================
#                           DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class KmerReport:
    """
    Filtered k-mer counts for one record.

    Attributes:
        record_id: Record identifier, decoded as UTF-8
        kmers: Surviving k-mers and their counts, in counter order
    """
    record_id: str
    kmers: Dict[str, int] = field(default_factory=dict)

    def lines(self) -> Iterator[str]:
        """Yield the report section: header line, then one line per k-mer."""
        yield f">{self.record_id}"
        for kmer, count in self.kmers.items():
            yield f"\t {kmer} {count}"


@dataclass
class ProcessingStats:
    """Counters for one run of the processor."""
    records_seen: int = 0
    records_processed: int = 0
    records_skipped: int = 0
    kmers_reported: int = 0

    def summary(self) -> str:
        return (
            f"{self.records_seen:,} records read, {self.records_processed:,} reported, "
            f"{self.records_skipped:,} shorter than k, {self.kmers_reported:,} k-mers written"
        )


# ============================================================================
#                           PER-RECORD STEP
# ============================================================================

def _decode(data: bytes, what: str, record_number: int) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceFormatError(
            f"record {record_number}: {what} is not valid UTF-8 ({e.reason} at byte {e.start})"
        ) from e


def count_record(
    record: SeqRecord, k: int, threshold: int, record_number: int = 0
) -> Optional[KmerReport]:
    """
    Build the report for a single record.

    Args:
        record: Record from the source
        k: K-mer size
        threshold: Minimum count to report
        record_number: 1-based position of the record, for error messages

    Returns:
        KmerReport, or None if the sequence is shorter than k

    Raises:
        SourceFormatError: If the identifier or sequence is not valid UTF-8
    """
    record = record.upper()
    if len(record.sequence) < k:
        return None

    _decode(record.sequence, "sequence", record_number)
    record_id = _decode(record.id, "identifier", record_number)

    survivors = filter_kmers(count_kmers(record.sequence, k), threshold)
    # every counted k-mer is pure ASCII
    kmers = {kmer.decode("ascii"): count for kmer, count in survivors.items()}
    return KmerReport(record_id=record_id, kmers=kmers)


def _count_task(task: Tuple[SeqRecord, int, int, int]) -> Tuple[int, Optional[KmerReport]]:
    record, k, threshold, record_number = task
    return record_number, count_record(record, k, threshold, record_number)


# ============================================================================
#                           STREAM DRIVER
# ============================================================================

def iter_reports(
    source: Iterable[SeqRecord],
    k: int,
    threshold: int,
    workers: int = 1,
    stats: Optional[ProcessingStats] = None,
) -> Iterator[KmerReport]:
    """
    Yield one KmerReport per record of the source that is at least k long.

    Args:
        source: Iterable of SeqRecord (e.g. read_records(path))
        k: K-mer size, >= 1
        threshold: Minimum count to report, >= 0
        workers: Number of worker processes; 1 counts in-process
        stats: Optional ProcessingStats updated as records go by

    Raises:
        InvalidConfigurationError: On bad k, threshold or workers, before
            the source is touched
        SourceError: Propagated from the source; ends the stream
    """
    validate_k(k)
    validate_threshold(threshold)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise InvalidConfigurationError(
            f"workers must be a positive integer, got {workers!r}", parameter="workers"
        )

    if stats is None:
        stats = ProcessingStats()

    return _iter_reports(source, k, threshold, workers, stats)


def _iter_reports(
    source: Iterable[SeqRecord],
    k: int,
    threshold: int,
    workers: int,
    stats: ProcessingStats,
) -> Iterator[KmerReport]:
    def tasks() -> Iterator[Tuple[SeqRecord, int, int, int]]:
        for number, record in enumerate(source, start=1):
            stats.records_seen += 1
            yield record, k, threshold, number

    if workers == 1:
        for number, report in map(_count_task, tasks()):
            if _tally(number, report, stats, k):
                yield report
        return

    # map() yields results in submit order
    batch_size = workers * WORKER_CHUNKSIZE * 4
    pending = tasks()

    logger.debug(f"Counting with {workers} worker processes")
    with ProcessPoolExecutor(max_workers=workers) as executor:
        while True:
            batch, failure = _fill_batch(pending, batch_size)
            for number, report in executor.map(_count_task, batch, chunksize=WORKER_CHUNKSIZE):
                if _tally(number, report, stats, k):
                    yield report
            # records read before a source failure are reported first
            if failure is not None:
                raise failure
            if len(batch) < batch_size:
                break


def _fill_batch(
    pending: Iterator[Tuple[SeqRecord, int, int, int]], size: int
) -> Tuple[List[Tuple[SeqRecord, int, int, int]], Optional[Exception]]:
    """Take up to size tasks, returning any source error alongside them."""
    batch = []
    try:
        for task in islice(pending, size):
            batch.append(task)
    except Exception as e:
        return batch, e
    return batch, None


def _tally(
    number: int, report: Optional[KmerReport], stats: ProcessingStats, k: int
) -> bool:
    if report is None:
        stats.records_skipped += 1
        logger.debug(f"Skipping record {number}: shorter than k={k}")
        return False
    stats.records_processed += 1
    stats.kmers_reported += len(report.kmers)
    return True


def _line_writer(sink: Sink) -> Callable[[str], object]:
    if hasattr(sink, "write"):
        return lambda line: sink.write(line + "\n")
    return sink


def format_report(report: KmerReport) -> str:
    """Render a report section as text, one newline-terminated line each."""
    return "".join(line + "\n" for line in report.lines())


def process(
    source: Iterable[SeqRecord],
    k: int,
    threshold: int,
    sink: Sink,
    workers: int = 1,
) -> ProcessingStats:
    """
    Count, filter and write k-mer reports for every record of a source.

    Args:
        source: Iterable of SeqRecord
        k: K-mer size, >= 1
        threshold: Minimum count to report, >= 0
        sink: Text stream, or a callable receiving one line (no newline)
        workers: Number of worker processes

    Returns:
        ProcessingStats for the run

    Raises:
        InvalidConfigurationError: Before any record is read
        SourceError: From the source, aborting the run
    """
    stats = ProcessingStats()
    write = _line_writer(sink)

    logger.info(f"Counting {k}-mers (threshold {threshold})")

    for report in iter_reports(source, k, threshold, workers=workers, stats=stats):
        for line in report.lines():
            write(line)

    logger.info(stats.summary())
    return stats


__all__ = [
    'KmerReport',
    'ProcessingStats',
    'count_record',
    'iter_reports',
    'format_report',
    'process',
]

# KmerScan v0.1.0
# Any usage is subject to this software's license.
