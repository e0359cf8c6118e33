#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

Tests for FASTA/FASTQ reading, compression and format detection.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

import bz2
import dataclasses
import gzip

import pytest

from kmerscan.errors import ErrorKind, SourceFormatError, SourceIOError
from kmerscan.io import (
    SeqRecord,
    count_records,
    detect_compression,
    detect_format,
    is_gzipped,
    open_file,
    read_records,
)
from kmerscan.io.io_core_module import sniff_format


class TestSeqRecord:
    """Test SeqRecord data structure."""

    def test_upper_changes_only_ascii_letters(self):
        record = SeqRecord(b"id", "acgtné-*".encode("utf-8"))

        assert record.upper().sequence == "ACGTNé-*".encode("utf-8")

    def test_upper_keeps_id_and_quality(self):
        record = SeqRecord(b"read1 lower", b"acgt", b"IIII")

        upper = record.upper()

        assert upper.id == b"read1 lower"
        assert upper.quality == b"IIII"

    def test_upper_returns_new_record(self):
        record = SeqRecord(b"id", b"acgt")

        record.upper()

        assert record.sequence == b"acgt"

    def test_frozen(self):
        record = SeqRecord(b"id", b"ACGT")

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.sequence = b"TTTT"

    def test_fasta_vs_fastq(self):
        assert SeqRecord(b"a", b"ACGT").is_fasta()
        assert SeqRecord(b"a", b"ACGT", b"IIII").is_fastq()

    def test_len(self):
        assert len(SeqRecord(b"a", b"ACGTA")) == 5


class TestReadFasta:
    """Test FASTA parsing."""

    def test_records_in_order(self, write_file, simple_fasta):
        path = write_file("reads.fa", simple_fasta)

        records = list(read_records(path))

        assert [r.id for r in records] == [b"seq1 first record", b"seq2"]
        assert records[0].sequence == b"ACGTACGT"
        assert all(r.quality is None for r in records)

    def test_wrapped_sequence_joined(self, write_file, simple_fasta):
        path = write_file("reads.fa", simple_fasta)

        records = list(read_records(path))

        assert records[1].sequence == b"ACGTACGTACGT"

    def test_case_preserved(self, write_file):
        path = write_file("reads.fa", ">r\nacgtACGT\n")

        assert next(read_records(path)).sequence == b"acgtACGT"

    def test_non_ascii_bytes_preserved(self, write_file):
        path = write_file("reads.fa", b">r\nAC\xc3\xa9GT\n")

        assert next(read_records(path)).sequence == b"AC\xc3\xa9GT"

    def test_invalid_utf8_bytes_preserved(self, write_file):
        path = write_file("reads.fa", b">r\xfe\nAC\xffGT\n")

        record = next(read_records(path))

        assert record.id == b"r\xfe"
        assert record.sequence == b"AC\xffGT"

    def test_fasta_spaces_and_carriage_returns_removed(self, write_file):
        path = write_file("reads.fa", b">r\r\nAC GT\r\nAC\r\n")

        record = next(read_records(path))

        assert record.id == b"r"
        assert record.sequence == b"ACGTAC"

    def test_leading_blank_lines(self, write_file):
        path = write_file("reads.fa", "\n\n>r\nACGT\n")

        assert [r.sequence for r in read_records(path)] == [b"ACGT"]

    def test_empty_file(self, write_file):
        path = write_file("empty.fa", "")

        assert list(read_records(path)) == []
        assert detect_format(path) is None


class TestReadFastq:
    """Test FASTQ parsing."""

    def test_records_with_quality(self, write_file, simple_fastq):
        path = write_file("reads.fq", simple_fastq)

        records = list(read_records(path))

        assert [r.id for r in records] == [b"read1", b"read2 sample=2"]
        assert records[0].sequence == b"ATCGATCGATCG"
        assert records[0].quality == b"IIIIIIIIIIII"
        assert records[1].sequence == b"gctagctagcta"

    def test_quality_length_mismatch(self, write_file):
        path = write_file("bad.fq", "@r1\nACGT\n+\nII\n")

        with pytest.raises(SourceFormatError) as exc_info:
            list(read_records(path))

        assert exc_info.value.kind is ErrorKind.SOURCE_FORMAT
        assert exc_info.value.path == path

    def test_truncated_record(self, write_file):
        path = write_file("bad.fq", "@r1\nACGT\n+\nIIII\n@r2\nACGT\n")

        records = read_records(path)
        first = next(records)

        assert first.id == b"r1"
        with pytest.raises(SourceFormatError):
            next(records)

    def test_forced_format(self, write_file, simple_fastq):
        path = write_file("reads.txt", simple_fastq)

        assert count_records(path, fmt='fastq') == 2


class TestCompression:
    """Test compressed input."""

    @pytest.mark.parametrize("compression,name", [
        ('gzip', 'reads.fq.gz'),
        ('bzip2', 'reads.fq.bz2'),
    ])
    def test_compressed_matches_plain(self, write_file, simple_fastq, compression, name):
        plain = write_file("reads.fq", simple_fastq)
        packed = write_file(name, simple_fastq, compression=compression)

        assert detect_compression(packed) == compression
        assert list(read_records(packed)) == list(read_records(plain))

    def test_detection_ignores_suffix(self, write_file, simple_fasta):
        path = write_file("reads.fa", simple_fasta, compression='gzip')

        assert is_gzipped(path)
        assert count_records(path) == 2

    def test_plain_file(self, write_file, simple_fasta):
        path = write_file("reads.fa.gz", simple_fasta)

        assert detect_compression(path) is None
        assert count_records(path) == 2

    def test_open_file_returns_text(self, write_file, simple_fasta):
        path = write_file("reads.fa.gz", simple_fasta, compression='gzip')

        with open_file(path) as handle:
            assert handle.readline() == ">seq1 first record\n"

    def test_corrupt_gzip(self, write_file):
        path = write_file("bad.fa.gz", b"\x1f\x8b" + b"not really gzip data")

        with pytest.raises(SourceIOError) as exc_info:
            list(read_records(path))

        assert exc_info.value.kind is ErrorKind.SOURCE_IO

    def test_corrupt_gzip_body(self, write_file):
        """A valid gzip header over a damaged deflate stream."""
        packed = bytearray(gzip.compress(b">r\n" + b"ACGT" * 5000 + b"\n"))
        for i in range(20, 60):
            packed[i] ^= 0xFF
        path = write_file("damaged.fa.gz", bytes(packed))

        with pytest.raises(SourceIOError) as exc_info:
            list(read_records(path))

        assert exc_info.value.path == path

    def test_corrupt_bzip2_body(self, write_file):
        packed = bytearray(bz2.compress(b">r\n" + b"ACGT" * 5000 + b"\n"))
        for i in range(10, 30):
            packed[i] ^= 0xFF
        path = write_file("damaged.fa.bz2", bytes(packed))

        with pytest.raises(SourceIOError):
            list(read_records(path))

    def test_zstd_not_supported(self, write_file):
        path = write_file("reads.fa.zst", b"\x28\xb5\x2f\xfd" + b"\x00" * 16)

        assert detect_compression(path) == 'zstd'
        with pytest.raises(SourceFormatError):
            list(read_records(path))


class TestErrors:
    """Test source failures."""

    def test_missing_file(self, temp_output_dir):
        path = temp_output_dir / "missing.fa"

        with pytest.raises(SourceIOError) as exc_info:
            list(read_records(path))

        assert exc_info.value.is_source_error
        assert str(path) in str(exc_info.value)

    def test_not_a_sequence_file(self, write_file):
        path = write_file("notes.txt", "hello world\n")

        with pytest.raises(SourceFormatError) as exc_info:
            list(read_records(path))

        assert "'h'" in str(exc_info.value)

    def test_unknown_format_name(self, write_file, simple_fasta):
        path = write_file("reads.fa", simple_fasta)

        with pytest.raises(SourceFormatError):
            list(read_records(path, fmt='genbank'))

    @pytest.mark.parametrize("char,expected", [('>', 'fasta'), ('@', 'fastq'), ('', None)])
    def test_sniff_format(self, char, expected):
        assert sniff_format(char) == expected

    def test_sniff_format_rejects_other(self):
        with pytest.raises(SourceFormatError):
            sniff_format('#')

# KmerScan v0.1.0
# Any usage is subject to this software's license.
