"""Overlap detection between the two reads of a pair, and merging."""

from dataclasses import dataclass

from .read import Read
from .sequence import reverse_complement

# mismatches beyond the limit stop a comparison only within this many bases
_COMPLETE_COMPARE_REQUIRE = 50


@dataclass
class OverlapResult:
    """Where read 2's reverse complement lies against read 1."""

    overlapped: bool = False
    offset: int = 0
    overlap_len: int = 0
    diff: int = 0
    has_gap: bool = False


def _count_diff(a, b, limit):
    """Count mismatches; return (diff, position reached)."""
    diff = 0
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            diff += 1
            if diff > limit and i < _COMPLETE_COMPARE_REQUIRE:
                return diff, i
    return diff, min(len(a), len(b))


def _accepted(diff, reached, limit):
    return diff <= limit or reached > _COMPLETE_COMPARE_REQUIRE


def analyze_overlap(seq1, seq2, diff_limit, overlap_require, diff_percent_limit):
    """Find a gapless overlap of ``seq1`` with the reverse complement of ``seq2``."""
    str1 = seq1
    str2 = reverse_complement(seq2)
    len1, len2 = len(str1), len(str2)

    # forward: read 2 shifted right by offset
    for offset in range(0, len1 - overlap_require):
        overlap_len = min(len1 - offset, len2)
        limit = min(diff_limit, int(overlap_len * diff_percent_limit))
        diff, reached = _count_diff(str1[offset:offset + overlap_len], str2[:overlap_len], limit)
        if _accepted(diff, reached, limit):
            return OverlapResult(True, offset, overlap_len, diff, False)

    # reverse: the insert is shorter than the read, adapter was sequenced
    for offset in range(0, -(len2 - overlap_require), -1):
        overlap_len = min(len1, len2 - abs(offset))
        limit = min(diff_limit, int(overlap_len * diff_percent_limit))
        diff, reached = _count_diff(str1[:overlap_len], str2[-offset:-offset + overlap_len], limit)
        if _accepted(diff, reached, limit):
            return OverlapResult(True, offset, overlap_len, diff, False)

    return OverlapResult()


def analyze_reads(r1, r2, diff_limit, overlap_require, diff_percent_limit):
    """Overlap analysis on the bases of two reads."""
    return analyze_overlap(r1.seq, r2.seq, diff_limit, overlap_require, diff_percent_limit)


def merge_reads(r1, r2, overlap):
    """Merge a pair into one read using an overlap result, or None if not overlapped."""
    if not overlap.overlapped:
        return None
    ol = overlap.overlap_len
    len1 = ol + max(0, overlap.offset)
    len2 = len(r2) - ol if overlap.offset > 0 else 0

    rr2 = r2.reverse_complement()
    merged_seq = r1.seq[:len1]
    merged_qual = r1.quality[:len1]
    if overlap.offset > 0:
        merged_seq += rr2.seq[ol:ol + len2]
        merged_qual += rr2.quality[ol:ol + len2]

    suffix = f" merged_{len1}_{len2}"
    strand = r1.strand
    if strand != "+":
        strand = strand + suffix
    return Read(r1.name + suffix, merged_seq, strand, merged_qual)