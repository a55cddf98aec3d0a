import random

from fastqc_lite.overlap import OverlapResult, analyze_overlap, analyze_reads, merge_reads
from fastqc_lite.read import Read
from fastqc_lite.sequence import reverse_complement

R1 = "CAGCGCCTACGGGCCCCTTTTTCTGCGCGACCGCGTGGCTGTGGGCGCGGATGCCTTTGAGCGCGGTGACTTCTCACTGCGTATCGAGC"
R2 = "ACCTCCAGCGGCTCGATACGCAGTGAGAAGTCACCGCGCTCAAAGGCATCCGCGCCCACAGCCACGCGGTCGCGCAGAAAAAGGGGTCC"
Q1 = "F" * len(R1)
Q2 = "#" * len(R2)


def _random_seq(length, seed):
    rng = random.Random(seed)
    return "".join(rng.choice("ACGT") for _ in range(length))


def test_source_pair():
    ov = analyze_overlap(R1, R2, 2, 30, 0.2)
    assert ov.overlapped
    assert ov.offset == 10
    assert ov.overlap_len == 79
    assert ov.diff == 1
    assert not ov.has_gap


def test_source_pair_merge():
    ov = analyze_overlap(R1, R2, 2, 30, 0.2)
    r1 = Read("name1", R1, "+", Q1)
    r2 = Read("name2", R2, "+", Q2)
    merged = merge_reads(r1, r2, ov)
    assert len(merged) == ov.offset + len(R2)
    assert merged.seq.startswith(R1[:ov.offset + ov.overlap_len])
    assert merged.seq.endswith(reverse_complement(R2)[ov.overlap_len:])
    assert merged.quality.startswith("F" * (ov.offset + ov.overlap_len))
    assert merged.name.startswith("name1 merged_")
    assert merged.strand == "+"


def test_analyze_reads_matches_sequences():
    r1 = Read("a", R1, "+", Q1)
    r2 = Read("b", R2, "+", Q2)
    assert analyze_reads(r1, r2, 2, 30, 0.2) == analyze_overlap(R1, R2, 2, 30, 0.2)


def test_exact_reverse_complement_pair():
    seq = _random_seq(60, 1)
    ov = analyze_overlap(seq, reverse_complement(seq), 5, 30, 0.2)
    assert ov == OverlapResult(True, 0, 60, 0, False)


def test_single_mismatch_counted():
    seq = _random_seq(60, 2)
    swapped = {"A": "T", "T": "A", "C": "G", "G": "C"}
    mutated = seq[:20] + swapped[seq[20]] + seq[21:]
    ov = analyze_overlap(seq, reverse_complement(mutated), 5, 30, 0.2)
    assert ov.overlapped and ov.offset == 0 and ov.diff == 1


def test_mismatches_after_fifty_bases_still_accepted():
    seq = _random_seq(60, 3)
    swapped = {"A": "T", "T": "A", "C": "G", "G": "C"}
    mutated = seq[:50] + "".join(swapped[b] for b in seq[50:])
    ov = analyze_overlap(seq, reverse_complement(mutated), 5, 30, 0.2)
    assert ov.overlapped
    assert ov.offset == 0
    assert ov.diff == 10


def test_negative_offset_when_adapter_sequenced():
    insert = _random_seq(60, 4)
    prefix = _random_seq(10, 5)
    r2 = reverse_complement(prefix + insert)
    ov = analyze_overlap(insert, r2, 5, 30, 0.2)
    assert ov.overlapped
    assert ov.offset == -10
    assert ov.overlap_len == 60
    assert ov.diff == 0


def test_negative_offset_merge_keeps_overlap_only():
    insert = _random_seq(60, 4)
    prefix = _random_seq(10, 5)
    r2_seq = reverse_complement(prefix + insert)
    r1 = Read("@r", insert, "+", "I" * 60)
    r2 = Read("@r", r2_seq, "+", "I" * len(r2_seq))
    ov = analyze_reads(r1, r2, 5, 30, 0.2)
    merged = merge_reads(r1, r2, ov)
    assert merged.seq == insert
    assert merged.name == "@r merged_60_0"


def test_no_overlap():
    ov = analyze_overlap("A" * 60, "A" * 60, 5, 30, 0.2)
    assert ov == OverlapResult()
    r = Read("x", "A" * 60, "+", "I" * 60)
    assert merge_reads(r, r, ov) is None


def test_non_plus_strand_gets_suffix():
    seq = _random_seq(60, 6)
    r1 = Read("n", seq, "n strand", "I" * 60)
    r2 = Read("n", reverse_complement(seq), "+", "I" * 60)
    ov = analyze_reads(r1, r2, 5, 30, 0.2)
    merged = merge_reads(r1, r2, ov)
    assert merged.strand == "n strand merged_60_0"