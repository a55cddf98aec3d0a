"""Per-cycle quality, base content, k-mer and overrepresentation statistics."""

import math

KMER_LEN = 5
_KMER_BUF_LEN = 2 << (KMER_LEN * 2)
_HIST_SIZE = 128
_Q20 = ord("5")
_Q30 = ord("?")
_BASE_VALUES = {"A": 0, "T": 1, "C": 2, "G": 3}
_KMER_BASES = ("A", "T", "C", "G")


def _base_slot(base):
    """Map a base to 0..7 by its last three bits (A=1, T=4, C=3, G=7, N=6)."""
    return ord(base) & 0x07


def _fmt(value):
    """Format a number the way a default output stream does."""
    if isinstance(value, int):
        return str(value)
    return f"{value:g}"


def _div(a, b):
    if b:
        return a / b
    if a == 0:
        return math.nan
    return math.inf if a > 0 else -math.inf


def base2val(base):
    """Two-bit code of a base for k-mer counting, or -1 for anything else."""
    return _BASE_VALUES.get(base, -1)


def kmer3(val):
    """The 3-mer encoded in the low six bits of ``val``."""
    return (_KMER_BASES[(val & 0x30) >> 4] + _KMER_BASES[(val & 0x0C) >> 2]
            + _KMER_BASES[val & 0x03])


def kmer2(val):
    """The 2-mer encoded in the low four bits of ``val``."""
    return _KMER_BASES[(val & 0x0C) >> 2] + _KMER_BASES[val & 0x03]


def list2string(values, coords=None):
    """Comma-joined values; with ``coords``, the mean of each bin ending at a coord."""
    if coords is None:
        return ",".join(_fmt(v) for v in values)
    parts = []
    start = 0
    for end in coords:
        if end == start:
            parts.append("0.0")
        else:
            total = 0.0
            for v in values[start:end]:
                total += v
            parts.append(_fmt(total / (end - start)))
        start = end
    return ",".join(parts)


class Stats:
    """Statistics accumulated over the reads of one side (read 1 or read 2)."""

    def __init__(self, options, is_read2=False, guessed_cycles=0, buffer_margin=1024):
        self.options = options
        self.is_read2 = is_read2
        self.evaluated_seq_len = options.seq_len2 if is_read2 else options.seq_len1
        if guessed_cycles == 0:
            guessed_cycles = self.evaluated_seq_len

        self._reads = 0
        self._length_sum = 0
        self._cycles = guessed_cycles
        self._bases = 0
        self._q20_total = 0
        self._q30_total = 0
        self._q40_total = 0
        self._summarized = False
        self._kmer_min = 0
        self._kmer_max = 0

        self._buf_len = guessed_cycles + buffer_margin
        n = self._buf_len
        self._cycle_q30 = [[0] * n for _ in range(8)]
        self._cycle_q20 = [[0] * n for _ in range(8)]
        self._cycle_contents = [[0] * n for _ in range(8)]
        self._cycle_qual = [[0] * n for _ in range(8)]
        self._cycle_total_base = [0] * n
        self._cycle_total_qual = [0] * n

        self.q20_bases = [0] * 8
        self.q30_bases = [0] * 8
        self.base_contents = [0] * 8

        self.kmer = [0] * _KMER_BUF_LEN
        self._qual_hist = [0] * _HIST_SIZE

        self.quality_curves = {}
        self.content_curves = {}
        self.over_rep_seq = {}
        self.over_rep_seq_dist = {}
        self._init_over_rep_seq()

    def _init_over_rep_seq(self):
        seqs = self.options.over_rep_seqs2 if self.is_read2 else self.options.over_rep_seqs1
        for seq in seqs:
            self.over_rep_seq[seq] = 0
            self.over_rep_seq_dist[seq] = [0] * self.evaluated_seq_len

    def _extend_buffer(self, new_len):
        if new_len <= self._buf_len:
            return
        extra = [0] * (new_len - self._buf_len)
        for table in (self._cycle_q30, self._cycle_q20, self._cycle_contents, self._cycle_qual):
            for row in table:
                row.extend(extra)
        self._cycle_total_base.extend(extra)
        self._cycle_total_qual.extend(extra)
        self._buf_len = new_len

    def stat_read(self, read):
        """Add one read to the statistics."""
        seq, qual = read.seq, read.quality
        length = len(seq)
        self._length_sum += length
        if self._buf_len < length:
            self._extend_buffer(max(length + 100, int(length * 1.5)))

        kmer = 0
        need_full_compute = True
        for i, (base, q) in enumerate(zip(seq, qual)):
            b = _base_slot(base)
            qv = ord(q)
            self._qual_hist[qv] += 1
            if qv >= _Q30:
                self._cycle_q30[b][i] += 1
                self._cycle_q20[b][i] += 1
            elif qv >= _Q20:
                self._cycle_q20[b][i] += 1
            self._cycle_contents[b][i] += 1
            self._cycle_qual[b][i] += qv - 33
            self._cycle_total_base[i] += 1
            self._cycle_total_qual[i] += qv - 33

            if base == "N":
                need_full_compute = True
                continue
            # five bases are needed for a k-mer
            if i < 4:
                continue
            if not need_full_compute:
                val = base2val(base)
                if val < 0:
                    need_full_compute = True
                    continue
                kmer = ((kmer << 2) & 0x3FC) | val
                self.kmer[kmer] += 1
            else:
                kmer = 0
                valid = True
                for c in seq[i - 4:i + 1]:
                    val = base2val(c)
                    if val < 0:
                        valid = False
                        break
                    kmer = ((kmer << 2) & 0x3FC) | val
                if not valid:
                    need_full_compute = True
                    continue
                self.kmer[kmer] += 1
                need_full_compute = False

        ora = self.options.over_rep_analysis
        if ora.enabled and self._reads % ora.sampling == 0:
            self._stat_over_rep(seq)

        self._reads += 1

    def _stat_over_rep(self, seq):
        length = len(seq)
        steps = (10, 20, 40, 100, min(150, self.evaluated_seq_len - 2))
        for step in steps:
            i = 0
            while i < length - step:
                sub = seq[i:i + step]
                if sub in self.over_rep_seq:
                    self.over_rep_seq[sub] += 1
                    dist = self.over_rep_seq_dist[sub]
                    for p in range(i, min(i + len(sub), self.evaluated_seq_len)):
                        dist[p] += 1
                    i += step
                i += 1

    def summarize(self, forced=False):
        """Compute totals and curves from the per-cycle counts."""
        if self._summarized and not forced:
            return

        self._bases = 0
        for c in range(self._buf_len):
            count = self._cycle_total_base[c]
            self._bases += count
            if count == 0:
                self._cycles = c
                break
        if self._buf_len > 0 and self._cycle_total_base[self._buf_len - 1] > 0:
            self._cycles = self._buf_len
        cycles = self._cycles

        self.q20_bases = [sum(row[:cycles]) for row in self._cycle_q20]
        self.q30_bases = [sum(row[:cycles]) for row in self._cycle_q30]
        self.base_contents = [sum(row[:cycles]) for row in self._cycle_contents]
        self._q20_total = sum(self.q20_bases)
        self._q30_total = sum(self.q30_bases)
        self._q40_total = sum(self._qual_hist[40 + 33:127])

        total_base = self._cycle_total_base
        mean_curve = [_div(self._cycle_total_qual[c], total_base[c]) for c in range(cycles)]
        self.quality_curves = {"mean": mean_curve}
        self.content_curves = {}
        for base in "ATCGN":
            b = _base_slot(base)
            contents = self._cycle_contents[b]
            quals = self._cycle_qual[b]
            self.quality_curves[base] = [
                mean_curve[c] if contents[c] == 0 else quals[c] / contents[c]
                for c in range(cycles)
            ]
            self.content_curves[base] = [_div(contents[c], total_base[c]) for c in range(cycles)]

        g_row = self._cycle_contents[_base_slot("G")]
        c_row = self._cycle_contents[_base_slot("C")]
        self.content_curves["GC"] = [_div(g_row[c] + c_row[c], total_base[c])
                                     for c in range(cycles)]

        self._kmer_min = min(self.kmer)
        self._kmer_max = max(self.kmer)
        self._summarized = True

    def _ensure_summarized(self):
        if not self._summarized:
            self.summarize()

    def cycles(self):
        self._ensure_summarized()
        return self._cycles

    def reads(self):
        self._ensure_summarized()
        return self._reads

    def bases(self):
        self._ensure_summarized()
        return self._bases

    def q20(self):
        self._ensure_summarized()
        return self._q20_total

    def q30(self):
        self._ensure_summarized()
        return self._q30_total

    def q40(self):
        self._ensure_summarized()
        return self._q40_total

    def gc_number(self):
        self._ensure_summarized()
        return self.base_contents[_base_slot("G")] + self.base_contents[_base_slot("C")]

    def qual_hist(self):
        """Counts of bases per quality character code (0..127)."""
        return list(self._qual_hist)

    def mean_length(self):
        if self._reads == 0:
            return 0
        return self._length_sum // self._reads

    def is_long_read(self):
        return self._cycles > 300

    def summary_text(self):
        """The plain-text summary of reads, bases and Q20/Q30/Q40 bases."""
        self._ensure_summarized()
        bases = self._bases
        lines = [
            f"total reads: {self._reads}",
            f"total bases: {bases}",
            f"Q20 bases: {self._q20_total}({_fmt(_div(self._q20_total * 100.0, bases))}%)",
            f"Q30 bases: {self._q30_total}({_fmt(_div(self._q30_total * 100.0, bases))}%)",
            f"Q40 bases: {self._q40_total}({_fmt(_div(self._q40_total * 100.0, bases))}%)",
        ]
        return "\n".join(lines) + "\n"

    def over_rep_passed(self, seq, count):
        """Whether an overrepresented sequence is frequent enough to report."""
        s = self.options.over_rep_analysis.sampling
        thresholds = {10: 500, 20: 200, 40: 100, 100: 50}
        return s * count > thresholds.get(len(seq), 20)

    def report_json(self, padding):
        """The JSON object body for this side of the report, ending with '},'."""
        self._ensure_summarized()
        out = ["{\n"]
        for key, value in (("total_reads", self._reads), ("total_bases", self._bases),
                           ("q20_bases", self._q20_total), ("q30_bases", self._q30_total),
                           ("q40_bases", self._q40_total), ("total_cycles", self._cycles)):
            out.append(f'{padding}\t"{key}": {value},\n')

        def curves(title, names, table):
            out.append(f'{padding}\t"{title}": {{\n')
            entries = []
            for name in names:
                values = ",".join(_fmt(v) for v in table[name][:self._cycles])
                entries.append(f'{padding}\t\t"{name}":[{values}]')
            out.append(",\n".join(entries) + "\n")
            out.append(f"{padding}\t}},\n")

        curves("quality_curves", ("A", "T", "C", "G", "mean"), self.quality_curves)
        curves("content_curves", ("A", "T", "C", "G", "N", "GC"), self.content_curves)

        out.append(f'{padding}\t"kmer_count": {{\n')
        rows = []
        for i in range(64):
            first = kmer3(i)
            rows.append(",".join(
                f'{padding}\t\t"{first}{kmer2(j)}":{self.kmer[(i << 4) + j]}'
                for j in range(16)
            ))
        out.append(",\n".join(rows) + "\n")
        out.append(f"{padding}\t}},\n")

        out.append(f'{padding}\t"overrepresented_sequences": {{\n')
        out.append(",\n".join(
            f'{padding}\t\t"{seq}":{count}'
            for seq, count in sorted(self.over_rep_seq.items())
            if self.over_rep_passed(seq, count)
        ))
        out.append(f"{padding}\t}}\n")
        out.append(f"{padding}}},\n")
        return "".join(out)

    @classmethod
    def merge(cls, stats_list):
        """Combine the statistics of several workers into one, or None if empty."""
        if not stats_list:
            return None
        cycles = 0
        for item in stats_list:
            item.summarize()
            cycles = max(cycles, item.cycles())

        first = stats_list[0]
        merged = cls(first.options, first.is_read2, cycles, 0)
        span = merged._buf_len
        for item in stats_list:
            n = min(span, item.cycles())
            merged._reads += item._reads
            merged._length_sum += item._length_sum
            for table, source in ((merged._cycle_q30, item._cycle_q30),
                                  (merged._cycle_q20, item._cycle_q20),
                                  (merged._cycle_contents, item._cycle_contents),
                                  (merged._cycle_qual, item._cycle_qual)):
                for row, src in zip(table, source):
                    for j in range(n):
                        row[j] += src[j]
            for j in range(n):
                merged._cycle_total_base[j] += item._cycle_total_base[j]
                merged._cycle_total_qual[j] += item._cycle_total_qual[j]
            merged.kmer = [a + b for a, b in zip(merged.kmer, item.kmer)]
            merged._qual_hist = [a + b for a, b in zip(merged._qual_hist, item._qual_hist)]
            for seq in merged.over_rep_seq:
                merged.over_rep_seq[seq] += item.over_rep_seq.get(seq, 0)
                src = item.over_rep_seq_dist.get(seq)
                if src is None:
                    continue
                dist = merged.over_rep_seq_dist[seq]
                for i in range(min(len(dist), len(src))):
                    dist[i] += src[i]

        merged.summarize()
        return merged