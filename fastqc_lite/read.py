"""FASTQ records and read pairs."""

from dataclasses import InitVar, dataclass

from .sequence import reverse_complement


@dataclass
class Read:
    """One FASTQ record: name line, bases, strand line and qualities."""

    name: str
    seq: str
    strand: str
    quality: str
    phred64: InitVar[bool] = False

    def __post_init__(self, phred64):
        if phred64:
            self.convert_phred64_to_33()

    def convert_phred64_to_33(self):
        self.quality = "".join(chr(max(33, ord(q) - (64 - 33))) for q in self.quality)

    def reverse_complement(self):
        """A new read with the reverse complement bases and reversed qualities."""
        return Read(self.name, reverse_complement(self.seq), "+", self.quality[::-1])

    def first_index(self):
        name = self.name
        if len(name) < 5:
            return ""
        end = len(name)
        for i in range(len(name) - 3, -1, -1):
            if name[i] == "+":
                end = i - 1
            if name[i] == ":":
                return name[i + 1:end + 1]
        return ""

    def last_index(self):
        name = self.name
        if len(name) < 5:
            return ""
        for i in range(len(name) - 3, -1, -1):
            if name[i] in ":+":
                return name[i + 1:]
        return ""

    def low_qual_count(self, qual=20):
        """Number of bases whose phred score is below ``qual``."""
        threshold = qual + 33
        return sum(1 for q in self.quality if ord(q) < threshold)

    def __len__(self):
        return len(self.seq)

    def __str__(self):
        return self.to_string()

    def to_string(self):
        return f"{self.name}\n{self.seq}\n{self.strand}\n{self.quality}\n"

    def to_string_with_tag(self, tag):
        return f"{self.name} {tag}\n{self.seq}\n{self.strand}\n{self.quality}\n"

    def resize(self, length):
        """Truncate to ``length`` bases; out-of-range lengths are ignored."""
        if length > len(self) or length < 0:
            return
        self.seq = self.seq[:length]
        self.quality = self.quality[:length]

    def trim_front(self, length):
        """Remove up to ``length`` leading bases, always keeping at least one."""
        n = min(len(self) - 1, length)
        if n < 0:
            self.seq = ""
            self.quality = ""
            return
        self.seq = self.seq[n:]
        self.quality = self.quality[n:]

    def fix_mgi(self):
        """Separate a trailing '/1' or '/2' from the name with a space."""
        name = self.name
        if len(name) >= 2 and name[-1] in "12" and name[-2] == "/":
            self.name = name[:-2] + " " + name[-2:]
            return True
        return False


_MIN_OVERLAP = 30
_HIGH_QUAL = ord("?")
_LOW_QUAL = ord("0")


@dataclass
class ReadPair:
    """Read 1 and read 2 of a paired-end fragment."""

    left: Read
    right: Read

    def fast_merge(self):
        """Merge the pair by a gapless overlap of at least 30 bp, or return None."""
        rc_right = self.right.reverse_complement()
        str1, qual1 = self.left.seq, self.left.quality
        str2, qual2 = rc_right.seq, rc_right.quality
        len1, len2 = len(str1), len(str2)

        overlap = None
        diff = 0
        for olen in range(_MIN_OVERLAP, min(len1, len2) + 1):
            offset = len1 - olen
            diff = 0
            low_qual_diff = 0
            ok = True
            for a, b, qa, qb in zip(str1[offset:], str2, qual1[offset:], qual2):
                if a == b:
                    continue
                diff += 1
                qa, qb = ord(qa), ord(qb)
                if (qa >= _HIGH_QUAL and qb <= _LOW_QUAL) or (qa <= _LOW_QUAL and qb >= _HIGH_QUAL):
                    low_qual_diff += 1
                # no high quality mismatch, at most 2 low quality ones
                if diff > low_qual_diff or low_qual_diff >= 3:
                    ok = False
                    break
            if ok:
                overlap = olen
                break

        if overlap is None:
            return None

        offset = len1 - overlap
        merged_name = f"{self.left.name} merged offset:{offset} overlap:{overlap} diff:{diff}"
        merged_seq = list(str1[:offset] + str2)
        merged_qual = list(qual1[:offset] + qual2)
        for i in range(overlap):
            a, b = str1[offset + i], str2[i]
            qa, qb = qual1[offset + i], qual2[i]
            if a != b:
                if ord(qa) >= _HIGH_QUAL and ord(qb) <= _LOW_QUAL:
                    merged_seq[offset + i] = a
                    merged_qual[offset + i] = qa
                else:
                    merged_seq[offset + i] = b
                    merged_qual[offset + i] = qb
            else:
                merged_qual[offset + i] = chr((ord(qa) + ord(qb) - 33) & 0xFF)
        return Read(merged_name, "".join(merged_seq), "+", "".join(merged_qual))