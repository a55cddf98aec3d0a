"""Nucleotide sequences and reverse complements."""

from dataclasses import dataclass

_COMPLEMENT = {
    "A": "T", "a": "T",
    "T": "A", "t": "A",
    "C": "G", "c": "G",
    "G": "C", "g": "C",
}


def reverse_complement(seq):
    """Reverse complement of a sequence; unknown bases become 'N'."""
    return "".join(_COMPLEMENT.get(base, "N") for base in reversed(seq))


@dataclass
class Sequence:
    """A nucleotide sequence."""

    text: str

    def reverse_complement(self):
        return Sequence(reverse_complement(self.text))

    def __invert__(self):
        return self.reverse_complement()

    def __len__(self):
        return len(self.text)

    def __str__(self):
        return self.text