"""Trimming of poly-G and poly-X tails."""

from dataclasses import dataclass

from .common import ATCG_BASES

_ALLOW_ONE_MISMATCH_FOR_EACH = 8
_MAX_MISMATCH = 5


@dataclass(frozen=True)
class PolyXTrim:
    """A poly-X tail that was removed: its base and the number of bases cut."""

    base: str
    length: int


def trim_poly_g(read, compare_req):
    """Cut a 3' poly-G tail in place; return the number of bases removed."""
    data = read.seq
    rlen = len(data)
    mismatch = 0
    first_g_pos = rlen - 1
    i = 0
    for i in range(rlen):
        if data[rlen - i - 1] != "G":
            mismatch += 1
        else:
            first_g_pos = rlen - i - 1
        allowed = (i + 1) // _ALLOW_ONE_MISMATCH_FOR_EACH
        if mismatch > _MAX_MISMATCH or (mismatch > allowed and i >= compare_req - 1):
            break
    else:
        i = rlen

    if i >= compare_req:
        read.resize(first_g_pos)
    return rlen - len(read)


def trim_poly_g_pair(r1, r2, compare_req):
    """Cut poly-G tails from both reads of a pair."""
    return trim_poly_g(r1, compare_req), trim_poly_g(r2, compare_req)


def trim_poly_x(read, compare_req):
    """Cut a 3' homopolymer tail in place; return a PolyXTrim, or None if none found."""
    data = read.seq
    rlen = len(data)

    def base_from_end(pos):
        index = rlen - pos - 1
        return data[index] if 0 <= index < rlen else ""

    counts = [0, 0, 0, 0]
    pos = 0
    for pos in range(rlen):
        base = data[rlen - pos - 1]
        if base == "N":
            counts = [c + 1 for c in counts]
        elif base in ATCG_BASES:
            counts[ATCG_BASES.index(base)] += 1

        cmp = pos + 1
        allowed = min(_MAX_MISMATCH, cmp // _ALLOW_ONE_MISMATCH_FOR_EACH)
        need_to_break = all(cmp - c > allowed for c in counts)
        if need_to_break and (pos >= _ALLOW_ONE_MISMATCH_FOR_EACH or pos + 1 >= compare_req - 1):
            break
    else:
        pos = rlen

    if pos + 1 < compare_req:
        return None

    poly = max(range(4), key=lambda b: (counts[b], -b))
    poly_base = ATCG_BASES[poly]
    while base_from_end(pos) != poly_base and pos >= 0:
        pos -= 1

    read.resize(rlen - pos - 1)
    return PolyXTrim(poly_base, pos + 1)


def trim_poly_x_pair(r1, r2, compare_req):
    """Cut homopolymer tails from both reads of a pair."""
    return trim_poly_x(r1, compare_req), trim_poly_x(r2, compare_req)