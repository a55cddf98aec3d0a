"""Shared constants and filter result codes."""

from enum import IntEnum

VERSION = "1.0.0"

ATCG_BASES = ("A", "T", "C", "G")

# how many reads one pack holds
PACK_SIZE = 256

# upper bound of packs produced but not yet consumed
PACK_IN_MEM_LIMIT = 128

# how many filter result types are supported in total
FILTER_RESULT_TYPES = 32


class FilterResultCode(IntEnum):
    """Outcome of filtering a read; a bigger value means a worse result."""

    PASS_FILTER = 0
    FAIL_POLY_X = 4
    FAIL_OVERLAP = 8
    FAIL_N_BASE = 12
    FAIL_LENGTH = 16
    FAIL_TOO_LONG = 17
    FAIL_QUALITY = 20
    FAIL_COMPLEXITY = 24


_NAMED_TYPES = {
    FilterResultCode.PASS_FILTER: "passed",
    FilterResultCode.FAIL_POLY_X: "failed_polyx_filter",
    FilterResultCode.FAIL_OVERLAP: "failed_bad_overlap",
    FilterResultCode.FAIL_N_BASE: "failed_too_many_n_bases",
    FilterResultCode.FAIL_LENGTH: "failed_too_short",
    FilterResultCode.FAIL_TOO_LONG: "failed_too_long",
    FilterResultCode.FAIL_QUALITY: "failed_quality_filter",
    FilterResultCode.FAIL_COMPLEXITY: "failed_low_complexity",
}

FAILED_TYPES = tuple(_NAMED_TYPES.get(code, "") for code in range(FILTER_RESULT_TYPES))


def failed_type_name(code):
    """Return the tag written for a filter result code ('' for reserved slots)."""
    index = int(code)
    if not 0 <= index < FILTER_RESULT_TYPES:
        raise ValueError(f"filter result code out of range: {code}")
    return FAILED_TYPES[index]