"""Groups of processing options, one dataclass per concern."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional


class UmiLocation(IntEnum):
    """Where a UMI is taken from."""

    NONE = 0
    INDEX1 = 1
    INDEX2 = 2
    READ1 = 3
    READ2 = 4
    PER_INDEX = 5
    PER_READ = 6


@dataclass
class MergeOptions:
    enabled: bool = False
    include_unmerged: bool = False
    out: str = ""


@dataclass
class DuplicationOptions:
    enabled: bool = True
    hist_size: int = 32
    dedup: bool = False
    accuracy_level: int = 1


@dataclass
class IndexFilterOptions:
    blacklist1: List[str] = field(default_factory=list)
    blacklist2: List[str] = field(default_factory=list)
    enabled: bool = False
    threshold: int = 0


@dataclass
class LowComplexityFilterOptions:
    enabled: bool = False
    threshold: float = 0.3


@dataclass
class OverrepresentedSequenceAnalysisOptions:
    enabled: bool = False
    sampling: int = 20


@dataclass
class PolyGTrimmerOptions:
    enabled: bool = False
    min_len: int = 10


@dataclass
class PolyXTrimmerOptions:
    enabled: bool = False
    min_len: int = 10


@dataclass
class UMIOptions:
    enabled: bool = False
    location: UmiLocation = UmiLocation.NONE
    length: int = 0
    skip: int = 0
    prefix: str = ""
    separator: str = ""
    delimiter: str = ":"


@dataclass
class CorrectionOptions:
    enabled: bool = False


@dataclass
class QualityCutOptions:
    """Sliding-window quality cutting.

    Per-end window sizes and qualities left unset take the shared values.
    """

    # 5' cutting by quality
    enabled_front: bool = False
    # 3' cutting by quality
    enabled_tail: bool = False
    # aggressive cutting mode
    enabled_right: bool = False
    window_size_shared: int = 4
    quality_shared: int = 20
    window_size_front: Optional[int] = None
    quality_front: Optional[int] = None
    window_size_tail: Optional[int] = None
    quality_tail: Optional[int] = None
    window_size_right: Optional[int] = None
    quality_right: Optional[int] = None

    def __post_init__(self):
        for end in ("front", "tail", "right"):
            if getattr(self, f"window_size_{end}") is None:
                setattr(self, f"window_size_{end}", self.window_size_shared)
            if getattr(self, f"quality_{end}") is None:
                setattr(self, f"quality_{end}", self.quality_shared)


@dataclass
class SplitOptions:
    enabled: bool = False
    # number of files
    number: int = 0
    # lines of each file
    size: int = 0
    # digits of the file name prefix, e.g. 0001 has 4
    digits: int = 4
    need_evaluation: bool = False
    by_file_number: bool = False
    by_file_lines: bool = False


@dataclass
class AdapterOptions:
    enabled: bool = True
    sequence: str = ""
    sequence_r2: str = ""
    detected_adapter1: str = ""
    detected_adapter2: str = ""
    seqs_in_fasta: List[str] = field(default_factory=list)
    fasta_file: str = ""
    has_seq_r1: bool = False
    has_seq_r2: bool = False
    has_fasta: bool = False
    detect_adapter_for_pe: bool = False
    allow_gap_overlap_trimming: bool = False


@dataclass
class TrimmingOptions:
    front1: int = 0
    tail1: int = 0
    front2: int = 0
    tail2: int = 0
    max_len1: int = 0
    max_len2: int = 0


@dataclass
class QualityFilteringOptions:
    enabled: bool = True
    # quality character below which a base is unqualified; '0' is Q15
    qualified_qual: str = "0"
    # discard a read whose unqualified base percentage exceeds this
    unqualified_percent_limit: int = 40
    # discard a read with more N bases than this
    n_base_limit: int = 5
    # discard a read whose average quality is below this
    avg_qual_req: int = 0


@dataclass
class ReadLengthFilteringOptions:
    enabled: bool = False
    # reads shorter than this are discarded
    required_length: int = 15
    # 0 means no limit
    max_length: int = 0