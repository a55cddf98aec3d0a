import pytest

from fastqc_lite.option_groups import UmiLocation
from fastqc_lite.options import Options, OptionsError


@pytest.fixture
def fastq(tmp_path):
    def make(name):
        path = tmp_path / name
        path.write_text("@r\nACGT\n+\nIIII\n")
        return str(path)
    return make


def test_defaults():
    opt = Options()
    assert opt.report_title == "fastp report"
    assert opt.thread == 3
    assert opt.compression == 4
    assert opt.insert_size_max == 512
    assert opt.writer_buffer_size == 1 << 22


def test_is_paired():
    opt = Options()
    assert not opt.is_paired()
    opt.in2 = "x"
    assert opt.is_paired()
    assert Options(interleaved_input=True).is_paired()


def test_adapter_descriptions():
    opt = Options()
    assert opt.adapter1_description() == "unspecified"
    opt.adapter.sequence = "auto"
    assert opt.adapter1_description() == "unspecified"
    opt.adapter.sequence_r2 = "AGATCGGAAG"
    assert opt.adapter2_description() == "AGATCGGAAG"


def test_adapter_cutting_enabled():
    opt = Options()
    assert not opt.adapter_cutting_enabled()
    opt.adapter.sequence = "AGATCGG"
    assert opt.adapter_cutting_enabled()
    opt.adapter.enabled = False
    assert not opt.adapter_cutting_enabled()


def test_shall_detect_adapter():
    opt = Options()
    opt.adapter.sequence = "auto"
    assert opt.shall_detect_adapter(False)
    opt.in2 = "r2.fq"
    assert not opt.shall_detect_adapter(False)
    opt.adapter.detect_adapter_for_pe = True
    assert opt.shall_detect_adapter(False)
    assert not opt.shall_detect_adapter(True)
    opt.adapter.sequence_r2 = "auto"
    assert opt.shall_detect_adapter(True)


def test_missing_input_raises():
    with pytest.raises(OptionsError):
        Options().validate()


def test_stdin_input():
    opt = Options(input_from_stdin=True)
    assert opt.validate() is True
    assert opt.in1 == "/dev/stdin"


def test_nonexistent_input(tmp_path):
    with pytest.raises(OptionsError):
        Options(in1=str(tmp_path / "missing.fq")).validate()


def test_thread_clamped(fastq):
    opt = Options(in1=fastq("a.fq"), thread=200)
    opt.validate()
    assert opt.thread == 64
    opt = Options(in1=fastq("b.fq"), thread=0)
    opt.validate()
    assert opt.thread == 1


def test_compression_range(fastq):
    with pytest.raises(OptionsError):
        Options(in1=fastq("a.fq"), compression=10).validate()


def test_paired_needs_out2(fastq):
    opt = Options(in1=fastq("a.fq"), in2=fastq("b.fq"), out1="o1.fq")
    with pytest.raises(OptionsError):
        opt.validate()


def test_same_outputs_rejected(fastq, tmp_path):
    out = str(tmp_path / "o.fq")
    opt = Options(in1=fastq("a.fq"), in2=fastq("b.fq"), out1=out, out2=out)
    with pytest.raises(OptionsError):
        opt.validate()


def test_unpaired_ignored_for_single_end(fastq):
    opt = Options(in1=fastq("a.fq"), unpaired1="u1.fq")
    opt.validate()
    assert opt.unpaired1 == ""


def test_merge_uses_out1(fastq, tmp_path):
    out = str(tmp_path / "merged.fq")
    opt = Options(in1=fastq("a.fq"), in2=fastq("b.fq"), out1=out)
    opt.merge.enabled = True
    opt.validate()
    assert opt.merge.out == out
    assert opt.out1 == ""
    assert opt.correction.enabled


def test_merge_without_output_raises(fastq):
    opt = Options(in1=fastq("a.fq"), in2=fastq("b.fq"))
    opt.merge.enabled = True
    with pytest.raises(OptionsError):
        opt.validate()


def test_correction_disabled_for_single_end(fastq):
    opt = Options(in1=fastq("a.fq"))
    opt.correction.enabled = True
    opt.validate()
    assert not opt.correction.enabled


def test_dont_overwrite(fastq, tmp_path):
    existing = tmp_path / "exists.fq"
    existing.write_text("")
    opt = Options(in1=fastq("a.fq"), out1=str(existing), dont_overwrite=True)
    with pytest.raises(OptionsError, match="already exists"):
        opt.validate()


@pytest.mark.parametrize("seq", ["ACG", "ACGTN"])
def test_bad_adapter_sequence(fastq, seq):
    opt = Options(in1=fastq("a.fq"))
    opt.adapter.sequence = seq
    with pytest.raises(OptionsError):
        opt.validate()


def test_good_adapter_sets_flag(fastq):
    opt = Options(in1=fastq("a.fq"))
    opt.adapter.sequence = "AGATCGGAAGAGC"
    opt.validate()
    assert opt.adapter.has_seq_r1
    assert not opt.adapter.has_seq_r2


def test_umi_length_required(fastq):
    opt = Options(in1=fastq("a.fq"))
    opt.umi.enabled = True
    opt.umi.location = UmiLocation.READ1
    with pytest.raises(OptionsError, match="UMI length"):
        opt.validate()
    opt.umi.length = 8
    assert opt.validate() is True


def test_umi_prefix_must_be_alnum(fastq):
    opt = Options(in1=fastq("a.fq"))
    opt.umi.enabled = True
    opt.umi.location = UmiLocation.INDEX1
    opt.umi.prefix = "ab-c"
    with pytest.raises(OptionsError):
        opt.validate()


def test_split_by_file_number_limits_threads(fastq):
    opt = Options(in1=fastq("a.fq"), out1="o.fq", thread=8)
    opt.split.enabled = True
    opt.split.by_file_number = True
    opt.split.number = 2
    opt.validate()
    assert opt.thread == opt.split.number


def test_quality_cut_window_range(fastq):
    opt = Options(in1=fastq("a.fq"))
    opt.quality_cut.enabled_front = True
    opt.quality_cut.window_size_front = 0
    with pytest.raises(OptionsError):
        opt.validate()


def test_sampling_range(fastq):
    opt = Options(in1=fastq("a.fq"))
    opt.over_rep_analysis.sampling = 0
    with pytest.raises(OptionsError):
        opt.validate()


def test_make_list_strips_line_endings(tmp_path):
    path = tmp_path / "bl.txt"
    path.write_bytes(b"ACGT\r\nGGCC\nTTAA")
    assert Options().make_list_from_file_by_line(str(path)) == ["ACGT", "GGCC", "TTAA"]


def test_make_list_rejects_non_bases(tmp_path):
    path = tmp_path / "bl.txt"
    path.write_text("ACGT\nACNT\n")
    with pytest.raises(OptionsError):
        Options().make_list_from_file_by_line(str(path))


def test_init_index_filtering(tmp_path):
    path = tmp_path / "bl.txt"
    path.write_text("ACGT\n")
    opt = Options()
    opt.init_index_filtering(str(path), "", 2)
    assert opt.index_filter.enabled
    assert opt.index_filter.threshold == 2
    assert opt.index_filter.blacklist1 == ["ACGT"]
    assert opt.index_filter.blacklist2 == []


def test_init_index_filtering_no_files():
    opt = Options()
    opt.init_index_filtering("", "", 3)
    assert not opt.index_filter.enabled
    assert opt.index_filter.threshold == 0