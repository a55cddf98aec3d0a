from fastqc_lite.options import Options
from fastqc_lite.read import Read
from fastqc_lite.stats import Stats
from fastqc_lite.stats_html import (
    make_kmer_td,
    report_html,
    report_html_contents,
    report_html_kmer,
    report_html_ora,
    report_html_quality,
    sampled_positions,
)


def stats_with_reads(options=None, seq="AAAA", count=3):
    options = options or Options()
    stats = Stats(options)
    for _ in range(count):
        stats.stat_read(Read("@r", seq, "+", "I" * len(seq)))
    stats.summarize()
    return stats


def test_sampled_positions_short_read_is_every_cycle():
    assert sampled_positions(5, False) == [1, 2, 3, 4, 5]


def test_sampled_positions_long_read_invariants():
    positions = sampled_positions(500, True)
    assert positions[:40] == list(range(1, 41))
    assert positions[-1] == 500
    assert all(a < b for a, b in zip(positions, positions[1:]))
    assert len(positions) < 500


def test_quality_section_div_name_and_values():
    stats = stats_with_reads()
    html = report_html_quality(stats, "before filtering", "read1")
    assert "id='before_filtering__read1__quality'" in html
    assert "plot_before_filtering__read1__quality" in html
    assert "x:[1,2,3,4]" in html
    assert "y:[40,40,40,40]" in html
    assert ",type:'log'" not in html
    assert html.endswith("</script>\n")


def test_contents_section_percentages():
    stats = stats_with_reads()
    html = report_html_contents(stats, "after filtering", "read1")
    assert "name: 'A(100.0%)'" in html
    assert "name: 'T(0.000%)'" in html
    assert "name: 'GC(0.000%)'" in html
    assert "base content ratios" in html


def test_kmer_section_has_every_kmer():
    stats = stats_with_reads(seq="ACGTACGTAC")
    html = report_html_kmer(stats, "before filtering", "read1")
    assert html.count("times as mean value") == 1024
    assert ">AAAAA</td>" in html
    assert ">GGGGG</td>" in html
    assert "<div  id='before_filtering__read1__KMER_counting'>" in html


def test_kmer_td_for_empty_stats():
    stats = Stats(Options())
    cell = make_kmer_td(stats, 0, 0)
    assert cell.startswith("<td style='background:#fcfcfc'")
    assert cell.endswith(">AAAAA</td>")


def test_kmer_td_darker_for_frequent_kmer():
    stats = stats_with_reads(seq="AAAAAAAAAA", count=50)
    frequent = make_kmer_td(stats, 0, 0)
    rare = make_kmer_td(stats, 63, 15)
    frequent_shade = int(frequent.split("#")[1][:2], 16)
    rare_shade = int(rare.split("#")[1][:2], 16)
    assert frequent_shade < rare_shade


def test_ora_not_found():
    options = Options()
    options.over_rep_analysis.enabled = True
    stats = stats_with_reads(options)
    html = report_html_ora(stats, "before filtering", "read1")
    assert "not found" in html
    assert "var seqlen = 151;" in html
    assert "Sampling rate: 1 / 20" in html


def test_ora_reports_passing_sequence():
    options = Options()
    options.over_rep_analysis.enabled = True
    options.over_rep_analysis.sampling = 1
    seq = "ACGTACGTACGT"
    options.over_rep_seqs1 = {seq: 0}
    stats = stats_with_reads(options, seq="ACGTACGTACGTAAAA")
    stats.over_rep_seq[seq] = 25
    stats.over_rep_seq_dist[seq][0] = 7
    html = report_html_ora(stats, "before filtering", "read1")
    div = "before_filtering__read1__overrepresented_sequences"
    assert f"<canvas id='{div}_{seq}'" in html
    assert "not found" not in html
    assert f'"{div}_{seq}":[7,' in html


def test_report_html_includes_ora_only_when_enabled():
    disabled = stats_with_reads()
    assert "overrepresented sequences" not in report_html(disabled, "f", "r")
    options = Options()
    options.over_rep_analysis.enabled = True
    enabled = stats_with_reads(options)
    html = report_html(enabled, "f", "r")
    assert "overrepresented sequences" in html
    assert "KMER counting" in html