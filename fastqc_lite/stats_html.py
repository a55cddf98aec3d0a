"""HTML report sections for collected statistics."""

import math

from .stats import kmer2, kmer3, list2string

_FULL_SAMPLING = 40

_QUALITY_SERIES = (
    ("A", "rgba(128,128,0,1.0)"),
    ("T", "rgba(128,0,128,1.0)"),
    ("C", "rgba(0,255,0,1.0)"),
    ("G", "rgba(0,0,255,1.0)"),
    ("mean", "rgba(20,20,20,1.0)"),
)

_CONTENT_SERIES = (
    ("A", "rgba(128,128,0,1.0)"),
    ("T", "rgba(128,0,128,1.0)"),
    ("C", "rgba(0,255,0,1.0)"),
    ("G", "rgba(0,0,255,1.0)"),
    ("N", "rgba(255, 0, 0, 1.0)"),
    ("GC", "rgba(20,20,20,1.0)"),
)

_ORA_SCRIPT = """for (seq in orp_dist) {
    var cvs = document.getElementById(seq);
    var ctx = cvs.getContext('2d'); 
    var data = orp_dist[seq];
    var w = 240;
    var h = 20;
    ctx.fillStyle='#cccccc';
    ctx.fillRect(0, 0, w, h);
    ctx.fillStyle='#0000FF';
    var maxVal = 0;
    for(d=0; d<seqlen; d++) {
        if(data[d]>maxVal) maxVal = data[d];
    }
    var step = (seqlen-1) /  (w-1);
    for(x=0; x<w; x++){
        var target = step * x;
        var val = data[Math.floor(target)];
        var y = Math.floor((val / maxVal) * h);
        ctx.fillRect(x,h-1, 1, -y);
    }
}
</script>
"""


def _ratio(a, b):
    if b:
        return a / b
    if a == 0:
        return math.nan
    return math.inf if a > 0 else -math.inf


def _div_name(subsection):
    return subsection.replace(" ", "_").replace(":", "_")


def _section_header(subsection, div_name):
    return ("<div class='subsection_title'><a title='click to hide/show' "
            f"onclick=showOrHide('{div_name}')>{subsection}</a></div>\n")


def sampled_positions(cycles, long_read):
    """1-based cycle positions plotted; long reads are sampled geometrically."""
    if not long_read:
        return list(range(1, cycles + 1))
    positions = list(range(1, min(_FULL_SAMPLING, cycles) + 1))
    if cycles > _FULL_SAMPLING:
        pos = float(_FULL_SAMPLING)
        while True:
            pos *= 1.05
            if pos >= cycles:
                break
            positions.append(int(pos))
        if positions[-1] != cycles:
            positions.append(cycles)
    return positions


def _plot_section(stats, subsection, series, y_title, name_of):
    div_name = _div_name(subsection)
    cycles = stats.cycles()
    long_read = stats.is_long_read()
    x = sampled_positions(cycles, long_read)
    out = [
        _section_header(subsection, div_name),
        f"<div id='{div_name}'>\n",
        "<div class='sub_section_tips'>Value of each position will be shown on mouse over.</div>\n",
        f"<div class='figure' id='plot_{div_name}'></div>\n",
        "</div>\n",
        '\n<script type="text/javascript">\n',
    ]
    js = ["var data=["]
    for base, color, curve in series:
        js.append("{")
        js.append(f"x:[{list2string(x)}],")
        js.append(f"y:[{list2string(curve, x)}],")
        js.append(f"name: '{name_of(base)}',")
        js.append("mode:'lines',")
        js.append(f"line:{{color:'{color}', width:1}}\n")
        js.append("},")
    js.append("];\n")
    js.append("var layout={title:'', xaxis:{title:'position'")
    if long_read:
        js.append(",type:'log'")
    js.append(f"}}, yaxis:{{title:'{y_title}'}}}};\n")
    js.append(f"Plotly.newPlot('plot_{div_name}', data, layout);\n")
    out.append("".join(js))
    out.append("</script>\n")
    return "".join(out)


def report_html_quality(stats, filtering_type, read_name):
    """The per-cycle quality plot section."""
    stats.cycles()
    series = [(base, color, stats.quality_curves[base]) for base, color in _QUALITY_SERIES]
    subsection = f"{filtering_type}: {read_name}: quality"
    return _plot_section(stats, subsection, series, "quality", lambda base: base)


def report_html_contents(stats, filtering_type, read_name):
    """The per-cycle base content plot section."""
    stats.cycles()
    bases = stats.bases()
    contents = stats.base_contents

    def name_of(base):
        if len(base) == 1:
            count = contents[ord(base) & 0x07]
        else:
            count = contents[ord("G") & 0x07] + contents[ord("C") & 0x07]
        percentage = f"{_ratio(count * 100.0, bases):f}"[:5]
        return f"{base}({percentage}%)"

    series = [(base, color, stats.content_curves[base]) for base, color in _CONTENT_SERIES]
    subsection = f"{filtering_type}: {read_name}: base contents"
    return _plot_section(stats, subsection, series, "base content ratios", name_of)


def make_kmer_td(stats, i, j):
    """One shaded table cell of the k-mer table (3-mer row i, 2-mer column j)."""
    val = stats.kmer[(i << 4) + j]
    kmer = kmer3(i) + kmer2(j)
    mean_bases = (stats.bases() + 1) / len(stats.kmer)
    prop = val / mean_bases
    frac = 0.5
    if prop > 2.0:
        frac = (prop - 2.0) / 20.0 + 0.5
    elif prop < 0.5:
        frac = prop
    frac = max(0.01, min(1.0, frac))
    shade = int((1.0 - frac) * 255)
    color = f"{shade:02x}" * 3
    return (f"<td style='background:#{color}' title='{kmer}: {val}\n{prop:g} times as mean value'>"
            f"{kmer}</td>")


def report_html_kmer(stats, filtering_type, read_name):
    """The k-mer counting table section."""
    subsection = f"{filtering_type}: {read_name}: KMER counting"
    div_name = _div_name(subsection)
    out = [
        _section_header(subsection, div_name),
        f"<div  id='{div_name}'>\n",
        "<div class='sub_section_tips'>Darker background means larger counts. "
        "The count will be shown on mouse over.</div>\n",
        "<table class='kmer_table' style='width:680px;'>\n",
        "<tr><td></td>",
    ]
    out.extend(f"<td style='color:#333333'>{kmer2(h)}</td>" for h in range(16))
    out.append("</tr>\n")
    for i in range(64):
        out.append(f"<tr><td style='color:#333333'>{kmer3(i)}</td>")
        out.extend(make_kmer_td(stats, i, j) for j in range(16))
        out.append("</tr>\n")
    out.append("</table>\n")
    out.append("</div>\n")
    return "".join(out)


def report_html_ora(stats, filtering_type, read_name):
    """The overrepresented sequences section with its distribution script."""
    sampling = stats.options.over_rep_analysis.sampling
    seq_len = stats.evaluated_seq_len
    bases = float(stats.bases())
    subsection = f"{filtering_type}: {read_name}: overrepresented sequences"
    div_name = _div_name(subsection)
    passed = [(seq, count) for seq, count in sorted(stats.over_rep_seq.items())
              if stats.over_rep_passed(seq, count)]

    out = [
        _section_header(subsection, div_name),
        f"<div  id='{div_name}'>\n",
        f"<div class='sub_section_tips'>Sampling rate: 1 / {sampling}</div>\n",
        "<table class='summary_table'>\n",
        "<tr style='font-weight:bold;'><td>overrepresented sequence</td>"
        "<td>count (% of bases)</td>"
        f"<td>distribution: cycle 1 ~ cycle {seq_len}</td></tr>\n",
    ]
    for seq, count in passed:
        percent = _ratio(100.0 * count * len(seq) * sampling, bases)
        out.append("<tr>")
        out.append(f"<td width='400' style='word-break:break-all;font-size:8px;'>{seq}</td>")
        out.append(f"<td width='200'>{count} ({percent:f}%)</td>")
        out.append(f"<td width='250'><canvas id='{div_name}_{seq}' width='240' height='20'></td>")
        out.append("</tr>\n")
    if not passed:
        out.append("<tr><td style='text-align:center' colspan='3'>not found</td></tr>\n")
    out.append("</table>\n")
    out.append("</div>\n")

    out.append("<script language='javascript'>\n")
    out.append(f"var seqlen = {seq_len};\n")
    out.append("var orp_dist = {\n")
    entries = []
    for seq, _count in passed:
        dist = stats.over_rep_seq_dist.get(seq, [])
        values = ",".join(str(dist[i]) if i < len(dist) else "0" for i in range(seq_len))
        entries.append(f'\t"{div_name}_{seq}":[{values}]')
    out.append(",\n".join(entries))
    out.append("\n};\n")
    out.append(_ORA_SCRIPT)
    return "".join(out)


def report_html(stats, filtering_type, read_name):
    """All HTML sections for one side of the report."""
    parts = [
        report_html_quality(stats, filtering_type, read_name),
        report_html_contents(stats, filtering_type, read_name),
        report_html_kmer(stats, filtering_type, read_name),
    ]
    if stats.options.over_rep_analysis.enabled:
        parts.append(report_html_ora(stats, filtering_type, read_name))
    return "".join(parts)