# fastqc_lite

Building blocks for quality control of FASTQ sequencing reads, for
single-end and paired-end data. The package uses only the standard library.

## Modules

- `fastqc_lite.sequence`: `reverse_complement(seq)` and a small `Sequence`
  class (`~seq` gives the reverse complement).
- `fastqc_lite.read`: `Read`, one FASTQ record (name, seq, strand, quality),
  with phred64-to-phred33 conversion, reverse complement, index extraction
  from the name (`first_index`, `last_index`), `low_qual_count`, `resize`,
  `trim_front`, `fix_mgi` and text output (`to_string`,
  `to_string_with_tag`). `ReadPair.fast_merge()` merges a pair by a gapless
  overlap of at least 30 bp, or returns `None`.
- `fastqc_lite.overlap`: `analyze_overlap` / `analyze_reads` find where read 2's
  reverse complement lies against read 1 and return an `OverlapResult`;
  `merge_reads` joins a pair into one read from that result. Only gapless
  overlaps are searched.
- `fastqc_lite.polyx`: `trim_poly_g` and `trim_poly_x` cut 3' tails in place
  (`*_pair` variants handle both reads). `trim_poly_x` returns a `PolyXTrim`
  with the base and number of bases cut, or `None`.
- `fastqc_lite.umi`: `UmiProcessor` moves a UMI taken from the index or from
  the start of the read into the read name, according to `UMIOptions`.
- `fastqc_lite.stats`: `Stats` collects per-cycle quality, base content,
  5-mer counts and overrepresented-sequence counts; `Stats.merge` combines
  several; `summary_text()` and `report_json(padding)` return text fragments.
- `fastqc_lite.stats_html`: functions returning HTML report sections
  (`report_html`, `report_html_quality`, `report_html_contents`,
  `report_html_kmer`, `report_html_ora`) for a `Stats` object.
- `fastqc_lite.writer`: `Writer`, a buffered writer for plain files, `.gz`
  files (written as one gzip member per flushed chunk) or standard output;
  usable as a context manager.
- `fastqc_lite.options` and `fastqc_lite.option_groups`: `Options`, a
  dataclass of every run setting grouped by feature, whose `validate()`
  normalises the settings and raises `OptionsError` on conflicts or
  out-of-range values.
- `fastqc_lite.common`: constants, `FilterResultCode` and
  `failed_type_name(code)`, the label for a filter result
  (for example `failed_too_short`).

## Examples

```python
from fastqc_lite.sequence import reverse_complement

reverse_complement("AAAATTTTCCCCGGGG")  # "CCCCGGGGAAAATTTT"
```

Any base other than A, T, C or G, in either case, becomes `N`.

```python
from fastqc_lite.read import Read

read = Read("@read1", "ACGTACGTAC", "+", "IIIIIIIIII")
len(read)               # 10
read.trim_front(2)
read.to_string()        # "@read1\nGTACGTAC\n+\nIIIIIIII\n"
```

Trim a poly-A tail:

```python
from fastqc_lite.polyx import trim_poly_x

read = Read(
    "@name",
    "ATTTTAAAAAAAAAATAAAAAAAAAAAAACAAAAAAAAAAAAAAAAAAAAAAAAAT",
    "+",
    "///EEEEEEEEEEEEEEEEEEEEEEEEEE////EEEEEEEEEEEEE////E////E",
)
trim = trim_poly_x(read, 10)
read.seq                # "ATTTT"
trim.length             # 51
```

Find the overlap of a pair and merge it:

```python
from fastqc_lite.overlap import analyze_reads, merge_reads

result = analyze_reads(r1, r2, 5, 30, 0.2)
if result.overlapped:
    merged = merge_reads(r1, r2, result)
```

Collect statistics:

```python
from fastqc_lite.options import Options
from fastqc_lite.stats import Stats

stats = Stats(Options())
stats.stat_read(read)
print(stats.summary_text())
```

## What the package does not do

There is no command to run and no end-to-end processing pipeline. The
package does not read FASTQ files, does not trim adapters, cut by sliding
window quality, correct bases, deduplicate or decide whether a read passes
the filters (`FilterResultCode` only names the outcomes). It does not write
complete JSON or HTML report files; `Stats` and `stats_html` return the
fragments.

## Running the tests

```
pip install -e ".[test]"
pytest
```