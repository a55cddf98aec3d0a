import gzip

import pytest

from fastqc_lite.writer import Writer


def test_plain_round_trip(tmp_path):
    path = tmp_path / "out.fq"
    with Writer(str(path)) as w:
        assert w.is_zipped() is False
        w.write("@r\nACGT\n+\nIIII\n")
        w.write(b"@s\nTT\n+\nII\n")
    assert path.read_bytes() == b"@r\nACGT\n+\nIIII\n@s\nTT\n+\nII\n"


def test_gzip_round_trip(tmp_path):
    path = tmp_path / "out.fq.gz"
    chunks = [f"@r{i}\nACGTACGT\n+\nIIIIIIII\n" for i in range(50)]
    with Writer(str(path), compression=6, buffer_size=64) as w:
        assert w.is_zipped() is True
        for chunk in chunks:
            w.write(chunk)
    with gzip.open(path, "rt") as fh:
        assert fh.read() == "".join(chunks)


def test_buffered_until_flush(tmp_path):
    path = tmp_path / "out.txt"
    w = Writer(str(path), buffer_size=1024)
    w.write("ACGT")
    assert path.read_bytes() == b""
    w.flush()
    assert path.read_bytes() == b"ACGT"
    w.close()


def test_order_kept_when_bypassing_buffer(tmp_path):
    path = tmp_path / "out.txt"
    small = "ab"
    large = "X" * 40
    with Writer(str(path), buffer_size=8) as w:
        w.write(small)
        w.write(large)
        w.write(small)
    assert path.read_text() == small + large + small


def test_write_after_close_raises(tmp_path):
    w = Writer(str(tmp_path / "out.txt"))
    w.close()
    w.close()
    with pytest.raises(ValueError):
        w.write("A")


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        Writer(str(tmp_path / "missing" / "out.txt"))


def test_stdout(capsysbinary):
    w = Writer("", to_stdout=True)
    w.write("@r\nAC\n+\nII\n")
    w.close()
    assert capsysbinary.readouterr().out == b"@r\nAC\n+\nII\n"