"""Buffered output to plain files, gzip files or standard output."""

import gzip
import sys

DEFAULT_BUFFER_SIZE = 1 << 22


class Writer:
    """Buffers output and writes it out in chunks.

    Files whose names end in ``.gz`` are written as a series of gzip members,
    one per flushed chunk.
    """

    def __init__(self, filename, compression=4, buffer_size=DEFAULT_BUFFER_SIZE, to_stdout=False):
        self.filename = filename
        self._compression = max(0, min(9, compression))
        self._buffer_size = buffer_size
        self._buffer = bytearray()
        self._to_stdout = to_stdout
        self._closed = False
        if to_stdout:
            self._zipped = False
            self._stream = sys.stdout.buffer
        else:
            self._zipped = filename.endswith(".gz")
            self._stream = open(filename, "wb")

    def is_zipped(self):
        return self._zipped

    def write(self, data):
        """Queue ``data`` (str or bytes) for output."""
        if self._closed:
            raise ValueError(f"write to closed writer: {self.filename}")
        if isinstance(data, str):
            data = data.encode("latin-1")
        if len(data) + len(self._buffer) > self._buffer_size:
            self.flush()
        if len(data) > self._buffer_size:
            self._write_out(data)
        else:
            self._buffer += data

    def _write_out(self, data):
        if self._zipped:
            data = gzip.compress(bytes(data), compresslevel=self._compression, mtime=0)
        self._stream.write(data)

    def flush(self):
        if self._closed:
            return
        if self._buffer:
            self._write_out(self._buffer)
            self._buffer = bytearray()
        self._stream.flush()

    def close(self):
        if self._closed:
            return
        self.flush()
        self._closed = True
        if not self._to_stdout:
            self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False